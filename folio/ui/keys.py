"""
Key translation for the folio editor.

curses reports characters as str and special keys as int codes. The input
handlers work on plain key names instead: single characters stand for
themselves, everything else gets a lowercase name such as "esc", "enter",
"ctrl+s" or "ctrl+right".
"""
import curses

SPECIAL_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_HOME: "home",
    curses.KEY_END: "end",
    curses.KEY_PPAGE: "pgup",
    curses.KEY_NPAGE: "pgdn",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_DC: "delete",
    curses.KEY_ENTER: "enter",
    curses.KEY_RESIZE: "resize",
}

# ncurses names for modified keys (xterm style)
NAMED_KEYS = {
    "kLFT5": "ctrl+left",
    "kRIT5": "ctrl+right",
    "kUP5": "ctrl+up",
    "kDN5": "ctrl+down",
}

CONTROL_CHARS = {
    "\x1b": "esc",
    "\n": "enter",
    "\r": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
}


def translate(ch) -> str:
    """Turn a value returned by get_wch() into a key name."""
    if isinstance(ch, int):
        if ch in SPECIAL_KEYS:
            return SPECIAL_KEYS[ch]
        try:
            name = curses.keyname(ch).decode("ascii", "replace")
        except ValueError:
            return f"key{ch}"
        return NAMED_KEYS.get(name, name.lower())
    if ch in CONTROL_CHARS:
        return CONTROL_CHARS[ch]
    if len(ch) == 1 and ord(ch) < 32:
        return "ctrl+" + chr(ord(ch) + 96)
    return ch


def read_key(stdscr) -> str:
    """Block until the next key press and return its name."""
    while True:
        try:
            return translate(stdscr.get_wch())
        except curses.error:
            # get_wch raises on interrupted reads; wait for the next key
            continue
