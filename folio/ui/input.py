"""
Input handling for the folio transcription editor.

Processes key events for each mode (command, open, goto, input, select,
search, history) and updates the context accordingly. Keys arrive as names
produced by folio.ui.keys ("a", "esc", "enter", "ctrl+right", ...).
"""
from folio import clipboard, logger
from folio.editor import Mode
from folio.errors import FolioError
from folio.pages import format_page_id, parse_page_id

# Cursor movement shared by command and select mode
MOVEMENT_KEYS = {
    "w": "word_forward",
    "ctrl+right": "word_forward",
    "b": "word_back",
    "ctrl+left": "word_back",
    "ctrl+d": "paragraph_forward",
    "pgdn": "paragraph_forward",
    "ctrl+u": "paragraph_back",
    "pgup": "paragraph_back",
    "^": "head",
    "home": "head",
    "$": "end",
    "end": "end",
    "left": "back",
    "right": "forward",
    "up": "up",
    "down": "down",
}

SAVE_KEYS = ("s", "ctrl+s")
# Only ASCII digits open the goto prompt ("²".isdigit() is True)
DIGITS = "0123456789"
CUT_KEY = "x"
# Marker for illegible passages
ILLEGIBLE_MARK = "###"


def dispatch(context, key: str):
    """
    Route a key to the handler for the current mode.
    Recoverable errors become the status message; the mode stays wherever
    the handler had put it when the error happened.
    """
    context.status_message = ""
    handler = HANDLERS[context.mode]
    try:
        handler(context, key)
    except FolioError as e:
        context.status_message = str(e)
        logger.log_error(f"{context.mode.value} {key!r}", e)


def edit_field(value: str, key: str) -> str:
    """Apply a key to a one-line prompt field."""
    if key == "backspace":
        return value[:-1]
    if len(key) == 1 and key.isprintable():
        return value + key
    return value


def handle_command_mode(context, key: str):
    """Handle a key press in command mode."""
    buf = context.current_buffer

    if key in ("esc", "q"):
        context.graceful_exit()
        return

    if key == "o":
        context.set_mode(Mode.OPEN_DIRECTORY)
        context.directory_field = context.navigator.directory
        return
    if key == "f" or (len(key) == 1 and key in DIGITS):
        context.set_mode(Mode.OPEN_FILE)
        context.page_field = "" if key == "f" else key
        return
    if key == "i":
        context.set_mode(Mode.INPUT)
        return
    if key == "/":
        context.set_mode(Mode.SEARCH)
        context.search_field = context.search.text
        return
    if key == "h":
        context.set_mode(Mode.HISTORY)
        return
    if key == " ":
        buf.start_selection()
        context.set_mode(Mode.SELECTION)
        return

    if key == "n":
        context.current_buffer = context.navigator.next(buf)
        context.log_command(f"n: page {context.navigator.label()}")
        return
    if key == "p":
        context.current_buffer = context.navigator.prev(buf)
        context.log_command(f"p: page {context.navigator.label()}")
        return
    if key in SAVE_KEYS:
        context.navigator.save(buf)
        context.status_message = f"saved {context.navigator.label()}"
        context.log_command(f"s: save {context.navigator.label()}")
        return
    if key == "l":
        context.current_buffer = buf.replace_wholesale(context.reflow.apply(buf.lines))
        context.log_command(f"l: reflow ({len(context.current_buffer.lines)} lines)")
        return
    if key == "#":
        buf.insert_text(ILLEGIBLE_MARK)
        return
    if key == "y":
        clipboard.copy_text(buf.text())
        context.status_message = "page copied to clipboard"
        context.log_command("y: copy page")
        return

    if key in MOVEMENT_KEYS:
        buf.move_cursor(MOVEMENT_KEYS[key])


def handle_open_directory_mode(context, key: str):
    """Handle a key press while typing a directory path."""
    if key == "esc":
        context.set_mode(Mode.COMMAND)
        context.directory_field = context.navigator.directory
        return
    if key == "enter":
        context.open_directory(context.directory_field)
        context.set_mode(Mode.COMMAND)
        context.log_command(f"o: {context.navigator.directory}")
        context.load_page(0)
        return
    context.directory_field = edit_field(context.directory_field, key)


def handle_open_file_mode(context, key: str):
    """Handle a key press while typing a page number."""
    if key == "esc":
        context.set_mode(Mode.COMMAND)
        context.page_field = ""
        return
    if key == "enter":
        page_id = parse_page_id(context.page_field)
        context.set_mode(Mode.COMMAND)
        context.page_field = ""
        context.log_command(f"f: page {format_page_id(page_id)}")
        context.load_page(page_id)
        return
    context.page_field = edit_field(context.page_field, key)


def handle_input_mode(context, key: str):
    """Handle a key press in input mode: everything but esc edits the text."""
    if key == "esc":
        context.set_mode(Mode.COMMAND)
        return
    context.current_buffer.input(key)


def handle_selection_mode(context, key: str):
    """Handle a key press in select mode."""
    buf = context.current_buffer
    if key == "esc":
        buf.cancel_selection()
        context.set_mode(Mode.COMMAND)
        return
    if key == CUT_KEY:
        removed = buf.cut_selection()
        context.set_mode(Mode.COMMAND)
        context.log_command(f"x: cut {len(removed)} chars")
        return
    if key in MOVEMENT_KEYS:
        buf.move_cursor(MOVEMENT_KEYS[key])


def handle_search_mode(context, key: str):
    """
    Handle a key press while typing a search pattern.
    Enter searches forward from the cursor, shift+enter (or ctrl+p) backward.
    Neither wraps around the ends of the page. Esc leaves the last good pattern active.
    """
    if key == "esc":
        context.set_mode(Mode.COMMAND)
        return
    if key in ("enter", "ctrl+n", "shift+enter", "ctrl+p"):
        matcher = context.search.compile(context.search_field)
        buf = context.current_buffer
        buf.set_pattern(matcher)
        if matcher is None:
            context.status_message = "no search pattern"
            return
        if key in ("enter", "ctrl+n"):
            found = buf.search_forward()
        else:
            found = buf.search_backward()
        if not found:
            context.status_message = f"no match for '{context.search.text}'"
        return
    context.search_field = edit_field(context.search_field, key)


def handle_history_mode(context, key: str):
    """Handle a key press in history mode: u undoes, r redoes."""
    if key == "esc":
        context.set_mode(Mode.COMMAND)
    elif key == "u":
        if not context.current_buffer.undo():
            context.status_message = "nothing to undo"
    elif key == "r":
        if not context.current_buffer.redo():
            context.status_message = "nothing to redo"


def handle_quit_mode(context, key: str):
    """Quit is final; further keys do nothing."""


HANDLERS = {
    Mode.COMMAND: handle_command_mode,
    Mode.OPEN_DIRECTORY: handle_open_directory_mode,
    Mode.OPEN_FILE: handle_open_file_mode,
    Mode.INPUT: handle_input_mode,
    Mode.SELECTION: handle_selection_mode,
    Mode.SEARCH: handle_search_mode,
    Mode.HISTORY: handle_history_mode,
    Mode.QUIT: handle_quit_mode,
}
