"""
folio/ui/screen.py

Draws the editor state with curses: a title line with the page id and
progress, the page text with line numbers, search matches and selection
highlighted, and a status line with the active prompt or last message on the
left and the mode on the right.
"""
import curses

from wcwidth import wcwidth

from folio import logger
from folio.editor import Mode

# Color pair numbers
PAIR_TITLE = 1
PAIR_TEXT = 2
PAIR_MATCH = 3
PAIR_LINENO = 4
PAIR_ERROR = 5

LINENO_WIDTH = 5

PROMPTS = {
    Mode.OPEN_DIRECTORY: ("Open Directory", "directory_field"),
    Mode.OPEN_FILE: ("Go to Page", "page_field"),
    Mode.SEARCH: ("Search Pattern", "search_field"),
}


def init_colors():
    """Set up the color pairs used by display(). Plain terminals fall back to attributes only."""
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(PAIR_TITLE, curses.COLOR_WHITE, curses.COLOR_BLUE)
    curses.init_pair(PAIR_TEXT, curses.COLOR_CYAN, -1)
    curses.init_pair(PAIR_MATCH, curses.COLOR_RED, curses.COLOR_YELLOW)
    curses.init_pair(PAIR_LINENO, curses.COLOR_WHITE, curses.COLOR_BLACK)
    curses.init_pair(PAIR_ERROR, curses.COLOR_RED, -1)


def char_width(ch: str) -> int:
    w = wcwidth(ch)
    return w if w > 0 else 1


def display_char(ch: str) -> str:
    """Control characters (tabs included) take one cell and are shown as a space."""
    return ch if ch.isprintable() else " "


def text_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def clip(text: str, width: int) -> str:
    """Cut `text` to at most `width` terminal cells."""
    used = 0
    for i, ch in enumerate(text):
        used += char_width(ch)
        if used > width:
            return text[:i]
    return text


def line_attributes(buf, index: int, length: int):
    """Return one curses attribute per character of line `index`."""
    attrs = [curses.color_pair(PAIR_TEXT)] * length
    for start, end in buf.matches_on_line(index):
        for i in range(start, min(end, length)):
            attrs[i] = curses.color_pair(PAIR_MATCH)
    span = buf.selection_range()
    if span is not None:
        (sl, sc), (el, ec) = span
        if sl <= index <= el:
            first = sc if index == sl else 0
            last = ec if index == el else length
            for i in range(first, min(last, length)):
                attrs[i] |= curses.A_REVERSE
    return attrs


def draw_line(stdscr, y: int, x: int, text: str, attrs, width: int):
    """Draw `text` cell by cell, grouping runs that share an attribute."""
    used = 0
    run = ""
    run_attr = None
    run_x = x
    for ch, attr in zip(text, attrs):
        w = char_width(ch)
        if used + w > width:
            break
        if attr != run_attr and run:
            logger.safe_addstr(stdscr, y, run_x, run, run_attr)
            run_x = x + used
            run = ""
        run_attr = attr
        run += display_char(ch)
        used += w
    if run:
        logger.safe_addstr(stdscr, y, run_x, run, run_attr)


def draw_title(stdscr, context, width: int):
    nav = context.navigator
    title = f" {nav.label()}  [{nav.progress()}] "
    logger.safe_addstr(stdscr, 0, 0, " " * (width - 1), curses.color_pair(PAIR_TITLE))
    start = max(0, (width - text_width(title)) // 2)
    logger.safe_addstr(stdscr, 0, start, clip(title, width - 1), curses.color_pair(PAIR_TITLE) | curses.A_BOLD)
    left = clip(f" {nav.directory}", max(0, start - 1))
    logger.safe_addstr(stdscr, 0, 0, left, curses.color_pair(PAIR_TITLE))


def draw_text(stdscr, buf, top: int, height: int, width: int):
    """Draw the visible slice of the buffer, keeping the cursor line on screen."""
    if buf.cursor_line < buf.scroll:
        buf.scroll = buf.cursor_line
    if buf.cursor_line >= buf.scroll + height:
        buf.scroll = buf.cursor_line - height + 1
    buf.scroll = max(0, min(buf.scroll, max(0, len(buf.lines) - 1)))

    text_width_avail = max(0, width - LINENO_WIDTH - 1)
    for row in range(height):
        index = buf.scroll + row
        if index >= len(buf.lines):
            break
        line = buf.lines[index]
        lineno = f"{index + 1:>{LINENO_WIDTH - 1}} "
        logger.safe_addstr(stdscr, top + row, 0, lineno, curses.color_pair(PAIR_LINENO))
        draw_line(stdscr, top + row, LINENO_WIDTH, line,
                  line_attributes(buf, index, len(line)), text_width_avail)


def draw_status(stdscr, context, y: int, width: int):
    label = f" {context.mode.value.upper()} "
    label_x = max(0, width - len(label) - 1)
    logger.safe_addstr(stdscr, y, label_x, label, curses.A_REVERSE)

    if context.mode in PROMPTS:
        title, field = PROMPTS[context.mode]
        prompt = f"{title}: {getattr(context, field)}"
        logger.safe_addstr(stdscr, y, 0, clip(prompt, max(0, label_x - 1)))
        return text_width(prompt)
    if context.status_message:
        logger.safe_addstr(stdscr, y, 0, clip(context.status_message, max(0, label_x - 1)),
                           curses.color_pair(PAIR_ERROR))
    elif context.command_log:
        logger.safe_addstr(stdscr, y, 0, clip(context.command_log[-1], max(0, label_x - 1)), curses.A_DIM)
    return None


def display(stdscr, context):
    """
    Re-draw the entire screen: title line, page text and status line.
    The hardware cursor sits at the text cursor, or at the end of the prompt when one is active.
    """
    height, width = stdscr.getmaxyx()
    text_height = max(1, height - 2)
    buf = context.current_buffer

    stdscr.erase()
    draw_title(stdscr, context, width)
    draw_text(stdscr, buf, 1, text_height, width)
    prompt_end = draw_status(stdscr, context, height - 1, width)

    try:
        if prompt_end is not None:
            stdscr.move(height - 1, min(prompt_end, width - 1))
        else:
            line = buf.lines[buf.cursor_line]
            cursor_x = LINENO_WIDTH + text_width(line[:buf.cursor_col])
            stdscr.move(1 + buf.cursor_line - buf.scroll, min(cursor_x, width - 1))
    except curses.error:
        pass

    stdscr.refresh()
