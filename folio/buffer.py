"""
Buffer module for the folio transcription editor.

Defines the Buffer class holding the text of the page being transcribed: its lines,
cursor, selection, undo/redo history and the active search pattern.
Every change to the text goes through an Edit record so it can be undone and redone.
"""
from dataclasses import dataclass

# Cursor movement units understood by Buffer.move_cursor
MOVES = (
    "forward", "back", "up", "down",
    "word_forward", "word_back",
    "paragraph_forward", "paragraph_back",
    "head", "end",
)


def _advance(pos, text):
    """Return the position reached after writing `text` starting at `pos`."""
    line, col = pos
    parts = text.split("\n")
    if len(parts) == 1:
        return (line, col + len(text))
    return (line + len(parts) - 1, len(parts[-1]))


@dataclass
class Edit:
    """One reversible change: `removed` was replaced by `inserted` at `start`."""
    start: tuple
    removed: str
    inserted: str
    cursor_before: tuple
    cursor_after: tuple

    def apply(self, buf):
        buf._replace(self.start, self.removed, self.inserted)
        buf.cursor_line, buf.cursor_col = self.cursor_after
        buf._clamp()

    def revert(self, buf):
        buf._replace(self.start, self.inserted, self.removed)
        buf.cursor_line, buf.cursor_col = self.cursor_before
        buf._clamp()


class Buffer:
    """Represents the page text with its cursor, selection and edit history."""
    def __init__(self, lines=None, pattern=None, trailing_newline: bool = False):
        self.lines = list(lines) if lines else [""]
        self.pattern = pattern
        # Whether the file this text came from ended with a newline
        self.trailing_newline = trailing_newline

        self.cursor_line = 0
        self.cursor_col = 0
        self.selection_anchor = None
        self.undo_stack = []
        self.redo_stack = []
        # Text removed by the last cut, pasted back with ctrl+y in input mode
        self.yank = ""
        # Scroll offset (top line index visible in the window)
        self.scroll = 0

    def replace_wholesale(self, lines) -> "Buffer":
        """
        Return a fresh Buffer holding `lines`.
        The search pattern and trailing newline setting carry over;
        cursor, selection and history do not.
        """
        return Buffer(lines, pattern=self.pattern, trailing_newline=self.trailing_newline)

    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def cursor(self):
        return (self.cursor_line, self.cursor_col)

    def _clamp(self):
        if not self.lines:
            self.lines = [""]
        self.cursor_line = max(0, min(self.cursor_line, len(self.lines) - 1))
        self.cursor_col = max(0, min(self.cursor_col, len(self.lines[self.cursor_line])))

    ##########################################
    # CURSOR MOVEMENT
    ##########################################
    def move_cursor(self, unit: str):
        """Move the cursor by `unit` (one of MOVES). Edges clamp silently."""
        if unit not in MOVES:
            raise ValueError(f"unknown cursor movement: {unit}")
        getattr(self, "_move_" + unit)()
        self._clamp()

    def _move_forward(self):
        if self.cursor_col < len(self.lines[self.cursor_line]):
            self.cursor_col += 1
        elif self.cursor_line < len(self.lines) - 1:
            self.cursor_line += 1
            self.cursor_col = 0

    def _move_back(self):
        if self.cursor_col > 0:
            self.cursor_col -= 1
        elif self.cursor_line > 0:
            self.cursor_line -= 1
            self.cursor_col = len(self.lines[self.cursor_line])

    def _move_up(self):
        if self.cursor_line > 0:
            self.cursor_line -= 1

    def _move_down(self):
        if self.cursor_line < len(self.lines) - 1:
            self.cursor_line += 1

    def _move_head(self):
        self.cursor_col = 0

    def _move_end(self):
        self.cursor_col = len(self.lines[self.cursor_line])

    def _move_word_forward(self):
        """Move to the start of the next word, continuing on the next line at end of line."""
        line = self.lines[self.cursor_line]
        pos = self.cursor_col
        if pos >= len(line):
            if self.cursor_line >= len(self.lines) - 1:
                return
            self.cursor_line += 1
            line = self.lines[self.cursor_line]
            pos = 0
        else:
            while pos < len(line) and line[pos].isalnum():
                pos += 1
        while pos < len(line) and not line[pos].isalnum():
            pos += 1
        self.cursor_col = pos

    def _move_word_back(self):
        """Move to the beginning of the current or previous word."""
        if self.cursor_col == 0 and self.cursor_line > 0:
            self.cursor_line -= 1
            self.cursor_col = len(self.lines[self.cursor_line])
        line = self.lines[self.cursor_line]
        pos = self.cursor_col
        while pos > 0 and not line[pos-1].isalnum():
            pos -= 1
        while pos > 0 and line[pos-1].isalnum():
            pos -= 1
        self.cursor_col = pos

    def _move_paragraph_forward(self):
        """Move to the first line of the next paragraph (blank-line separated)."""
        last = len(self.lines) - 1
        i = self.cursor_line
        while i < last and self.lines[i].strip() != "":
            i += 1
        while i < last and self.lines[i].strip() == "":
            i += 1
        self.cursor_line = i
        self.cursor_col = 0

    def _move_paragraph_back(self):
        """Move to the first line of the current paragraph, or of the previous one."""
        i = self.cursor_line
        if i > 0:
            i -= 1
        while i > 0 and self.lines[i].strip() == "":
            i -= 1
        while i > 0 and self.lines[i-1].strip() != "":
            i -= 1
        self.cursor_line = i
        self.cursor_col = 0

    ##########################################
    # SELECTION
    ##########################################
    def start_selection(self):
        self.selection_anchor = self.cursor

    def cancel_selection(self):
        self.selection_anchor = None

    def selection_range(self):
        """Return (start, end) of the selection in document order, or None."""
        if self.selection_anchor is None:
            return None
        return tuple(sorted((self.selection_anchor, self.cursor)))

    def cut_selection(self) -> str:
        """Remove the selected text, remember it for pasting and return it."""
        span = self.selection_range()
        self.selection_anchor = None
        if span is None or span[0] == span[1]:
            return ""
        start, end = span
        removed = self._text_between(start, end)
        self._record(Edit(start, removed, "", self.cursor, start))
        self.yank = removed
        return removed

    ##########################################
    # TEXT EDITS
    ##########################################
    def _text_between(self, start, end) -> str:
        (sl, sc), (el, ec) = start, end
        if sl == el:
            return self.lines[sl][sc:ec]
        parts = [self.lines[sl][sc:]] + self.lines[sl+1:el] + [self.lines[el][:ec]]
        return "\n".join(parts)

    def _replace(self, start, old: str, new: str):
        """Replace the text `old` found at `start` with `new`."""
        sl, sc = start
        el, ec = _advance(start, old)
        head = self.lines[sl][:sc]
        tail = self.lines[el][ec:]
        parts = new.split("\n")
        parts[0] = head + parts[0]
        parts[-1] = parts[-1] + tail
        self.lines[sl:el+1] = parts

    def _record(self, edit: Edit):
        edit.apply(self)
        self.undo_stack.append(edit)
        self.redo_stack.clear()

    def insert_text(self, text: str):
        """Insert `text` (which may contain newlines) at the cursor."""
        if not text:
            return
        start = self.cursor
        self._record(Edit(start, "", text, start, _advance(start, text)))

    def delete_back(self):
        """Delete the character before the cursor, joining lines at column 0."""
        if self.cursor == (0, 0):
            return
        end = self.cursor
        self._move_back()
        start = self.cursor
        self._record(Edit(start, self._text_between(start, end), "", end, start))

    def delete_forward(self):
        """Delete the character under the cursor, joining lines at end of line."""
        start = self.cursor
        self._move_forward()
        end = self.cursor
        self.cursor_line, self.cursor_col = start
        if start == end:
            return
        self._record(Edit(start, self._text_between(start, end), "", start, start))

    def paste(self):
        self.insert_text(self.yank)

    def input(self, key: str) -> bool:
        """
        Apply a raw key from input mode.
        Printable characters are inserted; enter, tab, backspace, delete and
        ctrl+y edit; navigation keys move. Returns True if the key was used.
        """
        if key == "enter":
            self.insert_text("\n")
        elif key == "tab":
            self.insert_text("\t")
        elif key == "backspace":
            self.delete_back()
        elif key == "delete":
            self.delete_forward()
        elif key == "ctrl+y":
            self.paste()
        elif key in INPUT_MOVES:
            self.move_cursor(INPUT_MOVES[key])
        elif len(key) == 1 and key.isprintable():
            self.insert_text(key)
        else:
            return False
        return True

    ##########################################
    # HISTORY
    ##########################################
    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        edit = self.undo_stack.pop()
        edit.revert(self)
        self.redo_stack.append(edit)
        self.selection_anchor = None
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        edit = self.redo_stack.pop()
        edit.apply(self)
        self.undo_stack.append(edit)
        self.selection_anchor = None
        return True

    ##########################################
    # SEARCH
    ##########################################
    def set_pattern(self, matcher):
        self.pattern = matcher

    def search_forward(self, matcher=None) -> bool:
        """
        Move the cursor to the first match starting after the cursor.
        Does not wrap; returns False and leaves the cursor alone when nothing follows.
        """
        matcher = matcher or self.pattern
        if matcher is None:
            return False
        for i in range(self.cursor_line, len(self.lines)):
            line = self.lines[i]
            pos = self.cursor_col + 1 if i == self.cursor_line else 0
            if pos > len(line):
                continue
            m = matcher.search(line, pos)
            if m is not None:
                self.cursor_line, self.cursor_col = i, m.start()
                return True
        return False

    def search_backward(self, matcher=None) -> bool:
        """Move the cursor to the last match starting before the cursor, without wrapping."""
        matcher = matcher or self.pattern
        if matcher is None:
            return False
        for i in range(self.cursor_line, -1, -1):
            line = self.lines[i]
            last = self.cursor_col - 1 if i == self.cursor_line else len(line)
            for pos in range(last, -1, -1):
                if matcher.match(line, pos) is not None:
                    self.cursor_line, self.cursor_col = i, pos
                    return True
        return False

    def matches_on_line(self, index: int):
        """Return (start, end) spans of the search pattern on line `index`."""
        if self.pattern is None:
            return []
        return [m.span() for m in self.pattern.finditer(self.lines[index]) if m.end() > m.start()]


# Navigation keys that stay active while typing
INPUT_MOVES = {
    "left": "back",
    "right": "forward",
    "up": "up",
    "down": "down",
    "home": "head",
    "end": "end",
    "ctrl+left": "word_back",
    "ctrl+right": "word_forward",
    "pgup": "paragraph_back",
    "pgdn": "paragraph_forward",
}
