"""
Search pattern handling for the folio editor.

The SearchEngine turns the text typed at the search prompt into a compiled
regular expression and remembers the last pattern that compiled cleanly, so
leaving the prompt keeps the previous highlight active.
"""
import re

from folio.config import DEFAULT_SEARCH
from folio.errors import PatternError


class SearchEngine:
    """Compiles user patterns and keeps the last good one."""
    def __init__(self, default: str = DEFAULT_SEARCH):
        self.text = ""
        self.matcher = None
        self.compile(default)

    def compile(self, text: str):
        """
        Compile `text` and make it the current pattern.
        An empty string clears the pattern and returns None.
        Raises PatternError (leaving the previous pattern in place) on bad syntax.
        """
        if not text:
            self.text = ""
            self.matcher = None
            return None
        try:
            matcher = re.compile(text)
        except re.error as e:
            raise PatternError(f"{e} in '{text}'") from e
        self.text = text
        self.matcher = matcher
        return matcher
