"""
Error types for the folio transcription editor.

Every error raised while handling a key press derives from FolioError so the
input layer can turn it into a status message instead of crashing the editor.
"""


class FolioError(Exception):
    """Base class for recoverable editor errors."""
    prefix = "error"

    def __str__(self):
        return f"{self.prefix} {super().__str__()}"


class PageIOError(FolioError):
    """A page file or directory could not be read or written."""
    prefix = "io error"


class PageIdError(FolioError):
    """A page id token was not a usable non-negative number."""
    prefix = "not a page id"


class PatternError(FolioError):
    """A search pattern failed to compile."""
    prefix = "regex error"


class ClipboardError(FolioError):
    """The system clipboard refused the text."""
    prefix = "clipboard error"
