"""
System clipboard access for the folio editor.
"""
import pyperclip

from folio.errors import ClipboardError


def copy_text(text: str) -> None:
    """Place `text` on the system clipboard. Raises ClipboardError when no clipboard is usable."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(str(e)) from e
