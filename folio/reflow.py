"""
Line reflow for OCR output.

Scanners often flatten line breaks into wide runs of spaces; LineReflow puts
the breaks back by turning every run of three or more horizontal whitespace
characters into a newline.
"""
import re


class LineReflow:
    """Splits lines at long horizontal whitespace runs."""
    def __init__(self, min_run: int = 3):
        self.long_runs = re.compile(r"[^\n\S]{%d,}" % min_run)

    def apply(self, lines):
        """Return a new list of lines with every long run replaced by a line break."""
        text = "\n".join(lines)
        return self.long_runs.sub("\n", text).split("\n")
