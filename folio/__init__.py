"""folio: a terminal editor for transcribing scanned pages stored as numbered text files."""

__version__ = "0.1.0"
