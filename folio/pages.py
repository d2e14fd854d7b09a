"""
Page navigation for the folio transcription editor.

A transcription is a directory of numbered text files, one per scanned page:
000.txt, 001.txt, ... The PageNavigator knows which directory is open, which
page is current and how many files the directory held when it was opened.
"""
import os
import shutil
import tempfile

from folio import logger
from folio.buffer import Buffer
from folio.errors import PageIOError, PageIdError

PAGE_DIGITS = 3
PAGE_SUFFIX = ".txt"


def format_page_id(page_id: int) -> str:
    """Return the zero-padded token for `page_id`, e.g. 7 -> '007'."""
    return f"{page_id:0{PAGE_DIGITS}d}"


def parse_page_id(token: str) -> int:
    """Parse a page id typed by the user. Raises PageIdError if it is not a non-negative integer."""
    token = token.strip()
    if not (token.isascii() and token.isdigit()):
        raise PageIdError(f"'{token}'")
    try:
        return int(token)
    except ValueError as e:
        raise PageIdError(f"'{token[:10]}...', too many digits") from e


def count_page_files(directory: str) -> int:
    """Count the regular files directly inside `directory`."""
    try:
        with os.scandir(directory) as entries:
            return sum(1 for entry in entries if entry.is_file())
    except OSError as e:
        raise PageIOError(f"cannot list {directory}: {e}") from e


class PageNavigator:
    """Maps page ids to files in the open directory and moves text in and out of them."""
    def __init__(self, directory: str = "."):
        self.directory = directory
        self.page_id = 0
        self.page_count = 0
        # Whether the current page was read from its file (guards save)
        self.loaded = False

    def open_directory(self, path: str):
        """Make `path` the working directory and rewind to page 0."""
        path = os.path.expanduser(path.strip())
        if not os.path.isdir(path):
            raise PageIOError(f"not a directory: {path}")
        self.page_count = count_page_files(path)
        self.directory = path
        self.page_id = 0
        self.loaded = False
        logger.log(f"opened directory {path} ({self.page_count} files)")

    def path_for(self, page_id: int) -> str:
        return os.path.join(self.directory, format_page_id(page_id) + PAGE_SUFFIX)

    def label(self) -> str:
        return format_page_id(self.page_id)

    def progress(self) -> str:
        return f"{self.page_id + 1}/{self.page_count}"

    def load(self, page_id: int, current: Buffer) -> Buffer:
        """
        Read page `page_id` and return it as a fresh Buffer derived from `current`.
        The current page only changes once the file has been read.
        """
        path = self.path_for(page_id)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise PageIOError(f"cannot read {path}: {e}") from e
        trailing = content.endswith("\n")
        if trailing:
            content = content[:-1]
        buf = current.replace_wholesale(content.split("\n"))
        buf.trailing_newline = trailing
        self.page_id = page_id
        self.loaded = True
        logger.log(f"loaded {path} ({len(buf.lines)} lines)")
        return buf

    def save(self, buf: Buffer):
        """
        Write `buf` to the current page file.
        The text goes to a temporary file first and replaces the page in one rename.
        A page file that exists but was never loaded is not overwritten.
        """
        path = self.path_for(self.page_id)
        if os.path.exists(path) and not self.loaded:
            raise PageIOError(f"refusing to overwrite {path}: page was not loaded")
        content = "\n".join(buf.lines)
        if buf.trailing_newline:
            content += "\n"
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".folio-", suffix=PAGE_SUFFIX, dir=self.directory)
        except OSError as e:
            raise PageIOError(f"cannot write {path}: {e}") from e
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline="\n") as f:
                f.write(content)
            if os.path.exists(path):
                shutil.copymode(path, tmp_path)
            else:
                # New pages follow the umask like any other created file
                umask = os.umask(0)
                os.umask(umask)
                os.chmod(tmp_path, 0o666 & ~umask)
            os.replace(tmp_path, path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PageIOError(f"cannot write {path}: {e}") from e
        self.loaded = True
        logger.log(f"saved {path} ({len(content)} chars)")

    def next(self, current: Buffer) -> Buffer:
        return self.load(self.page_id + 1, current)

    def prev(self, current: Buffer) -> Buffer:
        if self.page_id == 0:
            raise PageIdError("-1, already at first page")
        return self.load(self.page_id - 1, current)
