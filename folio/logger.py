"""
Debug log for the folio transcription editor.

Page loads and saves, mode commands and recoverable errors are appended to a
plain text file (folio.log by default, or the "log_file" setting) since the
terminal itself is taken over by curses. Screen writes that fall outside the
window are logged instead of raised.
"""
import curses
import datetime

LOG_FILE_PATH = "folio.log"


def set_log_file(path: str) -> None:
    global LOG_FILE_PATH
    LOG_FILE_PATH = path


def log(message: str, level: str = "INFO") -> None:
    """Append `[timestamp] LEVEL message` to the log file. An unwritable log is ignored."""
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    try:
        with open(LOG_FILE_PATH, 'a', encoding='utf-8') as f:
            f.write(f"[{timestamp}] {level} {message}\n")
    except OSError:
        pass


def log_error(where: str, error: Exception) -> None:
    """Log an error reported to the user, with the mode (or action) it happened in."""
    log(f"{where}: {type(error).__name__}: {error}", level="ERROR")


def safe_addstr(window, y: int, x: int, text: str, attr: int = 0) -> None:
    """Write `text` at (y, x); a curses.error (text past the window edge) is logged and dropped."""
    try:
        window.addstr(y, x, text, attr)
    except curses.error:
        log(f"addstr off screen at ({y},{x}): {text!r}", level="WARN")
