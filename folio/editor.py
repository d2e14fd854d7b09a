"""
Editor context for the folio transcription editor.

Holds the state every key handler works on: the current mode, the page
buffer, the page navigator, the search engine, the prompt fields and the
status message. Nothing here touches the terminal, so the whole state machine
can be driven from tests.
"""
import enum

from folio import buffer, config, logger, pages, reflow, search


class Mode(str, enum.Enum):
    COMMAND = "command"
    OPEN_DIRECTORY = "open"
    OPEN_FILE = "goto"
    INPUT = "input"
    SELECTION = "select"
    SEARCH = "search"
    HISTORY = "history"
    QUIT = "quit"


class EditorContext:
    """
    Holds the state of the editor and the objects it drives.
    `settings` is a dict as returned by config.load_config().
    """
    def __init__(self, settings=None):
        settings = settings or config.load_config()
        logger.set_log_file(settings["log_file"])

        self.mode = Mode.COMMAND

        self.search = search.SearchEngine(settings["search"])
        self.reflow = reflow.LineReflow()
        self.navigator = pages.PageNavigator(settings["directory"])
        self.current_buffer = buffer.Buffer(pattern=self.search.matcher)

        # Prompt fields for the open directory / goto page / search prompts
        self.directory_field = settings["directory"]
        self.page_field = ""
        self.search_field = self.search.text

        self.status_message = ""

        # Last few actions, shown in the status bar
        self.command_log = []

    def set_mode(self, mode: Mode):
        self.mode = mode

    def log_command(self, msg: str):
        """Record an action in the short command log (and the debug log file)."""
        self.command_log.append(msg)
        if len(self.command_log) > 5:
            self.command_log = self.command_log[-5:]
        logger.log(msg)

    def open_directory(self, path: str):
        """Switch the navigator to `path` and start over with an empty buffer."""
        self.navigator.open_directory(path)
        self.directory_field = self.navigator.directory
        self.current_buffer = buffer.Buffer(pattern=self.search.matcher)

    def load_page(self, page_id: int):
        self.current_buffer = self.navigator.load(page_id, self.current_buffer)

    def graceful_exit(self):
        logger.log("Editor exited.")
        self.mode = Mode.QUIT

    @property
    def exit_flag(self) -> bool:
        return self.mode is Mode.QUIT
