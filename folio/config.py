"""
Configuration for the folio editor.

Settings live in ~/folio/config/folio.conf as plain `key=value` lines, the
same format the editor has always used for its small persisted settings.
"""
import os

CONFIG_PATH = os.path.expanduser("~/folio/config/folio.conf")

# Page markers, folio markers and bare numbers: the usual anchors in a scan
DEFAULT_SEARCH = r"\d+|f\.|fol|p\.|page|scan"

DEFAULTS = {
    "search": DEFAULT_SEARCH,
    "log_file": "folio.log",
    "directory": "",
}


def load_config(path: str = CONFIG_PATH) -> dict:
    """
    Read `path` and return the settings merged over DEFAULTS.
    A missing file yields the defaults; unknown keys and malformed lines are skipped.
    An empty "directory" means the current working directory.
    """
    settings = dict(DEFAULTS)
    if os.path.isfile(path):
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                if key in settings:
                    settings[key] = value.strip()
    if not settings["directory"]:
        settings["directory"] = os.getcwd()
    return settings
