import pytest

from folio import logger
from folio.config import DEFAULT_SEARCH
from folio.editor import EditorContext


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setattr(logger, "LOG_FILE_PATH", str(tmp_path / "folio.log"))


@pytest.fixture
def pages_dir(tmp_path):
    """A transcription directory holding 000.txt, 001.txt and 002.txt."""
    d = tmp_path / "scans"
    d.mkdir()
    for i in range(3):
        (d / f"{i:03d}.txt").write_text(f"page {i}\nline two of {i}\n", encoding="utf-8")
    return d


@pytest.fixture
def make_context(tmp_path):
    def _make(directory=None):
        return EditorContext({
            "search": DEFAULT_SEARCH,
            "log_file": str(tmp_path / "folio.log"),
            "directory": str(directory or tmp_path),
        })
    return _make
