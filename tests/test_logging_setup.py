# ruff: noqa: S101
import logging
from pathlib import Path

import pytest

from poke.logging_setup import configure_logging, find_file_handler, log_file_path


@pytest.fixture
def root_handlers():
    root = logging.getLogger()
    initial = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers[len(initial) :]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


def test_log_file_path_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert log_file_path() == tmp_path / "poke.log"


def test_log_file_path_is_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert log_file_path("logs/debug.log") == tmp_path / "logs" / "debug.log"


def test_disabled_logging_adds_no_handler(root_handlers):
    initial = list(root_handlers.handlers)
    assert configure_logging(False) is None
    assert root_handlers.handlers == initial


def test_debug_log_is_written_once(tmp_path, root_handlers):
    target = tmp_path / "logs" / "debug.log"
    path = configure_logging(True, log_path=target)
    assert path == target.resolve()
    configure_logging(True, log_path=target)

    file_handlers = [h for h in root_handlers.handlers if isinstance(h, logging.FileHandler)]
    assert [Path(h.baseFilename) for h in file_handlers].count(path) == 1
    logging.getLogger("poke.test").debug("hello from the test")
    find_file_handler(root_handlers, path).flush()
    assert "hello from the test" in target.read_text(encoding="utf-8")


def test_transport_loggers_are_quietened(tmp_path, root_handlers):
    configure_logging(True, log_path=tmp_path / "poke.log")
    assert logging.getLogger("httpcore").level == logging.INFO


def test_unwritable_log_path_returns_none(tmp_path, root_handlers):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    assert configure_logging(True, log_path=blocker / "poke.log") is None
