import logging

from backend.app.infra import logging as diary_logging


def test_configure_logging_applies_level(monkeypatch) -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        diary_logging.configure_logging("warning")
        assert root.level == logging.WARNING
        diary_logging.configure_logging("not-a-level")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)


def test_get_logger_returns_named_logger() -> None:
    assert diary_logging.get_logger("diary.test").name == "diary.test"
