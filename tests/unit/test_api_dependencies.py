from types import SimpleNamespace

from starlette.requests import Request

from backend.app.api import dependencies
from backend.app.api.dependencies import (
    get_diary_controller,
    get_diary_repository,
    get_settings,
)
from backend.app.domain.diary.controller import DiaryViewController
from backend.app.domain.diary.repository import InMemoryDiaryEntryRepository


def _make_request(app: object) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": [],
        "client": ("test", 1234),
        "server": ("testserver", 80),
        "scheme": "http",
        "app": app,
    }
    return Request(scope)


def test_get_diary_controller_reads_app_state() -> None:
    controller = DiaryViewController(InMemoryDiaryEntryRepository())
    app = SimpleNamespace(state=SimpleNamespace(diary_controller=controller))

    assert get_diary_controller(_make_request(app)) is controller


def test_get_diary_repository_reads_app_state() -> None:
    repository = InMemoryDiaryEntryRepository()
    app = SimpleNamespace(state=SimpleNamespace(diary_repository=repository))

    assert get_diary_repository(_make_request(app)) is repository


def test_get_settings_is_cached(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("DIARY_CONFIG_DIR", str(tmp_path))
    dependencies._settings_singleton.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        dependencies._settings_singleton.cache_clear()
