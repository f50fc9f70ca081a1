"""Shared API dependencies."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from ..config import Settings, load_settings
from ..domain.diary.controller import DiaryViewController
from ..domain.diary.repository import DiaryEntryRepository

__all__ = ["get_diary_controller", "get_diary_repository", "get_settings"]


@lru_cache()
def _settings_singleton() -> Settings:
    return load_settings()


def get_settings() -> Settings:
    """Return the process-wide settings loaded at first use."""

    return _settings_singleton()


def get_diary_controller(request: Request) -> DiaryViewController:
    """Return the controller created by the application lifespan."""

    return request.app.state.diary_controller


def get_diary_repository(request: Request) -> DiaryEntryRepository:
    """Return the store adapter actually serving requests."""

    return request.app.state.diary_repository
