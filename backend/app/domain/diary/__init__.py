"""Diary domain package."""

from .controller import DiaryViewController, DiaryViewState, EntryCard, FormBuffers
from .models import DiaryEntry, DiaryEntryDraft
from .repository import (
    DiaryEntryRepository,
    InMemoryDiaryEntryRepository,
    RestDiaryEntryRepository,
    SqlDiaryEntryRepository,
    build_diary_repository,
)
from .types import Outcome, StoreError, StoreResult

__all__ = [
    "DiaryEntry",
    "DiaryEntryDraft",
    "DiaryEntryRepository",
    "DiaryViewController",
    "DiaryViewState",
    "EntryCard",
    "FormBuffers",
    "InMemoryDiaryEntryRepository",
    "Outcome",
    "RestDiaryEntryRepository",
    "SqlDiaryEntryRepository",
    "StoreError",
    "StoreResult",
    "build_diary_repository",
]
