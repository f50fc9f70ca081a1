"""Diary entry data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

__all__ = [
    "DiaryEntry",
    "DiaryEntryDraft",
    "format_entry_date",
    "parse_timestamp",
    "utcnow",
]


def utcnow() -> datetime:
    """Return timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DiaryEntry:
    """A stored diary row; ``id`` and ``created_at`` come from the store."""

    id: str
    created_at: datetime
    title: str
    mood: str
    content: str
    user_id: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DiaryEntry":
        return cls(
            id=str(row["id"]),
            created_at=parse_timestamp(row["created_at"]),
            title=row["title"],
            mood=row["mood"],
            content=row["content"],
            user_id=row["user_id"],
        )


@dataclass(frozen=True)
class DiaryEntryDraft:
    """Insert candidate; the repository trusts these values as given."""

    title: str
    mood: str
    content: str
    user_id: str

    def as_row(self) -> dict[str, str]:
        return {
            "title": self.title,
            "content": self.content,
            "mood": self.mood,
            "user_id": self.user_id,
        }


def parse_timestamp(value: Any) -> datetime:
    """Accept a datetime or an ISO-8601 string as returned by the REST store."""

    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    return datetime.fromisoformat(text)


def format_entry_date(value: datetime) -> str:
    """Render ``value`` as e.g. ``October 17, 2026``."""

    return f"{value:%B} {value.day}, {value.year}"
