"""Seed script for the diary entries store.

Inserts a few sample entries through the configured repository so the
diary screen has something to show on a fresh store.
"""

from __future__ import annotations

import argparse
from typing import List

from backend.app.config import load_settings
from backend.app.domain.diary.models import DiaryEntryDraft
from backend.app.domain.diary.repository import (
    DiaryEntryRepository,
    build_diary_repository,
)
from backend.app.infra.db import build_engine


def build_seed_drafts(user_id: str) -> List[DiaryEntryDraft]:
    """Return static seed entries for the diary."""

    return [
        DiaryEntryDraft(
            title="First day back",
            mood="hopeful",
            content="Unpacked the boxes and found my old notebooks.\nTime to start writing again.",
            user_id=user_id,
        ),
        DiaryEntryDraft(
            title="Rainy walk",
            mood="calm",
            content="Walked the long way home in the rain.",
            user_id=user_id,
        ),
        DiaryEntryDraft(
            title="Deadline week",
            mood="tired",
            content="Three reviews, two launches, one very long Thursday.",
            user_id=user_id,
        ),
    ]


def seed_entries(repository: DiaryEntryRepository, user_id: str) -> int:
    drafts = build_seed_drafts(user_id)
    for draft in drafts:
        repository.insert(draft)
    return len(drafts)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed sample diary entries.")
    parser.add_argument("--profile", default=None, help="Config profile name.")
    args = parser.parse_args(argv)

    settings = load_settings(args.profile)
    engine = build_engine(settings) if settings.store.backend == "sql" else None
    repository = build_diary_repository(settings, engine=engine)
    try:
        inserted = seed_entries(repository, settings.user_id)
    finally:
        repository.close()
        if engine is not None:
            engine.dispose()
    print(f"Seeded {inserted} entries into {settings.store.table}.")


if __name__ == "__main__":
    main()
