from backend.app.domain.diary.repository import InMemoryDiaryEntryRepository
from scripts.seed_diary import build_seed_drafts, seed_entries


def test_seed_entries_inserts_every_draft_for_user() -> None:
    repository = InMemoryDiaryEntryRepository()

    inserted = seed_entries(repository, "default-user")

    entries = repository.list_all()
    assert inserted == len(build_seed_drafts("default-user")) == len(entries)
    assert {entry.user_id for entry in entries} == {"default-user"}
    assert all(entry.title and entry.mood and entry.content for entry in entries)
