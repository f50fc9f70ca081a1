"""View-state controller keeping the on-screen diary list consistent with the store."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, List, Optional

from fastapi.concurrency import run_in_threadpool

from ...config.loader import DEFAULT_USER_ID
from ...infra.logging import get_logger
from .models import DiaryEntry, DiaryEntryDraft, format_entry_date
from .repository import DiaryEntryRepository
from .types import StoreError, StoreResult

__all__ = [
    "ConfirmDelete",
    "DiaryViewController",
    "DiaryViewState",
    "EntryCard",
    "FormBuffers",
]

logger = get_logger(__name__)

ConfirmDelete = Callable[[str], bool]


@dataclass
class FormBuffers:
    title: str = ""
    mood: str = ""
    content: str = ""

    def clear(self) -> None:
        self.title = ""
        self.mood = ""
        self.content = ""

    def to_draft(self, user_id: str) -> DiaryEntryDraft:
        return DiaryEntryDraft(
            title=self.title,
            mood=self.mood,
            content=self.content,
            user_id=user_id,
        )


@dataclass(frozen=True)
class EntryCard:
    """One rendered list item."""

    id: str
    title: str
    mood: str
    content: str
    created_at: datetime
    display_date: str
    is_deleting: bool
    delete_enabled: bool


@dataclass(frozen=True)
class DiaryViewState:
    """Render-ready state derived from the controller."""

    show_loading: bool
    cards: List[EntryCard] = field(default_factory=list)
    form: FormBuffers = field(default_factory=FormBuffers)
    deleting_ids: tuple[str, ...] = tuple()


class DiaryViewController:
    """Mediates user actions and the entry repository.

    Store calls run in a worker thread so several actions may be in flight
    at once. State is only mutated back on the event loop. Store failures
    never escape an action; each action returns a :class:`StoreResult`
    and leaves the visible state as it was.
    """

    def __init__(
        self,
        repository: DiaryEntryRepository,
        *,
        user_id: str = DEFAULT_USER_ID,
        confirm: Optional[ConfirmDelete] = None,
    ) -> None:
        self._repository = repository
        self._user_id = user_id
        self._confirm = confirm
        self.entries: List[DiaryEntry] = []
        self.is_initial_loading = True
        self._pending_deletes: Counter[str] = Counter()
        self.form = FormBuffers()

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def deleting_ids(self) -> set[str]:
        """Ids with at least one delete still in flight."""

        return set(self._pending_deletes)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    async def mount(self) -> StoreResult[List[DiaryEntry]]:
        self.is_initial_loading = True
        return await self.refresh()

    async def refresh(self) -> StoreResult[List[DiaryEntry]]:
        result = await self._attempt(self._repository.list_all)
        if result.ok:
            self.entries = list(result.value or [])
            logger.info("diary_fetch_completed", extra={"count": len(self.entries)})
        else:
            logger.warning(
                "diary_fetch_failed",
                extra=_error_extra(result.error),
            )
        self.is_initial_loading = False
        return result

    def update_form(
        self,
        *,
        title: Optional[str] = None,
        mood: Optional[str] = None,
        content: Optional[str] = None,
    ) -> FormBuffers:
        if title is not None:
            self.form.title = title
        if mood is not None:
            self.form.mood = mood
        if content is not None:
            self.form.content = content
        return self.form

    async def submit(self) -> StoreResult[None]:
        """Insert the form contents, then reload the whole list on success."""

        draft = self.form.to_draft(self._user_id)
        result = await self._attempt(self._repository.insert, draft)
        if not result.ok:
            logger.warning("diary_insert_failed", extra=_error_extra(result.error))
            return result
        logger.info("diary_entry_inserted", extra={"user_id": self._user_id})
        self.form.clear()
        await self.refresh()
        return result

    async def request_delete(
        self, entry_id: str, *, confirmed: Optional[bool] = None
    ) -> StoreResult[None]:
        if not self._is_confirmed(entry_id, confirmed):
            logger.info("diary_delete_declined", extra={"entry_id": entry_id})
            return StoreResult.declined()

        self._pending_deletes[entry_id] += 1
        try:
            result = await self._attempt(self._repository.delete_by_id, entry_id)
        finally:
            self._pending_deletes[entry_id] -= 1
            if self._pending_deletes[entry_id] <= 0:
                del self._pending_deletes[entry_id]

        if result.ok:
            self.entries = [entry for entry in self.entries if entry.id != entry_id]
            logger.info("diary_entry_deleted", extra={"entry_id": entry_id})
        else:
            logger.warning(
                "diary_delete_failed",
                extra={"entry_id": entry_id, **_error_extra(result.error)},
            )
        return result

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def snapshot(self) -> DiaryViewState:
        deleting = self.deleting_ids
        cards = [
            EntryCard(
                id=entry.id,
                title=entry.title,
                mood=entry.mood,
                content=entry.content,
                created_at=entry.created_at,
                display_date=format_entry_date(entry.created_at),
                is_deleting=entry.id in deleting,
                delete_enabled=entry.id not in deleting,
            )
            for entry in self.entries
        ]
        return DiaryViewState(
            show_loading=self.is_initial_loading,
            cards=[] if self.is_initial_loading else cards,
            form=replace(self.form),
            deleting_ids=tuple(sorted(deleting)),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _is_confirmed(self, entry_id: str, confirmed: Optional[bool]) -> bool:
        if confirmed is not None:
            return confirmed
        if self._confirm is None:
            return False
        return bool(self._confirm(entry_id))

    async def _attempt(self, func: Callable[..., Any], *args: Any) -> StoreResult[Any]:
        try:
            value = await run_in_threadpool(func, *args)
        except StoreError as exc:
            return StoreResult.failure(exc)
        return StoreResult.success(value)


def _error_extra(error: Optional[StoreError]) -> dict[str, Any]:
    if error is None:
        return {}
    return {
        "operation": error.operation,
        "error": error.message,
        "details": error.details,
    }
