"""Persistence adapters for diary entries."""

from __future__ import annotations

from datetime import datetime
from threading import RLock
from typing import Callable, Dict, List, Protocol
from uuid import uuid4

import httpx
from sqlalchemy import (
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    Text,
    delete,
    func,
    insert,
    select,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ...config import Settings
from ...infra.logging import get_logger
from ...infra.store_client import StoreClient, StoreNotConfiguredError
from .models import DiaryEntry, DiaryEntryDraft, utcnow
from .types import StoreError

__all__ = [
    "DiaryEntryRepository",
    "InMemoryDiaryEntryRepository",
    "RestDiaryEntryRepository",
    "SqlDiaryEntryRepository",
    "build_diary_repository",
    "build_diary_table",
]

logger = get_logger(__name__)


class DiaryEntryRepository(Protocol):  # pragma: no cover - interface only
    """Create/list/delete contract over the diary entries store."""

    backend: str

    @property
    def configured(self) -> bool: ...

    def list_all(self) -> List[DiaryEntry]: ...

    def insert(self, draft: DiaryEntryDraft) -> None: ...

    def delete_by_id(self, entry_id: str) -> None: ...

    def close(self) -> None: ...


class InMemoryDiaryEntryRepository(DiaryEntryRepository):
    """Dict-backed store used for local development and tests."""

    backend = "memory"
    configured = True

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ) -> None:
        self._lock = RLock()
        self._rows: Dict[str, DiaryEntry] = {}
        self._clock = clock
        self._id_factory = id_factory

    def list_all(self) -> List[DiaryEntry]:
        with self._lock:
            rows = list(self._rows.values())
        return sorted(rows, key=lambda row: row.created_at, reverse=True)

    def insert(self, draft: DiaryEntryDraft) -> None:
        with self._lock:
            entry_id = self._id_factory()
            if entry_id in self._rows:
                raise StoreError(
                    f"Entry '{entry_id}' already exists",
                    operation="insert",
                    details={"id": entry_id},
                )
            self._rows[entry_id] = DiaryEntry(
                id=entry_id,
                created_at=self._clock(),
                title=draft.title,
                mood=draft.mood,
                content=draft.content,
                user_id=draft.user_id,
            )

    def delete_by_id(self, entry_id: str) -> None:
        with self._lock:
            self._rows.pop(entry_id, None)

    def close(self) -> None:
        return None


def build_diary_table(
    metadata: MetaData,
    name: str = "diary_entries",
    *,
    clock: Callable[[], datetime] = utcnow,
) -> Table:
    """Describe the entries table; ``id`` and ``created_at`` are filled on insert."""

    return Table(
        name,
        metadata,
        Column("id", String(36), primary_key=True, default=lambda: str(uuid4())),
        Column(
            "created_at",
            DateTime(timezone=True),
            nullable=False,
            default=clock,
            server_default=func.now(),
        ),
        Column("title", Text, nullable=False),
        Column("content", Text, nullable=False),
        Column("mood", Text, nullable=False),
        Column("user_id", String(128), nullable=False),
    )


class SqlDiaryEntryRepository(DiaryEntryRepository):
    """SQLAlchemy-backed adapter over an injected engine."""

    backend = "sql"
    configured = True

    def __init__(
        self,
        engine: Engine,
        *,
        table_name: str = "diary_entries",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._engine = engine
        self.metadata = MetaData()
        self._table = build_diary_table(self.metadata, table_name, clock=clock)

    def ping(self) -> None:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StoreError(
                "store unreachable", operation="ping", details={"reason": str(exc)}
            ) from exc

    def list_all(self) -> List[DiaryEntry]:
        stmt = select(self._table).order_by(self._table.c.created_at.desc())
        try:
            with self._engine.begin() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            raise _sql_failure("list_all", exc) from exc
        return [DiaryEntry.from_row(row) for row in rows]

    def insert(self, draft: DiaryEntryDraft) -> None:
        stmt = insert(self._table).values(**draft.as_row())
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise _sql_failure("insert", exc) from exc

    def delete_by_id(self, entry_id: str) -> None:
        stmt = delete(self._table).where(self._table.c.id == entry_id)
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise _sql_failure("delete_by_id", exc) from exc

    def close(self) -> None:
        return None


class RestDiaryEntryRepository(DiaryEntryRepository):
    """Adapter for the hosted store's REST endpoint."""

    backend = "rest"

    def __init__(self, client: StoreClient, *, table_name: str = "diary_entries") -> None:
        self._client = client
        self._path = f"/{table_name}"

    @property
    def configured(self) -> bool:
        return self._client.configured

    def list_all(self) -> List[DiaryEntry]:
        response = self._send(
            "list_all",
            "GET",
            params={"select": "*", "order": "created_at.desc"},
        )
        try:
            payload = response.json()
            return [DiaryEntry.from_row(row) for row in payload or []]
        except (ValueError, KeyError, TypeError) as exc:
            raise StoreError(
                "malformed list response",
                operation="list_all",
                details={"reason": str(exc)},
            ) from exc

    def insert(self, draft: DiaryEntryDraft) -> None:
        self._send(
            "insert",
            "POST",
            json=[draft.as_row()],
            headers={"Prefer": "return=minimal"},
        )

    def delete_by_id(self, entry_id: str) -> None:
        self._send("delete_by_id", "DELETE", params={"id": f"eq.{entry_id}"})

    def close(self) -> None:
        self._client.close()

    def _send(self, operation: str, method: str, **kwargs) -> httpx.Response:
        try:
            return self._client.request(method, self._path, **kwargs)
        except StoreNotConfiguredError as exc:
            raise StoreError(str(exc), operation=operation) from exc
        except httpx.HTTPStatusError as exc:
            raise StoreError(
                f"store responded {exc.response.status_code}",
                operation=operation,
                details={
                    "status_code": exc.response.status_code,
                    "body": exc.response.text[:500],
                },
            ) from exc
        except httpx.HTTPError as exc:
            raise StoreError(
                "store transport failure",
                operation=operation,
                details={"reason": str(exc)},
            ) from exc


def build_diary_repository(
    settings: Settings,
    *,
    engine: Engine | None = None,
    transport: httpx.BaseTransport | None = None,
) -> DiaryEntryRepository:
    """Return the adapter selected by ``settings.store.backend``."""

    store = settings.store
    if store.backend == "memory":
        return InMemoryDiaryEntryRepository()

    if store.backend == "sql":
        if engine is None:
            raise ValueError("sql store backend requires an engine")
        repository = SqlDiaryEntryRepository(engine, table_name=store.table)
        try:
            repository.ping()
        except StoreError:
            if not store.fallback_to_memory:
                raise
            logger.warning("sql_diary_store_unavailable_falling_back", exc_info=True)
            return InMemoryDiaryEntryRepository()
        return repository

    client = StoreClient(
        store.url,
        store.anon_key,
        timeout=store.timeout_seconds,
        transport=transport,
    )
    return RestDiaryEntryRepository(client, table_name=store.table)


def _sql_failure(operation: str, exc: SQLAlchemyError) -> StoreError:
    return StoreError(
        f"{operation} failed",
        operation=operation,
        details={"reason": str(exc)},
    )
