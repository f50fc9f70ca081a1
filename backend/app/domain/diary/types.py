"""Shared diary domain types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class StoreError(Exception):
    """Any failure of a store round trip (network, auth, query, config)."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.details = details or {}


class Outcome(str, Enum):
    """Tag carried by every :class:`StoreResult`."""

    OK = "ok"
    FAILED = "failed"
    DECLINED = "declined"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Explicit success/failure outcome of a controller action."""

    outcome: Outcome
    value: Optional[T] = None
    error: Optional[StoreError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(outcome=Outcome.OK, value=value)

    @classmethod
    def failure(cls, error: StoreError) -> "StoreResult[T]":
        return cls(outcome=Outcome.FAILED, error=error)

    @classmethod
    def declined(cls) -> "StoreResult[T]":
        return cls(outcome=Outcome.DECLINED)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK
