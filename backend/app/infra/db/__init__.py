"""Database connection helpers."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from ...config import Settings


def build_engine(settings: Settings) -> Engine:
    """Create the engine for ``settings.database_url``; the caller disposes it."""

    return create_engine(settings.database_url, echo=False, future=True)
