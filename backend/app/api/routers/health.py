"""System health endpoints for frontend polling."""

from typing import Any

from fastapi import APIRouter, Depends

from ...config import Settings
from ...domain.diary.repository import DiaryEntryRepository
from ..dependencies import get_diary_repository, get_settings

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/healthz")
def healthcheck(
    settings: Settings = Depends(get_settings),
    repository: DiaryEntryRepository = Depends(get_diary_repository),
) -> dict[str, Any]:
    """Return coarse-grained backend readiness information.

    ``store.backend`` names the adapter in use, which differs from the
    configured backend when the SQL store fell back to memory at startup.
    """

    return {
        "status": "ok",
        "environment": settings.environment,
        "store": {
            "backend": repository.backend,
            "table": settings.store.table,
            "configured": repository.configured,
        },
    }
