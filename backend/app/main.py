"""FastAPI entrypoint for the diary backend."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.dependencies import get_settings
from .api.routers import diary, health
from .domain.diary.controller import DiaryViewController
from .domain.diary.repository import build_diary_repository
from .infra.db import build_engine
from .infra.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Own the store handle for the lifetime of the process."""

    settings = get_settings()
    configure_logging(settings.log_level)
    engine = build_engine(settings) if settings.store.backend == "sql" else None
    repository = build_diary_repository(settings, engine=engine)
    controller = DiaryViewController(repository, user_id=settings.user_id)
    application.state.diary_repository = repository
    application.state.diary_controller = controller
    logger.info(
        "diary_app_started",
        extra={
            "environment": settings.environment,
            "store_backend": repository.backend,
        },
    )
    await controller.mount()
    try:
        yield
    finally:
        repository.close()
        if engine is not None:
            engine.dispose()


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and register routers."""

    application = FastAPI(title="Diary API", version="0.1.0", lifespan=lifespan)
    allowed_origins = {
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    }
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in (health.router, diary.router):
        application.include_router(router)
    return application


app = create_app()
