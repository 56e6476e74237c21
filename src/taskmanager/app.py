"""Application factory for the FastAPI service."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import PROJECT_ROOT, Settings, get_settings
from .errors import register_exception_handlers
from .logging_handlers import DateStampedFileHandler, cleanup_old_logs
from .logging_settings import parse_logging_settings
from .repository import TaskRepository
from .routers.tasks import router as tasks_router
from .tasks.service import TaskService

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
_APP_LOG_DIR = Path("logs/app")


def _resolve_under(base: Path, p: Path) -> Path:
    # Allow absolute paths as-is (useful for tests and external mounts).
    if p.is_absolute():
        return p.resolve()
    resolved = (base / p).resolve()
    if not resolved.is_relative_to(base):
        raise ValueError(f"Configured path {resolved} escapes project root {base}")
    return resolved


def _configure_logging(settings: Settings) -> None:
    """Configure logging from ``logging_settings.conf`` and the environment."""
    # Load .env file first to ensure LOG_LEVEL / LOG_FILE are available
    load_dotenv()

    log_settings = parse_logging_settings(
        _resolve_under(PROJECT_ROOT, settings.logging_settings_path)
    )

    env_level = os.getenv("LOG_LEVEL")
    terminal_level = (
        getattr(logging, env_level.upper(), logging.INFO)
        if env_level
        else log_settings.terminal_level
    )

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)
    handlers: list[logging.Handler] = []

    if terminal_level is not None:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(terminal_level)
        handlers.append(console_handler)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(terminal_level or logging.INFO)
        handlers.append(file_handler)

    app_log_dir = _resolve_under(PROJECT_ROOT, _APP_LOG_DIR)
    if log_settings.file_level is not None:
        stamped_handler = DateStampedFileHandler(app_log_dir)
        stamped_handler.setLevel(log_settings.file_level)
        handlers.append(stamped_handler)

    for handler in handlers:
        handler.setFormatter(formatter)

    root_level = min((h.level for h in handlers), default=logging.WARNING)
    logging.basicConfig(
        level=root_level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

    logging.getLogger("taskmanager").setLevel(root_level)
    logging.getLogger("uvicorn").setLevel(root_level)
    logging.getLogger("uvicorn.access").setLevel(root_level)
    logging.getLogger("uvicorn.error").setLevel(root_level)

    # aiosqlite logs every statement at DEBUG
    if root_level > logging.DEBUG:
        logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    cleanup_old_logs(
        app_log_dir,
        log_settings.retention_hours,
        logger=logging.getLogger(__name__),
    )


def create_app() -> FastAPI:
    settings = get_settings()

    # Configure logging first thing
    _configure_logging(settings)

    database_path = _resolve_under(PROJECT_ROOT, settings.tasks_database_path)
    repository = TaskRepository(database_path)
    task_service = TaskService(repository)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await repository.initialize()
        try:
            yield
        finally:
            await repository.close()

    app = FastAPI(
        title="Task Manager Backend",
        version="0.1.0",
        description="Create, track and complete tasks.",
        lifespan=lifespan,
    )

    app.state.task_service = task_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(tasks_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["health"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app


__all__ = ["create_app"]
