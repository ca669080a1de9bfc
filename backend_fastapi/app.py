import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend_fastapi.api.errors import register_error_handlers
from backend_fastapi.api.routes.tasks import router as tasks_router
from infrastructure.config import Settings
from infrastructure.container import build_connection_pool
from infrastructure.sqlalchemy.session.db import ConnectionPool

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _resolve_static_dir(static_dir: str) -> Path:
    path = Path(static_dir)
    if not path.is_absolute() and not path.is_dir():
        path = _PROJECT_ROOT / path
    return path


def create_app(
    settings: Settings | None = None,
    pool: ConnectionPool | None = None,
) -> FastAPI:
    """
    Construye la aplicación FastAPI.

    Si no se entrega un pool, se hace el bootstrap del esquema y se crea el
    pool en el arranque (lifespan). En el apagado el pool se drena y se cierra.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.pool = pool if pool is not None else build_connection_pool(settings)
        try:
            yield
        finally:
            app.state.pool.close()

    app = FastAPI(title="Task Resource Service", lifespan=lifespan)

    # Configure CORS for the static client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods or ["*"],
        allow_headers=settings.cors_allow_headers or ["*"],
    )

    register_error_handlers(app)
    app.include_router(tasks_router)

    static_dir = _resolve_static_dir(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning(f"Static directory {static_dir} not found; client disabled")

    return app

