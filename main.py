import logging
import sys

import uvicorn

from backend_fastapi.app import create_app
from infrastructure.config import Settings
from infrastructure.container import build_connection_pool
from infrastructure.logging_setup import setup_logging

logger = logging.getLogger("task_service")


def run() -> None:
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level)

    # Sin esquema ni pool no se sirve ningún request.
    try:
        pool = build_connection_pool(settings)
    except Exception:
        logger.exception("Failed to start server")
        sys.exit(1)

    app = create_app(settings, pool)
    logger.info(f"Starting server at http://{settings.host}:{settings.port}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )
    logger.info("Server stopped")


if __name__ == "__main__":
    run()
