"""
Bootstrap idempotente del esquema.

Garantiza, antes de aceptar tráfico, que existen la base de datos y la tabla
`tasks`. Se puede ejecutar tantas veces como se quiera.
"""

import logging
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import NullPool

from infrastructure.resilience.retry import retry_with_backoff
from infrastructure.sqlalchemy.model.models import TaskModel
from infrastructure.sqlalchemy.session.db import Base

logger = logging.getLogger(__name__)

# Base a la que se conecta PostgreSQL cuando la de destino aún no existe.
_POSTGRES_MAINTENANCE_DB = "postgres"


def _ensure_sqlite_file(url: URL) -> None:
    database = url.database
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    # SQLite crea el fichero en la primera conexión, pero no el directorio.
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def _ensure_database(url: URL) -> None:
    backend = url.get_backend_name()
    name = url.database

    if backend == "sqlite":
        _ensure_sqlite_file(url)
        return
    if not name:
        logger.warning("La URL no indica base de datos; se omite su creación")
        return

    if backend == "postgresql":
        server_url = url.set(database=_POSTGRES_MAINTENANCE_DB)
    elif backend in ("mysql", "mariadb"):
        server_url = url.set(database=None)
    else:
        logger.warning(
            f"No se sabe crear bases de datos en '{backend}'; se asume que '{name}' existe"
        )
        return

    engine = create_engine(server_url, isolation_level="AUTOCOMMIT", poolclass=NullPool)
    try:
        with engine.connect() as conn:
            quoted = conn.dialect.identifier_preparer.quote(name)
            if backend == "postgresql":
                exists = conn.execute(
                    text("SELECT 1 FROM pg_database WHERE datname = :name"),
                    {"name": name},
                ).scalar()
                if not exists:
                    conn.execute(text(f"CREATE DATABASE {quoted}"))
            else:
                conn.execute(
                    text(
                        f"CREATE DATABASE IF NOT EXISTS {quoted} "
                        "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
                    )
                )
        logger.info(f"Database '{name}' created or verified successfully")
    finally:
        engine.dispose()


def _ensure_tables(url: URL) -> None:
    engine = create_engine(url, poolclass=NullPool)
    try:
        Base.metadata.create_all(engine, tables=[TaskModel.__table__], checkfirst=True)
        logger.info(f"Table '{TaskModel.__tablename__}' created or verified successfully")
    finally:
        engine.dispose()


def ensure_schema(
    url: URL | str,
    retries: int = 2,
    retry_delay: float = 0.5,
) -> None:
    """
    Crea la base de datos y la tabla `tasks` si no existen.

    Los errores transitorios de conexión se reintentan con backoff; cualquier
    otro error se propaga y debe considerarse fatal para el arranque.

    Args:
        url:         URL de SQLAlchemy de la base de datos de destino.
        retries:     Reintentos ante errores transitorios.
        retry_delay: Delay base del backoff en segundos.
    """
    url = make_url(url)
    logger.info(
        f"Inicializando esquema en {url.render_as_string(hide_password=True)}"
    )
    retry_with_backoff(
        lambda: _ensure_database(url), max_retries=retries, base_delay=retry_delay
    )
    retry_with_backoff(
        lambda: _ensure_tables(url), max_retries=retries, base_delay=retry_delay
    )
