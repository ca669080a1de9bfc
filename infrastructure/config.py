"""
Configuración del servicio leída del entorno (una sola vez al arrancar).

Se carga primero el fichero `.env` si existe. `DATABASE_URL` tiene prioridad
sobre las variables `DB_*` sueltas.
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv
from sqlalchemy.engine import URL, make_url


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(slots=True)
class Settings:
    database_url: URL
    pool_size: int = 10
    pool_timeout: float | None = None
    connect_retries: int = 2
    connect_retry_delay: float = 0.5
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "info"
    static_dir: str = "public"
    cors_origins: list[str] | None = None
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] | None = None
    cors_allow_headers: list[str] | None = None

    @property
    def safe_database_url(self) -> str:
        """URL de la base de datos con la contraseña enmascarada (para logs)."""
        return self.database_url.render_as_string(hide_password=True)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))

        raw_url = os.getenv("DATABASE_URL")
        if raw_url:
            database_url = make_url(raw_url)
        else:
            database_url = URL.create(
                drivername=os.getenv("DB_DRIVER", "postgresql+psycopg2"),
                username=os.getenv("DB_USER", "postgres"),
                password=os.getenv("DB_PASSWORD", "") or None,
                host=os.getenv("DB_HOST", "localhost"),
                port=int(os.getenv("DB_PORT", "5432")),
                database=os.getenv("DB_NAME", "tasks_db"),
            )

        pool_timeout = os.getenv("DB_POOL_TIMEOUT")

        cors_origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=database_url,
            pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
            pool_timeout=float(pool_timeout) if pool_timeout else None,
            connect_retries=int(os.getenv("DB_CONNECT_RETRIES", "2")),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
            static_dir=os.getenv("STATIC_DIR", "public"),
            cors_origins=["*"] if cors_origins == "*" else _as_list(cors_origins),
            cors_allow_credentials=_as_bool(
                os.getenv("CORS_ALLOW_CREDENTIALS", "true")
            ),
            cors_allow_methods=_as_list(os.getenv("CORS_ALLOW_METHODS", "*")),
            cors_allow_headers=_as_list(os.getenv("CORS_ALLOW_HEADERS", "*")),
        )
