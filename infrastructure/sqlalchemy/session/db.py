"""
Pool de conexiones SQLAlchemy compartido por todos los requests.

El pool se construye explícitamente (después del bootstrap del esquema) y se
pasa al repositorio; no existe un engine global a nivel de módulo.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from core.domain.errors import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


class ConnectionPool:
    """
    Pool acotado de conexiones reutilizables.

    - Máximo `pool_size` conexiones, sin overflow. Si están todas ocupadas
      el llamador espera en cola (hasta `pool_timeout` segundos, o sin
      límite si es None) en lugar de ser rechazado.
    - `close()` drena el pool: rechaza nuevos checkouts, espera a que
      terminen los que están en curso y libera todas las conexiones.

    Args:
        url:          URL de SQLAlchemy de la base de datos (ya existente).
        pool_size:    Número máximo de conexiones abiertas.
        pool_timeout: Segundos de espera por una conexión libre.
    """

    def __init__(
        self,
        url: URL | str,
        pool_size: int = 10,
        pool_timeout: float | None = None,
    ) -> None:
        connect_args = {}
        if make_url(url).get_backend_name() == "sqlite":
            # Los handlers síncronos corren en el threadpool del servidor.
            connect_args["check_same_thread"] = False

        self._engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=0,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        self._session_factory = sessionmaker(
            bind=self._engine, expire_on_commit=False
        )
        self.pool_size = pool_size

        self._closed = False
        self._in_flight = 0
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def in_flight(self) -> int:
        """Checkouts en curso en este momento."""
        with self._cond:
            return self._in_flight

    def _acquire(self) -> None:
        with self._cond:
            if self._closed:
                raise StorageError("Connection pool is closed")
            self._in_flight += 1

    def _release(self) -> None:
        with self._cond:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._cond.notify_all()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Entrega una sesión ligada a una conexión del pool.

        La conexión vuelve al pool al salir del bloque.

        Raises:
            StorageError: si el pool ya fue cerrado.
        """
        self._acquire()
        try:
            session = self._session_factory()
            try:
                yield session
            finally:
                session.close()
        finally:
            self._release()

    def verify(self) -> None:
        """Hace checkout de una conexión y ejecuta `SELECT 1`."""
        with self.session() as session:
            session.execute(text("SELECT 1"))

    def close(self, timeout: float | None = None) -> bool:
        """
        Drena y cierra el pool. Llamarlo más de una vez no tiene efecto.

        Args:
            timeout: Segundos máximos de espera por los checkouts en curso
                     (None = esperar indefinidamente).

        Returns:
            True si todos los checkouts terminaron antes de liberar las conexiones.
        """
        with self._cond:
            if self._closed:
                return True
            self._closed = True
            pending = self._in_flight
            if pending:
                logger.info(f"⏳ Esperando {pending} consultas en curso antes de cerrar el pool")
            drained = self._cond.wait_for(lambda: self._in_flight == 0, timeout)

        if not drained:
            logger.warning(
                f"⚠️ Pool cerrado con {self.in_flight} consultas aún en curso"
            )
        self._engine.dispose()
        logger.info("Database connection pool closed")
        return drained

