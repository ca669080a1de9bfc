import logging
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterator

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.domain.errors import StorageError
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository
from core.domain.validation import validate_title
from infrastructure.sqlalchemy.model.models import TaskModel, utcnow
from infrastructure.sqlalchemy.session.db import ConnectionPool

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite devuelve datetimes naive aunque se guarden en UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_domain(model: TaskModel) -> Task:
    return Task(
        id=model.id,
        title=model.title,
        description=model.description or "",
        status=TaskStatus(model.status),
        created_at=_as_utc(model.created_at),
        updated_at=_as_utc(model.updated_at),
    )


class SqlAlchemyTaskRepository(TaskRepository):
    """
    Implementación de TaskRepository sobre un pool de conexiones SQLAlchemy.

    Todas las sentencias se construyen con expresiones de SQLAlchemy, de modo
    que los valores viajan siempre como parámetros enlazados. Cualquier error
    del almacén se propaga como StorageError.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with self._pool.session() as session:
                try:
                    yield session
                except SQLAlchemyError:
                    session.rollback()
                    raise
        except SQLAlchemyError as e:
            logger.error(f"✗ {operation} falló en la base de datos: {e}")
            raise StorageError(f"{operation} failed") from e

    def list_tasks(self) -> list[Task]:
        stmt = select(TaskModel).order_by(
            TaskModel.created_at.desc(), TaskModel.id.desc()
        )
        with self._session("list_tasks") as session:
            return [_to_domain(model) for model in session.scalars(stmt)]

    def get_task(self, task_id: int) -> Task | None:
        with self._session("get_task") as session:
            model = session.get(TaskModel, task_id)
            if model is None:
                return None
            return _to_domain(model)

    def create_task(
        self,
        title: str,
        description: str = "",
        status: TaskStatus = TaskStatus.PENDING,
    ) -> Task:
        title = validate_title(title)
        now = utcnow()
        model = TaskModel(
            title=title,
            description=description or "",
            status=status,
            created_at=now,
            updated_at=now,
        )
        with self._session("create_task") as session:
            session.add(model)
            session.commit()
            logger.debug(f"✓ Tarea {model.id} creada")
            return _to_domain(model)

    def update_task(
        self,
        task_id: int,
        title: str,
        description: str = "",
        status: TaskStatus = TaskStatus.PENDING,
    ) -> Task | None:
        title = validate_title(title)
        with self._session("update_task") as session:
            model = session.get(TaskModel, task_id)
            if model is None:
                return None

            now = utcnow()
            previous = _as_utc(model.updated_at)
            # updated_at siempre avanza, aunque el reloj no haya cambiado.
            if previous is not None and now <= previous:
                now = previous + timedelta(microseconds=1)

            model.title = title
            model.description = description or ""
            model.status = status
            model.updated_at = now
            session.commit()
            logger.debug(f"✓ Tarea {task_id} actualizada")
            return _to_domain(model)

    def delete_task(self, task_id: int) -> bool:
        stmt = delete(TaskModel).where(TaskModel.id == task_id)
        with self._session("delete_task") as session:
            result = session.execute(stmt)
            session.commit()
            deleted = result.rowcount > 0
            if deleted:
                logger.debug(f"✓ Tarea {task_id} eliminada")
            return deleted

    def ping(self) -> None:
        with self._session("ping") as session:
            session.execute(text("SELECT 1"))
