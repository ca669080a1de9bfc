import logging

from core.application.check_database import CheckDatabaseUseCase
from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import Settings
from infrastructure.resilience.retry import retry_with_backoff
from infrastructure.sqlalchemy.bootstrap import ensure_schema
from infrastructure.sqlalchemy.repository.task_repository import (
    SqlAlchemyTaskRepository,
)
from infrastructure.sqlalchemy.session.db import ConnectionPool

logger = logging.getLogger(__name__)


def build_connection_pool(settings: Settings) -> ConnectionPool:
    """
    Arranque de la capa de datos: bootstrap del esquema y luego el pool.

    El pool solo se crea cuando el esquema ya existe, y se verifica con
    `SELECT 1` antes de devolverlo. Cualquier excepción es fatal.
    """
    logger.info(f"Database config: {settings.safe_database_url}")
    ensure_schema(
        settings.database_url,
        retries=settings.connect_retries,
        retry_delay=settings.connect_retry_delay,
    )

    pool = ConnectionPool(
        settings.database_url,
        pool_size=settings.pool_size,
        pool_timeout=settings.pool_timeout,
    )
    try:
        retry_with_backoff(
            pool.verify,
            max_retries=settings.connect_retries,
            base_delay=settings.connect_retry_delay,
        )
    except Exception:
        pool.close()
        raise
    logger.info(
        f"✅ Connection pool created and tested successfully (size={settings.pool_size})"
    )
    return pool


def get_task_repository(pool: ConnectionPool) -> TaskRepository:
    return SqlAlchemyTaskRepository(pool)


def get_list_tasks_use_case(pool: ConnectionPool) -> ListTasksUseCase:
    return ListTasksUseCase(repository=get_task_repository(pool))


def get_get_task_use_case(pool: ConnectionPool) -> GetTaskUseCase:
    return GetTaskUseCase(repository=get_task_repository(pool))


def get_create_task_use_case(pool: ConnectionPool) -> CreateTaskUseCase:
    return CreateTaskUseCase(repository=get_task_repository(pool))


def get_update_task_use_case(pool: ConnectionPool) -> UpdateTaskUseCase:
    return UpdateTaskUseCase(repository=get_task_repository(pool))


def get_delete_task_use_case(pool: ConnectionPool) -> DeleteTaskUseCase:
    return DeleteTaskUseCase(repository=get_task_repository(pool))


def get_check_database_use_case(pool: ConnectionPool) -> CheckDatabaseUseCase:
    return CheckDatabaseUseCase(repository=get_task_repository(pool))
