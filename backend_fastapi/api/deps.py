from fastapi import Request

from core.application.check_database import CheckDatabaseUseCase
from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskUseCase
from infrastructure.container import (
    get_check_database_use_case,
    get_create_task_use_case,
    get_delete_task_use_case,
    get_get_task_use_case,
    get_list_tasks_use_case,
    get_update_task_use_case,
)
from infrastructure.sqlalchemy.session.db import ConnectionPool


def connection_pool(request: Request) -> ConnectionPool:
    return request.app.state.pool


def list_tasks_use_case(request: Request) -> ListTasksUseCase:
    return get_list_tasks_use_case(connection_pool(request))


def get_task_use_case(request: Request) -> GetTaskUseCase:
    return get_get_task_use_case(connection_pool(request))


def create_task_use_case(request: Request) -> CreateTaskUseCase:
    return get_create_task_use_case(connection_pool(request))


def update_task_use_case(request: Request) -> UpdateTaskUseCase:
    return get_update_task_use_case(connection_pool(request))


def delete_task_use_case(request: Request) -> DeleteTaskUseCase:
    return get_delete_task_use_case(connection_pool(request))


def check_database_use_case(request: Request) -> CheckDatabaseUseCase:
    return get_check_database_use_case(connection_pool(request))
