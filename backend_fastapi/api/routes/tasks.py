import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from backend_fastapi.api.deps import (
    check_database_use_case,
    create_task_use_case,
    delete_task_use_case,
    get_task_use_case,
    list_tasks_use_case,
    update_task_use_case,
)
from backend_fastapi.api.schemas import (
    ErrorEnvelope,
    MessageEnvelope,
    TaskEnvelope,
    TaskListEnvelope,
    TaskOut,
    TaskPayload,
)
from core.application.check_database import CheckDatabaseUseCase
from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.delete_task import DeleteTaskCommand, DeleteTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskCommand, UpdateTaskUseCase
from core.domain.errors import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tasks"])

# Rango de un INTEGER de 64 bits; fuera de él la tarea no puede existir.
TASK_ID_MAX = 2**63 - 1
TaskId = Annotated[int, Path(ge=1, le=TASK_ID_MAX)]

_ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope},
    404: {"model": ErrorEnvelope},
    500: {"model": ErrorEnvelope},
}


def _storage_failure(message: str, exc: StorageError) -> HTTPException:
    logger.error(f"❌ {message}: {exc}", exc_info=exc)
    return HTTPException(status_code=500, detail=message)


@router.get(
    "/test-db",
    response_model=MessageEnvelope,
    summary="Comprobar la conexión con la base de datos",
    responses={500: {"model": ErrorEnvelope}},
)
def test_db(
    use_case: CheckDatabaseUseCase = Depends(check_database_use_case),
) -> MessageEnvelope:
    try:
        use_case.execute()
    except StorageError as e:
        raise _storage_failure("Database connection failed", e)
    return MessageEnvelope(message="Database connection successful")


@router.get(
    "/tasks",
    response_model=TaskListEnvelope,
    summary="Listar todas las tareas",
    responses={500: {"model": ErrorEnvelope}},
)
def list_tasks(
    use_case: ListTasksUseCase = Depends(list_tasks_use_case),
) -> TaskListEnvelope:
    """
    Obtiene todas las tareas, de la más reciente a la más antigua.
    """
    try:
        tasks = use_case.execute()
    except StorageError as e:
        raise _storage_failure("Failed to fetch tasks", e)
    return TaskListEnvelope(data=[TaskOut.from_domain(task) for task in tasks])


@router.get(
    "/tasks/{task_id}",
    response_model=TaskEnvelope,
    summary="Obtener una tarea",
    responses=_ERROR_RESPONSES,
)
def get_task(
    task_id: TaskId,
    use_case: GetTaskUseCase = Depends(get_task_use_case),
) -> TaskEnvelope:
    try:
        task = use_case.execute(task_id)
    except StorageError as e:
        raise _storage_failure("Failed to fetch task", e)
    return TaskEnvelope(data=TaskOut.from_domain(task))


@router.post(
    "/tasks",
    response_model=TaskEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Crear una nueva tarea",
    responses=_ERROR_RESPONSES,
)
def create_task(
    payload: TaskPayload,
    use_case: CreateTaskUseCase = Depends(create_task_use_case),
) -> TaskEnvelope:
    """
    Crea una nueva tarea en el sistema.

    - **title**: Título de la tarea (obligatorio, no vacío).
    - **description**: Descripción opcional de la tarea.
    - **status**: Estado inicial (por defecto `pending`).
    """
    cmd = CreateTaskCommand(
        title=payload.title,
        description=payload.description,
        status=payload.status,
    )
    try:
        task = use_case.execute(cmd)
    except StorageError as e:
        raise _storage_failure("Failed to create task", e)
    return TaskEnvelope(data=TaskOut.from_domain(task))


@router.put(
    "/tasks/{task_id}",
    response_model=TaskEnvelope,
    summary="Editar una tarea existente",
    responses=_ERROR_RESPONSES,
)
def update_task(
    task_id: TaskId,
    payload: TaskPayload,
    use_case: UpdateTaskUseCase = Depends(update_task_use_case),
) -> TaskEnvelope:
    """
    Reemplaza título, descripción y estado de una tarea existente.

    - **task_id**: ID de la tarea a modificar.
    """
    cmd = UpdateTaskCommand(
        title=payload.title,
        description=payload.description,
        status=payload.status,
    )
    try:
        task = use_case.execute(task_id, cmd)
    except StorageError as e:
        raise _storage_failure("Failed to update task", e)
    return TaskEnvelope(data=TaskOut.from_domain(task))


@router.delete(
    "/tasks/{task_id}",
    response_model=MessageEnvelope,
    summary="Eliminar una tarea",
    responses=_ERROR_RESPONSES,
)
def delete_task(
    task_id: TaskId,
    use_case: DeleteTaskUseCase = Depends(delete_task_use_case),
) -> MessageEnvelope:
    try:
        use_case.execute(DeleteTaskCommand(id=task_id))
    except StorageError as e:
        raise _storage_failure("Failed to delete task", e)
    return MessageEnvelope(message="Task deleted successfully")
