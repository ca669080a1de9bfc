from dataclasses import dataclass

from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository
from core.domain.validation import validate_title


@dataclass(slots=True)
class CreateTaskCommand:
    title: str | None
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING


class CreateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: CreateTaskCommand) -> Task:
        # Falla antes de tocar la base de datos.
        title = validate_title(cmd.title)
        return self._repository.create_task(
            title=title,
            description=cmd.description or "",
            status=cmd.status,
        )
