from dataclasses import dataclass

from core.domain.errors import TaskNotFoundError
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository
from core.domain.validation import validate_title


@dataclass(slots=True)
class UpdateTaskCommand:
    title: str | None
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING


class UpdateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: int, cmd: UpdateTaskCommand) -> Task:
        title = validate_title(cmd.title)
        task = self._repository.update_task(
            task_id,
            title=title,
            description=cmd.description or "",
            status=cmd.status,
        )
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
