from core.domain.errors import TaskNotFoundError
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


class GetTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: int) -> Task:
        task = self._repository.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
