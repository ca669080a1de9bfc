from abc import ABC, abstractmethod

from core.domain.models.task import Task, TaskStatus


class TaskRepository(ABC):
    @abstractmethod
    def list_tasks(self) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def get_task(self, task_id: int) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def create_task(
        self, title: str, description: str, status: TaskStatus
    ) -> Task:
        raise NotImplementedError

    @abstractmethod
    def update_task(
        self, task_id: int, title: str, description: str, status: TaskStatus
    ) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def delete_task(self, task_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> None:
        raise NotImplementedError
