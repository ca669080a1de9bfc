from core.domain.ports.task_repository import TaskRepository


class CheckDatabaseUseCase:
    """Verifica que el almacén responde (GET /api/test-db)."""

    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self) -> None:
        self._repository.ping()
