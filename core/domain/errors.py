"""
Errores de dominio del servicio de tareas.

Cada error se traduce a un código HTTP en la capa FastAPI:
validación → 400, no encontrada → 404, almacenamiento → 500.
"""


class TaskError(Exception):
    """Base de todos los errores del servicio."""


class TaskValidationError(TaskError, ValueError):
    """Los datos de entrada no cumplen las reglas de la tarea."""


class TaskNotFoundError(TaskError, LookupError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StorageError(TaskError):
    """Fallo del almacén subyacente (conexión, consulta, pool cerrado)."""
