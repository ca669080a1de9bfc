from datetime import datetime

from pydantic import BaseModel

from core.domain.models.task import Task, TaskStatus


class TaskPayload(BaseModel):
    """
    Cuerpo de POST/PUT /api/tasks.

    `title` se acepta ausente para poder responder 400 con un mensaje propio.
    """

    title: str | None = None
    description: str | None = ""
    status: TaskStatus = TaskStatus.PENDING


class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, task: Task) -> "TaskOut":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskEnvelope(BaseModel):
    success: bool = True
    data: TaskOut


class TaskListEnvelope(BaseModel):
    success: bool = True
    data: list[TaskOut]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
