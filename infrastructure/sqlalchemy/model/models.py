from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Integer, String, Text
from sqlalchemy.dialects import mysql

from core.domain.models.task import TaskStatus
from infrastructure.sqlalchemy.session.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# DATETIME de MySQL/MariaDB guarda segundos enteros salvo que se pida fsp=6.
Timestamp = DateTime(timezone=True).with_variant(
    mysql.DATETIME(fsp=6), "mysql", "mariadb"
)


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True, default="")
    status = Column(
        Enum(
            TaskStatus,
            name="task_status",
            native_enum=False,
            create_constraint=True,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    created_at = Column(Timestamp, nullable=False, default=utcnow, index=True)
    updated_at = Column(Timestamp, nullable=False, default=utcnow)
