import pytest

from infrastructure.sqlalchemy.bootstrap import ensure_schema
from infrastructure.sqlalchemy.repository.task_repository import (
    SqlAlchemyTaskRepository,
)
from infrastructure.sqlalchemy.session.db import ConnectionPool


@pytest.fixture
def sqlite_url(tmp_path):
    """URL de una base SQLite en fichero, aislada por test."""
    return f"sqlite:///{tmp_path / 'tasks.db'}"


@pytest.fixture
def pool(sqlite_url):
    ensure_schema(sqlite_url, retries=0)
    pool = ConnectionPool(sqlite_url, pool_size=2, pool_timeout=5)
    yield pool
    pool.close()


@pytest.fixture
def repo(pool):
    return SqlAlchemyTaskRepository(pool)
