import tempfile
import time
import unittest
from pathlib import Path
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from core.domain.errors import StorageError, TaskValidationError
from core.domain.models.task import TaskStatus
from infrastructure.sqlalchemy.bootstrap import ensure_schema
from infrastructure.sqlalchemy.repository.task_repository import (
    SqlAlchemyTaskRepository,
)
from infrastructure.sqlalchemy.session.db import ConnectionPool


class SqlAlchemyTaskRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        url = f"sqlite:///{Path(self._tmp.name) / 'tasks.db'}"
        ensure_schema(url, retries=0)
        self.pool = ConnectionPool(url, pool_size=2, pool_timeout=5)
        self.repo = SqlAlchemyTaskRepository(self.pool)

    def tearDown(self) -> None:
        self.pool.close()
        self._tmp.cleanup()

    def test_create_and_get(self) -> None:
        task = self.repo.create_task("Buy milk", "2%", TaskStatus.IN_PROGRESS)

        loaded = self.repo.get_task(task.id)

        self.assertIsNotNone(loaded)
        assert loaded is not None
        self.assertGreater(task.id, 0)
        self.assertEqual(loaded.id, task.id)
        self.assertEqual(loaded.title, "Buy milk")
        self.assertEqual(loaded.description, "2%")
        self.assertEqual(loaded.status, TaskStatus.IN_PROGRESS)
        self.assertIsNotNone(loaded.created_at)
        self.assertEqual(loaded.created_at, loaded.updated_at)

    def test_create_defaults(self) -> None:
        task = self.repo.create_task("Only title")

        self.assertEqual(task.status, TaskStatus.PENDING)
        self.assertEqual(task.description, "")

    def test_ids_are_unique(self) -> None:
        ids = {self.repo.create_task(f"task {i}").id for i in range(5)}

        self.assertEqual(len(ids), 5)

    def test_create_rejects_empty_title_without_touching_storage(self) -> None:
        with patch.object(self.pool, "session") as session:
            with self.assertRaises(TaskValidationError):
                self.repo.create_task("   ")

        session.assert_not_called()
        self.assertEqual(self.repo.list_tasks(), [])

    def test_get_missing_returns_none(self) -> None:
        self.assertIsNone(self.repo.get_task(12345))

    def test_list_is_newest_first(self) -> None:
        first = self.repo.create_task("first")
        second = self.repo.create_task("second")
        third = self.repo.create_task("third")

        tasks = self.repo.list_tasks()

        self.assertEqual([t.id for t in tasks], [third.id, second.id, first.id])
        created = [t.created_at for t in tasks]
        self.assertEqual(created, sorted(created, reverse=True))

    def test_list_empty(self) -> None:
        self.assertEqual(self.repo.list_tasks(), [])

    def test_list_size_tracks_creates_minus_deletes(self) -> None:
        tasks = [self.repo.create_task(f"t{i}") for i in range(4)]
        self.repo.delete_task(tasks[1].id)
        self.repo.delete_task(tasks[3].id)

        self.assertEqual(len(self.repo.list_tasks()), 2)

    def test_update_changes_only_target_row(self) -> None:
        target = self.repo.create_task("target", "a")
        other = self.repo.create_task("other", "b")
        time.sleep(0.01)

        updated = self.repo.update_task(
            target.id, "changed", "c", TaskStatus.COMPLETED
        )

        assert updated is not None
        self.assertEqual(updated.id, target.id)
        self.assertEqual(updated.title, "changed")
        self.assertEqual(updated.description, "c")
        self.assertEqual(updated.status, TaskStatus.COMPLETED)
        self.assertEqual(updated.created_at, target.created_at)
        self.assertGreater(updated.updated_at, target.updated_at)

        reloaded = self.repo.get_task(target.id)
        self.assertEqual(reloaded, updated)
        self.assertEqual(self.repo.get_task(other.id), other)

    def test_update_missing_returns_none(self) -> None:
        self.assertIsNone(self.repo.update_task(999, "x", "", TaskStatus.PENDING))

    def test_update_rejects_empty_title(self) -> None:
        task = self.repo.create_task("keep")

        with self.assertRaises(TaskValidationError):
            self.repo.update_task(task.id, "", "", TaskStatus.PENDING)

        self.assertEqual(self.repo.get_task(task.id).title, "keep")

    def test_delete(self) -> None:
        task = self.repo.create_task("delete me")

        self.assertTrue(self.repo.delete_task(task.id))
        self.assertIsNone(self.repo.get_task(task.id))

    def test_delete_is_consistently_not_found_afterwards(self) -> None:
        task = self.repo.create_task("delete me")
        keep = self.repo.create_task("keep me")
        self.repo.delete_task(task.id)

        self.assertFalse(self.repo.delete_task(task.id))
        self.assertFalse(self.repo.delete_task(task.id))
        self.assertEqual([t.id for t in self.repo.list_tasks()], [keep.id])

    def test_title_is_stored_as_bound_parameter(self) -> None:
        title = "x'); DROP TABLE tasks; --"

        task = self.repo.create_task(title)

        self.assertEqual(self.repo.get_task(task.id).title, title)
        self.assertEqual(len(self.repo.list_tasks()), 1)

    def test_ping(self) -> None:
        self.repo.ping()

    def test_storage_errors_are_wrapped(self) -> None:
        error = OperationalError("SELECT", {}, Exception("disk I/O error"))
        with patch("sqlalchemy.orm.Session.execute", side_effect=error):
            with self.assertRaises(StorageError) as ctx:
                self.repo.ping()

        self.assertIs(ctx.exception.__cause__, error)

    def test_closed_pool_is_a_storage_error(self) -> None:
        self.pool.close()

        with self.assertRaises(StorageError):
            self.repo.list_tasks()


if __name__ == "__main__":
    unittest.main()
