"""
repositories/task_repo.py
--------------------------
Data access layer for tasks.
All SQL queries related to the `tasks` table live here.
"""

from typing import Optional

import psycopg2

from db.connection import get_connection, release_connection
from models.task import Task
from utils.errors import StoreFailure
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "id, title, description, status, priority, due_date, tags, "
    "external_event_id, created_at, updated_at"
)


class TaskRepository:
    """Repository for CRUD operations on the tasks table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, task: Task) -> Task:
        """
        Insert a new task.

        Args:
            task: The Task domain object to persist.

        Returns:
            The same Task with `id`, `created_at` and `updated_at` populated.
        """
        sql = """
            INSERT INTO tasks (title, description, status, priority, due_date, tags)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id, created_at, updated_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    task.title, task.description, task.status,
                    task.priority, task.due_date, list(task.tags),
                ))
                row = cur.fetchone()
                task.id, task.created_at, task.updated_at = row
            conn.commit()
            logger.info(f"Added task #{task.id}")
            return task
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add task: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Task]:
        """Fetch every task, newest first."""
        sql = f"SELECT {_COLUMNS} FROM tasks ORDER BY created_at DESC, id;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_task(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to list tasks: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    def get_by_id(self, task_id: str) -> Optional[Task]:
        """
        Fetch a single task by ID.

        Returns:
            A Task object or None if not found.
        """
        sql = f"SELECT {_COLUMNS} FROM tasks WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (task_id,))
                row = cur.fetchone()
                return self._row_to_task(row) if row else None
        except psycopg2.Error as e:
            logger.error(f"Failed to fetch task #{task_id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, task: Task) -> bool:
        """
        Update an existing task's editable fields.

        Args:
            task: Task with updated fields (must have id set).

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE tasks
            SET title = %s, description = %s, status = %s, priority = %s,
                due_date = %s, tags = %s, updated_at = (NOW() AT TIME ZONE 'utc')
            WHERE id = %s
            RETURNING updated_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    task.title, task.description, task.status, task.priority,
                    task.due_date, list(task.tags), task.id,
                ))
                row = cur.fetchone()
                if row:
                    task.updated_at = row[0]
            conn.commit()
            return row is not None
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update task #{task.id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    def set_external_event_id(self, task_id: str, event_id: str) -> bool:
        """Record the calendar event id a task was synced to."""
        sql = """
            UPDATE tasks
            SET external_event_id = %s, updated_at = (NOW() AT TIME ZONE 'utc')
            WHERE id = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (event_id, task_id))
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to store event id for task #{task_id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, task_id: str) -> bool:
        """
        Delete a task by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM tasks WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (task_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted task #{task_id}")
            return deleted
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete task #{task_id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_task(row: tuple) -> Task:
        """Convert a database row tuple to a Task domain object."""
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            status=row[3],
            priority=row[4],
            due_date=row[5],
            tags=list(row[6] or []),
            external_event_id=row[7],
            created_at=row[8],
            updated_at=row[9],
        )
