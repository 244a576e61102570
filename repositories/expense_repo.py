"""
repositories/expense_repo.py
-----------------------------
Data access layer for expenses.
All SQL queries related to the `expenses` table live here.
"""

from typing import Optional

import psycopg2

from db.connection import get_connection, release_connection
from models.expense import Expense
from utils.errors import StoreFailure
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "id, description, amount, category, date, payment_method, status, notes, "
    "created_at, updated_at"
)


def _like_pattern(text: str) -> str:
    """Escape LIKE wildcards so the search is a plain substring match."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ExpenseRepository:
    """Repository for CRUD operations on the expenses table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, expense: Expense) -> Expense:
        """
        Insert a new expense.

        Args:
            expense: The Expense domain object to persist.

        Returns:
            The same Expense with its `id` and timestamps populated.
        """
        sql = """
            INSERT INTO expenses (description, amount, category, date, payment_method, status, notes)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING id, created_at, updated_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    expense.description, expense.amount, expense.category,
                    expense.date, expense.payment_method, expense.status, expense.notes,
                ))
                expense.id, expense.created_at, expense.updated_at = cur.fetchone()
            conn.commit()
            logger.info(f"Added expense #{expense.id} ({expense.amount:.2f} {expense.category})")
            return expense
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add expense: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_all(self, category: Optional[str] = None, search: Optional[str] = None) -> list[Expense]:
        """
        Fetch expenses ordered by date descending.

        Args:
            category: Only this category; None or 'all' disables the filter.
            search: Case-insensitive substring of the description.

        Returns:
            List of Expense objects.
        """
        sql = f"SELECT {_COLUMNS} FROM expenses WHERE TRUE"
        params: list = []
        if category and category != "all":
            sql += " AND category = %s"
            params.append(category)
        if search:
            sql += " AND description ILIKE %s"
            params.append(_like_pattern(search))
        sql += " ORDER BY date DESC NULLS LAST, id;"

        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return [self._row_to_expense(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to list expenses: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    def get_by_id(self, expense_id: str) -> Optional[Expense]:
        """Fetch a single expense by ID, or None if not found."""
        sql = f"SELECT {_COLUMNS} FROM expenses WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (expense_id,))
                row = cur.fetchone()
                return self._row_to_expense(row) if row else None
        except psycopg2.Error as e:
            logger.error(f"Failed to fetch expense #{expense_id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    def get_category_summary(self) -> list[dict]:
        """
        Get total spending grouped by category.

        Returns:
            List of dicts: [{'category': str, 'total': float, 'count': int}, ...]
        """
        sql = """
            SELECT category, SUM(amount) AS total, COUNT(*) AS count
            FROM expenses
            GROUP BY category
            ORDER BY total DESC;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [
                    {"category": r[0], "total": float(r[1]), "count": int(r[2])}
                    for r in cur.fetchall()
                ]
        except psycopg2.Error as e:
            logger.error(f"Failed to summarize expenses: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, expense: Expense) -> bool:
        """
        Update an existing expense record.

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE expenses
            SET description = %s, amount = %s, category = %s, date = %s,
                payment_method = %s, status = %s, notes = %s,
                updated_at = (NOW() AT TIME ZONE 'utc')
            WHERE id = %s
            RETURNING updated_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    expense.description, expense.amount, expense.category, expense.date,
                    expense.payment_method, expense.status, expense.notes, expense.id,
                ))
                row = cur.fetchone()
                if row:
                    expense.updated_at = row[0]
            conn.commit()
            return row is not None
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update expense #{expense.id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, expense_id: str) -> bool:
        """
        Delete an expense by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM expenses WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (expense_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted expense #{expense_id}")
            return deleted
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete expense #{expense_id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_expense(row: tuple) -> Expense:
        """Convert a database row tuple to an Expense domain object."""
        return Expense(
            id=row[0],
            description=row[1],
            amount=float(row[2]),
            category=row[3],
            date=row[4],
            payment_method=row[5],
            status=row[6],
            notes=row[7],
            created_at=row[8],
            updated_at=row[9],
        )
