"""
repositories/income_repo.py
----------------------------
Data access layer for income entries.
"""

from typing import Optional

import psycopg2

from db.connection import get_connection, release_connection
from models.income import Income
from utils.errors import StoreFailure
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, source, amount, date, created_at, updated_at"


class IncomeRepository:
    """Repository for CRUD operations on the incomes table."""

    def add(self, income: Income) -> Income:
        """Insert a new income entry and populate its id and timestamps."""
        sql = """
            INSERT INTO incomes (source, amount, date)
            VALUES (%s, %s, %s)
            RETURNING id, created_at, updated_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (income.source, income.amount, income.date))
                income.id, income.created_at, income.updated_at = cur.fetchone()
            conn.commit()
            logger.info(f"Added income #{income.id} from '{income.source}'")
            return income
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add income: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    def get_all(self) -> list[Income]:
        """Fetch every income entry ordered by date descending."""
        sql = f"SELECT {_COLUMNS} FROM incomes ORDER BY date DESC NULLS LAST, id;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_income(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to list incomes: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    def get_by_id(self, income_id: str) -> Optional[Income]:
        """Fetch a single income entry, or None if not found."""
        sql = f"SELECT {_COLUMNS} FROM incomes WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (income_id,))
                row = cur.fetchone()
                return self._row_to_income(row) if row else None
        except psycopg2.Error as e:
            logger.error(f"Failed to fetch income #{income_id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    def update(self, income: Income) -> bool:
        """Update an income entry. Returns True if a row was updated."""
        sql = """
            UPDATE incomes
            SET source = %s, amount = %s, date = %s, updated_at = (NOW() AT TIME ZONE 'utc')
            WHERE id = %s
            RETURNING updated_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (income.source, income.amount, income.date, income.id))
                row = cur.fetchone()
                if row:
                    income.updated_at = row[0]
            conn.commit()
            return row is not None
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update income #{income.id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    def delete(self, income_id: str) -> bool:
        """Delete an income entry. Returns True if a row was deleted."""
        sql = "DELETE FROM incomes WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (income_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted income #{income_id}")
            return deleted
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete income #{income_id}: {e}")
            raise StoreFailure(str(e)) from e
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_income(row: tuple) -> Income:
        """Convert a database row tuple to an Income domain object."""
        return Income(
            id=row[0],
            source=row[1],
            amount=float(row[2]),
            date=row[3],
            created_at=row[4],
            updated_at=row[5],
        )
