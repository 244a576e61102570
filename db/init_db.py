"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Record ids are opaque text so any client-supplied id can be looked up safely
CREATE EXTENSION IF NOT EXISTS pgcrypto;

-- Tasks: completion is derived from status, so there is no completed column
CREATE TABLE IF NOT EXISTS tasks (
    id                  TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    title               VARCHAR(200) NOT NULL,
    description         VARCHAR(1000),
    status              VARCHAR(20) NOT NULL DEFAULT 'pending'
                        CHECK (status IN ('pending', 'in-progress', 'completed')),
    priority            VARCHAR(10) NOT NULL DEFAULT 'medium'
                        CHECK (priority IN ('low', 'medium', 'high')),
    due_date            DATE,
    tags                TEXT[] NOT NULL DEFAULT '{}',
    external_event_id   TEXT,
    created_at          TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
    updated_at          TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc')
);

-- Expenses
CREATE TABLE IF NOT EXISTS expenses (
    id                  TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    description         VARCHAR(200) NOT NULL,
    amount              NUMERIC(12,2) NOT NULL CHECK (amount >= 0),
    category            VARCHAR(20) NOT NULL DEFAULT 'Other',
    date                TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
    payment_method      VARCHAR(20) NOT NULL DEFAULT 'Cash',
    status              VARCHAR(10) NOT NULL DEFAULT 'Paid'
                        CHECK (status IN ('Paid', 'Pending', 'Cancelled')),
    notes               VARCHAR(500),
    created_at          TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
    updated_at          TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc')
);

-- Incomes
CREATE TABLE IF NOT EXISTS incomes (
    id                  TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    source              VARCHAR(200) NOT NULL,
    amount              NUMERIC(12,2) NOT NULL CHECK (amount >= 0),
    date                TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
    created_at          TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
    updated_at          TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc')
);

-- Indexes for the date-descending listings
CREATE INDEX IF NOT EXISTS idx_expenses_date ON expenses(date DESC);
CREATE INDEX IF NOT EXISTS idx_expenses_category ON expenses(category);
CREATE INDEX IF NOT EXISTS idx_incomes_date ON incomes(date DESC);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("✅ Database schema created successfully.")
