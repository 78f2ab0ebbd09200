"""Database schema initialization and migrations."""

import sqlite3
from pathlib import Path

from fintrack.config import get_data_dir

DB_FILENAME = "fintrack.db"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_data_dir() / DB_FILENAME


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS budgets (
                user_id TEXT PRIMARY KEY,
                budget_id TEXT NOT NULL,
                name TEXT NOT NULL,
                goal_limit TEXT,
                mode TEXT NOT NULL DEFAULT 'reject'
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS ledger_months (
                user_id TEXT NOT NULL,
                month INTEGER NOT NULL,
                income_total TEXT NOT NULL,
                expense_total TEXT NOT NULL,
                PRIMARY KEY (user_id, month)
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS transactions (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT NOT NULL,
                user_id TEXT NOT NULL,
                occurred_on TEXT NOT NULL,
                kind TEXT NOT NULL,
                category TEXT NOT NULL,
                description TEXT NOT NULL,
                amount TEXT NOT NULL,
                UNIQUE (user_id, id)
            )
        """
        )

        # Migrations for older databases (must run before creating indexes on new columns)
        cursor.execute("PRAGMA table_info(budgets)")
        columns = [row[1] for row in cursor.fetchall()]

        # Migration: Add 'mode' column if missing
        if "mode" not in columns:
            cursor.execute("ALTER TABLE budgets ADD COLUMN mode TEXT NOT NULL DEFAULT 'reject'")

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_user_seq ON transactions(user_id, seq)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_user_category ON transactions(user_id, category)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
