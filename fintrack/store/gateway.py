"""Persistence gateways for budgets and transaction stores.

A gateway is the only place that touches durable storage. Storage errors are
wrapped in PersistenceFailure (with the original error chained) and never
masked.
"""

import logging
import os
import sqlite3
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

from fintrack.domain.budget import Budget
from fintrack.domain.transaction_store import TransactionStore
from fintrack.errors import PersistenceFailure
from fintrack.store.schema import DB_FILENAME, init_database
from fintrack.store.snapshot import (
    budget_from_snapshot,
    budget_to_snapshot,
    decode_budget,
    decode_store,
    encode_budget,
    encode_store,
    store_from_snapshot,
    store_to_snapshot,
)

logger = logging.getLogger(__name__)

TRANSACTIONS_FILE = "transactions.json"


class PersistenceGateway(Protocol):
    """Saves and loads budget and transaction snapshots."""

    def save_budget(self, user_id: str, budget: Budget) -> None: ...

    def load_budget(self, user_id: str) -> Budget | None: ...

    def save_transactions(self, store: TransactionStore) -> None: ...

    def load_transactions(self) -> TransactionStore: ...


class FileGateway:
    """Stores one JSON snapshot file per budget plus one for all transactions."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def budget_path(self, user_id: str) -> Path:
        return self.directory / f"budget_{quote(user_id, safe='')}.json"

    @property
    def transactions_path(self) -> Path:
        return self.directory / TRANSACTIONS_FILE

    def save_budget(self, user_id: str, budget: Budget) -> None:
        self._write(self.budget_path(user_id), encode_budget(budget))
        logger.debug("Saved budget %s for %s", budget.id, user_id)

    def load_budget(self, user_id: str) -> Budget | None:
        """Load a user's budget, or None if it has never been saved.

        Raises:
            PersistenceFailure: If the file can't be read or decoded.
        """
        payload = self._read(self.budget_path(user_id))
        if payload is None:
            return None
        logger.debug("Loaded budget for %s", user_id)
        return decode_budget(payload)

    def save_transactions(self, store: TransactionStore) -> None:
        self._write(self.transactions_path, encode_store(store))
        logger.debug("Saved %d transactions", len(store))

    def load_transactions(self) -> TransactionStore:
        """Load every user's transactions; an empty store if nothing was saved."""
        payload = self._read(self.transactions_path)
        if payload is None:
            return TransactionStore()
        return decode_store(payload)

    def _read(self, path: Path) -> bytes | None:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            raise PersistenceFailure(f"Could not read {path}: {e}") from e

    def _write(self, path: Path, payload: bytes) -> None:
        """Write via a temporary file and rename, so a failed save keeps the old file."""
        tmp_name: str | None = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(dir=self.directory, prefix=".tmp-", delete=False) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.warning("Could not write %s: %s", path, e)
            raise PersistenceFailure(f"Could not write {path}: {e}") from e


class SqliteGateway:
    """Stores budgets, ledger months and transactions in a SQLite database."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        try:
            init_database(db_path)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceFailure(f"Could not open database {db_path}: {e}") from e

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection that commits on success and always closes."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Could not open database {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.warning("Database error on %s: %s", self.db_path, e)
            raise PersistenceFailure(f"Database error: {e}") from e
        finally:
            conn.close()

    def save_budget(self, user_id: str, budget: Budget) -> None:
        snapshot = budget_to_snapshot(budget)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO budgets (user_id, budget_id, name, goal_limit, mode) VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    budget_id = excluded.budget_id,
                    name = excluded.name,
                    goal_limit = excluded.goal_limit,
                    mode = excluded.mode
                """,
                (user_id, snapshot["id"], snapshot["name"], snapshot["goal_limit"], snapshot["mode"]),
            )
            conn.execute("DELETE FROM ledger_months WHERE user_id = ?", (user_id,))
            conn.executemany(
                "INSERT INTO ledger_months (user_id, month, income_total, expense_total) VALUES (?, ?, ?, ?)",
                [(user_id, m["month"], m["income_total"], m["expense_total"]) for m in snapshot["months"]],
            )
        logger.debug("Saved budget %s for %s", budget.id, user_id)

    def load_budget(self, user_id: str) -> Budget | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT budget_id, name, goal_limit, mode FROM budgets WHERE user_id = ?", (user_id,)
            ).fetchone()
            if row is None:
                return None
            months = conn.execute(
                "SELECT month, income_total, expense_total FROM ledger_months WHERE user_id = ? ORDER BY month",
                (user_id,),
            ).fetchall()

        return budget_from_snapshot(
            {
                "id": row["budget_id"],
                "name": row["name"],
                "goal_limit": row["goal_limit"],
                "mode": row["mode"],
                "months": [dict(month) for month in months],
            }
        )

    def save_transactions(self, store: TransactionStore) -> None:
        """Replace the saved transactions with the store's current contents."""
        snapshot = store_to_snapshot(store)
        with self._connect() as conn:
            conn.execute("DELETE FROM transactions")
            conn.executemany(
                """
                INSERT INTO transactions (id, user_id, occurred_on, kind, category, description, amount)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        entry["id"],
                        user_id,
                        entry["occurred_on"],
                        entry["kind"],
                        entry["category"],
                        entry["description"],
                        entry["amount"],
                    )
                    for user_id, entries in snapshot.items()
                    for entry in entries
                ],
            )
        logger.debug("Saved %d transactions", len(store))

    def load_transactions(self) -> TransactionStore:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, user_id, occurred_on, kind, category, description, amount
                FROM transactions ORDER BY seq
                """
            ).fetchall()

        snapshot: dict[str, list[dict[str, str]]] = {}
        for row in rows:
            entry = dict(row)
            snapshot.setdefault(entry.pop("user_id"), []).append(entry)
        return store_from_snapshot(snapshot)


def open_gateway(backend: str, data_dir: Path) -> FileGateway | SqliteGateway:
    """Create the gateway for a configured storage backend."""
    if backend == "sqlite":
        return SqliteGateway(data_dir / DB_FILENAME)
    return FileGateway(data_dir)
