"""Snapshot encoding for budgets and transaction stores.

A snapshot is a plain dict made of strings, ints and lists so it can be
written as JSON. Decimals are stored as strings to keep round-trips exact.
"""

import json
from datetime import date
from decimal import Decimal
from typing import Any

from fintrack.domain.budget import Budget
from fintrack.domain.ledger import MonthlyLedger
from fintrack.domain.models import EnforcementMode, TransactionKind
from fintrack.domain.money import to_money
from fintrack.domain.transaction_store import TransactionStore
from fintrack.domain.transactions import Transaction
from fintrack.errors import FinTrackError, PersistenceFailure

ENCODING = "utf-8"


def _decimal_or_none(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def budget_to_snapshot(budget: Budget) -> dict[str, Any]:
    """Convert a Budget into its snapshot dict."""
    return {
        "id": budget.id,
        "name": budget.name,
        "goal_limit": _decimal_or_none(budget.goal_limit),
        "mode": budget.mode.value,
        "months": [
            {
                "month": ledger.month,
                "income_total": str(ledger.income_total),
                "expense_total": str(ledger.expense_total),
            }
            for ledger in budget.ledgers()
        ],
    }


def budget_from_snapshot(data: dict[str, Any]) -> Budget:
    """Rebuild a Budget from its snapshot dict.

    Raises:
        PersistenceFailure: If the snapshot is missing fields or holds invalid values.
    """
    try:
        months = data["months"]
        if len(months) != 12:
            raise PersistenceFailure(f"Budget snapshot must hold 12 months (got {len(months)})")

        ledgers = [
            MonthlyLedger(
                int(entry["month"]),
                to_money(entry["income_total"], "income_total", maximum=None),
                to_money(entry["expense_total"], "expense_total", maximum=None),
            )
            for entry in months
        ]
        if sorted(ledger.month for ledger in ledgers) != list(range(1, 13)):
            raise PersistenceFailure("Budget snapshot must hold each month exactly once")

        goal_limit = data.get("goal_limit")
        return Budget(
            data["id"],
            data["name"],
            goal_limit=None if goal_limit is None else to_money(goal_limit, "goal_limit"),
            mode=EnforcementMode(data.get("mode", EnforcementMode.REJECT.value)),
            ledgers=ledgers,
        )
    except PersistenceFailure:
        raise
    except (KeyError, TypeError, ValueError, FinTrackError) as e:
        raise PersistenceFailure(f"Invalid budget snapshot: {e}") from e


def transaction_to_snapshot(transaction: Transaction) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "amount": str(transaction.amount),
        "kind": transaction.kind.value,
        "category": transaction.category,
        "description": transaction.description,
        "occurred_on": transaction.occurred_on.isoformat(),
    }


def transaction_from_snapshot(data: dict[str, Any]) -> Transaction:
    """Rebuild a Transaction, keeping its original id."""
    return Transaction(
        id=str(data["id"]),
        amount=to_money(data["amount"]),
        kind=TransactionKind(data["kind"]),
        category=data["category"],
        description=data.get("description", ""),
        occurred_on=date.fromisoformat(data["occurred_on"]),
    )


def store_to_snapshot(store: TransactionStore) -> dict[str, list[dict[str, Any]]]:
    """Convert a TransactionStore into a user id -> transactions mapping."""
    return {user_id: [transaction_to_snapshot(t) for t in store.transactions(user_id)] for user_id in store.users()}


def store_from_snapshot(data: dict[str, Any]) -> TransactionStore:
    """Rebuild a TransactionStore, preserving each user's order.

    Raises:
        PersistenceFailure: If an entry is malformed or an id repeats.
    """
    try:
        return TransactionStore(
            {user_id: [transaction_from_snapshot(entry) for entry in entries] for user_id, entries in data.items()}
        )
    except (AttributeError, KeyError, TypeError, ValueError, FinTrackError) as e:
        raise PersistenceFailure(f"Invalid transaction snapshot: {e}") from e


def _dumps(data: Any) -> bytes:
    return json.dumps(data, indent=2, sort_keys=True).encode(ENCODING)


def _loads(payload: bytes) -> Any:
    try:
        return json.loads(payload.decode(ENCODING))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PersistenceFailure(f"Snapshot is not valid JSON: {e}") from e


def encode_budget(budget: Budget) -> bytes:
    return _dumps(budget_to_snapshot(budget))


def decode_budget(payload: bytes) -> Budget:
    data = _loads(payload)
    if not isinstance(data, dict):
        raise PersistenceFailure("Budget snapshot must be a JSON object")
    return budget_from_snapshot(data)


def encode_store(store: TransactionStore) -> bytes:
    return _dumps(store_to_snapshot(store))


def decode_store(payload: bytes) -> TransactionStore:
    data = _loads(payload)
    if not isinstance(data, dict):
        raise PersistenceFailure("Transaction snapshot must be a JSON object")
    return store_from_snapshot(data)
