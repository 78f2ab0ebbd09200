"""In-memory per-user transaction history with aggregate queries.

Transactions are kept in insertion order. They are never removed one at a
time; only a bulk clear is allowed.
"""

from decimal import Decimal

from fintrack.domain.models import ZERO, CategoryName, Money, TransactionKind, UserId
from fintrack.domain.money import add_money, to_money, validate_category, validate_text
from fintrack.domain.transactions import Transaction
from fintrack.errors import DuplicateTransaction


class TransactionStore:
    """Maps a user id to that user's ordered transactions."""

    def __init__(self, entries: dict[str, list[Transaction]] | None = None) -> None:
        self._entries: dict[UserId, list[Transaction]] = {}
        self._ids: dict[UserId, set[str]] = {}
        for user_id, transactions in (entries or {}).items():
            for transaction in transactions:
                self.record(user_id, transaction)

    def record(self, user_id: str, transaction: Transaction) -> None:
        """Append a transaction to a user's history.

        Raises:
            InvalidField: If user_id is empty.
            DuplicateTransaction: If this transaction id is already recorded for the user.
        """
        key = UserId(validate_text(user_id, "user_id"))
        seen = self._ids.setdefault(key, set())
        if transaction.id in seen:
            raise DuplicateTransaction(transaction.id)

        seen.add(transaction.id)
        self._entries.setdefault(key, []).append(transaction)

    def contains(self, user_id: str, transaction_id: str) -> bool:
        return transaction_id in self._ids.get(UserId(user_id), set())

    def transactions(self, user_id: str) -> list[Transaction]:
        """Return a copy of a user's transactions in the order they were recorded."""
        return list(self._entries.get(UserId(user_id), []))

    def users(self) -> list[UserId]:
        return list(self._entries)

    def totals_by_kind(self, user_id: str, kind: TransactionKind) -> Money:
        """Sum a user's transactions of one kind; zero for unknown users."""
        return add_money(t.amount for t in self._entries.get(UserId(user_id), []) if t.kind is kind)

    def totals_by_category(self, user_id: str) -> dict[CategoryName, Money]:
        """Sum a user's expenses per category.

        Income is ignored and categories that total zero are left out.
        """
        totals: dict[CategoryName, Money] = {}
        for transaction in self._entries.get(UserId(user_id), []):
            if transaction.is_expense:
                current = totals.get(transaction.category, ZERO)
                totals[transaction.category] = add_money((current, transaction.amount))
        return {category: total for category, total in totals.items() if total != 0}

    def exceeding(self, user_id: str, ceiling: Decimal) -> list[Transaction]:
        """Return expenses whose own amount is above the ceiling, in recorded order.

        This is a per-transaction check, unlike the cumulative monthly check
        a Budget performs.
        """
        limit = to_money(ceiling, "ceiling")
        return [t for t in self._entries.get(UserId(user_id), []) if t.is_expense and t.amount > limit]

    def count_by_category(self, user_id: str, category: str) -> int:
        """Count a user's transactions in a category, ignoring case."""
        wanted = validate_category(category).casefold()
        return sum(1 for t in self._entries.get(UserId(user_id), []) if t.category.casefold() == wanted)

    def clear(self, user_id: str | None = None) -> None:
        """Bulk reset: drop one user's history, or everyone's when user_id is None."""
        if user_id is None:
            self._entries.clear()
            self._ids.clear()
            return
        self._entries.pop(UserId(user_id), None)
        self._ids.pop(UserId(user_id), None)

    def __len__(self) -> int:
        return sum(len(transactions) for transactions in self._entries.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransactionStore):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"TransactionStore(users={len(self._entries)}, transactions={len(self)})"
