"""Immutable transaction records and their validating builder.

Builder setters validate the moment a value is supplied, so a builder that
has accepted every field always produces a valid Transaction.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Self

from fintrack.domain.models import CategoryName, Money, MonthIndex, TransactionKind
from fintrack.domain.money import to_money, validate_category, validate_text
from fintrack.errors import InvalidAmount, InvalidField


def new_transaction_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Transaction:
    """Immutable record of one income or expense event.

    A correction is a new Transaction, never a mutation of this one.
    """

    amount: Money
    kind: TransactionKind
    category: CategoryName
    description: str = ""
    occurred_on: date = field(default_factory=date.today)
    id: str = field(default_factory=new_transaction_id)

    def __post_init__(self) -> None:
        """Reject field values that break the record, including ones read back from storage."""
        if not isinstance(self.amount, Decimal):
            raise InvalidAmount(f"Amount must be a Decimal (got {type(self.amount).__name__})")
        to_money(self.amount)
        if not isinstance(self.kind, TransactionKind):
            raise InvalidField("kind", f"Unknown transaction kind {self.kind!r}")
        validate_category(self.category)
        validate_text(self.description, "description", allow_empty=True)
        if not isinstance(self.occurred_on, date):
            raise InvalidField("occurred_on", "Transaction date must be a date")
        validate_text(self.id, "id")

    @property
    def month(self) -> MonthIndex:
        """Ledger month this transaction applies to."""
        return MonthIndex(self.occurred_on.month)

    @property
    def is_expense(self) -> bool:
        return self.kind is TransactionKind.EXPENSE


class TransactionBuilder:
    """Accumulates transaction fields, rejecting bad values immediately.

    Example:
        txn = (
            TransactionBuilder()
            .description("Weekly shop")
            .category("Food")
            .amount("42.10")
            .kind(TransactionKind.EXPENSE)
            .build()
        )
    """

    def __init__(self) -> None:
        self._description = ""
        self._category: CategoryName | None = None
        self._amount: Money | None = None
        self._kind: TransactionKind | None = None
        self._occurred_on: date | None = None

    def description(self, description: str) -> Self:
        self._description = validate_text(description, "description", allow_empty=True)
        return self

    def category(self, category: str) -> Self:
        self._category = validate_category(category)
        return self

    def amount(self, amount: object) -> Self:
        self._amount = to_money(amount)
        return self

    def kind(self, kind: TransactionKind | str) -> Self:
        if kind is None:
            raise InvalidField("kind", "Transaction kind cannot be null")
        try:
            self._kind = TransactionKind(kind)
        except ValueError:
            raise InvalidField("kind", f"Unknown transaction kind {kind!r}") from None
        return self

    def occurred_on(self, occurred_on: date) -> Self:
        if not isinstance(occurred_on, date):
            raise InvalidField("occurred_on", "Transaction date must be a date")
        self._occurred_on = occurred_on
        return self

    def build(self) -> Transaction:
        """Assign an id and return the finished Transaction.

        Raises:
            InvalidField: If category, amount or kind was never set.
        """
        if self._category is None:
            raise InvalidField("category", "Category is required")
        if self._amount is None:
            raise InvalidAmount("Amount is required")
        if self._kind is None:
            raise InvalidField("kind", "Transaction kind is required")

        return Transaction(
            amount=self._amount,
            kind=self._kind,
            category=self._category,
            description=self._description,
            occurred_on=self._occurred_on or date.today(),
        )
