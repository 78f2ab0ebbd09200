"""Tests for fintrack.domain.transactions."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from fintrack.domain.models import TransactionKind
from fintrack.domain.transactions import Transaction, TransactionBuilder
from fintrack.errors import InvalidAmount, InvalidField


def builder() -> TransactionBuilder:
    return TransactionBuilder().category("Food").amount("12.50").kind(TransactionKind.EXPENSE)


class TestTransactionBuilder:
    """Tests for TransactionBuilder."""

    def test_builds_transaction(self) -> None:
        """Should build an immutable transaction with every field set."""
        txn = (
            TransactionBuilder()
            .description("Weekly shop")
            .category("Food")
            .amount("42.10")
            .kind(TransactionKind.EXPENSE)
            .occurred_on(date(2025, 3, 14))
            .build()
        )

        assert txn.description == "Weekly shop"
        assert txn.category == "Food"
        assert txn.amount == Decimal("42.10")
        assert txn.kind is TransactionKind.EXPENSE
        assert txn.occurred_on == date(2025, 3, 14)
        assert txn.month == 3
        assert txn.is_expense

    def test_assigns_unique_ids(self) -> None:
        b = builder()
        first = b.build()
        second = b.build()

        assert first.id
        assert first.id != second.id

    def test_defaults_description_and_date(self) -> None:
        txn = builder().build()

        assert txn.description == ""
        assert txn.occurred_on == date.today()

    def test_accepts_kind_as_string(self) -> None:
        txn = builder().kind("income").build()

        assert txn.kind is TransactionKind.INCOME

    def test_float_amount_keeps_its_short_form(self) -> None:
        txn = builder().amount(0.1).build()

        assert txn.amount == Decimal("0.1")

    @pytest.mark.parametrize("category", ["", "   ", None])
    def test_rejects_empty_category_immediately(self, category: object) -> None:
        """Should fail on the setter, not at build()."""
        with pytest.raises(InvalidField) as exc_info:
            TransactionBuilder().category(category)  # type: ignore[arg-type]

        assert exc_info.value.field == "category"

    def test_rejects_null_description(self) -> None:
        with pytest.raises(InvalidField):
            TransactionBuilder().description(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("amount", ["-1", Decimal("-0.01"), "abc", None, True, "NaN"])
    def test_rejects_bad_amount(self, amount: object) -> None:
        with pytest.raises(InvalidAmount):
            TransactionBuilder().amount(amount)

    def test_invalid_amount_is_an_invalid_field(self) -> None:
        with pytest.raises(InvalidField):
            TransactionBuilder().amount("-5")

    @pytest.mark.parametrize("kind", [None, "transfer"])
    def test_rejects_bad_kind(self, kind: object) -> None:
        with pytest.raises(InvalidField):
            TransactionBuilder().kind(kind)  # type: ignore[arg-type]

    def test_rejects_non_date(self) -> None:
        with pytest.raises(InvalidField):
            TransactionBuilder().occurred_on("2025-01-01")  # type: ignore[arg-type]

    def test_build_requires_category_amount_and_kind(self) -> None:
        with pytest.raises(InvalidField):
            TransactionBuilder().amount("1").kind(TransactionKind.INCOME).build()
        with pytest.raises(InvalidAmount):
            TransactionBuilder().category("Pay").kind(TransactionKind.INCOME).build()
        with pytest.raises(InvalidField):
            TransactionBuilder().category("Pay").amount("1").build()

    def test_bad_value_does_not_replace_good_one(self) -> None:
        b = builder()
        with pytest.raises(InvalidAmount):
            b.amount("-3")

        assert b.build().amount == Decimal("12.50")


class TestTransaction:
    """Tests for the Transaction value object."""

    def test_is_immutable(self) -> None:
        txn = builder().build()

        with pytest.raises(dataclasses.FrozenInstanceError):
            txn.amount = Decimal("1")  # type: ignore[misc]

    def test_equality_is_by_value(self) -> None:
        a = Transaction(
            amount=Decimal("5"),
            kind=TransactionKind.INCOME,
            category="Gift",
            occurred_on=date(2025, 1, 1),
            id="same",
        )
        b = dataclasses.replace(a)

        assert a == b

    @pytest.mark.parametrize(
        "changes",
        [
            {"category": ""},
            {"category": 5},
            {"description": None},
            {"amount": 5.0},
            {"amount": Decimal("-1")},
            {"kind": "income"},
            {"id": ""},
        ],
    )
    def test_rejects_invalid_fields(self, changes: dict[str, object]) -> None:
        fields: dict[str, object] = {
            "amount": Decimal("5"),
            "kind": TransactionKind.INCOME,
            "category": "Gift",
            "occurred_on": date(2025, 1, 1),
        }
        fields.update(changes)

        with pytest.raises(InvalidField):
            Transaction(**fields)  # type: ignore[arg-type]
