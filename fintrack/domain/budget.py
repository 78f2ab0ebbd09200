"""Yearly budget made of twelve monthly ledgers plus a goal ceiling.

This module is part of the functional core:
- No I/O operations (no database, no console, no files)
- No logging; failures are raised as fintrack.errors exceptions
- A failed call leaves every ledger exactly as it was

All monetary amounts are Decimal (Money type).
"""

from decimal import Decimal
from typing import Protocol, runtime_checkable

from fintrack.domain.ledger import MonthlyLedger, active_ceiling
from fintrack.domain.models import MONTHS, ZERO, CategoryName, EnforcementMode, Money, MonthIndex
from fintrack.domain.money import (
    add_money,
    subtract_money,
    to_money,
    validate_category,
    validate_month,
    validate_text,
)
from fintrack.errors import InvalidAmount

INITIAL_FUNDING_CATEGORY = CategoryName("Initial Funding")


@runtime_checkable
class BalanceBearing(Protocol):
    """Anything that can report a net balance."""

    def balance(self) -> Money: ...


class Budget:
    """A user's budget for one year.

    Owns its twelve MonthlyLedgers exclusively. ``exceeded`` is derived from
    the ledgers on every read rather than stored.
    """

    def __init__(
        self,
        id: str,
        name: str,
        goal_limit: Decimal | None = None,
        mode: EnforcementMode = EnforcementMode.REJECT,
        ledgers: list[MonthlyLedger] | None = None,
    ) -> None:
        self.id = validate_text(id, "id")
        self.name = validate_text(name, "name")
        self.goal_limit: Money | None = None if goal_limit is None else to_money(goal_limit, "goal_limit")
        self.mode = EnforcementMode(mode)

        self._ledgers: dict[MonthIndex, MonthlyLedger] = {m: MonthlyLedger(m) for m in MONTHS}
        for ledger in ledgers or []:
            self._ledgers[ledger.month] = ledger.copy()

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        initial_funding: object = ZERO,
        goal_limit: Decimal | None = None,
        mode: EnforcementMode = EnforcementMode.REJECT,
    ) -> "Budget":
        """Create a new budget and seed January's income with the initial funding.

        Raises:
            InvalidField: If id or name is empty.
            InvalidAmount: If initial funding or goal limit is negative.
        """
        funding = to_money(initial_funding, "initial_funding")
        budget = cls(id, name, goal_limit=goal_limit, mode=mode)
        budget.add_income(1, INITIAL_FUNDING_CATEGORY, funding)
        return budget

    @property
    def exceeded(self) -> bool:
        """True while any month's expenses sit above the goal limit."""
        return any(ledger.is_over(self.goal_limit) for ledger in self._ledgers.values())

    @property
    def enforced(self) -> bool:
        return active_ceiling(self.goal_limit) is not None

    def add_income(self, month: int, category: str, amount: object) -> None:
        """Add income to a month.

        Raises:
            InvalidMonth: If month is outside 1-12.
            InvalidField: If category is empty.
            InvalidAmount: If amount is negative.
        """
        ledger = self._ledgers[validate_month(month)]
        validate_category(category)
        ledger.add_income(amount)

    def add_expense(self, month: int, category: str, amount: object) -> bool:
        """Add an expense to a month, enforcing the goal limit.

        Returns:
            True if the month is now above the goal limit (WARN mode only).

        Raises:
            InvalidMonth: If month is outside 1-12.
            InvalidField: If category is empty.
            InvalidAmount: If amount is negative.
            BudgetExceeded: Under REJECT, if the month would go over the limit.
        """
        ledger = self._ledgers[validate_month(month)]
        validate_category(category)
        return ledger.add_expense(amount, self.goal_limit, self.mode)

    def monthly_income(self, month: int) -> Money:
        return self._ledgers[validate_month(month)].income_total

    def monthly_expenses(self, month: int) -> Money:
        return self._ledgers[validate_month(month)].expense_total

    def monthly_balance(self, month: int) -> Money:
        return self._ledgers[validate_month(month)].balance()

    def ledger(self, month: int) -> MonthlyLedger:
        """Return a detached copy of one month's ledger."""
        return self._ledgers[validate_month(month)].copy()

    def ledgers(self) -> list[MonthlyLedger]:
        """Return detached copies of all twelve ledgers, January first."""
        return [self._ledgers[m].copy() for m in MONTHS]

    def balance(self) -> Money:
        """Total income minus total expenses across the year, computed fresh."""
        return subtract_money(self.total_income(), self.total_expenses())

    def total_income(self) -> Money:
        return add_money(ledger.income_total for ledger in self._ledgers.values())

    def total_expenses(self) -> Money:
        return add_money(ledger.expense_total for ledger in self._ledgers.values())

    def exceeded_months(self) -> list[MonthIndex]:
        return [m for m in MONTHS if self._ledgers[m].is_over(self.goal_limit)]

    def set_goal_limit(self, limit: object) -> None:
        """Change the ceiling without touching any totals.

        None or zero disables enforcement.

        Raises:
            InvalidAmount: If limit is negative.
        """
        self.goal_limit = None if limit is None else to_money(limit, "goal_limit")

    def reset(self, new_goal_limit: object) -> None:
        """Zero every month's expenses and install a new goal limit.

        Income history is kept.

        Raises:
            InvalidAmount: If the new limit is not greater than zero.
        """
        limit = to_money(new_goal_limit, "goal_limit")
        if limit <= 0:
            raise InvalidAmount("Goal limit must be greater than zero", "goal_limit")

        for ledger in self._ledgers.values():
            ledger.clear_expenses()
        self.goal_limit = limit

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Budget):
            return NotImplemented
        return (
            self.id == other.id
            and self.name == other.name
            and self.goal_limit == other.goal_limit
            and self.mode == other.mode
            and self.ledgers() == other.ledgers()
        )

    def __repr__(self) -> str:
        return (
            f"Budget(id={self.id!r}, name={self.name!r}, goal_limit={self.goal_limit}, "
            f"mode={self.mode.value!r}, balance={self.balance()})"
        )
