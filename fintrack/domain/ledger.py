"""Per-month income and expense accumulator.

Pure in-memory state, no I/O. All amounts are Decimal.
"""

from decimal import Decimal

from fintrack.domain.models import ZERO, EnforcementMode, Money, MonthIndex
from fintrack.domain.money import add_money, subtract_money, to_money, validate_month
from fintrack.errors import BudgetExceeded


def active_ceiling(ceiling: Decimal | None) -> Decimal | None:
    """Return the ceiling if it is enforceable; None or zero means no limit."""
    if ceiling is None or ceiling <= 0:
        return None
    return ceiling


class MonthlyLedger:
    """Running income and expense totals for one month of a budget."""

    __slots__ = ("month", "_income_total", "_expense_total")

    def __init__(self, month: int, income_total: Decimal = ZERO, expense_total: Decimal = ZERO) -> None:
        self.month: MonthIndex = validate_month(month)
        self._income_total = to_money(income_total, "income_total", maximum=None)
        self._expense_total = to_money(expense_total, "expense_total", maximum=None)

    @property
    def income_total(self) -> Money:
        return self._income_total

    @property
    def expense_total(self) -> Money:
        return self._expense_total

    def add_income(self, amount: object) -> None:
        """Increase the income total.

        Raises:
            InvalidAmount: If amount is missing or negative.
        """
        self._income_total = add_money((self._income_total, to_money(amount)))

    def add_expense(
        self,
        amount: object,
        ceiling: Decimal | None = None,
        mode: EnforcementMode = EnforcementMode.REJECT,
    ) -> bool:
        """Increase the expense total, enforcing an optional ceiling.

        Under REJECT an expense that would take the total above the ceiling
        raises and nothing is applied. Under WARN it is applied anyway.

        Args:
            amount: Expense amount.
            ceiling: Per-month expense ceiling, or None for no limit.
            mode: Enforcement mode.

        Returns:
            True if the expense total is now above the ceiling.

        Raises:
            InvalidAmount: If amount is missing or negative.
            BudgetExceeded: If the ceiling would be crossed under REJECT.
        """
        value = to_money(amount)
        new_total = add_money((self._expense_total, value))

        limit = active_ceiling(ceiling)
        over = limit is not None and new_total > limit
        if over and mode is EnforcementMode.REJECT:
            raise BudgetExceeded(self.month, new_total, Money(limit))

        self._expense_total = new_total
        return over

    def balance(self) -> Money:
        """Income minus expenses; negative when overspent."""
        return subtract_money(self._income_total, self._expense_total)

    def is_over(self, ceiling: Decimal | None) -> bool:
        limit = active_ceiling(ceiling)
        return limit is not None and self._expense_total > limit

    def remaining(self, ceiling: Decimal | None) -> Money | None:
        """Headroom left under the ceiling, or None when there is no ceiling."""
        limit = active_ceiling(ceiling)
        if limit is None:
            return None
        return subtract_money(limit, self._expense_total)

    def clear_expenses(self) -> None:
        self._expense_total = ZERO

    def copy(self) -> "MonthlyLedger":
        return MonthlyLedger(self.month, self._income_total, self._expense_total)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MonthlyLedger):
            return NotImplemented
        return (
            self.month == other.month
            and self._income_total == other._income_total
            and self._expense_total == other._expense_total
        )

    def __repr__(self) -> str:
        return (
            f"MonthlyLedger(month={self.month}, income_total={self._income_total}, "
            f"expense_total={self._expense_total})"
        )
