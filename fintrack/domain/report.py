"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are Decimal (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from fintrack.domain.budget import Budget
from fintrack.domain.models import MONTHS, CategoryName, Money, MonthIndex, TransactionKind
from fintrack.domain.money import add_money, format_money, multiply_money, quantize, subtract_money, to_money
from fintrack.domain.transactions import Transaction

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class TransactionSummary:
    """Immutable income/expense summary, rounded to whole cents."""

    total_income: Money
    total_expenses: Money

    @property
    def net_balance(self) -> Money:
        return quantize(subtract_money(self.total_income, self.total_expenses))


@dataclass(frozen=True)
class MonthStatus:
    """Immutable status row for one month of a budget."""

    month: MonthIndex
    income: Money
    expenses: Money
    balance: Money
    remaining: Money | None
    over_limit: bool


@dataclass(frozen=True)
class CategoryReport:
    """Immutable expense total for one category."""

    category: CategoryName
    amount: Money
    percentage: float


def summarize(transactions: Iterable[Transaction]) -> TransactionSummary:
    """Total income and expenses for a set of transactions.

    Args:
        transactions: Transactions to summarize.

    Returns:
        TransactionSummary with both totals rounded half-up to two places.
    """
    incomes: list[Decimal] = []
    expenses: list[Decimal] = []
    for transaction in transactions:
        if transaction.kind is TransactionKind.INCOME:
            incomes.append(transaction.amount)
        else:
            expenses.append(transaction.amount)

    return TransactionSummary(
        total_income=quantize(add_money(incomes)),
        total_expenses=quantize(add_money(expenses)),
    )


def calculate_percentage(amount: Decimal, total: Decimal) -> float:
    """Calculate what percentage of total an amount is.

    Returns:
        Percentage (0-100+), or 0.0 when total is not positive.
    """
    if total <= 0:
        return 0.0
    return float(amount / total * HUNDRED)


def create_category_reports(totals: dict[CategoryName, Money], sort_by: str = "value") -> list[CategoryReport]:
    """Turn per-category expense totals into sorted report rows.

    Args:
        totals: Category expense totals.
        sort_by: "value" (largest first) or "alpha".

    Returns:
        List of CategoryReport, each with its share of total expenses.
    """
    grand_total = add_money(totals.values())

    if sort_by == "alpha":
        ordered = sorted(totals.items(), key=lambda x: x[0].casefold())
    else:
        ordered = sorted(totals.items(), key=lambda x: x[1], reverse=True)

    return [
        CategoryReport(category=category, amount=amount, percentage=calculate_percentage(amount, grand_total))
        for category, amount in ordered
    ]


def month_status(budget: Budget) -> list[MonthStatus]:
    """Build one status row per month, January first."""
    rows: list[MonthStatus] = []
    for month in MONTHS:
        ledger = budget.ledger(month)
        rows.append(
            MonthStatus(
                month=month,
                income=ledger.income_total,
                expenses=ledger.expense_total,
                balance=ledger.balance(),
                remaining=ledger.remaining(budget.goal_limit),
                over_limit=ledger.is_over(budget.goal_limit),
            )
        )
    return rows


def budget_alert(budget: Budget, threshold: object) -> str:
    """Build a warning when yearly spending reaches a share of the yearly ceiling.

    The yearly ceiling is twelve times the monthly goal limit.

    Args:
        budget: Budget to check.
        threshold: Percentage (e.g. 80) at which to warn.

    Returns:
        Alert message, or an empty string when under the threshold or when
        the budget has no goal limit.

    Raises:
        InvalidAmount: If threshold is negative or not a number.
    """
    percent = to_money(threshold, "threshold")
    if not budget.enforced or budget.goal_limit is None:
        return ""

    yearly_ceiling = multiply_money(budget.goal_limit, len(MONTHS))
    spent = budget.total_expenses()
    used = calculate_percentage(spent, yearly_ceiling)

    if used < percent:
        return ""

    return (
        f"Alert: you have used {used:.0f}% of your yearly budget "
        f"({format_money(spent)} of {format_money(yearly_ceiling)})"
    )
