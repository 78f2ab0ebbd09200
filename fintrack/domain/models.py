"""Domain type definitions for fintrack.

These types provide semantic clarity and help with type checking:
- Money: Exact decimal amount (never a float)
- MonthIndex: Month of the budget year, 1-12
- CategoryName: Free-text category label
- UserId: Opaque identifier handed over by the authentication layer
"""

from decimal import Decimal
from enum import StrEnum
from typing import NewType

# Money is kept as Decimal so repeated additions never drift
Money = NewType("Money", Decimal)

# Month index within a budget year (1 = January)
MonthIndex = NewType("MonthIndex", int)

CategoryName = NewType("CategoryName", str)

UserId = NewType("UserId", str)

ZERO = Money(Decimal("0"))

MONTHS: tuple[MonthIndex, ...] = tuple(MonthIndex(m) for m in range(1, 13))


class TransactionKind(StrEnum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class EnforcementMode(StrEnum):
    """How a budget reacts to an expense that crosses its ceiling.

    REJECT refuses the expense outright. WARN applies it and flags the
    budget as exceeded.
    """

    REJECT = "reject"
    WARN = "warn"
