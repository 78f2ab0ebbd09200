"""Exceptions raised by fintrack.

Every failure is recoverable and caller-visible. Nothing here is retried or
logged at the point it is raised; callers decide how to render it.
"""

from decimal import Decimal


class FinTrackError(Exception):
    """Base class for all fintrack errors."""


class ValidationError(FinTrackError, ValueError):
    """Raised when input does not meet validation requirements."""


class InvalidField(ValidationError):
    """A required value was empty, missing or of the wrong kind."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class InvalidAmount(InvalidField):
    """An amount was missing, non-numeric or negative."""

    def __init__(self, message: str = "Amount must be non-negative", field: str = "amount") -> None:
        super().__init__(field, message)


class InvalidMonth(InvalidField):
    """A month index fell outside 1-12."""

    def __init__(self, month: object) -> None:
        super().__init__("month", f"Month must be between 1 and 12 (got {month!r})")
        self.month = month


class DuplicateTransaction(InvalidField):
    """A transaction id was recorded twice for the same user."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__("id", f"Transaction {transaction_id} is already recorded")
        self.transaction_id = transaction_id


class BudgetExceeded(FinTrackError):
    """An expense would push a month's total over its ceiling."""

    def __init__(self, month: int, attempted: Decimal, ceiling: Decimal) -> None:
        super().__init__(
            f"Adding this expense exceeds your budget for month {month} "
            f"(would be {attempted:,.2f}, limit {ceiling:,.2f})"
        )
        self.month = month
        self.attempted = attempted
        self.ceiling = ceiling


class NotFound(FinTrackError, LookupError):
    """An operation referenced an unknown user or budget."""


class PersistenceFailure(FinTrackError, OSError):
    """Reading or writing durable storage failed."""
