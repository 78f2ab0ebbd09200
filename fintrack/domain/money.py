"""Validation and arithmetic helpers shared by the ledger, budget and transaction builder.

Totals are added and subtracted in a wide decimal context that raises
instead of rounding, so a sum is either exact or an InvalidAmount.
"""

from collections.abc import Iterable
from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)

from fintrack.domain.models import MONTHS, ZERO, CategoryName, Money, MonthIndex
from fintrack.errors import InvalidAmount, InvalidField, InvalidMonth

CENT = Decimal("0.01")

# Largest single amount accepted from input (one quintillion)
MAX_AMOUNT = Decimal("1e18")

# Significant digits kept by money arithmetic
MONEY_PRECISION = 64

EXACT_CONTEXT = Context(
    prec=MONEY_PRECISION,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)

ROUNDING_CONTEXT = Context(
    prec=MONEY_PRECISION,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def to_money(value: object, field: str = "amount", maximum: Decimal | None = MAX_AMOUNT) -> Money:
    """Convert a raw value to a non-negative Money amount.

    Args:
        value: Decimal, int, numeric string or float.
        field: Field name reported in the error.
        maximum: Largest accepted value, or None for running totals.

    Returns:
        The amount as Money.

    Raises:
        InvalidAmount: If the value is missing, non-numeric, non-finite, negative
            or too large.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"{field.capitalize()} is required", field)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation:
            raise InvalidAmount(f"{field.capitalize()} must be a number (got {value!r})", field) from None
    elif isinstance(value, float):
        # Shortest repr keeps 0.1 as 0.1 rather than its binary expansion
        amount = Decimal(repr(value))
    else:
        raise InvalidAmount(f"{field.capitalize()} must be a number (got {type(value).__name__})", field)

    if not amount.is_finite():
        raise InvalidAmount(f"{field.capitalize()} must be a finite number", field)
    if amount < 0:
        raise InvalidAmount(f"{field.capitalize()} must be non-negative", field)
    if maximum is not None and amount > maximum:
        raise InvalidAmount(f"{field.capitalize()} must not exceed {maximum:,.0f}", field)
    if len(amount.as_tuple().digits) > MONEY_PRECISION:
        raise InvalidAmount(f"{field.capitalize()} has too many digits", field)

    return Money(amount)


def validate_month(month: object) -> MonthIndex:
    """Check a month index is an integer in 1-12."""
    if isinstance(month, bool) or not isinstance(month, int) or month not in MONTHS:
        raise InvalidMonth(month)
    return MonthIndex(month)


def validate_text(value: object, field: str, allow_empty: bool = False) -> str:
    """Check a string field is present and, unless allowed, non-blank."""
    if value is None:
        raise InvalidField(field, f"{field.capitalize()} cannot be null")
    if not isinstance(value, str):
        raise InvalidField(field, f"{field.capitalize()} must be text (got {type(value).__name__})")
    if not allow_empty and not value.strip():
        raise InvalidField(field, f"{field.capitalize()} cannot be empty")
    return value


def validate_category(category: object) -> CategoryName:
    return CategoryName(validate_text(category, "category"))


def add_money(amounts: Iterable[Decimal]) -> Money:
    """Sum amounts exactly.

    Raises:
        InvalidAmount: If the total needs more digits than money arithmetic keeps.
    """
    try:
        with localcontext(EXACT_CONTEXT):
            return Money(sum(amounts, ZERO))
    except DecimalException:
        raise InvalidAmount("Total is too large to keep exactly", "total") from None


def subtract_money(minuend: Decimal, subtrahend: Decimal) -> Money:
    """Exact difference of two amounts; may be negative."""
    try:
        with localcontext(EXACT_CONTEXT):
            return Money(minuend - subtrahend)
    except DecimalException:
        raise InvalidAmount("Difference is too large to keep exactly", "total") from None


def multiply_money(amount: Decimal, factor: int) -> Money:
    try:
        with localcontext(EXACT_CONTEXT):
            return Money(amount * factor)
    except DecimalException:
        raise InvalidAmount("Product is too large to keep exactly", "total") from None


def quantize(amount: Decimal) -> Money:
    """Round to whole cents, half-up.

    Raises:
        InvalidAmount: If the rounded amount needs more digits than money arithmetic keeps.
    """
    try:
        with localcontext(ROUNDING_CONTEXT):
            return Money(amount.quantize(CENT))
    except DecimalException:
        raise InvalidAmount("Amount is too large to round to cents", "amount") from None


def format_money(amount: Decimal) -> str:
    """Format an amount for display (e.g. -1,234.50)."""
    return f"{quantize(amount):,.2f}"
