"""Exact dollar arithmetic.

Every operation converts its operands to integer cents, does integer
arithmetic, and converts back. A chain of operations therefore never
accumulates sub-cent error, and 0.1 + 0.2 is exactly 0.30.

Rounding is half away from zero (ROUND_HALF_UP) for both cents and
whole dollars, matching IRS whole-dollar reporting.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext

from taxengine.exceptions import ArithmeticOverflowError, InvalidAmountError

Amount = Decimal | int | float | str

CENTS_SCALE = 100
CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Signed 64-bit range, in cents.
MAX_CENTS = 2**63 - 1

# Wide enough that cents x factor never rounds before we round it ourselves.
_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP)


def _to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise InvalidAmountError(value) from exc
    if not result.is_finite():
        raise InvalidAmountError(value)
    return result


def _round_integral(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def _check_range(cents: int) -> int:
    if abs(cents) > MAX_CENTS:
        raise ArithmeticOverflowError(cents, MAX_CENTS)
    return cents


def to_cents(amount: Amount) -> int:
    """Convert a dollar amount to integer cents, rounding to the nearest cent."""
    with localcontext(_CONTEXT):
        return _check_range(_round_integral(_to_decimal(amount) * CENTS_SCALE))


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-place dollar Decimal."""
    _check_range(cents)
    with localcontext(_CONTEXT):
        return Decimal(cents).scaleb(-2)


def add(a: Amount, b: Amount) -> Decimal:
    return from_cents(to_cents(a) + to_cents(b))


def subtract(a: Amount, b: Amount) -> Decimal:
    return from_cents(to_cents(a) - to_cents(b))


def multiply(amount: Amount, factor: Amount) -> Decimal:
    """Multiply a dollar amount by any real factor (shares, multipliers)."""
    with localcontext(_CONTEXT):
        return from_cents(_round_integral(to_cents(amount) * _to_decimal(factor)))


def apply_rate(amount: Amount, rate: Amount) -> Decimal:
    """Apply a percentage rate, conventionally in [0, 1], to a dollar amount."""
    return multiply(amount, rate)


def prorate(amount: Amount, part: Amount, whole: Amount) -> Decimal:
    """Return ``amount * part / whole`` rounded once, at the end.

    Used to apportion a lot's total basis to the shares consumed from it
    without going through a rounded per-share figure. A zero ``whole``
    yields zero.
    """
    whole_value = _to_decimal(whole)
    if whole_value == 0:
        return ZERO
    with localcontext(_CONTEXT):
        scaled = to_cents(amount) * _to_decimal(part) / whole_value
        return from_cents(_round_integral(scaled))


def sum_all(values: Iterable[Amount]) -> Decimal:
    return from_cents(sum((to_cents(v) for v in values), 0))


def clamp_min(value: Amount, minimum: Amount = 0) -> Decimal:
    """Clamp a value to a minimum (typically zero)."""
    value_cents = to_cents(value)
    minimum_cents = to_cents(minimum)
    return from_cents(max(value_cents, minimum_cents))


def round_to_cents(amount: Amount) -> Decimal:
    return from_cents(to_cents(amount))


def round_to_whole_dollar(amount: Amount) -> Decimal:
    """Round to the nearest whole dollar (IRS rounding rule)."""
    with localcontext(_CONTEXT):
        dollars = _round_integral(_to_decimal(amount))
    return from_cents(dollars * CENTS_SCALE)
