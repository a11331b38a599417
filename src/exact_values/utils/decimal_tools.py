from __future__ import annotations

import decimal
from decimal import Decimal
from typing import TypeAlias

from exact_values.errors import DivisionByZeroError, InvalidOperationError

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Unbounded context for operations whose result is always finite (add, subtract, multiply, remainder)
EXACT_CONTEXT = decimal.Context(
    prec=decimal.MAX_PREC,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        decimal.InvalidOperation: If a string is not a decimal literal.
    """
    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def to_plain_string(value: Decimal) -> str:
    """Format $value in positional notation, never with an exponent."""
    return format(value, "f")


def scale_of(value: Decimal) -> int:
    """Number of fractional digits of $value (negative for values like `1E+3`)."""
    return -value.as_tuple().exponent


def quantum(scale: int) -> Decimal:
    """Return `1E-<scale>`, the quantum used to round to $scale fractional digits."""
    return Decimal(1).scaleb(-scale)


def exact_add(a: Decimal, b: Decimal) -> Decimal:
    return EXACT_CONTEXT.add(a, b)


def exact_subtract(a: Decimal, b: Decimal) -> Decimal:
    return EXACT_CONTEXT.subtract(a, b)


def exact_multiply(a: Decimal, b: Decimal) -> Decimal:
    return EXACT_CONTEXT.multiply(a, b)


def exact_remainder(a: Decimal, b: Decimal) -> Decimal:
    """Remainder with the sign of $a (truncating division), like `a - b * trunc(a / b)`."""
    # Raise: remainder by zero is undefined
    if b.is_zero():
        raise DivisionByZeroError(f"Cannot call `exact_remainder` because $b is zero (a={a})")
    return EXACT_CONTEXT.remainder(a, b)


def exact_divide_to_integral(a: Decimal, b: Decimal) -> Decimal:
    """Integer part of `a / b`, truncated towards zero."""
    # Raise: integral division by zero is undefined
    if b.is_zero():
        raise DivisionByZeroError(f"Cannot call `exact_divide_to_integral` because $b is zero (a={a})")
    return EXACT_CONTEXT.divide_int(a, b)


def divide_to_scale(dividend: Decimal, divisor: Decimal, scale: int, rounding: str) -> Decimal:
    """Divide and round the quotient to exactly $scale fractional digits.

    The quotient is computed with integers: it is truncated to one guard digit beyond $scale and a
    non-zero remainder is folded into that digit (sticky digit), so a single `quantize` applies
    $rounding correctly for every `decimal` rounding mode.

    Args:
        dividend: Number to divide.
        divisor: Number to divide by.
        scale: Number of fractional digits of the result.
        rounding: One of the `decimal.ROUND_*` constants.

    Returns:
        The rounded quotient with exactly $scale fractional digits.

    Raises:
        DivisionByZeroError: If $divisor is zero.
        InvalidOperationError: If an operand is not finite.
    """
    # Raise: operands must be finite numbers
    if not dividend.is_finite() or not divisor.is_finite():
        raise InvalidOperationError(f"Cannot call `divide_to_scale` because an operand is not finite ({dividend} / {divisor})")

    # Raise: division by zero is undefined
    if divisor.is_zero():
        raise DivisionByZeroError(f"Cannot call `divide_to_scale` because $divisor is zero (dividend={dividend})")

    sign_a, digits_a, exp_a = dividend.as_tuple()
    sign_b, digits_b, exp_b = divisor.as_tuple()
    int_a = int("".join(map(str, digits_a)) or "0")
    int_b = int("".join(map(str, digits_b)) or "0")

    # |a| / |b| = int_a / int_b * 10^(exp_a - exp_b); one guard digit beyond the target scale
    shift = exp_a - exp_b + scale + 1
    numerator = int_a * 10**shift if shift >= 0 else int_a
    denominator = int_b if shift >= 0 else int_b * 10**-shift

    truncated, remainder = divmod(numerator, denominator)
    if remainder and truncated % 10 in (0, 5):
        truncated += 1

    negative = sign_a != sign_b
    guarded = Decimal((1 if negative else 0, tuple(int(d) for d in str(truncated)), -(scale + 1)))
    result = guarded.quantize(quantum(scale), rounding=rounding, context=EXACT_CONTEXT)

    # No negative zero
    return result.copy_abs() if result.is_zero() else result
