from __future__ import annotations

import decimal
from decimal import Decimal
from enum import Enum

from exact_values.errors import PrecisionLossError
from exact_values.utils.decimal_tools import EXACT_CONTEXT, divide_to_scale, exact_multiply, quantum


class RoundingMode(Enum):
    """Rounding modes for scale changes and bounded division.

    `UNNECESSARY` asserts that no rounding is needed and raises `PrecisionLossError` otherwise.
    """

    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR
    HALF_UP = decimal.ROUND_HALF_UP
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    UNNECESSARY = "UNNECESSARY"

    def round(self, value: Decimal, scale: int) -> Decimal:
        """Return $value with exactly $scale fractional digits."""
        if self is RoundingMode.UNNECESSARY:
            rounded = value.quantize(quantum(scale), rounding=decimal.ROUND_DOWN, context=EXACT_CONTEXT)
            # Raise: rounding was required
            if rounded != value:
                raise PrecisionLossError(value, rounded)
            return rounded

        return value.quantize(quantum(scale), rounding=self.value, context=EXACT_CONTEXT)

    def divide(self, dividend: Decimal, divisor: Decimal, scale: int) -> Decimal:
        """Return `dividend / divisor` rounded to exactly $scale fractional digits."""
        if self is RoundingMode.UNNECESSARY:
            quotient = divide_to_scale(dividend, divisor, scale, decimal.ROUND_DOWN)
            # Raise: the quotient is not exact at this scale
            if exact_multiply(quotient, divisor) != dividend:
                raise PrecisionLossError(f"{dividend} / {divisor}", quotient)
            return quotient

        return divide_to_scale(dividend, divisor, scale, self.value)
