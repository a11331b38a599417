from decimal import Decimal

import pytest

from exact_values.domain.numeric.rounding import RoundingMode
from exact_values.errors import DivisionByZeroError, PrecisionLossError


@pytest.mark.parametrize(
    "mode, value, expected",
    [
        (RoundingMode.HALF_UP, "2.5", "3"),
        (RoundingMode.HALF_DOWN, "2.5", "2"),
        (RoundingMode.HALF_EVEN, "2.5", "2"),
        (RoundingMode.HALF_EVEN, "3.5", "4"),
        (RoundingMode.UP, "2.1", "3"),
        (RoundingMode.DOWN, "2.9", "2"),
        (RoundingMode.CEILING, "-2.9", "-2"),
        (RoundingMode.FLOOR, "-2.1", "-3"),
    ],
)
def test_round(mode, value, expected):
    assert mode.round(Decimal(value), 0) == Decimal(expected)


def test_round_unnecessary():
    assert RoundingMode.UNNECESSARY.round(Decimal("1.50"), 1) == Decimal("1.5")
    with pytest.raises(PrecisionLossError):
        RoundingMode.UNNECESSARY.round(Decimal("1.55"), 1)


@pytest.mark.parametrize(
    "mode, dividend, divisor, scale, expected",
    [
        (RoundingMode.DOWN, "2", "3", 3, "0.666"),
        (RoundingMode.HALF_UP, "2", "3", 3, "0.667"),
        (RoundingMode.CEILING, "-1", "3", 1, "-0.3"),
        (RoundingMode.FLOOR, "-1", "3", 1, "-0.4"),
        # Exact tie
        (RoundingMode.HALF_EVEN, "1", "8", 2, "0.12"),
        # Just above the tie
        (RoundingMode.HALF_EVEN, "1.0000001", "8", 2, "0.13"),
        (RoundingMode.HALF_UP, "10.0000", "3", 4, "3.3333"),
        (RoundingMode.HALF_UP, "1E+3", "7", 0, "143"),
    ],
)
def test_divide(mode, dividend, divisor, scale, expected):
    result = mode.divide(Decimal(dividend), Decimal(divisor), scale)
    assert result == Decimal(expected)
    assert -result.as_tuple().exponent == scale


def test_divide_never_returns_negative_zero():
    assert str(RoundingMode.HALF_UP.divide(Decimal("-0.001"), Decimal(1), 2)) == "0.00"


def test_divide_unnecessary():
    assert RoundingMode.UNNECESSARY.divide(Decimal(1), Decimal(4), 2) == Decimal("0.25")
    with pytest.raises(PrecisionLossError):
        RoundingMode.UNNECESSARY.divide(Decimal(1), Decimal(3), 2)


def test_divide_by_zero():
    with pytest.raises(DivisionByZeroError):
        RoundingMode.HALF_UP.divide(Decimal(1), Decimal(0), 2)
