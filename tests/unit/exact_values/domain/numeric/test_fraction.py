from decimal import Decimal

import pytest

from exact_values.domain.numeric.fraction import Fraction
from exact_values.domain.numeric.packed_decimal import PackedDecimal
from exact_values.domain.numeric.rounding import RoundingMode
from exact_values.errors import DivisionByZeroError, NonTerminatingDecimalError, ParseError


def test_reduce_two_quarters():
    assert str(Fraction.of("2/4").reduce()) == "1/2"


@pytest.mark.parametrize(
    "numerator, denominator, expected",
    [
        (12, 18, "2/3"),
        (0, 5, "0/1"),
        (-6, 4, "-3/2"),
        (91, 49, "13/7"),
        (2 * 10007, 3 * 10007, "2/3"),
        (7, 7, "1/1"),
    ],
)
def test_reduce(numerator, denominator, expected):
    reduced = Fraction(numerator, denominator).reduce()
    assert str(reduced) == expected
    # Reducing twice changes nothing
    again = reduced.reduce()
    assert (again.numerator, again.denominator) == (reduced.numerator, reduced.denominator)


def test_sign_moves_to_numerator():
    f = Fraction(1, -2)
    assert f.numerator == -1
    assert f.denominator == 2
    assert str(f) == "-1/2"
    assert f == Fraction(-1, 2)


def test_equality_uses_reduced_form():
    assert Fraction(1, 2) == Fraction(2, 4)
    assert hash(Fraction(1, 2)) == hash(Fraction(2, 4))
    assert Fraction(1, 2) != Fraction(1, 3)
    assert Fraction(1, 2) != "1/2"


def test_zero_denominator_is_rejected():
    with pytest.raises(DivisionByZeroError):
        Fraction(1, 0)
    with pytest.raises(DivisionByZeroError):
        Fraction.from_str("3/0")


def test_add_keeps_product_denominator():
    total = Fraction(1, 2).add(Fraction(1, 2))
    assert str(total) == "4/4"
    assert total == Fraction(1, 1)
    assert str(Fraction(1, 2).add(Fraction(1, 3))) == "5/6"


def test_subtract():
    assert Fraction(3, 4).subtract(Fraction(1, 4)) == Fraction(1, 2)


def test_multiply_and_divide_are_reduced():
    assert str(Fraction(2, 3).multiply(Fraction(3, 4))) == "1/2"
    assert str(Fraction(1, 2).divide(Fraction(1, 4))) == "2/1"


def test_divide_by_zero():
    with pytest.raises(DivisionByZeroError):
        Fraction(1, 2).divide(0)


def test_operators():
    assert Fraction(1, 2) + 1 == Fraction(3, 2)
    assert str(1 - Fraction(1, 4)) == "3/4"
    assert 2 * Fraction(1, 4) == Fraction(1, 2)
    assert 1 / Fraction(1, 3) == Fraction(3, 1)
    assert -Fraction(1, 2) == Fraction(-1, 2)
    assert abs(Fraction(-1, 2)) == Fraction(1, 2)


def test_ordering_by_cross_multiplication():
    assert Fraction(1, 3) < Fraction(1, 2)
    assert Fraction(-1, 2) < Fraction(1, -3)
    assert Fraction(2, 4).compare_to(Fraction(1, 2)) == 0
    assert Fraction(1, 2).compare_to(PackedDecimal.of("0.5")) == 0
    assert max(Fraction(1, 3), Fraction(3, 8), Fraction(1, 4)) == Fraction(3, 8)


def test_to_decimal_exact():
    assert Fraction(1, 4).to_decimal() == Decimal("0.25")
    assert Fraction(-3, 8).to_decimal() == Decimal("-0.375")
    assert str(Fraction(6, 2).to_decimal()) == "3"


def test_to_decimal_non_terminating_needs_scale():
    with pytest.raises(NonTerminatingDecimalError):
        Fraction(1, 3).to_decimal()

    assert Fraction(1, 3).to_decimal(4) == Decimal("0.3333")
    assert Fraction(2, 3).to_decimal(2) == Decimal("0.67")
    assert Fraction(2, 3).to_decimal(2, RoundingMode.DOWN) == Decimal("0.66")


def test_native_conversions():
    assert int(Fraction(7, 2)) == 3
    assert int(Fraction(-7, 2)) == -3
    assert float(Fraction(1, 4)) == 0.25


def test_from_decimal_text():
    assert str(Fraction.from_str("0.75")) == "3/4"
    assert str(Fraction.of(Decimal("-1.5"))) == "-3/2"
    assert str(Fraction.of(0.2)) == "1/5"
    assert str(Fraction.of(5)) == "5/1"
    assert str(Fraction.of(3, 9)) == "3/9"


@pytest.mark.parametrize("text", ["1/2/3", "a/b", "", "1.5/2", "one"])
def test_from_str_rejects_malformed_text(text):
    with pytest.raises(ParseError):
        Fraction.from_str(text)


def test_of_rejects_unsupported_types():
    with pytest.raises(TypeError):
        Fraction.of(True)
    with pytest.raises(TypeError):
        Fraction.of([1, 2])
    with pytest.raises(TypeError):
        Fraction(1.5, 2)


def test_repr():
    assert repr(Fraction(1, 2)) == "Fraction(1, 2)"


@pytest.mark.parametrize(
    "fraction, integer, real",
    [
        (Fraction(1, 3), 0, 1 / 3),
        (Fraction(2, 3), 0, 2 / 3),
        (Fraction(-7, 3), -2, -7 / 3),
        (Fraction(7, -3), -2, -7 / 3),
    ],
)
def test_native_conversions_without_finite_decimal(fraction, integer, real):
    assert int(fraction) == integer
    assert float(fraction) == real
