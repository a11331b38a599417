from decimal import Decimal

import pytest

from exact_values.domain.monetary.money import Money
from exact_values.domain.monetary.numeric_context import DEFAULT_CONTEXT, NumericContext
from exact_values.domain.numeric.fraction import Fraction
from exact_values.errors import (
    CurrencyMismatchError,
    DivisionByZeroError,
    InvalidArgumentError,
    InvalidOperationError,
    ParseError,
    PrecisionLossError,
    UnknownCurrencyError,
)

TWO_DIGITS = NumericContext(max_scale=2)


# region Construction


def test_strict_construction_detects_precision_loss():
    with pytest.raises(PrecisionLossError) as excinfo:
        Money.of("1.23456", "EUR", TWO_DIGITS)

    assert excinfo.value.value == Decimal("1.23456")
    assert excinfo.value.rounded == Decimal("1.23")


def test_lossy_construction_rounds_silently():
    money = Money.rounded_of("1.23456", "EUR", TWO_DIGITS)
    assert money.value == Decimal("1.23")
    assert money.context == TWO_DIGITS


def test_lossy_construction_uses_default_context():
    money = Money.rounded_of("1.234567", "EUR")
    assert money.value == Decimal("1.2346")
    assert money.context is DEFAULT_CONTEXT


def test_default_context_widens_to_value():
    money = Money.of("1.23456", "EUR")
    assert money.value == Decimal("1.23456")
    assert money.context.max_scale == 5
    assert Money.of("12.5", "EUR").context is DEFAULT_CONTEXT


def test_construction_from_numbers():
    assert Money.of(Fraction(1, 4), "EUR").value == Decimal("0.25")
    assert Money.of(0.1, "USD").value == Decimal("0.1")
    assert Money(Decimal("-0"), "EUR").value.is_signed() is False


@pytest.mark.parametrize(
    "value, currency, error",
    [
        ("abc", "EUR", ParseError),
        (Decimal("NaN"), "EUR", InvalidOperationError),
        (float("inf"), "EUR", InvalidOperationError),
        (1, "XYZ", UnknownCurrencyError),
        (True, "EUR", TypeError),
        (1, 42, TypeError),
    ],
)
def test_invalid_construction(value, currency, error):
    with pytest.raises(error):
        Money.of(value, currency)


def test_of_minor():
    assert Money.of_minor("EUR", 1999).value == Decimal("19.99")
    assert Money.of_minor("JPY", 500).value == Decimal("500")
    assert Money.of_minor("EUR", 5, fraction_digits=3).value == Decimal("0.005")


def test_with_currency_does_not_convert():
    money = Money.of("5", "EUR").with_currency("USD")
    assert money.currency.code == "USD"
    assert money.value == Decimal("5")


def test_factory_recreates_amount():
    money = Money.of("12.345", "EUR")
    assert money.factory.create().is_equal_to(money)


# endregion

# region Currency rules


def test_different_currencies_cannot_be_added():
    with pytest.raises(CurrencyMismatchError):
        Money.of(1, "EUR").add(Money.of(1, "USD"))

    with pytest.raises(CurrencyMismatchError):
        Money.of(1, "EUR") - Money.of(1, "USD")


@pytest.mark.parametrize("code", ["EUR", "USD", "JPY", "CHF"])
def test_zero_of_any_currency_is_neutral(code):
    amount = Money.of("12.50", "EUR")
    zero = Money.zero(code)

    assert amount.add(zero) is amount
    assert zero.add(amount) is amount
    assert amount.subtract(zero) is amount


def test_sum():
    assert sum([Money.of(1, "EUR"), Money.of(2, "EUR")]) == Money.of("3.00", "EUR")


# endregion

# region Arithmetic


def test_divide_rounds_to_four_digits_first():
    quotient = Money.of(10, "EUR").divide(3)
    assert quotient.value == Decimal("3.3333")
    assert quotient.to_long_string() == "3.3333 EUR"
    assert str(quotient) == "3.33 EUR"


def test_divide_special_divisors():
    money = Money.of(10, "EUR")
    assert money.divide(1) is money
    assert money.divide(float("inf")).is_zero
    assert money.divide(float("-inf")).is_zero

    with pytest.raises(DivisionByZeroError):
        money.divide(0)

    with pytest.raises(InvalidOperationError):
        money.divide(float("nan"))


def test_multiply():
    assert Money.of("2.50", "EUR").multiply(3).value == Decimal("7.50")
    assert Money.of("2.50", "EUR") * 3 == Money.of("7.5", "EUR")
    assert 2 * Money.of("2.50", "EUR") == Money.of(5, "EUR")


def test_multiply_rounds_into_context():
    product = Money.of("1.2345", "EUR").multiply("1.1")
    assert product.value == Decimal("1.3580")


def test_remainder_has_sign_of_dividend():
    assert Money.of(10, "EUR").remainder(3).value == Decimal("1")
    assert Money.of(-10, "EUR").remainder(3).value == Decimal("-1")
    assert (Money.of(10, "EUR") % 4).value == Decimal("2")


def test_divide_and_remainder():
    quotient, remainder = Money.of(10, "EUR").divide_and_remainder(3)
    assert quotient.value == Decimal("3")
    assert remainder.value == Decimal("1")

    assert Money.of("7.5", "EUR").divide_to_integral_value(Decimal("2.5")).value == Decimal("3")


def test_scale_by_power_of_ten():
    assert Money.of("1.25", "EUR").scale_by_power_of_ten(2).value == Decimal("125")
    assert Money.of("1.25", "EUR").scale_by_power_of_ten(-2).value == Decimal("0.0125")


def test_sign_operations():
    money = Money.of("-3.5", "EUR")
    assert money.abs().value == Decimal("3.5")
    assert abs(money).value == Decimal("3.5")
    assert money.negate().value == Decimal("3.5")
    assert (-money).value == Decimal("3.5")
    assert money.plus().value == Decimal("-3.5")


def test_strip_trailing_zeros():
    stripped = Money.of("600.00", "EUR").strip_trailing_zeros()
    assert stripped.value == Decimal("600")
    assert stripped.value.as_tuple().exponent == 0
    assert Money.of("1.50", "EUR").strip_trailing_zeros().value.as_tuple().exponent == -1


def test_sign_probes():
    negative = Money.of("-1", "EUR")
    assert negative.signum == -1
    assert negative.is_negative
    assert negative.is_negative_or_zero
    assert not negative.is_positive

    zero = Money.zero("EUR")
    assert zero.is_zero
    assert zero.signum == 0
    assert zero.is_positive_or_zero
    assert zero.is_negative_or_zero


# endregion

# region Comparison


def test_display_equality_versus_exact_equality():
    a = Money.of("1.001", "EUR")
    b = Money.of("1.00", "EUR")

    assert a == b
    assert hash(a) == hash(b)
    assert not a.is_equal_to(b)
    assert a.is_equal_to(Money.of("1.0010", "EUR"))


def test_equality_requires_same_currency():
    assert Money.of(1, "EUR") != Money.of(1, "USD")

    with pytest.raises(CurrencyMismatchError):
        Money.of(1, "EUR").is_equal_to(Money.of(1, "USD"))


def test_ordering_is_by_currency_code_first():
    amounts = [Money.of(1, "USD"), Money.of(100, "EUR"), Money.of(5, "EUR")]
    assert [str(m) for m in sorted(amounts)] == ["5.00 EUR", "100.00 EUR", "1.00 USD"]
    assert Money.of(100, "EUR").compare_to(Money.of(1, "USD")) < 0
    assert Money.of(1, "EUR").compare_to(Money.of("1.00", "EUR")) == 0


def test_value_comparisons_require_same_currency():
    assert Money.of(5, "EUR").is_greater_than(Money.of(4, "EUR"))
    assert Money.of(5, "EUR").is_greater_than_or_equal_to(Money.of(5, "EUR"))
    assert Money.of(4, "EUR").is_less_than(Money.of(5, "EUR"))
    assert Money.of(4, "EUR").is_less_than_or_equal_to(Money.of(4, "EUR"))
    assert Money.of(5, "EUR").is_greater_than(Money.zero("USD"))

    with pytest.raises(CurrencyMismatchError):
        Money.of(5, "EUR").is_greater_than(Money.of(4, "USD"))


# endregion

# region Formatting and parsing


def test_short_string():
    assert Money.of("19.99", "EUR").to_short_string() == "€20"
    assert Money.of("19.49", "USD").to_short_string() == "$19"


def test_str_uses_currency_digits():
    assert str(Money.of("19.99", "EUR")) == "19.99 EUR"
    assert str(Money.of("1234.5", "JPY")) == "1235 JPY"
    assert str(Money.of("7", "BHD")) == "7.000 BHD"


def test_long_string_uses_context_scale():
    assert Money.of("19.99", "EUR").to_long_string() == "19.9900 EUR"
    assert Money.of("1.23456", "EUR").to_long_string() == "1.23456 EUR"


def test_repr():
    assert repr(Money.of("19.99", "EUR")) == "Money(19.99, EUR)"


def test_parse():
    assert Money.parse("12.50 EUR") == Money.of("12.50", "EUR")
    assert Money.from_str("USD 3") == Money.of(3, "USD")


def test_validate_and_verify():
    assert Money.validate("12,5 €") == "12.50 EUR"

    with pytest.raises(ParseError):
        Money.validate("twelve euros")

    with pytest.raises(InvalidArgumentError) as excinfo:
        Money.verify("twelve euros")

    assert isinstance(excinfo.value.__cause__, ParseError)


# endregion


# region Fractions without finite decimal


def test_lossy_construction_rounds_fraction():
    assert Money.rounded_of(Fraction(1, 3), "EUR", TWO_DIGITS).value == Decimal("0.33")
    assert Money.rounded_of(Fraction(2, 3), "EUR").value == Decimal("0.6667")


def test_strict_construction_rejects_fraction():
    with pytest.raises(PrecisionLossError) as excinfo:
        Money.of(Fraction(2, 3), "EUR", TWO_DIGITS)

    assert excinfo.value.rounded == Decimal("0.67")

    with pytest.raises(PrecisionLossError):
        Money.of(Fraction(1, 3), "EUR")


# endregion


def test_divisor_is_used_exactly():
    assert Money.of(1, "EUR").divide(Decimal("0.00001")).value == Decimal("100000")
    assert Money.of("2.00005", "EUR").divide(1.5).value == Decimal("1.3334")
