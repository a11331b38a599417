import pytest

from exact_values.check_digits import CODE25, EAN13, LEITCODE, LuhnScheme, Mod10Scheme
from exact_values.errors import CheckDigitError, InvalidArgumentError, InvalidValueError


@pytest.mark.parametrize("value", ["260326822", "8018132", "1234567897", "A123456780", "X234567891"])
def test_luhn_accepts(value):
    assert LuhnScheme().is_valid(value)
    assert LuhnScheme().validate(value) == value


@pytest.mark.parametrize("value", ["2134567897", "500", "5", "", "12a4"])
def test_luhn_rejects(value):
    assert not LuhnScheme().is_valid(value)


def test_luhn_reports_computed_and_supplied_digit():
    with pytest.raises(CheckDigitError) as excinfo:
        LuhnScheme().validate("2134567897")

    assert excinfo.value.computed == "6"
    assert excinfo.value.supplied == "7"


def test_too_short_value():
    with pytest.raises(InvalidValueError, match="shorter than 2"):
        LuhnScheme().validate("5")


def test_illegal_character():
    with pytest.raises(InvalidValueError, match="not a digit"):
        LuhnScheme().validate("12a4")


def test_verify_wraps_failures():
    with pytest.raises(InvalidArgumentError) as excinfo:
        LuhnScheme().verify("2134567897")

    assert isinstance(excinfo.value.__cause__, CheckDigitError)


def test_mod10_default_weights():
    scheme = Mod10Scheme()
    assert scheme.weights == (2, 1)
    assert scheme.compute_check_digit("7992739871") == "9"
    assert scheme.is_valid("79927398719")
    assert not scheme.is_valid("79927398710")


def test_ean13():
    assert EAN13.is_valid("4006381333931")
    assert not EAN13.is_valid("4006381333932")


def test_named_weightings():
    assert EAN13.weights == (1, 3)
    assert CODE25.weights == (3, 1)
    assert LEITCODE.weights == (4, 9)
    assert repr(LEITCODE) == "Mod10Scheme(4, 9)"


def test_check_digit_ten_wraps_to_zero():
    # 2*5 = 10, so the check digit is (10 - 0) % 10 = 0
    assert Mod10Scheme().compute_check_digit("5") == "0"
