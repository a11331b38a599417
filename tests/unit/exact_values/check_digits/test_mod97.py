import pytest

from exact_values.check_digits import Mod97Scheme
from exact_values.errors import CheckDigitError, InvalidValueError


@pytest.mark.parametrize(
    "iban, check_digits",
    [
        ("DE68210501700012345678", "68"),
        ("GB82WEST12345698765432", "82"),
    ],
)
def test_compute_check_digits(iban, check_digits):
    assert Mod97Scheme().compute_check_digit(iban) == check_digits
    assert Mod97Scheme().is_valid(iban)


def test_lowercase_letters():
    assert Mod97Scheme().is_valid("GB82west12345698765432")


def test_wrong_check_digits():
    with pytest.raises(CheckDigitError) as excinfo:
        Mod97Scheme().validate("DE69210501700012345678")

    assert excinfo.value.supplied == "69"
    assert excinfo.value.computed == "68"


@pytest.mark.parametrize("value", ["DE68", "", "DE68 2105 0170"])
def test_rejects_short_or_illegal_values(value):
    assert not Mod97Scheme().is_valid(value)

    with pytest.raises(InvalidValueError):
        Mod97Scheme().validate(value)
