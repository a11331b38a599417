from __future__ import annotations

from abc import abstractmethod

from exact_values.errors import CheckDigitError, InvalidValueError
from exact_values.validation import Validator


class CheckDigitScheme(Validator[str]):
    """Stateless check-digit algorithm.

    Subclasses define where the check digit sits (`get_check_digit`), how the rest of the value is
    extracted (`strip_check_digit`) and how the digit is computed (`compute_check_digit`).
    `is_valid` strips the check digit, recomputes it and compares; it returns False (never raises)
    for values shorter than `min_length` or with illegal characters.
    """

    min_length: int = 2

    @abstractmethod
    def get_check_digit(self, value: str) -> str:
        """Return the check digit(s) contained in $value."""
        ...

    @abstractmethod
    def compute_check_digit(self, value: str) -> str:
        """Compute the check digit(s) for $value without its check digit.

        Raises:
            InvalidValueError: If $value contains characters the scheme cannot handle.
        """
        ...

    def strip_check_digit(self, value: str) -> str:
        """Return $value without its check digit (the last character by default)."""
        return value[:-1]

    def validate(self, value: str) -> str:
        """Return $value if its check digit is correct.

        Raises:
            InvalidValueError: If $value is too short or contains illegal characters.
            CheckDigitError: If the check digit is wrong.
        """
        # Raise: too short to carry a check digit
        if not isinstance(value, str) or len(value) < self.min_length:
            raise InvalidValueError(value, "check digit value", f"shorter than {self.min_length} characters")

        supplied = self.get_check_digit(value)
        computed = self.compute_check_digit(self.strip_check_digit(value))

        # Raise: wrong check digit
        if supplied != computed:
            raise CheckDigitError(value, computed, supplied)

        return value


def to_digit(character: str, value: str) -> int:
    """Convert one decimal digit of $value.

    Raises:
        InvalidValueError: If $character is not a decimal digit.
    """
    # Raise: only the digits 0-9 are allowed
    if character not in "0123456789" or len(character) != 1:
        raise InvalidValueError(value, "check digit value", f"'{character}' is not a digit")
    return ord(character) - ord("0")
