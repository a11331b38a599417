from __future__ import annotations

from exact_values.errors import InvalidValueError
from exact_values.check_digits.base import CheckDigitScheme


class Mod97Scheme(CheckDigitScheme):
    """ISO 7064 MOD 97-10 as used by IBANs.

    The two check digits sit at positions 3-4 (`DE68...` has `68`). To compute them, the first four
    characters are moved to the end with `00` in place of the check digits, letters are replaced by
    two-digit numbers (A=10 ... Z=35) and the result is `98 - number % 97`, padded to two digits.
    `compute_check_digit` takes the complete value; its check digits are ignored.
    """

    min_length = 5

    def get_check_digit(self, value: str) -> str:
        return value[2:4]

    def strip_check_digit(self, value: str) -> str:
        return value

    def compute_check_digit(self, value: str) -> str:
        # Raise: country code and check digits are required
        if len(value) < 4:
            raise InvalidValueError(value, "check digit value", "shorter than 4 characters")

        rearranged = (value[4:] + value[:2] + "00").upper()
        digits = []
        for character in rearranged:
            if character in "0123456789":
                digits.append(character)
            elif "A" <= character <= "Z":
                digits.append(str(ord(character) - ord("A") + 10))
            else:
                raise InvalidValueError(value, "check digit value", f"'{character}' is neither a digit nor a letter")

        return f"{98 - int(''.join(digits)) % 97:02d}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
