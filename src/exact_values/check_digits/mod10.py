from __future__ import annotations

import re

from exact_values.check_digits.base import CheckDigitScheme, to_digit

_LEADING_LETTER = re.compile(r"[A-Z].*")


class Mod10Scheme(CheckDigitScheme):
    """Weighted modulo-10 scheme with the check digit at the end.

    Digits are weighted alternately from the left, starting with $odd_weight. The check digit is
    `(10 - sum % 10) % 10`.

    Args:
        odd_weight: Weight of the 1st, 3rd, 5th, ... digit.
        even_weight: Weight of the 2nd, 4th, 6th, ... digit.
    """

    def __init__(self, odd_weight: int = 2, even_weight: int = 1):
        self._odd_weight = odd_weight
        self._even_weight = even_weight

    @property
    def weights(self) -> tuple[int, int]:
        return self._odd_weight, self._even_weight

    def get_check_digit(self, value: str) -> str:
        return value[-1:]

    def compute_check_digit(self, value: str) -> str:
        total = 0
        for i, character in enumerate(value):
            weight = self._odd_weight if i % 2 == 0 else self._even_weight
            total += to_digit(character, value) * weight
        return str((10 - total % 10) % 10)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._odd_weight}, {self._even_weight})"


class LuhnScheme(Mod10Scheme):
    """Luhn variant used for insurance and card numbers.

    Going from right to left, every second digit (starting with the second) is doubled and the digit
    sums are added up; the check digit is `sum % 10`. A value starting with a letter A-Z is
    letter-aware: the letter is replaced by its two-digit position (A=01 ... Z=26) and a `0` is
    appended before summing, so `A123456780` is valid.
    """

    def __init__(self):
        super().__init__(2, 1)

    def compute_check_digit(self, value: str) -> str:
        return str(self._digit_sum(value) % 10)

    @classmethod
    def _digit_sum(cls, value: str) -> int:
        if _LEADING_LETTER.fullmatch(value):
            position = ord(value[0]) - ord("A") + 1
            return cls._digit_sum(f"{position:02d}{value[1:]}0")

        total = 0
        for i, character in enumerate(reversed(value)):
            digit = to_digit(character, value)
            if i % 2 == 1:
                digit *= 2
            total += digit - 9 if digit > 9 else digit
        return total

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


# Named weightings
EAN13 = Mod10Scheme(1, 3)
CODE25 = Mod10Scheme(3, 1)
LEITCODE = Mod10Scheme(4, 9)
