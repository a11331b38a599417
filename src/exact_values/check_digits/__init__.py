"""Check-digit schemes: weighted Mod10, Luhn and Mod97 (IBAN)."""

from exact_values.check_digits.base import CheckDigitScheme
from exact_values.check_digits.mod10 import CODE25, EAN13, LEITCODE, LuhnScheme, Mod10Scheme
from exact_values.check_digits.mod97 import Mod97Scheme

__all__ = ["CheckDigitScheme", "Mod10Scheme", "LuhnScheme", "Mod97Scheme", "EAN13", "CODE25", "LEITCODE"]
