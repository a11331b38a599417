from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exact_values.domain.numeric.fraction import Fraction


class NumericValue(ABC):
    """Common base of the exact numeric value types.

    Subclasses provide a canonical `Decimal` projection (`to_decimal`); conversions to native
    numbers and the total ordering are derived from it.
    """

    __slots__ = ()

    @abstractmethod
    def to_decimal(self) -> Decimal:
        """Return the value as an exact `Decimal`."""
        ...

    @abstractmethod
    def to_fraction(self) -> Fraction:
        """Return the value as an exact `Fraction`."""
        ...

    def compare_to(self, other: NumericValue) -> int:
        """Compare with $other via the decimal projection.

        Returns:
            A negative number, zero or a positive number as this value is less than, equal to or
            greater than $other.
        """
        from exact_values.domain.numeric.fraction import Fraction

        # Fractions compare by cross-multiplication and may have no finite decimal projection
        if isinstance(other, Fraction):
            return -other.compare_to(self)

        a = self.to_decimal()
        b = other.to_decimal()
        return (a > b) - (a < b)

    # region Native conversions

    # Through the fraction, so 1/3 converts as well

    def __int__(self) -> int:
        """Truncate towards zero."""
        fraction = self.to_fraction()
        quotient = abs(fraction.numerator) // fraction.denominator
        return -quotient if fraction.numerator < 0 else quotient

    def __float__(self) -> float:
        """Nearest float to the exact value."""
        fraction = self.to_fraction()
        return fraction.numerator / fraction.denominator

    # endregion

    # region Ordering

    def __lt__(self, other) -> bool:
        if not isinstance(other, NumericValue):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, NumericValue):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, NumericValue):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, NumericValue):
            return NotImplemented
        return self.compare_to(other) >= 0

    # endregion
