from __future__ import annotations

import decimal
import re
from decimal import Decimal
from typing import TypeAlias

from exact_values.domain.numeric.numeric_value import NumericValue
from exact_values.domain.numeric.primes import iter_primes
from exact_values.domain.numeric.rounding import RoundingMode
from exact_values.errors import DivisionByZeroError, NonTerminatingDecimalError, ParseError
from exact_values.utils.decimal_tools import EXACT_CONTEXT, as_decimal

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

FractionLike: TypeAlias = "Fraction | NumericValue | Decimal | int | float | str"


class Fraction(NumericValue):
    """Exact rational number as numerator/denominator over Python integers.

    The sign always lives in the numerator: a negative denominator is moved to the numerator on
    construction, so `Fraction(1, -2)` and `Fraction(-1, 2)` are the same value with the same text
    form `-1/2`. Common factors are NOT removed on construction; call `reduce` for that.

    Addition and subtraction expand to the product of both denominators and keep that form.
    Multiplication and division return reduced results.

    Attributes:
        numerator (int): Signed numerator.
        denominator (int): Positive denominator.
    """

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int, denominator: int = 1):
        """Create a fraction.

        Args:
            numerator: Integer numerator.
            denominator: Non-zero integer denominator.

        Raises:
            TypeError: If an argument is not an integer.
            DivisionByZeroError: If $denominator is zero.
        """
        # Raise: only integers are accepted, use `Fraction.of` for text and decimals
        if not isinstance(numerator, int) or not isinstance(denominator, int):
            raise TypeError(f"Cannot call `Fraction.__init__` because $numerator and $denominator must be int, but got ({numerator!r}, {denominator!r}). Use `Fraction.of` to convert other types")

        # Raise: zero denominator
        if denominator == 0:
            raise DivisionByZeroError(f"Cannot call `Fraction.__init__` because $denominator is zero (numerator={numerator})")

        if denominator < 0:
            numerator, denominator = -numerator, -denominator

        self._numerator = numerator
        self._denominator = denominator

    # region Factories

    @classmethod
    def of(cls, value: FractionLike, denominator: int | None = None) -> Fraction:
        """Create a fraction from a pair of integers, text, a decimal or another numeric value.

        Args:
            value: Numerator (with $denominator), `"n/d"` text, decimal text, `Decimal`, `int`,
                `float` or any `NumericValue`.
            denominator: Denominator when $value is an integer numerator.

        Returns:
            Fraction: The fraction. Decimal input is returned reduced, `"n/d"` text is kept as written.

        Raises:
            ParseError: If text is malformed.
            DivisionByZeroError: If the denominator is zero.
        """
        if denominator is not None:
            return cls(value, denominator)
        if isinstance(value, Fraction):
            return value
        if isinstance(value, NumericValue):
            return value.to_fraction()
        if isinstance(value, bool):
            raise TypeError(f"Cannot call `Fraction.of` because $value is bool ({value})")
        if isinstance(value, int):
            return cls(value, 1)
        if isinstance(value, str):
            return cls.from_str(value)
        if not isinstance(value, (Decimal, float)):
            raise TypeError(f"Cannot call `Fraction.of` because $value has unsupported type '{type(value).__name__}'")
        return cls.from_decimal(value)

    @classmethod
    def from_str(cls, text: str) -> Fraction:
        """Parse `"n/d"` or a plain decimal like `"0.5"`.

        Raises:
            ParseError: If $text is neither form.
            DivisionByZeroError: If the denominator is zero.
        """
        stripped = text.strip()
        parts = stripped.split("/")

        if len(parts) == 1:
            # Raise: plain text must be a decimal literal
            if not _DECIMAL_PATTERN.fullmatch(stripped):
                raise ParseError(text, "not a fraction")
            return cls.from_decimal(Decimal(stripped))

        if len(parts) == 2:
            numerator, denominator = parts[0].strip(), parts[1].strip()
            # Raise: both sides must be integers
            if not _INTEGER_PATTERN.fullmatch(numerator) or not _INTEGER_PATTERN.fullmatch(denominator):
                raise ParseError(text, "not a fraction")
            return cls(int(numerator), int(denominator))

        raise ParseError(text, "not a fraction")

    @classmethod
    def from_decimal(cls, value: Decimal | float | int | str) -> Fraction:
        """Convert a finite decimal into a reduced fraction, e.g. `0.25` into `1/4`.

        Raises:
            ParseError: If $value is not a finite decimal.
        """
        try:
            d = as_decimal(value)
        except (decimal.InvalidOperation, ValueError) as e:
            raise ParseError(str(value), "not a decimal number") from e

        # Raise: NaN and infinities have no fraction
        if not d.is_finite():
            raise ParseError(str(value), "not a finite number")

        sign, digits, exponent = d.as_tuple()
        coefficient = int("".join(map(str, digits)) or "0")
        if sign:
            coefficient = -coefficient

        if exponent >= 0:
            return cls(coefficient * 10**exponent, 1)

        # The denominator is a power of ten, so only the factors 2 and 5 can cancel
        numerator, denominator = coefficient, 10**-exponent
        for p in (2, 5):
            while numerator % p == 0 and denominator % p == 0:
                numerator //= p
                denominator //= p
        return cls(numerator, denominator)

    # endregion

    # region Properties

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    # endregion

    # region Transformations

    def reduce(self) -> Fraction:
        """Return a new fraction without common factors, e.g. `2/4` becomes `1/2`.

        Common factors are found by trial division with ascending primes. Trial division only
        needs to reach the square root of the not yet factored rest of the denominator; a rest
        greater than 1 after that is itself prime. Very large denominators with large prime
        factors therefore make this slow.
        """
        z, n = self._numerator, self._denominator
        if z == 0:
            return Fraction(0, 1)

        rest = n
        for p in iter_primes():
            if p * p > rest:
                break
            if rest % p:
                continue
            while rest % p == 0:
                rest //= p
            while z % p == 0 and n % p == 0:
                z //= p
                n //= p

        if rest > 1:
            while z % rest == 0 and n % rest == 0:
                z //= rest
                n //= rest

        return Fraction(z, n)

    def reciprocal(self) -> Fraction:
        """Swap numerator and denominator (not reduced).

        Raises:
            DivisionByZeroError: If this fraction is zero.
        """
        return Fraction(self._denominator, self._numerator)

    def negate(self) -> Fraction:
        return Fraction(-self._numerator, self._denominator)

    # endregion

    # region Arithmetic

    def add(self, other: FractionLike) -> Fraction:
        """Add $other; the result's denominator is the product of both denominators (not reduced)."""
        o = Fraction.of(other)
        numerator = self._numerator * o._denominator + o._numerator * self._denominator
        return Fraction(numerator, self._denominator * o._denominator)

    def subtract(self, other: FractionLike) -> Fraction:
        """Subtract $other; like `add`, the result is not reduced."""
        return self.add(Fraction.of(other).negate())

    def multiply(self, other: FractionLike) -> Fraction:
        """Multiply by $other; the result is reduced."""
        o = Fraction.of(other)
        return Fraction(self._numerator * o._numerator, self._denominator * o._denominator).reduce()

    def divide(self, other: FractionLike) -> Fraction:
        """Divide by $other; the result is reduced.

        Raises:
            DivisionByZeroError: If $other is zero.
        """
        return self.multiply(Fraction.of(other).reciprocal())

    # endregion

    # region Conversions

    def to_decimal(self, scale: int | None = None, rounding: RoundingMode = RoundingMode.HALF_UP) -> Decimal:
        """Return the quotient numerator / denominator as `Decimal`.

        Args:
            scale: Number of fractional digits to round to. If None, the exact quotient is
                returned, which requires a terminating expansion.
            rounding: Rounding mode used with an explicit $scale.

        Raises:
            NonTerminatingDecimalError: If $scale is None and the expansion does not terminate
                (e.g. `1/3`).
        """
        if scale is not None:
            return rounding.divide(Decimal(self._numerator), Decimal(self._denominator), scale)

        reduced = self.reduce()
        rest = reduced._denominator
        twos = fives = 0
        while rest % 2 == 0:
            rest //= 2
            twos += 1
        while rest % 5 == 0:
            rest //= 5
            fives += 1

        # Raise: any other prime factor makes the expansion infinite
        if rest != 1:
            raise NonTerminatingDecimalError(self._numerator, self._denominator)

        exact_scale = max(twos, fives)
        coefficient = reduced._numerator * 10**exact_scale // reduced._denominator
        return Decimal(coefficient).scaleb(-exact_scale, context=EXACT_CONTEXT)

    def to_fraction(self) -> Fraction:
        return self

    # endregion

    # region Comparison

    def compare_to(self, other: NumericValue) -> int:
        """Compare by cross-multiplication: sign of `a*d - c*b` for `a/b` and `c/d`."""
        o = other if isinstance(other, Fraction) else other.to_fraction()
        diff = self._numerator * o._denominator - o._numerator * self._denominator
        return (diff > 0) - (diff < 0)

    def __eq__(self, other) -> bool:
        """Fractions are equal when their reduced forms are equal, so `1/2 == 2/4`."""
        if not isinstance(other, Fraction):
            return False
        a = self.reduce()
        b = other.reduce()
        return a._numerator == b._numerator and a._denominator == b._denominator

    def __hash__(self) -> int:
        reduced = self.reduce()
        return hash((reduced._numerator, reduced._denominator))

    # endregion

    # region Operators

    def __add__(self, other):
        try:
            return self.add(other)
        except TypeError:
            return NotImplemented

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        try:
            return self.subtract(other)
        except TypeError:
            return NotImplemented

    def __rsub__(self, other):
        try:
            return Fraction.of(other).subtract(self)
        except TypeError:
            return NotImplemented

    def __mul__(self, other):
        try:
            return self.multiply(other)
        except TypeError:
            return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        try:
            return self.divide(other)
        except TypeError:
            return NotImplemented

    def __rtruediv__(self, other):
        try:
            return Fraction.of(other).divide(self)
        except TypeError:
            return NotImplemented

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.negate() if self._numerator < 0 else self

    # endregion

    def __str__(self) -> str:
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._numerator}, {self._denominator})"


ZERO = Fraction(0, 1)
ONE = Fraction(1, 1)
