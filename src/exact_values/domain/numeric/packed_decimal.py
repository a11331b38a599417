"""Packed storage of digit strings, two characters per byte.

Each character is stored in a nibble (4 bits), following the idea of COBOL's COMPUTATIONAL-3
packed decimals. Besides the digits the alphabet holds a few separators, so fractions and
formatted numbers (e.g. phone numbers like `+49/811 32 16-8`) fit as well:

    +-----+---+---------------------------------+
    | 0x0 | 0 | digit 0                         |
    | ... |   |                                 |
    | 0x9 | 9 | digit 9                         |
    | 0xA | / | fraction bar                    |
    | 0xB |   | blank (tabs become blank)       |
    | 0xC | + | plus sign                       |
    | 0xD | - | minus sign                      |
    | 0xE | . | dot                             |
    | 0xF | , | comma                           |
    +-----+---+---------------------------------+

Text of odd length is padded with one trailing blank.
"""

from __future__ import annotations

import decimal
import logging
from decimal import Decimal
from typing import TypeAlias

from bidict import bidict

from exact_values.domain.numeric.fraction import Fraction
from exact_values.domain.numeric.numeric_value import NumericValue
from exact_values.domain.numeric.rounding import RoundingMode
from exact_values.errors import EncodingError, ExactValueError, InvalidOperationError, ParseError
from exact_values.utils.decimal_tools import (
    EXACT_CONTEXT,
    as_decimal,
    exact_add,
    exact_multiply,
    exact_subtract,
    scale_of,
    to_plain_string,
)

logger = logging.getLogger(__name__)

Operand: TypeAlias = "PackedDecimal | Fraction | Decimal | int | str | float"

# region Nibble codec

NIBBLE_BY_SYMBOL: bidict[str, int] = bidict(
    {
        "0": 0x0,
        "1": 0x1,
        "2": 0x2,
        "3": 0x3,
        "4": 0x4,
        "5": 0x5,
        "6": 0x6,
        "7": 0x7,
        "8": 0x8,
        "9": 0x9,
        "/": 0xA,
        " ": 0xB,
        "+": 0xC,
        "-": 0xD,
        ".": 0xE,
        ",": 0xF,
    }
)

PAD = " "


def _to_nibble(text: str, position: int) -> int:
    character = text[position]
    if character == "\t":
        character = " "
    try:
        return NIBBLE_BY_SYMBOL[character]
    except KeyError:
        raise EncodingError(text, text[position], position) from None


def encode_nibbles(text: str) -> bytes:
    """Pack $text into `ceil(len(text) / 2)` bytes, high nibble first.

    A trailing blank cannot be told apart from the pad, so `decode_nibbles` drops it.

    Raises:
        EncodingError: If $text contains a character outside the alphabet.
    """
    nibbles = [_to_nibble(text, i) for i in range(len(text))]
    if len(nibbles) % 2:
        nibbles.append(NIBBLE_BY_SYMBOL[PAD])
    return bytes((nibbles[i] << 4) | nibbles[i + 1] for i in range(0, len(nibbles), 2))


def decode_nibbles(code: bytes) -> str:
    """Unpack bytes produced by `encode_nibbles`, dropping the trailing pad blank if present."""
    symbols = NIBBLE_BY_SYMBOL.inverse
    text = "".join(symbols[b >> 4] + symbols[b & 0x0F] for b in code)
    return text[:-1] if text.endswith(PAD) else text


# endregion


class PackedDecimal(NumericValue):
    """Immutable number (or number-like text) stored as packed nibbles.

    Equality and hashing use the exact decoded text, so leading zeros matter: `0711` and `711`
    are different values. Text that is neither a decimal number nor a fraction (e.g.
    `+49/811 32 16-8`) can be stored, but every arithmetic operation on it raises
    `InvalidOperationError`.

    Arithmetic dispatches on the operands: if either side is a fraction, both sides are computed as
    `Fraction` and the result is stored as `"n/d"`; otherwise both sides are exact decimals.

    Prefer `PackedDecimal.of` over the constructor: the digits 0-9 and the empty value come from a
    fixed table of constants.
    """

    __slots__ = ("_code",)

    def __init__(self, text: str):
        """Encode $text (surrounding whitespace is stripped).

        Raises:
            EncodingError: If $text contains a character outside the alphabet. The position counts
                from the start of $text as passed.
        """
        # Raise: only text can be packed, use `PackedDecimal.of` for numbers
        if not isinstance(text, str):
            raise TypeError(f"Cannot call `PackedDecimal.__init__` because $text must be str, but got '{type(text).__name__}'. Use `PackedDecimal.of` to convert numbers")

        try:
            self._code = encode_nibbles(text.strip())
        except EncodingError as e:
            # Position in $text as passed, leading whitespace included
            offset = len(text) - len(text.lstrip())
            raise EncodingError(text, e.character, e.position + offset) from None

    # region Factories

    @classmethod
    def of(cls, value: Operand | NumericValue) -> PackedDecimal:
        """Create a PackedDecimal from text, a number or another numeric value.

        Args:
            value: Text, `int`, `Decimal`, `float`, `Fraction` or other `NumericValue`.

        Returns:
            PackedDecimal: Shared constant for single digits and empty text, otherwise a new instance.

        Raises:
            EncodingError: If text contains a character outside the alphabet.
        """
        if isinstance(value, PackedDecimal):
            return value
        if isinstance(value, bool):
            raise TypeError(f"Cannot call `PackedDecimal.of` because $value is bool ({value})")
        if isinstance(value, str):
            text = value.strip()
        elif isinstance(value, Fraction):
            text = str(value)
        elif isinstance(value, NumericValue):
            text = to_plain_string(value.to_decimal())
        elif isinstance(value, (int, Decimal, float)):
            text = to_plain_string(as_decimal(value))
        else:
            raise TypeError(f"Cannot call `PackedDecimal.of` because $value has unsupported type '{type(value).__name__}'")

        constant = _CONSTANTS.get(text)
        if constant is not None:
            return constant
        return cls(value if isinstance(value, str) else text)

    @classmethod
    def encode(cls, text: str) -> PackedDecimal:
        """Alias of `of` for text."""
        return cls.of(text)

    # endregion

    # region Text and bytes

    @property
    def code(self) -> bytes:
        """The packed bytes."""
        return self._code

    def decode(self) -> str:
        return decode_nibbles(self._code)

    def __str__(self) -> str:
        return self.decode()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.decode()}')"

    def __len__(self) -> int:
        return len(self.decode())

    # endregion

    # region Classification

    @property
    def is_fraction(self) -> bool:
        """True if the text is a fraction like `1/2`. Never raises."""
        text = self.decode()
        if "/" not in text:
            return False
        try:
            Fraction.from_str(text)
        except ExactValueError as e:
            logger.debug(f"'{text}' is not a fraction: {e}")
            return False
        return True

    @property
    def is_number(self) -> bool:
        """True if the text is a decimal number or a fraction. Never raises.

        Blanks are ignored, so `1 000` is a number, `+49/811 32 16-8` is not.
        """
        text = self.decode().replace(" ", "")
        try:
            Decimal(text)
        except decimal.InvalidOperation as e:
            logger.debug(f"'{text}' is not a decimal number: {e!r}")
            return self.is_fraction
        return True

    def _check_number(self, operation: str) -> None:
        # Raise: arithmetic on text that is neither a decimal nor a fraction
        if not self.is_number:
            raise InvalidOperationError(f"Cannot call `{operation}` because '{self.decode()}' is neither a number nor a fraction")

    # endregion

    # region Conversions

    def to_decimal(self) -> Decimal:
        """Return the value as `Decimal`.

        Raises:
            InvalidOperationError: If the value is not a number.
            NonTerminatingDecimalError: If the value is a fraction without finite decimal expansion.
        """
        self._check_number("to_decimal")
        if self.is_fraction:
            return self.to_fraction().to_decimal()
        return Decimal(self.decode().replace(" ", ""))

    def to_fraction(self) -> Fraction:
        """Return the value as `Fraction`.

        Raises:
            InvalidOperationError: If the value is not a number.
        """
        self._check_number("to_fraction")
        if self.is_fraction:
            return Fraction.from_str(self.decode())
        return Fraction.from_decimal(self.to_decimal())

    # endregion

    # region Arithmetic

    def _uses_fractions(self, other: Operand) -> bool:
        if self.is_fraction or isinstance(other, Fraction):
            return True
        return isinstance(other, PackedDecimal) and other.is_fraction

    def _operand_as_decimal(self, other: Operand, operation: str) -> Decimal:
        if isinstance(other, PackedDecimal):
            other._check_number(operation)
            return other.to_decimal()
        try:
            return as_decimal(other)
        except (decimal.InvalidOperation, ValueError) as e:
            raise ParseError(str(other), "not a decimal number") from e

    def _operand_as_fraction(self, other: Operand, operation: str) -> Fraction:
        if isinstance(other, PackedDecimal):
            other._check_number(operation)
        return Fraction.of(other)

    def add(self, other: Operand) -> PackedDecimal:
        """Return `self + other`.

        Raises:
            InvalidOperationError: If an operand is not a number.
        """
        self._check_number("add")
        if self._uses_fractions(other):
            return PackedDecimal.of(self.to_fraction().add(self._operand_as_fraction(other, "add")))
        return PackedDecimal.of(exact_add(self.to_decimal(), self._operand_as_decimal(other, "add")))

    def subtract(self, other: Operand) -> PackedDecimal:
        """Return `self - other`.

        Raises:
            InvalidOperationError: If an operand is not a number.
        """
        self._check_number("subtract")
        if self._uses_fractions(other):
            return PackedDecimal.of(self.to_fraction().subtract(self._operand_as_fraction(other, "subtract")))
        return PackedDecimal.of(exact_subtract(self.to_decimal(), self._operand_as_decimal(other, "subtract")))

    def multiply(self, other: Operand) -> PackedDecimal:
        """Return `self * other`.

        Raises:
            InvalidOperationError: If an operand is not a number.
        """
        self._check_number("multiply")
        if self._uses_fractions(other):
            return PackedDecimal.of(self.to_fraction().multiply(self._operand_as_fraction(other, "multiply")))
        return PackedDecimal.of(exact_multiply(self.to_decimal(), self._operand_as_decimal(other, "multiply")))

    def divide(self, other: Operand) -> PackedDecimal:
        """Return `self / other`.

        With fractions the quotient is exact. With decimals the quotient keeps the scale of the
        dividend and is rounded HALF_UP, so `10 / 3` is `3` and `10.00 / 3` is `3.33`.

        Raises:
            InvalidOperationError: If an operand is not a number.
            DivisionByZeroError: If $other is zero.
        """
        self._check_number("divide")
        if self._uses_fractions(other):
            return PackedDecimal.of(self.to_fraction().divide(self._operand_as_fraction(other, "divide")))

        dividend = self.to_decimal()
        divisor = self._operand_as_decimal(other, "divide")
        return PackedDecimal.of(RoundingMode.HALF_UP.divide(dividend, divisor, max(scale_of(dividend), 0)))

    def move_point_left(self, n: int) -> PackedDecimal:
        """Shift the decimal point $n places to the left, e.g. `12.5` becomes `1.25` for n=1."""
        self._check_number("move_point_left")
        return PackedDecimal.of(self.to_decimal().scaleb(-n, context=EXACT_CONTEXT))

    def move_point_right(self, n: int) -> PackedDecimal:
        """Shift the decimal point $n places to the right, e.g. `12.5` becomes `125` for n=1."""
        self._check_number("move_point_right")
        return PackedDecimal.of(self.to_decimal().scaleb(n, context=EXACT_CONTEXT))

    def set_scale(self, n: int, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> PackedDecimal:
        """Return the value with exactly $n fractional digits.

        Raises:
            InvalidOperationError: If the value is not a number.
            PrecisionLossError: If $rounding is UNNECESSARY and digits would be dropped.
        """
        self._check_number("set_scale")
        if self.is_fraction:
            return PackedDecimal.of(self.to_fraction().to_decimal(n, rounding))
        return PackedDecimal.of(rounding.round(self.to_decimal(), n))

    # endregion

    # region Comparison

    def compare_to(self, other: NumericValue) -> int:
        """Compare numerically through the fraction projection.

        Raises:
            InvalidOperationError: If either value is not a number.
        """
        return self.to_fraction().compare_to(other)

    def __eq__(self, other) -> bool:
        """Equal when the decoded text is identical, so `0711 != 711`."""
        if not isinstance(other, PackedDecimal):
            return False
        return self._code == other._code

    def __hash__(self) -> int:
        return hash(self.decode())

    # endregion

    # region Operators

    def __add__(self, other):
        try:
            return self.add(other)
        except TypeError:
            return NotImplemented

    def __sub__(self, other):
        try:
            return self.subtract(other)
        except TypeError:
            return NotImplemented

    def __mul__(self, other):
        try:
            return self.multiply(other)
        except TypeError:
            return NotImplemented

    def __truediv__(self, other):
        try:
            return self.divide(other)
        except TypeError:
            return NotImplemented

    # endregion


# Digits 0-9 and the empty value are shared; everything else is allocated on demand
_CONSTANTS: dict[str, PackedDecimal] = {str(i): PackedDecimal(str(i)) for i in range(10)}
_CONSTANTS[""] = PackedDecimal("")

EMPTY = _CONSTANTS[""]
ZERO = _CONSTANTS["0"]
ONE = _CONSTANTS["1"]
TEN = PackedDecimal("10")
