from __future__ import annotations

import decimal
import math
from decimal import Decimal
from typing import TYPE_CHECKING, TypeAlias

from exact_values.domain.monetary.currency import Currency
from exact_values.domain.monetary.numeric_context import DEFAULT_CONTEXT, NumericContext
from exact_values.domain.numeric.numeric_value import NumericValue
from exact_values.domain.numeric.rounding import RoundingMode
from exact_values.errors import (
    CurrencyMismatchError,
    DivisionByZeroError,
    InvalidOperationError,
    NonTerminatingDecimalError,
    ParseError,
    PrecisionLossError,
)
from exact_values.utils.decimal_tools import (
    EXACT_CONTEXT,
    DecimalLike,
    as_decimal,
    exact_add,
    exact_divide_to_integral,
    exact_multiply,
    exact_remainder,
    to_plain_string,
)

if TYPE_CHECKING:
    from exact_values.domain.monetary.money_factory import MoneyFactory

Number: TypeAlias = "DecimalLike | NumericValue"

# Division rounds the dividend to this scale first and keeps it for the quotient
DIVISION_SCALE = 4


def as_amount_decimal(value: Number, operation: str) -> Decimal:
    """Convert a number accepted by money operations into a finite `Decimal`.

    Raises:
        TypeError: If $value has an unsupported type.
        ParseError: If text is not a decimal literal.
        InvalidOperationError: If $value is NaN or infinite.
    """
    if isinstance(value, bool) or isinstance(value, Money):
        raise TypeError(f"Cannot call `{operation}` because $value has unsupported type '{type(value).__name__}'")

    if isinstance(value, NumericValue):
        result = value.to_decimal()
    elif isinstance(value, (Decimal, int, float, str)):
        try:
            result = as_decimal(value.strip() if isinstance(value, str) else value)
        except (decimal.InvalidOperation, ValueError) as e:
            raise ParseError(str(value), "not a decimal number") from e
    else:
        raise TypeError(f"Cannot call `{operation}` because $value has unsupported type '{type(value).__name__}'")

    # Raise: NaN and infinities are no amounts
    if not result.is_finite():
        raise InvalidOperationError(f"Cannot call `{operation}` because $value ({value}) is not a finite number")

    return result


def bounded_amount_decimal(value: NumericValue, context: NumericContext, rounding: RoundingMode | None = None) -> Decimal:
    """Round a numeric value without finite decimal expansion (e.g. `1/3`) into $context.

    The quotient is cut at the context's max scale, or at the default max scale if the context
    does not limit the scale.

    Args:
        value: Value whose exact decimal does not exist.
        context: Target context.
        rounding: Rounding mode; defaults to the context's rounding mode.
    """
    scale = context.max_scale if context.is_scale_limited else DEFAULT_CONTEXT.max_scale
    mode = rounding or context.rounding_mode
    return context.round(value.to_fraction().to_decimal(scale, mode))


def exact_amount_decimal(value: Number, operation: str, context: NumericContext) -> Decimal:
    """Like `as_amount_decimal`, for strict construction.

    Raises:
        PrecisionLossError: If $value has no finite decimal expansion; `rounded` carries the value
            rounded into $context (HALF_UP if the context's mode is UNNECESSARY).
    """
    try:
        return as_amount_decimal(value, operation)
    except NonTerminatingDecimalError as e:
        mode = RoundingMode.HALF_UP if context.rounding_mode is RoundingMode.UNNECESSARY else None
        raise PrecisionLossError(value, bounded_amount_decimal(value, context, mode)) from e


def as_currency(currency: Currency | str) -> Currency:
    if isinstance(currency, Currency):
        return currency
    if isinstance(currency, str):
        return Currency.lookup(currency)
    raise TypeError(f"$currency must be a Currency or a currency code, but provided value is: {currency!r}")


def _is_infinite_float(value) -> bool:
    return isinstance(value, float) and math.isinf(value)


class Money:
    """Exact monetary amount: a `Decimal` value, a currency and a numeric context.

    Construction is strict: the value is rounded into the context and a `PrecisionLossError` is
    raised if that changed it. Without an explicit context the default context is used, widened
    to the value's own scale, so plain construction never loses digits. `rounded_of` is the
    lossy alternative that rounds silently.

    Arithmetic works on the exact value; results are rounded into the context of the left operand.
    Amounts of different currencies cannot be combined (`CurrencyMismatchError`), except that a zero
    amount of any currency is neutral for addition and subtraction.

    Two equivalence relations exist:

    * `==` compares the displayed value (rounded to the currency's fractional digits) and the currency,
      so `Money.of("1.001", "EUR") == Money.of("1.00", "EUR")`.
    * `is_equal_to` compares the exact values and raises `CurrencyMismatchError` for different
      currencies.

    Ordering (`compare_to`, `<`, `sorted`, ...) is by currency code first and by value second. Amounts
    of different currencies are therefore ordered alphabetically by currency, not rejected. The
    `is_greater_than` family instead requires matching currencies.
    """

    __slots__ = ("_value", "_currency", "_context")

    def __init__(self, value: Number, currency: Currency | str, context: NumericContext | None = None):
        """Create an amount without rounding.

        Args:
            value: Amount as `Decimal`, `int`, `str`, `float` or `NumericValue`.
            currency: `Currency` or a currency code or symbol.
            context: Numeric context. If None, `DEFAULT_CONTEXT` widened to fit $value.

        Raises:
            PrecisionLossError: If $value does not fit into $context without rounding.
            ParseError: If $value is text that is not a decimal literal.
            InvalidOperationError: If $value is NaN or infinite.
            UnknownCurrencyError: If $currency cannot be resolved.
        """
        decimal_value = exact_amount_decimal(value, "Money.__init__", context or DEFAULT_CONTEXT)
        if context is None:
            context = DEFAULT_CONTEXT.widened_for(decimal_value)

        rounded = context.round(decimal_value)
        # Raise: strict construction never rounds
        if rounded != decimal_value:
            raise PrecisionLossError(decimal_value, rounded)

        self._set(rounded, as_currency(currency), context)

    def _set(self, value: Decimal, currency: Currency, context: NumericContext) -> None:
        self._value = value.copy_abs() if value.is_zero() else value
        self._currency = currency
        self._context = context

    # region Factories

    @classmethod
    def of(cls, value: Number, currency: Currency | str, context: NumericContext | None = None) -> Money:
        """Strict factory, same as the constructor."""
        return cls(value, currency, context)

    @classmethod
    def rounded_of(cls, value: Number, currency: Currency | str, context: NumericContext | None = None) -> Money:
        """Lossy factory: round $value into $context (default `DEFAULT_CONTEXT`) without complaining.

        A fraction without finite decimal expansion is cut at the context's max scale (at the
        default max scale if the context is unlimited).

        Example:
            Money.rounded_of("1.23456", "EUR", two_digits_context) gives 1.23 EUR.
            Money.rounded_of(Fraction(1, 3), "EUR", two_digits_context) gives 0.33 EUR.
        """
        context = context or DEFAULT_CONTEXT
        try:
            rounded = context.round(as_amount_decimal(value, "Money.rounded_of"))
        except NonTerminatingDecimalError:
            rounded = bounded_amount_decimal(value, context)

        money = cls.__new__(cls)
        money._set(rounded, as_currency(currency), context)
        return money

    @classmethod
    def of_minor(cls, currency: Currency | str, minor_units: int, fraction_digits: int | None = None) -> Money:
        """Create an amount from minor units, e.g. 1999 cents are 19.99 EUR.

        Args:
            currency: Currency of the amount.
            minor_units: Amount in minor units.
            fraction_digits: Digits of the minor unit; defaults to the currency's fractional digits.
        """
        unit = as_currency(currency)
        digits = unit.fraction_digits if fraction_digits is None else fraction_digits
        value = Decimal(minor_units).scaleb(-digits, context=EXACT_CONTEXT)
        return cls(value, unit)

    @classmethod
    def zero(cls, currency: Currency | str) -> Money:
        return cls(0, currency)

    @classmethod
    def parse(cls, text: str) -> Money:
        """Parse text like `12.50 EUR`, `€ 12,50` or `12.50` (default currency).

        Raises:
            ParseError: If $text is not a money amount; carries the original text.
        """
        from exact_values.domain.monetary.money_formatter import MoneyFormatter

        return MoneyFormatter().parse(text)

    @classmethod
    def from_str(cls, text: str) -> Money:
        return cls.parse(text)

    @classmethod
    def validate(cls, text: str) -> str:
        """Validate money text and return it in canonical form, e.g. `"12,5 €"` gives `"12.50 EUR"`.

        Raises:
            ParseError: If $text is not a money amount.
        """
        from exact_values.domain.monetary.money_formatter import MONEY_VALIDATOR

        return MONEY_VALIDATOR.validate(text)

    @classmethod
    def verify(cls, text: str) -> str:
        """Like `validate`, but every failure surfaces as `InvalidArgumentError`."""
        from exact_values.domain.monetary.money_formatter import MONEY_VALIDATOR

        return MONEY_VALIDATOR.verify(text)

    def with_currency(self, currency: Currency | str) -> Money:
        """Same value in another currency. No conversion takes place."""
        money = Money.__new__(Money)
        money._set(self._value, as_currency(currency), self._context)
        return money

    def _derive(self, value: Decimal) -> Money:
        money = Money.__new__(Money)
        money._set(self._context.round(value), self._currency, self._context)
        return money

    # endregion

    # region Properties

    @property
    def value(self) -> Decimal:
        return self._value

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def context(self) -> NumericContext:
        return self._context

    @property
    def factory(self) -> MoneyFactory:
        """A `MoneyFactory` preset with the currency, value and context of this amount."""
        from exact_values.domain.monetary.money_factory import MoneyFactory

        return MoneyFactory().set_currency(self._currency).set_context(self._context).set_number(self._value)

    @property
    def signum(self) -> int:
        """-1, 0 or 1 as the value is negative, zero or positive."""
        return (self._value > 0) - (self._value < 0)

    @property
    def is_zero(self) -> bool:
        return self._value.is_zero()

    @property
    def is_positive(self) -> bool:
        return self.signum > 0

    @property
    def is_positive_or_zero(self) -> bool:
        return self.signum >= 0

    @property
    def is_negative(self) -> bool:
        return self.signum < 0

    @property
    def is_negative_or_zero(self) -> bool:
        return self.signum <= 0

    # endregion

    # region Currency checks

    @staticmethod
    def _check_money(other, operation: str) -> None:
        # Raise: the operand must be an amount
        if not isinstance(other, Money):
            raise TypeError(f"Cannot call `{operation}` because $other must be Money, but got '{type(other).__name__}'")

    def _check_same_currency(self, other: Money, operation: str) -> None:
        # Raise: amounts of different currencies cannot be combined
        if self._currency != other._currency:
            raise CurrencyMismatchError(operation, self, other)

    # endregion

    # region Arithmetic

    def add(self, other: Money) -> Money:
        """Return `self + other`.

        A zero amount is neutral regardless of its currency: `x.add(zero)` returns `x` and
        `zero.add(x)` returns `x`.

        Raises:
            CurrencyMismatchError: If both amounts are non-zero and their currencies differ.
        """
        self._check_money(other, "add")
        if other.is_zero:
            return self
        if self.is_zero:
            return other
        self._check_same_currency(other, "add")
        return self._derive(exact_add(self._value, other._value))

    def subtract(self, other: Money) -> Money:
        """Return `self - other`, with the same zero rule as `add`."""
        self._check_money(other, "subtract")
        return self.add(other.negate())

    def multiply(self, multiplicand: Number) -> Money:
        return self._derive(exact_multiply(self._value, as_amount_decimal(multiplicand, "multiply")))

    def divide(self, divisor: Number) -> Money:
        """Return `self / divisor`.

        The amount is first rounded to 4 fractional digits (HALF_UP) and the quotient keeps that scale
        (HALF_UP), before it is rounded into the context. The divisor is used exactly as given. So
        `Money.of(10, "EUR").divide(3)` is `3.3333 EUR`. Dividing by 1 returns this amount unchanged, a
        float infinity gives zero.

        Raises:
            DivisionByZeroError: If $divisor is zero.
            InvalidOperationError: If $divisor is NaN.
        """
        if _is_infinite_float(divisor):
            return self._derive(Decimal(0))

        d = as_amount_decimal(divisor, "divide")
        if d == 1:
            return self

        # Raise: division by zero
        if d.is_zero():
            raise DivisionByZeroError(f"Cannot call `divide` because $divisor is zero ({self!r})")

        dividend = RoundingMode.HALF_UP.round(self._value, DIVISION_SCALE)
        return self._derive(RoundingMode.HALF_UP.divide(dividend, d, DIVISION_SCALE))

    def remainder(self, divisor: Number) -> Money:
        """Return `self % divisor` with the sign of this amount (not a modulo).

        Raises:
            DivisionByZeroError: If $divisor is zero.
        """
        if _is_infinite_float(divisor):
            return self._derive(Decimal(0))
        return self._derive(exact_remainder(self._value, as_amount_decimal(divisor, "remainder")))

    def divide_to_integral_value(self, divisor: Number) -> Money:
        """Return the integer part of `self / divisor`, truncated towards zero.

        Raises:
            DivisionByZeroError: If $divisor is zero.
        """
        if _is_infinite_float(divisor):
            return self._derive(Decimal(0))
        return self._derive(exact_divide_to_integral(self._value, as_amount_decimal(divisor, "divide_to_integral_value")))

    def divide_and_remainder(self, divisor: Number) -> tuple[Money, Money]:
        """Return `(divide_to_integral_value(divisor), remainder(divisor))`."""
        return self.divide_to_integral_value(divisor), self.remainder(divisor)

    def scale_by_power_of_ten(self, power: int) -> Money:
        """Return `self * 10**power`, rounded into the context."""
        return self._derive(self._value.scaleb(power, context=EXACT_CONTEXT))

    def abs(self) -> Money:
        return self.negate() if self.is_negative else self

    def negate(self) -> Money:
        return self._derive(-self._value)

    def plus(self) -> Money:
        """Return `+self`, rounded into the context."""
        return self._derive(self._value)

    def strip_trailing_zeros(self) -> Money:
        """Numerically equal amount without trailing fractional zeros (`600.00` becomes `600`)."""
        if self.is_zero:
            return self._derive(Decimal(0))
        stripped = self._value.normalize(context=EXACT_CONTEXT)
        # normalize() writes 600 as 6E+2
        if stripped.as_tuple().exponent > 0:
            stripped = stripped.quantize(Decimal(1), context=EXACT_CONTEXT)
        return self._derive(stripped)

    # endregion

    # region Comparison

    def compare_to(self, other: Money) -> int:
        """Order by currency code first, then by value.

        Amounts in different currencies are NOT rejected: `Money.of(100, "EUR")` sorts before
        `Money.of(1, "USD")` because "EUR" < "USD".

        Returns:
            A negative number, zero or a positive number.
        """
        self._check_money(other, "compare_to")
        a, b = self._currency.code, other._currency.code
        if a != b:
            return -1 if a < b else 1
        return (self._value > other._value) - (self._value < other._value)

    def _compare_value(self, other: Money, operation: str) -> int:
        self._check_money(other, operation)
        # A zero amount compares with amounts of any currency
        if not self.is_zero and not other.is_zero:
            self._check_same_currency(other, operation)
        return (self._value > other._value) - (self._value < other._value)

    def is_greater_than(self, other: Money) -> bool:
        """Compare values; currencies must match unless one amount is zero.

        Raises:
            CurrencyMismatchError: If both amounts are non-zero and their currencies differ.
        """
        return self._compare_value(other, "is_greater_than") > 0

    def is_greater_than_or_equal_to(self, other: Money) -> bool:
        return self._compare_value(other, "is_greater_than_or_equal_to") >= 0

    def is_less_than(self, other: Money) -> bool:
        return self._compare_value(other, "is_less_than") < 0

    def is_less_than_or_equal_to(self, other: Money) -> bool:
        return self._compare_value(other, "is_less_than_or_equal_to") <= 0

    def is_equal_to(self, other: Money) -> bool:
        """Compare exact values, so `1.001 EUR` and `1.00 EUR` differ here but are `==`.

        Raises:
            CurrencyMismatchError: If the currencies differ.
        """
        self._check_money(other, "is_equal_to")
        self._check_same_currency(other, "is_equal_to")
        return self._value == other._value

    def __eq__(self, other) -> bool:
        """Display equality: same currency and same value rounded to the currency's digits."""
        if not isinstance(other, Money):
            return False
        if self._currency != other._currency:
            return False
        return self._display_value() == other._display_value()

    def __hash__(self) -> int:
        return hash((self._currency.code, self._display_value()))

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) >= 0

    # endregion

    # region Operators

    def __add__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        """Support `sum()`, which starts with the integer 0."""
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        if isinstance(other, (Money, bool)):
            return NotImplemented  # Money * Money doesn't make sense
        try:
            return self.multiply(other)
        except TypeError:
            return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, (Money, bool)):
            return NotImplemented
        try:
            return self.divide(other)
        except TypeError:
            return NotImplemented

    def __mod__(self, other):
        if isinstance(other, (Money, bool)):
            return NotImplemented
        try:
            return self.remainder(other)
        except TypeError:
            return NotImplemented

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self.plus()

    def __abs__(self):
        return self.abs()

    # endregion

    # region Formatting

    def _display_value(self) -> Decimal:
        mode = self._context.rounding_mode
        if mode is RoundingMode.UNNECESSARY:
            mode = RoundingMode.HALF_UP
        return mode.round(self._value, self._currency.fraction_digits)

    def to_short_string(self) -> str:
        """Symbol followed by the value rounded to whole units (HALF_UP), e.g. `€20` for 19.99 EUR."""
        whole = RoundingMode.HALF_UP.round(self._value, 0)
        return f"{self._currency.display_symbol}{to_plain_string(whole)}"

    def to_long_string(self) -> str:
        """Value with the context's full scale and the currency code, e.g. `3.3333 EUR`."""
        value = self._value
        if self._context.is_scale_limited:
            # The value already fits, so this only pads zeros
            value = RoundingMode.DOWN.round(value, self._context.max_scale)
        return f"{to_plain_string(value)} {self._currency.code}"

    def __str__(self) -> str:
        """Return string like '1000.50 EUR' (the currency's fractional digits)."""
        return f"{to_plain_string(self._display_value())} {self._currency.code}"

    def __repr__(self) -> str:
        """Return string like 'Money(1000.50, EUR)'."""
        return f"{self.__class__.__name__}({to_plain_string(self._value)}, {self._currency.code})"

    # endregion
