from __future__ import annotations

from decimal import Decimal

from exact_values.domain.monetary.currency import Currency
from exact_values.domain.monetary.money import Money, Number, as_currency, exact_amount_decimal
from exact_values.domain.monetary.numeric_context import DEFAULT_CONTEXT, MAXIMAL_CONTEXT, NumericContext
from exact_values.errors import MissingCurrencyError


class MoneyFactory:
    """Mutable builder for `Money`.

    Setting a number whose scale exceeds the current context widens the context to that scale, so
    `create` never rounds a number that was set after the context. A context set afterwards is taken
    as given; `create` then raises `PrecisionLossError` if the number does not fit.

    Example:
        money = MoneyFactory().set_currency("EUR").set_number("12.50").create()
    """

    def __init__(self):
        self._currency: Currency | None = None
        self._number: Decimal = Decimal(0)
        self._context: NumericContext = DEFAULT_CONTEXT

    # region Setters

    def set_currency(self, currency: Currency | str) -> MoneyFactory:
        """Set the currency by `Currency`, code or symbol.

        Raises:
            UnknownCurrencyError: If a code or symbol cannot be resolved.
        """
        self._currency = as_currency(currency)
        return self

    def set_number(self, number: Number) -> MoneyFactory:
        """Set the number; the context widens to its scale.

        Raises:
            PrecisionLossError: If $number has no finite decimal expansion (e.g. `Fraction(1, 3)`).
        """
        self._number = exact_amount_decimal(number, "MoneyFactory.set_number", self._context)
        self._context = self._context.widened_for(self._number)
        return self

    def set_context(self, context: NumericContext) -> MoneyFactory:
        # Raise: context must be a NumericContext
        if not isinstance(context, NumericContext):
            raise TypeError(f"$context must be a NumericContext, but provided value is: {context!r}")

        self._context = context
        return self

    # endregion

    # region Properties

    @property
    def currency(self) -> Currency | None:
        return self._currency

    @property
    def number(self) -> Decimal:
        return self._number

    @property
    def context(self) -> NumericContext:
        return self._context

    @property
    def default_context(self) -> NumericContext:
        """Bounded context used for everyday construction."""
        return DEFAULT_CONTEXT

    @property
    def maximal_context(self) -> NumericContext:
        """Unbounded context (precision 0, scale -1); describes capabilities, not used for arithmetic."""
        return MAXIMAL_CONTEXT

    # endregion

    def create(self) -> Money:
        """Create the amount.

        Raises:
            MissingCurrencyError: If no currency was set.
            PrecisionLossError: If the number does not fit into the context.
        """
        # Raise: a currency is mandatory
        if self._currency is None:
            raise MissingCurrencyError(f"Cannot call `create` because no currency was set (number={self._number})")

        return Money(self._number, self._currency, self._context)
