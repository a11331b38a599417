"""Formatting and parsing of money text.

Accepted text is a number with an optional currency token before or after it:

    12.50 EUR    EUR 12.50    12,50 €    €12.50    -1.234,56 EUR    12.50

The decimal separator is guessed by `NumberValidator` (`1.234,56` is German, `1,234.56` English).
Text without a currency token gets the configured default currency
(`EXACT_VALUES_DEFAULT_CURRENCY`, default EUR).
"""

from __future__ import annotations

import logging
import re

from exact_values.config import get_settings
from exact_values.domain.monetary.currency import Currency, CurrencyLookup
from exact_values.domain.monetary.money import Money
from exact_values.errors import ExactValueError, ParseError
from exact_values.validation import NumberValidator, Validator

logger = logging.getLogger(__name__)

_CURRENCY_TOKEN = r"[^\d\s+\-.,]+"
_MONEY_PATTERN = re.compile(
    rf"(?:(?P<sign>[+-])?\s*(?P<leading>{_CURRENCY_TOKEN})\s*)?"
    rf"(?P<number>[+-]?[\d.,]+(?:[eE][+-]?\d+)?)"
    rf"(?:\s*(?P<trailing>{_CURRENCY_TOKEN}))?"
)


class MoneyFormatter:
    """Turns `Money` into text and back.

    Args:
        default_currency: Currency for text without a currency token. If None, the configured
            default currency is looked up on each parse.
        currencies: Resolves currency tokens. Defaults to the registry of `Currency`.
    """

    def __init__(self, default_currency: Currency | str | None = None, currencies: CurrencyLookup = Currency):
        self._currencies = currencies
        self._default_currency = self._resolve(default_currency) if default_currency is not None else None
        self._number_validator = NumberValidator()

    def _resolve(self, currency: Currency | str) -> Currency:
        return currency if isinstance(currency, Currency) else self._currencies.lookup(currency)

    @property
    def default_currency(self) -> Currency:
        if self._default_currency is not None:
            return self._default_currency
        return self._currencies.lookup(get_settings().default_currency_code)

    # region Formatting

    def format(self, money: Money) -> str:
        """Default form, e.g. `19.99 EUR`."""
        return str(money)

    def format_short(self, money: Money) -> str:
        """Short form, e.g. `€20`."""
        return money.to_short_string()

    def format_long(self, money: Money) -> str:
        """Full scale of the context, e.g. `19.9900 EUR`."""
        return money.to_long_string()

    # endregion

    # region Parsing

    def parse(self, text: str) -> Money:
        """Split $text into number and currency token and create the amount.

        Raises:
            ParseError: If $text is not a money amount or names an unknown currency. The error
                carries the original text.
        """
        # Raise: only text can be parsed
        if not isinstance(text, str):
            raise ParseError(str(text), "not text")

        match = _MONEY_PATTERN.fullmatch(text.strip())
        # Raise: no number, or garbage around it
        if match is None:
            raise ParseError(text, "expected a number with an optional currency before or after it")

        sign, leading, number, trailing = match.group("sign", "leading", "number", "trailing")

        # Raise: two currency tokens
        if leading and trailing:
            raise ParseError(text, f"two currency tokens ('{leading}' and '{trailing}')")

        # Raise: a sign on both sides of the currency
        if sign and number[0] in "+-":
            raise ParseError(text, "two signs")

        try:
            normalized = self._number_validator.validate(number)
        except ExactValueError as e:
            raise ParseError(text, "not a number") from e

        token = leading or trailing
        try:
            currency = self._currencies.lookup(token) if token else self.default_currency
        except ExactValueError as e:
            raise ParseError(text, f"unknown currency '{token}'") from e

        if not token:
            logger.debug(f"No currency in '{text}', using default currency {currency.code}")

        return Money((sign or "") + normalized, currency)

    # endregion


class MoneyTextValidator(Validator[str]):
    """Validates money text; `validate` returns the canonical form (e.g. `12.50 EUR`)."""

    def __init__(self, formatter: MoneyFormatter | None = None):
        self._formatter = formatter or MoneyFormatter()

    def validate(self, value: str) -> str:
        return str(self._formatter.parse(value))


MONEY_VALIDATOR = MoneyTextValidator()
