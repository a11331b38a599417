"""Monetary domain package.

Currencies, numeric contexts and exact monetary amounts. Importing this package registers the
predefined currencies.
"""

from exact_values.domain.monetary.currency import Currency, CurrencyLookup
from exact_values.domain.monetary import currency_registry
from exact_values.domain.monetary.numeric_context import (
    DEFAULT_CONTEXT,
    MAXIMAL_CONTEXT,
    NumericContext,
    NumericContextBuilder,
)
from exact_values.domain.monetary.money import Money
from exact_values.domain.monetary.money_factory import MoneyFactory
from exact_values.domain.monetary.money_formatter import MoneyFormatter

__all__ = [
    "Currency",
    "CurrencyLookup",
    "currency_registry",
    "DEFAULT_CONTEXT",
    "MAXIMAL_CONTEXT",
    "NumericContext",
    "NumericContextBuilder",
    "Money",
    "MoneyFactory",
    "MoneyFormatter",
]
