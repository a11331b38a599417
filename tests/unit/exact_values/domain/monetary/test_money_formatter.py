from decimal import Decimal

import pytest

from exact_values.config import DEFAULT_CURRENCY_ENV, get_settings
from exact_values.domain.monetary.currency import Currency
from exact_values.domain.monetary.money import Money
from exact_values.domain.monetary.money_formatter import MoneyFormatter
from exact_values.errors import ParseError, UnknownCurrencyError


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.parametrize(
    "text, value, code",
    [
        ("12.50 EUR", "12.50", "EUR"),
        ("EUR 12.50", "12.50", "EUR"),
        ("12,50 €", "12.50", "EUR"),
        ("€12.50", "12.50", "EUR"),
        ("-1.234,56 EUR", "-1234.56", "EUR"),
        ("1,234.56 USD", "1234.56", "USD"),
        ("-€5", "-5", "EUR"),
        ("€ -5", "-5", "EUR"),
        ("$ 3", "3", "USD"),
        ("12.50 Euro", "12.50", "EUR"),
        ("100 DM", "100", "DEM"),
    ],
)
def test_parse(text, value, code):
    money = MoneyFormatter().parse(text)
    assert money.value == Decimal(value)
    assert money.currency.code == code


def test_parse_without_currency_uses_default():
    assert MoneyFormatter(default_currency="USD").parse("7.5").currency.code == "USD"


def test_default_currency_from_environment(monkeypatch, fresh_settings):
    monkeypatch.setenv(DEFAULT_CURRENCY_ENV, "chf")
    assert MoneyFormatter().parse("7").currency.code == "CHF"


@pytest.mark.parametrize(
    "text",
    ["abc", "", "EUR", "12.50 EUR USD", "EUR 12 USD", "1.2.3 EUR", "-€-5", "12 50 EUR"],
)
def test_parse_rejects_malformed_text(text):
    with pytest.raises(ParseError) as excinfo:
        MoneyFormatter().parse(text)

    assert excinfo.value.text == text


def test_parse_unknown_currency():
    with pytest.raises(ParseError, match="unknown currency") as excinfo:
        MoneyFormatter().parse("12.50 XYZ")

    assert isinstance(excinfo.value.__cause__, UnknownCurrencyError)


def test_format():
    formatter = MoneyFormatter()
    money = Money.of("19.99", "EUR")

    assert formatter.format(money) == "19.99 EUR"
    assert formatter.format_short(money) == "€20"
    assert formatter.format_long(money) == "19.9900 EUR"


def test_format_then_parse():
    formatter = MoneyFormatter()
    money = Money.of("1234.5", "USD")
    assert formatter.parse(formatter.format(money)) == money


class _OnlyFrancs:
    def lookup(self, code_or_symbol):
        if code_or_symbol.upper() in ("CHF", "FR"):
            return Currency.lookup("CHF")
        raise UnknownCurrencyError(code_or_symbol)


def test_custom_currency_lookup():
    formatter = MoneyFormatter(default_currency="CHF", currencies=_OnlyFrancs())

    assert formatter.parse("12 Fr").currency.code == "CHF"
    assert formatter.parse("12").currency.code == "CHF"

    with pytest.raises(ParseError, match="unknown currency"):
        formatter.parse("12 EUR")
