from __future__ import annotations

import logging
from typing import ClassVar, Dict, Protocol

from exact_values.errors import UnknownCurrencyError

logger = logging.getLogger(__name__)


class CurrencyLookup(Protocol):
    """Narrow contract Money needs from a currency table."""

    def lookup(self, code_or_symbol: str) -> Currency: ...


class Currency:
    """Represents a currency unit with its code, fractional digits and symbol.

    Attributes:
        code (str): Currency code (e.g., "EUR", "USD").
        fraction_digits (int): Number of fractional digits of the minor unit (0-18).
        name (str): Full currency name.
        symbol (str | None): Display symbol (e.g., "€"), or None if the currency has none.
    """

    # Class-level registry for predefined currencies
    _registry: ClassVar[Dict[str, Currency]] = {}

    # Legacy spellings resolved before the registry lookup
    _ALIASES: ClassVar[Dict[str, str]] = {"DM": "DEM"}

    def __init__(self, code: str, fraction_digits: int, name: str, symbol: str | None = None):
        """Initialize a Currency instance.

        Raises:
            ValueError: If parameters are invalid.
        """
        # Raise: code must be non-empty text
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        # Raise: fraction digits out of range
        if isinstance(fraction_digits, bool) or not isinstance(fraction_digits, int) or fraction_digits < 0 or fraction_digits > 18:
            raise ValueError(f"$fraction_digits must be an integer between 0 and 18, but provided value is: {fraction_digits}")

        # Raise: name must be non-empty text
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        self._code = code.upper().strip()
        self._fraction_digits = fraction_digits
        self._name = name.strip()
        self._symbol = symbol.strip() if symbol and symbol.strip() else None

    @property
    def code(self) -> str:
        return self._code

    @property
    def fraction_digits(self) -> int:
        return self._fraction_digits

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str | None:
        return self._symbol

    @property
    def display_symbol(self) -> str:
        """Symbol used for short formatting; the code if the currency has no symbol."""
        if self._symbol is None:
            logger.warning(f"Currency {self._code} has no symbol, using its code instead")
            return self._code
        return self._symbol

    # region Registry

    @classmethod
    def register(cls, currency: Currency, overwrite: bool = False) -> None:
        """Register a currency in the global registry.

        Args:
            currency (Currency): The currency to register.
            overwrite (bool): Whether to overwrite existing currency.

        Raises:
            ValueError: If currency already exists and overwrite is False.
            TypeError: If currency is not Currency instance.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.code in cls._registry and not overwrite:
            raise ValueError(f"Currency with code '{currency.code}' already exists in registry. Use overwrite=True to replace it.")

        cls._registry[currency.code] = currency

    @classmethod
    def registered(cls) -> list[Currency]:
        """All registered currencies, ordered by code."""
        return [cls._registry[code] for code in sorted(cls._registry)]

    @classmethod
    def lookup(cls, code_or_symbol: str) -> Currency:
        """Find a registered currency by code (case-insensitive) or by symbol.

        Text longer than three characters that matches nothing is retried with its first three
        characters, so `"EUR "` and `"EURO"` both resolve to EUR. The legacy alias `DM` resolves
        to `DEM`.

        Raises:
            TypeError: If $code_or_symbol is not a string.
            UnknownCurrencyError: If nothing matches.
        """
        if not isinstance(code_or_symbol, str):
            raise TypeError(f"$code_or_symbol must be a string, but provided value is: {code_or_symbol}")

        key = code_or_symbol.strip()
        found = cls._find(key)
        if found is None and len(key) > 3:
            found = cls._find(key[:3])
            if found is not None:
                logger.debug(f"Currency '{code_or_symbol}' resolved by its first three characters to {found.code}")

        # Raise: no currency matches the code or symbol
        if found is None:
            raise UnknownCurrencyError(code_or_symbol)

        return found

    @classmethod
    def _find(cls, key: str) -> Currency | None:
        code = key.upper()
        code = cls._ALIASES.get(code, code)
        if code in cls._registry:
            return cls._registry[code]

        for currency in cls._registry.values():
            if currency.symbol is not None and currency.symbol == key:
                return currency
        return None

    @classmethod
    def from_str(cls, code: str) -> Currency:
        """Get currency from registry by code or symbol, same as `lookup`."""
        return cls.lookup(code)

    # endregion

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.code}', {self.fraction_digits}, '{self.name}', {self.symbol!r})"
