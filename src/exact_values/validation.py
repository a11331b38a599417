"""Validated-value contract.

Every value type plugs a validator into its construction. A validator offers two entry points:

* `validate(value)` returns the (possibly normalized) value or raises a typed `ValidationError`
  (or another `ExactValueError`) describing exactly what is wrong.
* `verify(value)` runs `validate` and wraps any failure into one generic `InvalidArgumentError`
  for callers that want a single catch-all.
"""

from __future__ import annotations

import decimal
import logging
import re
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Generic, TypeVar

from exact_values.errors import ExactValueError, InvalidArgumentError, InvalidValueError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Validator(ABC, Generic[T]):
    """Base of all validators."""

    @abstractmethod
    def validate(self, value: T) -> T:
        """Return $value (possibly normalized) or raise a typed error."""
        ...

    def verify(self, value: T) -> T:
        """Like `validate`, but every failure surfaces as `InvalidArgumentError`."""
        try:
            return self.validate(value)
        except (ExactValueError, ValueError) as e:
            raise InvalidArgumentError(f"Cannot accept '{value}': {e}") from e

    def is_valid(self, value: T) -> bool:
        """Probe $value without raising."""
        try:
            self.validate(value)
        except (ExactValueError, ValueError) as e:
            logger.debug(f"{self.__class__.__name__} rejected '{value}': {e}")
            return False
        return True


class NullValidator(Validator[T]):
    """Accepts every value except None."""

    def validate(self, value: T) -> T:
        # Raise: None is never a value
        if value is None:
            raise InvalidValueError(value, "value", "None is not allowed")
        return value


class NumberValidator(Validator[str]):
    """Validates numeric text and normalizes it to a plain decimal literal.

    The decimal separator is guessed: text like `1.234.567,89` (dot grouping in blocks of three,
    optional comma fraction) follows the German convention, anything else the English one
    (comma grouping, dot fraction).

    Args:
        minimum: Smallest accepted value (inclusive), or None for no bound.
        maximum: Largest accepted value (inclusive), or None for no bound.
    """

    _NUMBER_PATTERN = re.compile(r"[+-]?[\d,.]+([eE][+-]?\d+)?")
    _GERMAN_PATTERN = re.compile(r"[+-]?\d+(\.\d{3})*(,\d+)?")

    def __init__(self, minimum: Decimal | None = None, maximum: Decimal | None = None):
        # Raise: inverted range
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ValueError(f"Cannot call `NumberValidator.__init__` because $minimum ({minimum}) > $maximum ({maximum})")

        self._minimum = minimum
        self._maximum = maximum

    def validate(self, value: str) -> str:
        normalized = self.normalize(value)
        number = Decimal(normalized)

        if self._minimum is not None and number < self._minimum:
            raise InvalidValueError(value, "number", f"below minimum {self._minimum}")
        if self._maximum is not None and number > self._maximum:
            raise InvalidValueError(value, "number", f"above maximum {self._maximum}")

        return normalized

    def normalize(self, value: str) -> str:
        """Turn German or English formatted numeric text into a plain decimal literal.

        Raises:
            InvalidValueError: If $value is not numeric text.
        """
        text = value.strip() if isinstance(value, str) else value
        if not isinstance(text, str) or not self._NUMBER_PATTERN.fullmatch(text):
            raise InvalidValueError(value, "number")

        if self._GERMAN_PATTERN.fullmatch(text):
            normalized = text.replace(".", "").replace(",", ".")
        else:
            normalized = text.replace(",", "")

        try:
            Decimal(normalized)
        except decimal.InvalidOperation as e:
            raise InvalidValueError(value, "number") from e

        return normalized
