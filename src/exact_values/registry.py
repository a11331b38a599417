"""Explicit registry of value types.

Every value type is registered under a tag with two callables: `construct(*args)` creates the value,
`validate(*args)` checks the arguments and returns them normalized (or raises a typed error).
Registration happens explicitly, e.g. via `create_default_registry()`; nothing is discovered at
runtime.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from bidict import bidict

from exact_values.errors import ExactValueError, InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValueType:
    """How to build and check one kind of value.

    Attributes:
        value_class: Class of the constructed values.
        construct: Creates a value from the arguments.
        validate: Returns the arguments' normalized form or raises a typed error.
    """

    value_class: type
    construct: Callable[..., Any]
    validate: Callable[..., Any]


class ValueRegistry:
    """Maps type tags (e.g. "money") to `ValueType` entries.

    Tags and value classes are both unique, so a class can be mapped back to its tag.
    """

    def __init__(self):
        self._classes_by_tag_bidict: bidict[str, type] = bidict()
        self._value_types_by_tag: dict[str, ValueType] = {}
        self._lock = threading.Lock()

    # region Registration

    def register(
        self,
        tag: str,
        value_class: type,
        construct: Callable[..., Any] | None = None,
        validate: Callable[..., Any] | None = None,
    ) -> ValueType:
        """Register a value type under $tag.

        Args:
            tag: Unique tag.
            value_class: Class of the values; also the default $construct.
            construct: Factory callable. Defaults to $value_class.
            validate: Validation callable. Defaults to constructing the value and returning the first
                argument unchanged.

        Returns:
            ValueType: The registered entry.

        Raises:
            ValueError: If $tag or $value_class is already registered.
        """
        construct = construct or value_class
        if validate is None:

            def validate(*args):
                construct(*args)
                return args[0] if len(args) == 1 else args

        value_type = ValueType(value_class, construct, validate)
        with self._lock:
            # Precondition: tag must be unique
            if tag in self._classes_by_tag_bidict:
                raise ValueError(f"Cannot call `register` because tag $tag ('{tag}') is already registered. Choose a different tag.")

            # Precondition: one tag per class
            if value_class in self._classes_by_tag_bidict.inverse:
                existing = self._classes_by_tag_bidict.inverse[value_class]
                raise ValueError(f"Cannot call `register` because class {value_class.__name__} is already registered as '{existing}'")

            self._classes_by_tag_bidict[tag] = value_class
            self._value_types_by_tag[tag] = value_type

        logger.debug(f"ValueRegistry registered '{tag}' (class {value_class.__name__})")
        return value_type

    def unregister(self, tag: str) -> None:
        """Remove the value type registered under $tag.

        Raises:
            KeyError: If $tag is not registered.
        """
        with self._lock:
            self._get(tag, "unregister")
            del self._classes_by_tag_bidict[tag]
            del self._value_types_by_tag[tag]

        logger.debug(f"ValueRegistry removed '{tag}'")

    # endregion

    # region Lookup

    def _get(self, tag: str, operation: str) -> ValueType:
        # Precondition: tag must be registered
        if tag not in self._value_types_by_tag:
            raise KeyError(f"Cannot call `{operation}` because tag $tag ('{tag}') is not registered. Registered tags: {self.tags}")
        return self._value_types_by_tag[tag]

    def get(self, tag: str) -> ValueType:
        """Return the entry for $tag.

        Raises:
            KeyError: If $tag is not registered.
        """
        return self._get(tag, "get")

    def tag_of(self, value_class: type) -> str:
        """Return the tag under which $value_class is registered.

        Raises:
            KeyError: If $value_class is not registered.
        """
        if value_class not in self._classes_by_tag_bidict.inverse:
            raise KeyError(f"Cannot call `tag_of` because class {value_class.__name__} is not registered")
        return self._classes_by_tag_bidict.inverse[value_class]

    @property
    def tags(self) -> list[str]:
        """Registered tags in registration order."""
        return list(self._classes_by_tag_bidict.keys())

    def __contains__(self, tag: str) -> bool:
        return tag in self._value_types_by_tag

    # endregion

    # region Construction

    def create(self, tag: str, *args: Any) -> Any:
        """Construct a value of the type registered under $tag.

        Raises:
            KeyError: If $tag is not registered.
        """
        return self._get(tag, "create").construct(*args)

    def validate(self, tag: str, *args: Any) -> Any:
        """Validate $args for the type registered under $tag; raises the type's own typed error."""
        return self._get(tag, "validate").validate(*args)

    def verify(self, tag: str, *args: Any) -> Any:
        """Like `validate`, but every failure surfaces as `InvalidArgumentError`."""
        value_type = self._get(tag, "verify")
        try:
            return value_type.validate(*args)
        except (ExactValueError, ValueError) as e:
            raise InvalidArgumentError(f"Cannot accept {args!r} as '{tag}': {e}") from e

    def is_valid(self, tag: str, *args: Any) -> bool:
        value_type = self._get(tag, "is_valid")
        try:
            value_type.validate(*args)
        except (ExactValueError, ValueError) as e:
            logger.debug(f"'{tag}' rejected {args!r}: {e}")
            return False
        return True

    # endregion


def create_default_registry() -> ValueRegistry:
    """Return a registry with the value types of this package.

    Tags: `packed_decimal`, `fraction`, `currency`, `money`. Money accepts either one text
    argument (`"12.50 EUR"`) or a value and a currency.
    """
    from exact_values.domain.monetary import Currency, Money
    from exact_values.domain.numeric import Fraction, PackedDecimal

    def money(*args):
        return Money.parse(args[0]) if len(args) == 1 else Money.of(*args)

    registry = ValueRegistry()
    registry.register("packed_decimal", PackedDecimal, PackedDecimal.of, lambda text: PackedDecimal.of(text).decode())
    registry.register("fraction", Fraction, Fraction.of, lambda *args: str(Fraction.of(*args)))
    registry.register("currency", Currency, Currency.lookup, lambda code: Currency.lookup(code).code)
    registry.register("money", Money, money, lambda *args: str(money(*args)))
    return registry
