"""Error types raised by exact_values.

Every error is raised synchronously at the point of detection. All computations are deterministic,
so none of these errors is worth retrying.
"""

from __future__ import annotations

from typing import Any


class ExactValueError(Exception):
    """Base class of all errors raised by this package."""


# region Validation


class ValidationError(ExactValueError, ValueError):
    """Typed failure returned by the `validate` path of a validator."""


class InvalidValueError(ValidationError):
    """Raised when a value is not acceptable for the named kind of value."""

    def __init__(self, value: Any, kind: str, reason: str | None = None):
        self.value = value
        self.kind = kind
        self.reason = reason

        message = f"Invalid {kind}: '{value}'"
        if reason:
            message += f" - {reason}"

        super().__init__(message)


class EncodingError(ValidationError):
    """Raised when a character cannot be packed into a nibble."""

    def __init__(self, text: str, character: str, position: int):
        self.text = text
        self.character = character
        self.position = position
        super().__init__(f"Cannot encode '{text}' because character '{character}' at position {position} is not allowed")


class ParseError(ValidationError):
    """Raised when numeric, fraction or money text is malformed."""

    def __init__(self, text: str, reason: str | None = None):
        self.text = text
        self.reason = reason

        message = f"Cannot parse '{text}'"
        if reason:
            message += f": {reason}"

        super().__init__(message)


class CheckDigitError(ValidationError):
    """Raised when the supplied check digit differs from the computed one."""

    def __init__(self, value: str, computed: str, supplied: str):
        self.value = value
        self.computed = computed
        self.supplied = supplied
        super().__init__(f"Check digit of '{value}' is '{supplied}', but '{computed}' was expected")


class UnknownCurrencyError(ValidationError):
    """Raised when a currency code or symbol cannot be resolved."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown currency: '{code}'")


class InvalidArgumentError(ExactValueError, ValueError):
    """Generic invalid-argument failure produced by the `verify` path.

    The typed failure from `validate` is kept as `__cause__`.
    """


# endregion

# region Arithmetic


class InvalidOperationError(ExactValueError, ArithmeticError):
    """Raised when arithmetic is attempted on a value that is neither a number nor a fraction."""


class NonTerminatingDecimalError(InvalidOperationError):
    """Raised when an exact decimal is requested for a quotient with an infinite expansion."""

    def __init__(self, numerator: int, denominator: int):
        self.numerator = numerator
        self.denominator = denominator
        super().__init__(f"{numerator}/{denominator} has no terminating decimal expansion; pass an explicit $scale")


class PrecisionLossError(ExactValueError, ArithmeticError):
    """Raised by strict construction when rounding would change the value."""

    def __init__(self, value: Any, rounded: Any):
        self.value = value
        self.rounded = rounded
        super().__init__(f"Value {value} would lose precision (rounded to {rounded})")


class DivisionByZeroError(ExactValueError, ZeroDivisionError):
    """Raised for a zero denominator or divisor."""


# endregion

# region Monetary


class MonetaryError(ExactValueError):
    """Base class for errors of monetary operations."""


class CurrencyMismatchError(MonetaryError):
    """Raised when two amounts of different currencies are combined."""

    def __init__(self, operation: str, left: Any, right: Any):
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(f"Cannot call `{operation}` because currencies differ: {left!r} and {right!r}")


class MissingCurrencyError(MonetaryError):
    """Raised when a money amount is created without a currency."""


# endregion
