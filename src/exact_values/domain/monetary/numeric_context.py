from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal

from exact_values.domain.numeric.rounding import RoundingMode
from exact_values.utils.decimal_tools import scale_of

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 41
DEFAULT_MAX_SCALE = 4
UNLIMITED_PRECISION = 0
UNLIMITED_SCALE = -1


@dataclass(frozen=True)
class NumericContext:
    """Precision, scale bound and rounding mode of monetary values.

    Attributes:
        precision: Maximum number of significant digits; `0` means unlimited.
        max_scale: Maximum number of fractional digits; `-1` means unlimited.
        rounding_mode: How values are rounded into these bounds.
    """

    precision: int = DEFAULT_PRECISION
    max_scale: int = DEFAULT_MAX_SCALE
    rounding_mode: RoundingMode = RoundingMode.HALF_UP

    def __post_init__(self):
        # Raise: negative precision
        if self.precision < 0:
            raise ValueError(f"$precision must be >= 0 (0 = unlimited), but provided value is: {self.precision}")

        # Raise: scale below the "unlimited" marker
        if self.max_scale < UNLIMITED_SCALE:
            raise ValueError(f"$max_scale must be >= -1 (-1 = unlimited), but provided value is: {self.max_scale}")

        # Raise: rounding mode must be a RoundingMode
        if not isinstance(self.rounding_mode, RoundingMode):
            raise TypeError(f"$rounding_mode must be a RoundingMode, but provided value is: {self.rounding_mode!r}")

    @property
    def is_scale_limited(self) -> bool:
        return self.max_scale != UNLIMITED_SCALE

    @property
    def is_precision_limited(self) -> bool:
        return self.precision != UNLIMITED_PRECISION

    def round(self, value: Decimal) -> Decimal:
        """Round $value into this context: first to `max_scale`, then to `precision` digits.

        Raises:
            PrecisionLossError: If `rounding_mode` is UNNECESSARY and digits would be dropped.
        """
        result = value
        if self.is_scale_limited and scale_of(result) > self.max_scale:
            result = self.rounding_mode.round(result, self.max_scale)

        digits = len(result.as_tuple().digits)
        if self.is_precision_limited and digits > self.precision:
            result = self.rounding_mode.round(result, scale_of(result) - (digits - self.precision))

        return result

    def fits(self, value: Decimal) -> bool:
        """True if $value is representable in this context without rounding."""
        if self.is_scale_limited and scale_of(value) > self.max_scale:
            return False
        return not (self.is_precision_limited and len(value.as_tuple().digits) > self.precision)

    def widened_for(self, value: Decimal) -> NumericContext:
        """Return a context wide enough to hold $value exactly (self if it already fits)."""
        if self.fits(value):
            return self

        max_scale = self.max_scale
        if self.is_scale_limited:
            max_scale = max(max_scale, scale_of(value))
        precision = self.precision
        if self.is_precision_limited:
            precision = max(precision, len(value.as_tuple().digits))

        widened = replace(self, precision=precision, max_scale=max_scale)
        logger.debug(f"Widened {self} to {widened} for value {value}")
        return widened

    def to_builder(self) -> NumericContextBuilder:
        return NumericContextBuilder(self)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(precision={self.precision}, max_scale={self.max_scale}, rounding_mode={self.rounding_mode.name})"


class NumericContextBuilder:
    """Mutable builder for `NumericContext`.

    Example:
        context = DEFAULT_CONTEXT.to_builder().set_max_scale(2).build()
    """

    def __init__(self, base: NumericContext | None = None):
        base = base or DEFAULT_CONTEXT
        self._precision = base.precision
        self._max_scale = base.max_scale
        self._rounding_mode = base.rounding_mode

    def set_precision(self, precision: int) -> NumericContextBuilder:
        self._precision = precision
        return self

    def set_max_scale(self, max_scale: int) -> NumericContextBuilder:
        self._max_scale = max_scale
        return self

    def set_rounding_mode(self, rounding_mode: RoundingMode) -> NumericContextBuilder:
        self._rounding_mode = rounding_mode
        return self

    def build(self) -> NumericContext:
        """Create the context.

        Raises:
            ValueError: If a bound is out of range.
        """
        return NumericContext(self._precision, self._max_scale, self._rounding_mode)


# Bounded context for everyday construction
DEFAULT_CONTEXT = NumericContext(DEFAULT_PRECISION, DEFAULT_MAX_SCALE, RoundingMode.HALF_UP)

# Unbounded context, used only to describe capabilities
MAXIMAL_CONTEXT = NumericContext(UNLIMITED_PRECISION, UNLIMITED_SCALE, RoundingMode.HALF_UP)
