"""Exact numeric values: fractions and packed decimals."""

from exact_values.domain.numeric.numeric_value import NumericValue
from exact_values.domain.numeric.rounding import RoundingMode
from exact_values.domain.numeric.fraction import Fraction
from exact_values.domain.numeric.packed_decimal import PackedDecimal

__all__ = ["NumericValue", "RoundingMode", "Fraction", "PackedDecimal"]
