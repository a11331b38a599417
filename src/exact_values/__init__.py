__version__ = "0.1.0"

from exact_values.domain.numeric import Fraction, NumericValue, PackedDecimal, RoundingMode
from exact_values.domain.monetary import Currency, Money, MoneyFactory, MoneyFormatter, NumericContext
from exact_values.check_digits import LuhnScheme, Mod10Scheme, Mod97Scheme
from exact_values.registry import ValueRegistry, create_default_registry

__all__ = [
    "Fraction",
    "NumericValue",
    "PackedDecimal",
    "RoundingMode",
    "Currency",
    "Money",
    "MoneyFactory",
    "MoneyFormatter",
    "NumericContext",
    "LuhnScheme",
    "Mod10Scheme",
    "Mod97Scheme",
    "ValueRegistry",
    "create_default_registry",
]
