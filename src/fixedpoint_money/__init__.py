__version__ = "0.1.0"

from fixedpoint_money.domain.monetary.currency import Currency, CurrencyData, CurrencyType
from fixedpoint_money.domain.monetary.currency_with_precision import CurrencyWithPrecision
from fixedpoint_money.domain.monetary.errors import InvalidArgumentError
from fixedpoint_money.domain.monetary.precision_policy import MICRO_SCALE
from fixedpoint_money.platform.precision_cache import PrecisionCache, micro_precision_of, standard_precision_of

__all__ = [
    "Currency",
    "CurrencyData",
    "CurrencyType",
    "CurrencyWithPrecision",
    "InvalidArgumentError",
    "MICRO_SCALE",
    "PrecisionCache",
    "micro_precision_of",
    "standard_precision_of",
]
