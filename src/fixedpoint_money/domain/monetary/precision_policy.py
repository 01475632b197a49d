"""Resolves the zero marker (and hence the scale) a currency is tagged with.

Three policies exist:

- explicit: the scale of a caller-supplied reference value,
- default: the currency's own ISO 4217 fraction digits,
- micro: a fixed scale of `MICRO_SCALE` digits, regardless of the currency.

Every resolver returns one of the canonical markers from `zero_for_scale`.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from fixedpoint_money.domain.monetary.currency import CurrencyData
from fixedpoint_money.domain.monetary.errors import InvalidArgumentError
from fixedpoint_money.utils.decimal_tools import DecimalLike, zero_for_scale, zero_like

# Fixed number of fractional digits used for "micro-units" amounts
MICRO_SCALE: int = 6


def _check_currency(currency: CurrencyData | None) -> None:
    # Raise: currency is required by every policy
    if currency is None:
        raise InvalidArgumentError("Cannot resolve precision because $currency is None")


def resolve_explicit_zero(reference: DecimalLike | None) -> Decimal:
    """Return the zero marker at the scale of $reference.

    Args:
        reference: Any Decimal-like value; only its scale is used.

    Raises:
        InvalidArgumentError: If $reference is None, not convertible to Decimal, not finite,
            or has more fractional digits than the backing numeric type supports.
    """
    if reference is None:
        raise InvalidArgumentError("Cannot resolve precision because $reference is None")

    try:
        return zero_like(reference)
    except (ValueError, TypeError, InvalidOperation) as e:
        raise InvalidArgumentError(f"Cannot resolve precision because $reference ({reference!r}) has no usable scale") from e


def resolve_default_zero(currency: CurrencyData | None) -> Decimal:
    """Return the zero marker for the currency's default fraction digits.

    Raises:
        InvalidArgumentError: If $currency is None, or its default fraction digits are not
            a scale the backing numeric type supports.
    """
    _check_currency(currency)
    try:
        return zero_for_scale(currency.default_fraction_digits)
    except (ValueError, TypeError) as e:
        raise InvalidArgumentError(f"Cannot resolve precision because $currency ({currency!r}) has unsupported default fraction digits") from e


def resolve_micro_zero(currency: CurrencyData | None) -> Decimal:
    """Return the zero marker with `MICRO_SCALE` digits. $currency is validated, not consulted."""
    _check_currency(currency)
    return zero_for_scale(MICRO_SCALE)
