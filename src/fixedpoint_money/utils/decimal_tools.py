from __future__ import annotations

from decimal import Decimal
from typing import TypeAlias

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Largest number of fractional digits a zero marker can carry
MAX_SCALE: int = 18


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.
    """
    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def _build_zero(scale: int) -> Decimal:
    # Tuple constructor is exact and ignores the active decimal context
    return Decimal((0, (0,), -scale))


# Canonical zero markers, one shared instance per scale
_ZEROS: tuple[Decimal, ...] = tuple(_build_zero(scale) for scale in range(MAX_SCALE + 1))


def zero_for_scale(scale: int) -> Decimal:
    """Return the shared zero marker with exactly $scale fractional digits.

    Args:
        scale: Number of fractional digits, between 0 and `MAX_SCALE`.

    Returns:
        Canonical `Decimal` zero, e.g. `Decimal("0.00")` for $scale 2. Repeated calls
        with the same $scale return the same object.

    Raises:
        ValueError: If $scale is not an integer in range 0..`MAX_SCALE`.
    """
    # Raise: bool is an int subclass, but never a valid scale
    if not isinstance(scale, int) or isinstance(scale, bool):
        raise ValueError(f"$scale must be an integer, but provided value is: {scale!r}")

    # Raise: scale must be within supported range
    if scale < 0 or scale > MAX_SCALE:
        raise ValueError(f"$scale must be between 0 and {MAX_SCALE}, but provided value is: {scale}")

    return _ZEROS[scale]


def scale_of(value: Decimal) -> int:
    """Return the number of fractional digits $value is stored with.

    Values with a positive exponent (e.g. `Decimal("1E+2")`) have scale 0.

    Raises:
        ValueError: If $value is NaN or infinite.
    """
    if not value.is_finite():
        raise ValueError(f"Cannot determine scale because $value ({value}) is not finite")

    exponent = value.as_tuple().exponent
    return -exponent if exponent < 0 else 0


def zero_like(value: DecimalLike) -> Decimal:
    """Return the canonical zero marker at the scale of $value.

    Raises:
        ValueError: If $value is not finite or its scale exceeds `MAX_SCALE`.
    """
    return zero_for_scale(scale_of(as_decimal(value)))
