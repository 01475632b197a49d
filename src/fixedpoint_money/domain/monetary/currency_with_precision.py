from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from fixedpoint_money.domain.monetary.currency import CurrencyData
from fixedpoint_money.domain.monetary.errors import InvalidArgumentError
from fixedpoint_money.domain.monetary.precision_policy import MICRO_SCALE, resolve_default_zero, resolve_explicit_zero
from fixedpoint_money.utils.decimal_tools import DecimalLike, scale_of

if TYPE_CHECKING:
    from fixedpoint_money.platform.precision_cache import PrecisionCache

# Marks that no $reference was passed, so that an explicit None can still be rejected
_DEFAULT_PRECISION = object()


class CurrencyWithPrecision:
    """A currency together with the number of fractional digits amounts in it are stored with.

    By default the precision is the currency's ISO 4217 default. It can be overridden by
    passing a $reference value, whose scale is taken (its value is ignored).

    Instances are immutable. Two instances are equal when their currency codes and their
    scales are equal; other currency attributes and object identity are ignored.

    Prefer `standard_precision_of` / `micro_precision_of` (see `fixedpoint_money.platform.precision_cache`)
    for frequently used precisions; they return shared instances.

    Attributes:
        currency (CurrencyData): The currency descriptor.
        zero (Decimal): Zero at this instance's scale.
        currency_code (str): Code of $currency.
        decimals (int): Number of fractional digits.
    """

    __slots__ = ("_currency", "_zero", "_display_str")

    def __init__(self, currency: CurrencyData, reference: DecimalLike | None | object = _DEFAULT_PRECISION) -> None:
        """Initialize a new CurrencyWithPrecision.

        Args:
            currency: The currency descriptor. Must not be None.
            reference: Value whose scale defines the precision. If omitted, the
                currency's default fraction digits are used. Passing None is an error.

        Raises:
            InvalidArgumentError: If $currency or an explicitly passed $reference is None,
                if $currency does not provide currency data, or if $reference has no usable scale.
        """
        # Raise: currency is required
        if currency is None:
            raise InvalidArgumentError("Cannot create `CurrencyWithPrecision` because $currency is None")

        # Raise: currency must expose code and default fraction digits
        if not isinstance(currency, CurrencyData):
            raise InvalidArgumentError(f"Cannot create `CurrencyWithPrecision` because $currency ({currency!r}) does not provide currency data")

        if reference is _DEFAULT_PRECISION:
            zero = resolve_default_zero(currency)
        else:
            zero = resolve_explicit_zero(reference)

        self._currency = currency
        self._zero = zero
        self._display_str: str | None = None

    # region Properties

    @property
    def currency(self) -> CurrencyData:
        """Get the currency descriptor."""
        return self._currency

    @property
    def zero(self) -> Decimal:
        """Get zero at this instance's scale."""
        return self._zero

    @property
    def currency_code(self) -> str:
        """Get the currency code."""
        return self._currency.code

    @property
    def decimals(self) -> int:
        """Get the number of fractional digits."""
        return scale_of(self._zero)

    # endregion

    # region Precision changes

    def with_default_precision(self, cache: PrecisionCache | None = None) -> CurrencyWithPrecision:
        """Return this currency with its default precision. May return $self.

        Args:
            cache: Cache to take the instance from. Defaults to the process-wide cache.
        """
        if self.decimals == self._currency.default_fraction_digits:
            return self
        return _resolve_cache(cache).standard_precision_of(self._currency)

    def with_micro_precision(self, cache: PrecisionCache | None = None) -> CurrencyWithPrecision:
        """Return this currency with exactly `MICRO_SCALE` (6) decimals. May return $self.

        Args:
            cache: Cache to take the instance from. Defaults to the process-wide cache.
        """
        if self.decimals == MICRO_SCALE:
            return self
        return _resolve_cache(cache).micro_precision_of(self._currency)

    # endregion

    # region Magic methods

    def __eq__(self, other) -> bool:
        """Check equality by currency code and scale."""
        if self is other:
            return True
        if not isinstance(other, CurrencyWithPrecision):
            return False
        return self.currency_code == other.currency_code and self.decimals == other.decimals

    def __hash__(self) -> int:
        """Hash based on currency code and scale."""
        return hash((self.currency_code, self.decimals))

    def __str__(self) -> str:
        """Return the code (e.g. 'USD'), with ':<scale>' appended when not the default (e.g. 'USD:6')."""
        display_str = self._display_str
        if display_str is None:
            # Concurrent first calls compute the same string, so the last write wins harmlessly
            decimals = self.decimals
            if decimals == self._currency.default_fraction_digits:
                display_str = self.currency_code
            else:
                display_str = f"{self.currency_code}:{decimals}"
            self._display_str = display_str
        return display_str

    def __repr__(self) -> str:
        """Return string like 'CurrencyWithPrecision(USD, 6)'."""
        return f"{self.__class__.__name__}({self.currency_code}, {self.decimals})"

    def __reduce__(self):
        # Persist only currency and zero; the display string is rebuilt on demand
        return self.__class__, (self._currency, self._zero)

    # endregion


def _resolve_cache(cache: PrecisionCache | None) -> PrecisionCache:
    if cache is not None:
        return cache

    # Imported here, because the cache module builds instances of this class
    from fixedpoint_money.platform.precision_cache import PrecisionCache

    return PrecisionCache.get()
