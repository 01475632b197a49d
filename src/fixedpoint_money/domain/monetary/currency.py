from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from fixedpoint_money.utils.decimal_tools import MAX_SCALE


@runtime_checkable
class CurrencyData(Protocol):
    """Currency master data needed to tag amounts with a decimal precision.

    Implementations must be hashable, since they are used as cache keys, and stable
    for the lifetime of the process.
    """

    @property
    def code(self) -> str:
        """Return the currency code (e.g. "USD")."""
        ...

    @property
    def default_fraction_digits(self) -> int:
        """Return the ISO 4217 default number of fractional digits."""
        ...


class CurrencyType(Enum):
    """Enumeration of currency types."""

    FIAT = "FIAT"
    CRYPTO = "CRYPTO"
    COMMODITY = "COMMODITY"


class Currency:
    """Represents a currency with code, default fraction digits, and metadata.

    Attributes:
        code (str): Currency code (e.g., "USD", "BTC").
        default_fraction_digits (int): Number of decimal places (0-18).
        name (str): Full currency name.
        currency_type (CurrencyType): Type of currency (FIAT, CRYPTO, COMMODITY).
    """

    __slots__ = ("_code", "_default_fraction_digits", "_name", "_currency_type")

    def __init__(self, code: str, default_fraction_digits: int, name: str, currency_type: CurrencyType):
        """Initialize a Currency instance.

        Args:
            code (str): Currency code (e.g., "USD", "BTC").
            default_fraction_digits (int): Number of decimal places (0-18).
            name (str): Full currency name.
            currency_type (CurrencyType): Type of currency.

        Raises:
            ValueError: If parameters are invalid.
            TypeError: If currency_type is not CurrencyType instance.
        """
        # Validate inputs
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        if not isinstance(default_fraction_digits, int) or isinstance(default_fraction_digits, bool) or not 0 <= default_fraction_digits <= MAX_SCALE:
            raise ValueError(f"$default_fraction_digits must be an integer between 0 and {MAX_SCALE}, but provided value is: {default_fraction_digits}")

        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        if not isinstance(currency_type, CurrencyType):
            raise TypeError(f"$currency_type must be a CurrencyType instance, but provided value is: {currency_type}")

        self._code = code.upper().strip()
        self._default_fraction_digits = default_fraction_digits
        self._name = name.strip()
        self._currency_type = currency_type

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def default_fraction_digits(self) -> int:
        """Get the default number of fractional digits."""
        return self._default_fraction_digits

    @property
    def name(self) -> str:
        """Get the currency name."""
        return self._name

    @property
    def currency_type(self) -> CurrencyType:
        """Get the currency type."""
        return self._currency_type

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code and self.default_fraction_digits == other.default_fraction_digits

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self.code)

    def __getstate__(self):
        return (self._code, self._default_fraction_digits, self._name, self._currency_type)

    def __setstate__(self, state) -> None:
        self._code, self._default_fraction_digits, self._name, self._currency_type = state

    def __str__(self) -> str:
        """Return string representation."""
        return self.code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self.code}', {self.default_fraction_digits}, '{self.name}', {self.currency_type})"
