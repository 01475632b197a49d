from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

from fixedpoint_money.domain.monetary.currency import CurrencyData
from fixedpoint_money.domain.monetary.currency_with_precision import CurrencyWithPrecision
from fixedpoint_money.domain.monetary.precision_policy import resolve_micro_zero

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class InternTable(Generic[K, V]):
    """Grow-only map that keeps the first value stored under each key.

    Reads take no lock. Only the check-and-insert step of `put_if_absent` is guarded, so
    building a candidate value never blocks other callers. Entries are never removed.
    """

    def __init__(self, name: str):
        """Initialize an empty table.

        Args:
            name (str): Name used in log messages.
        """
        self._name = name
        self._entries: Dict[K, V] = {}
        self._insert_lock = Lock()

    @property
    def name(self) -> str:
        """Get the table name."""
        return self._name

    def get(self, key: K) -> Optional[V]:
        """Return the value stored under $key, or None if there is none."""
        return self._entries.get(key)

    def put_if_absent(self, key: K, value: V) -> V:
        """Store $value under $key unless another value is already stored there.

        Args:
            key: Key to store $value under.
            value: Candidate value.

        Returns:
            The value stored under $key after the call: $value if it was inserted,
            otherwise the value that was already present.
        """
        with self._insert_lock:
            winner = self._entries.setdefault(key, value)

        if winner is value:
            logger.debug(f"InternTable '{self._name}' stored new entry for $key '{key}'")
        else:
            logger.debug(f"InternTable '{self._name}' already had an entry for $key '{key}'; discarding the new one")
        return winner

    def get_or_create(self, key: K, factory: Callable[[K], V]) -> V:
        """Return the value stored under $key, creating and storing it via $factory if missing.

        Under concurrent first access $factory may run more than once; only one result
        is kept and returned to every caller.
        """
        result = self._entries.get(key)
        if result is None:
            result = self.put_if_absent(key, factory(key))
        return result

    def snapshot(self) -> Dict[K, V]:
        """Return a copy of all entries."""
        with self._insert_lock:
            return dict(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class PrecisionCache:
    """Shared `CurrencyWithPrecision` instances for the default and the micro precision.

    Each precision has its own `InternTable` keyed by currency, so repeated lookups of the
    same currency return the same instance. Tables grow with every new currency and are
    never evicted.

    A process-wide instance is available via `PrecisionCache.get()`; separate instances
    can be created where isolation is needed (e.g. tests).
    """

    # Process-wide instance
    _instance: Optional["PrecisionCache"] = None
    _instance_lock = Lock()

    @classmethod
    def get(cls) -> "PrecisionCache":
        """Get the process-wide PrecisionCache instance, creating it on first use.

        Returns:
            PrecisionCache: The process-wide instance.
        """
        instance = cls._instance
        if instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
                    logger.debug("Created process-wide PrecisionCache")
                instance = cls._instance
        return instance

    @classmethod
    def clear(cls):
        """Clear the process-wide instance.

        This method is primarily intended for testing purposes to ensure
        clean state between test runs.
        """
        with cls._instance_lock:
            cls._instance = None

    def __init__(self):
        self._standard: InternTable[CurrencyData, CurrencyWithPrecision] = InternTable("standard")
        self._micro: InternTable[CurrencyData, CurrencyWithPrecision] = InternTable("micro")

    @property
    def standard_table(self) -> InternTable[CurrencyData, CurrencyWithPrecision]:
        """Get the table of default-precision instances."""
        return self._standard

    @property
    def micro_table(self) -> InternTable[CurrencyData, CurrencyWithPrecision]:
        """Get the table of micro-precision instances."""
        return self._micro

    def standard_precision_of(self, currency: CurrencyData) -> CurrencyWithPrecision:
        """Return the shared instance of $currency with its default precision.

        Raises:
            InvalidArgumentError: If $currency is None.
        """
        return self._standard.get_or_create(currency, _create_standard)

    def micro_precision_of(self, currency: CurrencyData) -> CurrencyWithPrecision:
        """Return the shared instance of $currency with 6 decimals.

        Raises:
            InvalidArgumentError: If $currency is None.
        """
        return self._micro.get_or_create(currency, _create_micro)


def _create_standard(currency: CurrencyData) -> CurrencyWithPrecision:
    return CurrencyWithPrecision(currency)


def _create_micro(currency: CurrencyData) -> CurrencyWithPrecision:
    return CurrencyWithPrecision(currency, resolve_micro_zero(currency))


def standard_precision_of(currency: CurrencyData) -> CurrencyWithPrecision:
    """Return the shared default-precision instance of $currency from the process-wide cache."""
    return PrecisionCache.get().standard_precision_of(currency)


def micro_precision_of(currency: CurrencyData) -> CurrencyWithPrecision:
    """Return the shared 6-decimals instance of $currency from the process-wide cache."""
    return PrecisionCache.get().micro_precision_of(currency)
