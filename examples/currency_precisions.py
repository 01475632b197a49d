from __future__ import annotations

import logging
from decimal import Decimal

from fixedpoint_money.domain.monetary.currency_registry import BTC, JPY, USD
from fixedpoint_money.domain.monetary.currency_with_precision import CurrencyWithPrecision
from fixedpoint_money.platform.precision_cache import micro_precision_of, standard_precision_of


logger = logging.getLogger(__name__)


def run() -> None:
    # Shared instances with ISO default precision
    for currency in (USD, JPY, BTC):
        tagged = standard_precision_of(currency)
        logger.info(f"{currency.name}: '{tagged}' with {tagged.decimals} decimals")

    # Same currency, stored in micro-units
    usd_micros = micro_precision_of(USD)
    logger.info(f"Micro precision: '{usd_micros}'; back to default: '{usd_micros.with_default_precision()}'")

    # Precision taken from an existing amount; not cached
    usd_mills = CurrencyWithPrecision(USD, Decimal("12.345"))
    logger.info(f"Explicit precision: '{usd_mills}', equal to micro? {usd_mills == usd_micros}")

    # Repeated lookups return the very same object
    logger.info(f"Interned: {standard_precision_of(USD) is standard_precision_of(USD)}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    run()
