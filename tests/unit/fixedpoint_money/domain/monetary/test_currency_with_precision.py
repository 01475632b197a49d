import copy
import pickle
from dataclasses import dataclass
from decimal import Decimal

import pytest

from fixedpoint_money.domain.monetary.currency import Currency, CurrencyType
from fixedpoint_money.domain.monetary.currency_registry import BTC, EUR, JPY, USD, USDT
from fixedpoint_money.domain.monetary.currency_with_precision import CurrencyWithPrecision
from fixedpoint_money.domain.monetary.errors import InvalidArgumentError
from fixedpoint_money.platform.precision_cache import PrecisionCache
from fixedpoint_money.utils.decimal_tools import zero_for_scale


@dataclass(frozen=True)
class PlainCurrencyData:
    """Minimal currency data provider, unrelated to `Currency`."""

    code: str
    default_fraction_digits: int


@pytest.fixture
def cache():
    return PrecisionCache()


# region Construction


def test_default_construction_uses_currency_precision():
    usd = CurrencyWithPrecision(USD)
    assert usd.currency is USD
    assert usd.currency_code == "USD"
    assert usd.decimals == 2
    assert usd.zero is zero_for_scale(2)


def test_explicit_construction_uses_scale_of_reference():
    usd = CurrencyWithPrecision(USD, Decimal("1234.5678"))
    assert usd.decimals == 4
    assert usd.zero == 0
    assert usd.zero is zero_for_scale(4)


def test_explicit_construction_accepts_decimal_like_reference():
    assert CurrencyWithPrecision(EUR, "0.000").decimals == 3
    assert CurrencyWithPrecision(EUR, 10).decimals == 0


@pytest.mark.parametrize(
    "args",
    [
        (None,),
        (None, Decimal("0.00")),
        (USD, None),
    ],
)
def test_construction_rejects_missing_arguments(args):
    with pytest.raises(InvalidArgumentError):
        CurrencyWithPrecision(*args)


def test_construction_rejects_objects_without_currency_data():
    with pytest.raises(InvalidArgumentError, match="does not provide currency data"):
        CurrencyWithPrecision("USD")


def test_construction_rejects_unsupported_scale():
    with pytest.raises(InvalidArgumentError):
        CurrencyWithPrecision(USD, Decimal("1E-19"))


def test_instance_is_read_only():
    usd = CurrencyWithPrecision(USD)
    with pytest.raises(AttributeError):
        usd.currency = EUR
    with pytest.raises(AttributeError):
        usd.decimals = 6


# endregion

# region Equality and hashing


def test_equality_uses_currency_code_and_scale():
    assert CurrencyWithPrecision(USD) == CurrencyWithPrecision(USD, Decimal("0.00"))
    assert CurrencyWithPrecision(USD) != CurrencyWithPrecision(USD, Decimal("0.000000"))
    assert CurrencyWithPrecision(USD) != CurrencyWithPrecision(EUR)
    assert CurrencyWithPrecision(USD) != "USD"


def test_equality_ignores_descriptor_identity():
    plain_usd = PlainCurrencyData("USD", 2)
    other_usd = Currency("USD", 4, "Dollar with other default", CurrencyType.FIAT)

    a = CurrencyWithPrecision(USD)
    b = CurrencyWithPrecision(plain_usd)
    c = CurrencyWithPrecision(other_usd, Decimal("0.01"))

    assert a == b == c
    assert hash(a) == hash(b) == hash(c)


def test_equality_is_reflexive_symmetric_and_transitive():
    a = CurrencyWithPrecision(USD, Decimal("0.000000"))
    b = CurrencyWithPrecision(PlainCurrencyData("USD", 2), Decimal("1.000001"))
    c = CurrencyWithPrecision(USD, "5.500000")
    d = CurrencyWithPrecision(USD)

    assert a == a
    assert (a == b) and (b == a)
    assert (b == c) and (a == c)
    assert (a == d) == (d == a)
    assert hash(a) == hash(b) == hash(c)


def test_equality_does_not_compare_zero_markers():
    # Decimal zeros of different scale compare equal, the instances must not
    assert zero_for_scale(2) == zero_for_scale(6)
    assert CurrencyWithPrecision(USD, zero_for_scale(2)) != CurrencyWithPrecision(USD, zero_for_scale(6))


def test_instances_work_as_dict_keys():
    rates = {CurrencyWithPrecision(USD): "usd", CurrencyWithPrecision(USD, "0.000000"): "usd-micros"}
    assert rates[CurrencyWithPrecision(PlainCurrencyData("USD", 2))] == "usd"
    assert rates[CurrencyWithPrecision(USD, Decimal("0.123456"))] == "usd-micros"


# endregion

# region String rendering


def test_str_is_code_for_default_precision():
    assert str(CurrencyWithPrecision(USD)) == "USD"
    assert str(CurrencyWithPrecision(JPY)) == "JPY"


def test_str_appends_scale_for_other_precisions():
    assert str(CurrencyWithPrecision(USD, Decimal("0.000000"))) == "USD:6"
    assert str(CurrencyWithPrecision(JPY, Decimal("0.00"))) == "JPY:2"
    assert str(CurrencyWithPrecision(BTC, Decimal("0"))) == "BTC:0"


def test_str_is_computed_once():
    usd = CurrencyWithPrecision(USD, Decimal("0.000000"))
    first = str(usd)
    assert str(usd) is first


def test_repr():
    assert repr(CurrencyWithPrecision(USD, Decimal("0.000000"))) == "CurrencyWithPrecision(USD, 6)"


# endregion

# region Precision changes


def test_with_default_precision_returns_self_when_already_default(cache):
    usd = CurrencyWithPrecision(USD)
    assert usd.with_default_precision(cache) is usd
    assert len(cache.standard_table) == 0


def test_with_default_precision_takes_instance_from_cache(cache):
    usd_micros = CurrencyWithPrecision(USD, Decimal("0.000000"))
    usd = usd_micros.with_default_precision(cache)
    assert usd.decimals == 2
    assert usd is cache.standard_precision_of(USD)


def test_with_default_precision_is_idempotent(cache):
    usd = CurrencyWithPrecision(USD, Decimal("0.0")).with_default_precision(cache)
    assert usd.with_default_precision(cache) is usd
    assert usd.with_default_precision(cache) == usd


def test_with_micro_precision(cache):
    usd = cache.standard_precision_of(USD)
    usd_micros = usd.with_micro_precision(cache)
    assert usd_micros.decimals == 6
    assert str(usd_micros) == "USD:6"
    assert usd_micros is cache.micro_precision_of(USD)
    assert usd_micros.with_micro_precision(cache) is usd_micros


def test_with_micro_precision_returns_self_for_any_instance_at_six_decimals(cache):
    btc_micros = CurrencyWithPrecision(BTC, Decimal("0.000000"))
    assert btc_micros.with_micro_precision(cache) is btc_micros

    usdt = CurrencyWithPrecision(USDT)
    assert usdt.with_micro_precision(cache) is usdt
    assert usdt.with_default_precision(cache) is usdt


def test_precision_changes_use_process_wide_cache_by_default():
    PrecisionCache.clear()
    try:
        usd_micros = CurrencyWithPrecision(USD).with_micro_precision()
        assert usd_micros is PrecisionCache.get().micro_precision_of(USD)
    finally:
        PrecisionCache.clear()


# endregion

# region Serialization


def test_pickle_round_trip_drops_cached_string():
    usd_micros = CurrencyWithPrecision(USD, Decimal("0.000000"))
    assert str(usd_micros) == "USD:6"

    loaded = pickle.loads(pickle.dumps(usd_micros))

    assert loaded == usd_micros
    assert loaded._display_str is None
    assert str(loaded) == "USD:6"


def test_copy_and_deepcopy_keep_value():
    usd = CurrencyWithPrecision(USD)
    assert copy.copy(usd) == usd
    deep = copy.deepcopy(usd)
    assert deep == usd
    assert deep.currency == USD
    assert deep.decimals == 2


# endregion


# region Unsupported currency data


@pytest.mark.parametrize("digits", [19, 2.0])
def test_default_construction_rejects_unsupported_fraction_digits(cache, digits):
    currency = PlainCurrencyData("XYZ", digits)
    with pytest.raises(InvalidArgumentError, match="unsupported default fraction digits"):
        CurrencyWithPrecision(currency)
    with pytest.raises(InvalidArgumentError, match="unsupported default fraction digits"):
        cache.standard_precision_of(currency)
    assert len(cache.standard_table) == 0


def test_explicit_construction_ignores_unsupported_fraction_digits():
    # Only the default policy consults the currency's fraction digits
    currency = PlainCurrencyData("XYZ", 19)
    assert str(CurrencyWithPrecision(currency, Decimal("0.00"))) == "XYZ:2"


# endregion
