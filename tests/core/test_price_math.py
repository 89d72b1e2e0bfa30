from __future__ import annotations

from decimal import Decimal

import pytest

from cpamm_quote.constants import MAX_SQRT_PRICE, MIN_SQRT_PRICE, ONE_Q64
from cpamm_quote.core.price_math import (
    calculate_init_sqrt_price,
    decimal_to_q64,
    get_max_amount_with_slippage,
    get_min_amount_with_slippage,
    get_price_from_sqrt_price,
    get_price_impact,
    get_sqrt_price_from_price,
    q64_to_decimal,
)
from cpamm_quote.errors import ConfigurationError, InvalidAmountError


def test_q64_decimal_conversions() -> None:
    assert q64_to_decimal(ONE_Q64 * 3 // 2) == Decimal("1.5")
    assert q64_to_decimal(ONE_Q64 // 3, decimal_places=4) == Decimal("0.3333")
    assert decimal_to_q64(Decimal("0.25")) == ONE_Q64 // 4


def test_price_from_sqrt_price() -> None:
    assert get_price_from_sqrt_price(ONE_Q64, 6, 6) == 1
    assert get_price_from_sqrt_price(2 * ONE_Q64, 9, 6) == 4000


def test_sqrt_price_from_price() -> None:
    assert get_sqrt_price_from_price(1, 6, 6) == ONE_Q64
    assert get_sqrt_price_from_price("4", 0, 0) == 2 * ONE_Q64
    assert get_sqrt_price_from_price(Decimal("4000"), 9, 6) == 2 * ONE_Q64


def test_sqrt_price_from_negative_price_rejected() -> None:
    with pytest.raises(InvalidAmountError):
        get_sqrt_price_from_price(-1, 6, 6)


def test_price_impact_percent() -> None:
    assert get_price_impact(ONE_Q64, ONE_Q64) == 0
    assert get_price_impact(11, 10) == Decimal(21)
    assert get_price_impact(9, 10) == Decimal(19)


def test_slippage_bounds() -> None:
    assert get_min_amount_with_slippage(10_000, 50) == 9_950
    assert get_max_amount_with_slippage(10_000, 50) == 10_050
    assert get_min_amount_with_slippage(10_000, 0) == 10_000
    assert get_min_amount_with_slippage(999, 1) == 998
    with pytest.raises(ConfigurationError, match="slippage_bps"):
        get_min_amount_with_slippage(10_000, 10_001)


def test_init_sqrt_price_balanced_range() -> None:
    # pa = 1/2, pb = 2 and equal amounts solve to exactly s = 1
    assert calculate_init_sqrt_price(10**9, 10**9, ONE_Q64 // 2, 2 * ONE_Q64) == ONE_Q64


def test_init_sqrt_price_full_range_tracks_amount_ratio() -> None:
    s = calculate_init_sqrt_price(10**9, 4 * 10**9, MIN_SQRT_PRICE, MAX_SQRT_PRICE)
    assert abs(s - 2 * ONE_Q64) < ONE_Q64 // 1000


def test_init_sqrt_price_stays_in_range() -> None:
    s = calculate_init_sqrt_price(1, 10**18, ONE_Q64 // 2, 2 * ONE_Q64)
    assert ONE_Q64 // 2 <= s <= 2 * ONE_Q64


def test_init_sqrt_price_rejects_zero_amount() -> None:
    with pytest.raises(InvalidAmountError):
        calculate_init_sqrt_price(0, 1, ONE_Q64 // 2, 2 * ONE_Q64)
