from __future__ import annotations

import pytest

from cpamm_quote.constants import ONE_Q64
from cpamm_quote.errors import ArithmeticOverflowError, InvalidAmountError
from cpamm_quote.kernels.python import (
    Rounding,
    get_amount_a_from_liquidity_delta,
    get_amount_b_from_liquidity_delta,
    get_liquidity_delta_from_amount_a,
    get_liquidity_delta_from_amount_b,
    get_next_sqrt_price,
)


def test_next_sqrt_price_a_to_b_falls() -> None:
    # L == sqrtP in raw units: adding one unit of A halves the sqrt price.
    assert get_next_sqrt_price(1, ONE_Q64, ONE_Q64, a_to_b=True) == ONE_Q64 // 2


def test_next_sqrt_price_a_to_b_rounds_up() -> None:
    nxt = get_next_sqrt_price(1, ONE_Q64, 3 * ONE_Q64, a_to_b=True)
    # exact value is 3/4 * sqrtP
    assert nxt == 3 * ONE_Q64 // 4
    nxt = get_next_sqrt_price(1, ONE_Q64 + 1, ONE_Q64, a_to_b=True)
    assert nxt * (ONE_Q64 + (ONE_Q64 + 1)) >= ONE_Q64 * (ONE_Q64 + 1)


def test_next_sqrt_price_b_to_a_rises() -> None:
    liquidity = 1 << 70
    assert get_next_sqrt_price(1000, ONE_Q64, liquidity, a_to_b=False) == ONE_Q64 + (1000 << 58)


def test_shifted_divisions_round_down() -> None:
    assert get_next_sqrt_price(1, ONE_Q64, 3, a_to_b=False) == ONE_Q64 + (1 << 128) // 3
    assert get_liquidity_delta_from_amount_b(1, ONE_Q64, ONE_Q64 + 3) == (1 << 128) // 3


def test_next_sqrt_price_zero_amount_is_identity() -> None:
    assert get_next_sqrt_price(0, ONE_Q64, 1 << 80, a_to_b=False) == ONE_Q64
    assert get_next_sqrt_price(0, ONE_Q64, 1 << 80, a_to_b=True) == ONE_Q64


def test_next_sqrt_price_rejects_zero_liquidity() -> None:
    with pytest.raises(InvalidAmountError, match="liquidity"):
        get_next_sqrt_price(1, ONE_Q64, 0, a_to_b=True)


def test_next_sqrt_price_rejects_amount_wider_than_u64() -> None:
    with pytest.raises(ArithmeticOverflowError):
        get_next_sqrt_price(1 << 64, ONE_Q64, 1 << 80, a_to_b=True)


def test_amounts_from_liquidity_exact() -> None:
    liquidity = 1 << 100
    assert get_amount_a_from_liquidity_delta(liquidity, ONE_Q64, 2 * ONE_Q64, Rounding.DOWN) == 1 << 35
    assert get_amount_b_from_liquidity_delta(liquidity, ONE_Q64, 2 * ONE_Q64, Rounding.DOWN) == 1 << 36


def test_liquidity_from_amounts_exact() -> None:
    assert get_liquidity_delta_from_amount_a(1 << 35, ONE_Q64, 2 * ONE_Q64) == 1 << 100
    assert get_liquidity_delta_from_amount_b(1 << 36, ONE_Q64, 2 * ONE_Q64) == 1 << 100


def test_amount_rounding_direction() -> None:
    assert get_amount_b_from_liquidity_delta(3, ONE_Q64, ONE_Q64 + 1, Rounding.DOWN) == 0
    assert get_amount_b_from_liquidity_delta(3, ONE_Q64, ONE_Q64 + 1, Rounding.UP) == 1


def test_empty_range() -> None:
    assert get_amount_a_from_liquidity_delta(1 << 100, ONE_Q64, ONE_Q64, Rounding.UP) == 0
    assert get_amount_b_from_liquidity_delta(1 << 100, ONE_Q64, ONE_Q64, Rounding.UP) == 0
    with pytest.raises(InvalidAmountError, match="empty"):
        get_liquidity_delta_from_amount_a(1, ONE_Q64, ONE_Q64)
    with pytest.raises(InvalidAmountError, match="empty"):
        get_liquidity_delta_from_amount_b(1, ONE_Q64, ONE_Q64)


def test_unordered_range_rejected() -> None:
    with pytest.raises(ValueError, match="lower_sqrt_price"):
        get_amount_a_from_liquidity_delta(1, 2 * ONE_Q64, ONE_Q64, Rounding.DOWN)


def test_amount_wider_than_u64_rejected() -> None:
    with pytest.raises(ArithmeticOverflowError, match="amount_b"):
        get_amount_b_from_liquidity_delta(1 << 127, ONE_Q64, 4 * ONE_Q64, Rounding.DOWN)
