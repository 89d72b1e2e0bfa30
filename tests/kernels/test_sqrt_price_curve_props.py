"""Property tests for the sqrt-price curve: round trips through the curve never amplify."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from cpamm_quote.constants import ONE_Q64
from cpamm_quote.kernels.python import (
    Rounding,
    get_amount_a_from_liquidity_delta,
    get_amount_b_from_liquidity_delta,
    get_liquidity_delta_from_amount_a,
    get_liquidity_delta_from_amount_b,
)

_amounts = st.integers(min_value=1, max_value=10**9)
_uppers = st.integers(min_value=ONE_Q64 + (1 << 60), max_value=4 * ONE_Q64)


@settings(max_examples=200, deadline=None)
@given(amount=_amounts, upper=_uppers)
def test_amount_a_round_trip_never_amplifies(amount: int, upper: int) -> None:
    liquidity = get_liquidity_delta_from_amount_a(amount, ONE_Q64, upper)
    assert get_amount_a_from_liquidity_delta(liquidity, ONE_Q64, upper, Rounding.DOWN) <= amount


@settings(max_examples=200, deadline=None)
@given(amount=_amounts, upper=_uppers)
def test_amount_b_round_trip_never_amplifies(amount: int, upper: int) -> None:
    liquidity = get_liquidity_delta_from_amount_b(amount, ONE_Q64, upper)
    assert get_amount_b_from_liquidity_delta(liquidity, ONE_Q64, upper, Rounding.DOWN) <= amount


@settings(max_examples=200, deadline=None)
@given(liquidity=st.integers(min_value=0, max_value=1 << 100), upper=_uppers)
def test_round_up_is_at_most_one_above_round_down(liquidity: int, upper: int) -> None:
    down = get_amount_a_from_liquidity_delta(liquidity, ONE_Q64, upper, Rounding.DOWN)
    up = get_amount_a_from_liquidity_delta(liquidity, ONE_Q64, upper, Rounding.UP)
    assert down <= up <= down + 1


_liquidities = st.integers(min_value=0, max_value=1 << 100)
_lowers = st.integers(min_value=ONE_Q64 // 4, max_value=2 * ONE_Q64)
_widths = st.integers(min_value=1, max_value=2 * ONE_Q64)


@settings(max_examples=200, deadline=None)
@given(liquidity=_liquidities, lower=_lowers, width=_widths)
def test_liquidity_round_trip_through_amount_a_never_amplifies(liquidity: int, lower: int, width: int) -> None:
    upper = lower + width
    amount = get_amount_a_from_liquidity_delta(liquidity, lower, upper, Rounding.DOWN)
    assert get_liquidity_delta_from_amount_a(amount, lower, upper) <= liquidity


@settings(max_examples=200, deadline=None)
@given(liquidity=_liquidities, lower=_lowers, width=_widths)
def test_liquidity_round_trip_through_amount_b_never_amplifies(liquidity: int, lower: int, width: int) -> None:
    upper = lower + width
    amount = get_amount_b_from_liquidity_delta(liquidity, lower, upper, Rounding.DOWN)
    assert get_liquidity_delta_from_amount_b(amount, lower, upper) <= liquidity
