# [TESTER] v1

from __future__ import annotations

import pytest

from cpamm_quote.constants import ONE_Q64, U64_MAX, U128_MAX, U256_MAX
from cpamm_quote.errors import ArithmeticOverflowError, CpAmmQuoteError
from cpamm_quote.kernels.python.fixed_point import (
    Rounding,
    check_u64,
    check_u128,
    check_u256,
    div_round,
    mul_div,
    mul_shr,
    pow_q64,
    shl_div,
)


def test_mul_div_rounds_per_mode() -> None:
    assert mul_div(7, 3, 2, Rounding.DOWN) == 10
    assert mul_div(7, 3, 2, Rounding.UP) == 11


def test_mul_div_exact_quotient_is_rounding_independent() -> None:
    assert mul_div(6, 4, 3, Rounding.UP) == 8
    assert mul_div(6, 4, 3, Rounding.DOWN) == 8


def test_mul_div_rejects_zero_denominator() -> None:
    with pytest.raises(ArithmeticOverflowError):
        mul_div(1, 1, 0, Rounding.DOWN)


def test_mul_div_rejects_product_wider_than_u256() -> None:
    with pytest.raises(ArithmeticOverflowError, match="u256"):
        mul_div(U256_MAX, 2, 3, Rounding.DOWN)


def test_mul_div_rejects_negative_and_bool() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        mul_div(-1, 1, 1, Rounding.DOWN)
    with pytest.raises(TypeError):
        mul_div(True, 1, 1, Rounding.DOWN)  # type: ignore[arg-type]


def test_div_round_up_adds_one_only_on_remainder() -> None:
    assert div_round(10, 5, Rounding.UP) == 2
    assert div_round(11, 5, Rounding.UP) == 3
    assert div_round(11, 5, Rounding.DOWN) == 2


def test_width_checks_accept_bounds_and_reject_overflow() -> None:
    assert check_u64("x", U64_MAX) == U64_MAX
    assert check_u128("x", U128_MAX) == U128_MAX
    assert check_u256("x", U256_MAX) == U256_MAX
    with pytest.raises(ArithmeticOverflowError, match="u64"):
        check_u64("x", U64_MAX + 1)
    with pytest.raises(ArithmeticOverflowError, match="u128"):
        check_u128("x", U128_MAX + 1)
    with pytest.raises(ArithmeticOverflowError):
        check_u64("x", -1)


def test_overflow_error_is_a_value_error() -> None:
    assert issubclass(ArithmeticOverflowError, CpAmmQuoteError)
    assert issubclass(ArithmeticOverflowError, ValueError)


def test_mul_shr_and_shl_div() -> None:
    assert mul_shr(3 * ONE_Q64, ONE_Q64 // 2, 64) == 3 * ONE_Q64 // 2
    assert shl_div(1, 3, 64, Rounding.DOWN) == ONE_Q64 // 3
    assert shl_div(1, 3, 64, Rounding.UP) == ONE_Q64 // 3 + 1


def test_pow_q64_zero_exponent_is_one() -> None:
    assert pow_q64(ONE_Q64 // 3, 0) == ONE_Q64


def test_pow_q64_of_half() -> None:
    half = ONE_Q64 // 2
    assert pow_q64(half, 1) == half
    assert pow_q64(half, 2) == ONE_Q64 // 4
    assert pow_q64(half, 10) == ONE_Q64 >> 10


def test_pow_q64_is_monotone_decreasing_below_one() -> None:
    base = ONE_Q64 - ONE_Q64 // 100
    values = [pow_q64(base, n) for n in range(0, 50, 5)]
    assert values == sorted(values, reverse=True)


def test_pow_q64_rejects_huge_exponent() -> None:
    with pytest.raises(ArithmeticOverflowError, match="exponent"):
        pow_q64(ONE_Q64 // 2, 0x80000)


def test_pow_q64_underflow_raises() -> None:
    with pytest.raises(ArithmeticOverflowError, match="zero"):
        pow_q64(ONE_Q64 // 2, 200)
