"""
Integer kernels for the Q64.64 sqrt-price curve.

Every function takes and returns plain ints and checks its inputs and results
against the settlement program's u64/u128/u256 widths. Rounding direction is
always an explicit argument.
"""

from .fixed_point import Rounding, check_u64, check_u128, check_u256, mul_div, pow_q64
from .sqrt_price_curve import (
    get_amount_a_from_liquidity_delta,
    get_amount_b_from_liquidity_delta,
    get_liquidity_delta_from_amount_a,
    get_liquidity_delta_from_amount_b,
    get_next_sqrt_price,
)

__all__ = [
    "Rounding",
    "check_u64",
    "check_u128",
    "check_u256",
    "mul_div",
    "pow_q64",
    "get_amount_a_from_liquidity_delta",
    "get_amount_b_from_liquidity_delta",
    "get_liquidity_delta_from_amount_a",
    "get_liquidity_delta_from_amount_b",
    "get_next_sqrt_price",
]
