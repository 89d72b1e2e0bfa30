"""
Sqrt-price curve kernel (concentrated constant product, Q64.64 prices).

    A -> B:  sqrtP' = ceil(L * sqrtP / (L + amount * sqrtP))     (price falls)
    B -> A:  sqrtP' = sqrtP + (amount << 128) / L                 (price rises)

    amount_a = L * (upper - lower) / (upper * lower)
    amount_b = L * (upper - lower) / 2**128

    L_from_a = amount_a * lower * upper / (upper - lower)
    L_from_b = (amount_b << 128) / (upper - lower)

All operations are exact integer arithmetic. Amounts are u64, prices and
liquidity are u128; results outside those widths raise ArithmeticOverflowError.
"""

from __future__ import annotations

from ...constants import LIQUIDITY_SCALE, SCALE_OFFSET
from ...errors import InvalidAmountError
from .fixed_point import Rounding, check_u64, check_u128, check_u256, div_round, shl_div


def _require_ordered(lower_sqrt_price: int, upper_sqrt_price: int) -> None:
    check_u128("lower_sqrt_price", lower_sqrt_price)
    check_u128("upper_sqrt_price", upper_sqrt_price)
    if lower_sqrt_price > upper_sqrt_price:
        raise ValueError(
            f"lower_sqrt_price must not exceed upper_sqrt_price: {lower_sqrt_price} > {upper_sqrt_price}"
        )


def get_next_sqrt_price(amount: int, sqrt_price: int, liquidity: int, a_to_b: bool) -> int:
    """Sqrt price after `amount` of input has been added to the pool."""
    check_u64("amount", amount)
    check_u128("sqrt_price", sqrt_price)
    check_u128("liquidity", liquidity)
    if liquidity == 0:
        raise InvalidAmountError("pool has no liquidity")

    if a_to_b:
        product = amount * sqrt_price
        denominator = check_u256("denominator", liquidity + product)
        numerator = check_u256("numerator", liquidity * sqrt_price)
        result = div_round(numerator, denominator, Rounding.UP)
    else:
        quotient = shl_div(amount, liquidity, SCALE_OFFSET * 2, Rounding.DOWN)
        result = sqrt_price + quotient

    return check_u128("next_sqrt_price", result)


def get_amount_a_from_liquidity_delta(
    liquidity: int,
    lower_sqrt_price: int,
    upper_sqrt_price: int,
    rounding: Rounding,
) -> int:
    """Token A backing `liquidity` between the two prices."""
    check_u128("liquidity", liquidity)
    _require_ordered(lower_sqrt_price, upper_sqrt_price)
    if lower_sqrt_price == upper_sqrt_price:
        return 0
    if lower_sqrt_price == 0:
        raise InvalidAmountError("lower_sqrt_price must be positive")

    # Q128.128 / Q128.128 -> token units
    product = check_u256("product", liquidity * (upper_sqrt_price - lower_sqrt_price))
    denominator = lower_sqrt_price * upper_sqrt_price
    return check_u64("amount_a", div_round(product, denominator, rounding))


def get_amount_b_from_liquidity_delta(
    liquidity: int,
    lower_sqrt_price: int,
    upper_sqrt_price: int,
    rounding: Rounding,
) -> int:
    """Token B backing `liquidity` between the two prices."""
    check_u128("liquidity", liquidity)
    _require_ordered(lower_sqrt_price, upper_sqrt_price)

    product = check_u256("product", liquidity * (upper_sqrt_price - lower_sqrt_price))
    return check_u64("amount_b", div_round(product, 1 << LIQUIDITY_SCALE, rounding))


def get_liquidity_delta_from_amount_a(amount_a: int, lower_sqrt_price: int, upper_sqrt_price: int) -> int:
    """Liquidity obtainable from `amount_a` of token A (rounded down)."""
    check_u64("amount_a", amount_a)
    _require_ordered(lower_sqrt_price, upper_sqrt_price)
    denominator = upper_sqrt_price - lower_sqrt_price
    if denominator == 0:
        raise InvalidAmountError("price range is empty")

    # u64 * Q64.64 * Q64.64 can exceed u256; the settlement program widens to u512 here.
    product = amount_a * lower_sqrt_price * upper_sqrt_price
    return check_u128("liquidity_delta", product // denominator)


def get_liquidity_delta_from_amount_b(amount_b: int, lower_sqrt_price: int, upper_sqrt_price: int) -> int:
    """Liquidity obtainable from `amount_b` of token B (rounded down)."""
    check_u64("amount_b", amount_b)
    _require_ordered(lower_sqrt_price, upper_sqrt_price)
    denominator = upper_sqrt_price - lower_sqrt_price
    if denominator == 0:
        raise InvalidAmountError("price range is empty")

    return check_u128("liquidity_delta", shl_div(amount_b, denominator, LIQUIDITY_SCALE, Rounding.DOWN))
