"""
Price conversions and display helpers.

`Decimal` is used here for convenience conversions (human-readable prices,
price impact, the pool-bootstrap quadratic). Results that feed settlement
amounts are floored back to integer Q64.64 before use.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, localcontext
from typing import Optional

from ..constants import BASIS_POINT_MAX, ONE_Q64
from ..errors import ConfigurationError, InvalidAmountError
from ..kernels.python.fixed_point import check_u64, check_u128, require_int, require_nonneg

# Working precision for Decimal conversions (Q64.64 squared needs ~77 digits).
DECIMAL_PRECISION = 80


def _floor_to_int(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def q64_to_decimal(num: int, decimal_places: Optional[int] = None) -> Decimal:
    require_nonneg("num", num)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        value = Decimal(num) / Decimal(ONE_Q64)
        if decimal_places is not None:
            value = value.quantize(Decimal(1).scaleb(-decimal_places))
    return value


def decimal_to_q64(num: Decimal) -> int:
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return _floor_to_int(Decimal(num) * Decimal(ONE_Q64))


def get_price_from_sqrt_price(sqrt_price: int, token_a_decimal: int, token_b_decimal: int) -> Decimal:
    """price = sqrt_price**2 * 10**(a_decimal - b_decimal) / 2**128"""
    check_u128("sqrt_price", sqrt_price)
    require_int("token_a_decimal", token_a_decimal)
    require_int("token_b_decimal", token_b_decimal)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        sqrt_price_dec = Decimal(sqrt_price)
        return (
            sqrt_price_dec
            * sqrt_price_dec
            * Decimal(10) ** (token_a_decimal - token_b_decimal)
            / Decimal(ONE_Q64 * ONE_Q64)
        )


def get_sqrt_price_from_price(price: Decimal | str | int, token_a_decimal: int, token_b_decimal: int) -> int:
    """sqrt(price / 10**(a_decimal - b_decimal)) * 2**64, floored."""
    require_int("token_a_decimal", token_a_decimal)
    require_int("token_b_decimal", token_b_decimal)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        price_dec = Decimal(price)
        if price_dec < 0:
            raise InvalidAmountError(f"price must be non-negative: {price}")
        adjusted = price_dec / Decimal(10) ** (token_a_decimal - token_b_decimal)
        return check_u128("sqrt_price", _floor_to_int(adjusted.sqrt() * Decimal(ONE_Q64)))


def get_price_impact(next_sqrt_price: int, current_sqrt_price: int) -> Decimal:
    """
    Price impact in percent (1.5 means 1.5%).

    Decimal scaling factors cancel, so only the squared sqrt prices matter:
        |next**2 - current**2| * 100 / current**2
    """
    check_u128("next_sqrt_price", next_sqrt_price)
    check_u128("current_sqrt_price", current_sqrt_price)
    if current_sqrt_price == 0:
        raise InvalidAmountError("current_sqrt_price must be positive")
    diff = abs(next_sqrt_price**2 - current_sqrt_price**2)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return Decimal(diff) / Decimal(current_sqrt_price**2) * 100


def _require_slippage_bps(slippage_bps: int) -> None:
    require_int("slippage_bps", slippage_bps)
    if not (0 <= slippage_bps <= BASIS_POINT_MAX):
        raise ConfigurationError(f"slippage_bps must be in [0, {BASIS_POINT_MAX}]: {slippage_bps}")


def get_min_amount_with_slippage(amount: int, slippage_bps: int) -> int:
    """Minimum acceptable output (floor; conservative for the taker)."""
    check_u64("amount", amount)
    _require_slippage_bps(slippage_bps)
    return (amount * (BASIS_POINT_MAX - slippage_bps)) // BASIS_POINT_MAX


def get_max_amount_with_slippage(amount: int, slippage_bps: int) -> int:
    """Maximum acceptable input (floor)."""
    check_u64("amount", amount)
    _require_slippage_bps(slippage_bps)
    return (amount * (BASIS_POINT_MAX + slippage_bps)) // BASIS_POINT_MAX


def calculate_init_sqrt_price(
    token_a_amount: int,
    token_b_amount: int,
    min_sqrt_price: int,
    max_sqrt_price: int,
) -> int:
    """
    Initial sqrt price at which both amounts are fully used.

        a = L * (1/s - 1/pb),  b = L * (s - pa)
        with x = 1/pb, y = b/a:  s**2 + s*(x*y - pa) - y = 0
        s = ((pa - x*y) + sqrt((x*y - pa)**2 + 4*y)) / 2

    The result is floored to Q64.64 and clamped into [min_sqrt_price, max_sqrt_price].
    """
    check_u64("token_a_amount", token_a_amount)
    check_u64("token_b_amount", token_b_amount)
    check_u128("min_sqrt_price", min_sqrt_price)
    check_u128("max_sqrt_price", max_sqrt_price)
    if token_a_amount == 0 or token_b_amount == 0:
        raise InvalidAmountError("token amounts must both be positive")
    if min_sqrt_price == 0 or min_sqrt_price >= max_sqrt_price:
        raise ConfigurationError(f"invalid sqrt price range: [{min_sqrt_price}, {max_sqrt_price}]")

    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        q64 = Decimal(ONE_Q64)
        pa = Decimal(min_sqrt_price) / q64
        pb = Decimal(max_sqrt_price) / q64

        x = 1 / pb
        y = Decimal(token_b_amount) / Decimal(token_a_amount)
        xy_minus_pa = x * y - pa

        discriminant = xy_minus_pa * xy_minus_pa + 4 * y
        root = (-xy_minus_pa + discriminant.sqrt()) / 2
        init_sqrt_price = _floor_to_int(root * q64)

    return min(max(init_sqrt_price, min_sqrt_price), max_sqrt_price)
