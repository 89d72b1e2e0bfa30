"""
Deposit, withdraw and pool-bootstrap quotes.

Rounding follows the pool's side of every transfer:
- liquidity minted from an amount is rounded DOWN,
- the paired amount a depositor must add is rounded UP,
- amounts paid out on withdraw are rounded DOWN.

Within a pool [pa, pb] at price s, token A backs the range [s, pb] and token B
backs [pa, s].
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import ConfigurationError, InvalidAmountError, InvalidSingleSidedBootstrapError
from ..kernels.python.fixed_point import Rounding, check_u128, require_amount
from ..kernels.python.sqrt_price_curve import (
    get_amount_a_from_liquidity_delta,
    get_amount_b_from_liquidity_delta,
    get_liquidity_delta_from_amount_a,
    get_liquidity_delta_from_amount_b,
)
from ..state.tokens import TokenInfo
from .price_math import calculate_init_sqrt_price
from .transfer_fee import calculate_transfer_fee_excluded_amount, calculate_transfer_fee_included_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepositQuote:
    # net of the input mint's transfer fee
    actual_input_amount: int
    consumed_input_amount: int
    liquidity_delta: int
    # paired token, transfer fee included
    output_amount: int


@dataclass(frozen=True)
class WithdrawQuote:
    liquidity_delta: int
    out_amount_a: int
    out_amount_b: int


@dataclass(frozen=True)
class PreparedPoolCreation:
    init_sqrt_price: int
    liquidity_delta: int


def _require_price_range(sqrt_price: int, min_sqrt_price: int, max_sqrt_price: int) -> None:
    check_u128("sqrt_price", sqrt_price)
    check_u128("min_sqrt_price", min_sqrt_price)
    check_u128("max_sqrt_price", max_sqrt_price)
    if min_sqrt_price >= max_sqrt_price:
        raise ConfigurationError(f"invalid sqrt price range: [{min_sqrt_price}, {max_sqrt_price}]")
    if not (min_sqrt_price <= sqrt_price <= max_sqrt_price):
        raise ConfigurationError(f"sqrt_price {sqrt_price} outside [{min_sqrt_price}, {max_sqrt_price}]")


def _net_of_transfer_fee(amount: int, token_info: Optional[TokenInfo]) -> int:
    # Deposits pay the fee on top: the pool is credited amount - fee(gross(amount)).
    return amount - calculate_transfer_fee_included_amount(amount, token_info).transfer_fee


def get_liquidity_delta(
    max_amount_a: int,
    max_amount_b: int,
    sqrt_price: int,
    sqrt_min_price: int,
    sqrt_max_price: int,
    token_a_info: Optional[TokenInfo] = None,
    token_b_info: Optional[TokenInfo] = None,
) -> int:
    """
    Largest liquidity both budgets can back at `sqrt_price`.

    At a range bound one side backs nothing, so only the other budget binds.
    """
    require_amount("max_amount_a", max_amount_a)
    require_amount("max_amount_b", max_amount_b)
    _require_price_range(sqrt_price, sqrt_min_price, sqrt_max_price)
    amount_a = _net_of_transfer_fee(max_amount_a, token_a_info)
    amount_b = _net_of_transfer_fee(max_amount_b, token_b_info)

    if sqrt_price == sqrt_max_price:
        return get_liquidity_delta_from_amount_b(amount_b, sqrt_min_price, sqrt_price)
    if sqrt_price == sqrt_min_price:
        return get_liquidity_delta_from_amount_a(amount_a, sqrt_price, sqrt_max_price)

    liquidity_from_a = get_liquidity_delta_from_amount_a(amount_a, sqrt_price, sqrt_max_price)
    liquidity_from_b = get_liquidity_delta_from_amount_b(amount_b, sqrt_min_price, sqrt_price)
    return min(liquidity_from_a, liquidity_from_b)


def get_deposit_quote(
    in_amount: int,
    is_token_a: bool,
    sqrt_price: int,
    min_sqrt_price: int,
    max_sqrt_price: int,
    input_token_info: Optional[TokenInfo] = None,
    output_token_info: Optional[TokenInfo] = None,
) -> DepositQuote:
    """
    One-sided deposit quote: liquidity from `in_amount` and the paired amount
    of the other token needed to back it.
    """
    require_amount("in_amount", in_amount)
    if in_amount == 0:
        raise InvalidAmountError("in_amount must be positive")
    _require_price_range(sqrt_price, min_sqrt_price, max_sqrt_price)

    actual_input_amount = calculate_transfer_fee_excluded_amount(in_amount, input_token_info).amount

    if is_token_a:
        liquidity_delta = get_liquidity_delta_from_amount_a(actual_input_amount, sqrt_price, max_sqrt_price)
        raw_output_amount = get_amount_b_from_liquidity_delta(
            liquidity_delta, min_sqrt_price, sqrt_price, Rounding.UP
        )
    else:
        liquidity_delta = get_liquidity_delta_from_amount_b(actual_input_amount, min_sqrt_price, sqrt_price)
        raw_output_amount = get_amount_a_from_liquidity_delta(
            liquidity_delta, sqrt_price, max_sqrt_price, Rounding.UP
        )

    output_amount = calculate_transfer_fee_included_amount(raw_output_amount, output_token_info).amount
    logger.debug(
        "deposit quote is_token_a=%s in=%d actual=%d liquidity_delta=%d paired=%d",
        is_token_a,
        in_amount,
        actual_input_amount,
        liquidity_delta,
        output_amount,
    )
    return DepositQuote(
        actual_input_amount=actual_input_amount,
        consumed_input_amount=in_amount,
        liquidity_delta=liquidity_delta,
        output_amount=output_amount,
    )


def get_withdraw_quote(
    liquidity_delta: int,
    sqrt_price: int,
    min_sqrt_price: int,
    max_sqrt_price: int,
    token_a_info: Optional[TokenInfo] = None,
    token_b_info: Optional[TokenInfo] = None,
) -> WithdrawQuote:
    """Token amounts the user receives for burning `liquidity_delta`."""
    check_u128("liquidity_delta", liquidity_delta)
    _require_price_range(sqrt_price, min_sqrt_price, max_sqrt_price)

    amount_a = get_amount_a_from_liquidity_delta(liquidity_delta, sqrt_price, max_sqrt_price, Rounding.DOWN)
    amount_b = get_amount_b_from_liquidity_delta(liquidity_delta, min_sqrt_price, sqrt_price, Rounding.DOWN)

    quote = WithdrawQuote(
        liquidity_delta=liquidity_delta,
        out_amount_a=calculate_transfer_fee_excluded_amount(amount_a, token_a_info).amount,
        out_amount_b=calculate_transfer_fee_excluded_amount(amount_b, token_b_info).amount,
    )
    logger.debug(
        "withdraw quote liquidity_delta=%d out_a=%d out_b=%d",
        liquidity_delta,
        quote.out_amount_a,
        quote.out_amount_b,
    )
    return quote


def prepare_pool_creation_single_side(
    token_a_amount: int,
    init_sqrt_price: int,
    min_sqrt_price: int,
    max_sqrt_price: int,
    token_a_info: Optional[TokenInfo] = None,
) -> int:
    """Liquidity for a pool seeded with token A only, opened at its minimum price."""
    require_amount("token_a_amount", token_a_amount)
    if init_sqrt_price != min_sqrt_price:
        raise InvalidSingleSidedBootstrapError(
            f"single-sided bootstrap requires init_sqrt_price == min_sqrt_price: "
            f"{init_sqrt_price} != {min_sqrt_price}"
        )
    if token_a_amount == 0:
        raise InvalidAmountError("token_a_amount must be positive")
    _require_price_range(init_sqrt_price, min_sqrt_price, max_sqrt_price)

    actual_amount_a = _net_of_transfer_fee(token_a_amount, token_a_info)
    return get_liquidity_delta_from_amount_a(actual_amount_a, init_sqrt_price, max_sqrt_price)


def prepare_pool_creation_params(
    token_a_amount: int,
    token_b_amount: int,
    min_sqrt_price: int,
    max_sqrt_price: int,
    token_a_info: Optional[TokenInfo] = None,
    token_b_info: Optional[TokenInfo] = None,
) -> PreparedPoolCreation:
    """
    Initial sqrt price and liquidity for a new pool seeded with both amounts.

    The initial price is solved from the raw amounts; the liquidity is the
    smaller of the two one-sided deltas after transfer fees.
    """
    require_amount("token_a_amount", token_a_amount)
    require_amount("token_b_amount", token_b_amount)
    if token_a_amount == 0 and token_b_amount == 0:
        raise InvalidAmountError("token_a_amount and token_b_amount are both zero")
    if token_a_amount == 0:
        raise InvalidSingleSidedBootstrapError("single-sided bootstrap is only supported with token A")
    if token_b_amount == 0:
        liquidity_delta = prepare_pool_creation_single_side(
            token_a_amount, min_sqrt_price, min_sqrt_price, max_sqrt_price, token_a_info
        )
        return PreparedPoolCreation(init_sqrt_price=min_sqrt_price, liquidity_delta=liquidity_delta)

    init_sqrt_price = calculate_init_sqrt_price(token_a_amount, token_b_amount, min_sqrt_price, max_sqrt_price)

    liquidity_delta = get_liquidity_delta(
        token_a_amount,
        token_b_amount,
        init_sqrt_price,
        min_sqrt_price,
        max_sqrt_price,
        token_a_info,
        token_b_info,
    )
    logger.debug(
        "pool creation a=%d b=%d init_sqrt_price=%d liquidity_delta=%d",
        token_a_amount,
        token_b_amount,
        init_sqrt_price,
        liquidity_delta,
    )
    return PreparedPoolCreation(init_sqrt_price=init_sqrt_price, liquidity_delta=liquidity_delta)
