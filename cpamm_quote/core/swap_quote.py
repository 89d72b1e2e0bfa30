"""
Exact-in swap quote over a concentrated constant-product pool.

Pipeline (all integer, no mutation of the snapshot):
- exclude the input mint's transfer fee (the pool only receives the net),
- trade fee numerator = scheduled base fee + dynamic fee, capped,
- fee on input (OnlyB pools, B->A) or on the curve output (everything else),
- next sqrt price must stay within the pool's [sqrt_min_price, sqrt_max_price],
- exclude the output mint's transfer fee (the user only receives the net),
- slippage floor and price impact for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..errors import InvalidAmountError, PriceRangeViolationError
from ..kernels.python.fixed_point import Rounding, check_u128, require_amount
from ..kernels.python.sqrt_price_curve import (
    get_amount_a_from_liquidity_delta,
    get_amount_b_from_liquidity_delta,
    get_next_sqrt_price,
)
from ..state.pools import CollectFeeMode, PoolSnapshot, TradeDirection
from ..state.tokens import TokenInfo
from .fee_scheduler import get_fee_numerator
from .fees import FeeOnAmountResult, get_fee_mode, split_trading_fee
from .price_math import get_min_amount_with_slippage, get_price_impact
from .transfer_fee import calculate_transfer_fee_excluded_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapAmount:
    amount_out: int
    total_fee: int
    next_sqrt_price: int
    fee_breakdown: FeeOnAmountResult


@dataclass(frozen=True)
class SwapQuote:
    swap_in_amount: int
    consumed_in_amount: int
    swap_out_amount: int
    min_swap_out_amount: int
    total_fee: int
    fee_breakdown: FeeOnAmountResult
    next_sqrt_price: int
    # percent, e.g. Decimal("0.25") for 0.25%
    price_impact: Decimal
    trade_direction: TradeDirection


def get_swap_amount(
    in_amount: int,
    sqrt_price: int,
    liquidity: int,
    trade_fee_numerator: int,
    a_to_b: bool,
    collect_fee_mode: CollectFeeMode,
    protocol_fee_percent: int = 0,
    partner_fee_percent: int = 0,
    referral_fee_percent: int = 0,
    *,
    has_referral: bool = False,
    has_partner: bool = False,
) -> SwapAmount:
    """
    Curve step plus trading fee for `in_amount` that has already reached the pool.

    When the fee is taken on input it is deducted before the curve; otherwise
    the curve output is rounded down and the fee is deducted from it.
    """
    require_amount("in_amount", in_amount)
    check_u128("sqrt_price", sqrt_price)
    check_u128("liquidity", liquidity)
    fee_mode = get_fee_mode(collect_fee_mode, not a_to_b)

    def split(amount: int) -> FeeOnAmountResult:
        return split_trading_fee(
            amount,
            trade_fee_numerator,
            protocol_fee_percent,
            partner_fee_percent,
            referral_fee_percent,
            has_referral=has_referral,
            has_partner=has_partner,
        )

    actual_in_amount = in_amount
    fee_breakdown: Optional[FeeOnAmountResult] = None
    if fee_mode.fee_on_input:
        fee_breakdown = split(in_amount)
        actual_in_amount = fee_breakdown.amount

    next_sqrt_price = get_next_sqrt_price(actual_in_amount, sqrt_price, liquidity, a_to_b)
    if a_to_b:
        out_amount = get_amount_b_from_liquidity_delta(liquidity, next_sqrt_price, sqrt_price, Rounding.DOWN)
    else:
        out_amount = get_amount_a_from_liquidity_delta(liquidity, sqrt_price, next_sqrt_price, Rounding.DOWN)

    if fee_breakdown is None:
        fee_breakdown = split(out_amount)
        amount_out = fee_breakdown.amount
    else:
        amount_out = out_amount

    return SwapAmount(
        amount_out=amount_out,
        total_fee=fee_breakdown.total_fee,
        next_sqrt_price=next_sqrt_price,
        fee_breakdown=fee_breakdown,
    )


def get_swap_quote(
    in_amount: int,
    a_to_b: bool,
    pool: PoolSnapshot,
    slippage_bps: int,
    current_point: int,
    input_token_info: Optional[TokenInfo] = None,
    output_token_info: Optional[TokenInfo] = None,
    has_referral: bool = False,
) -> SwapQuote:
    """
    Quote an exact-in swap against `pool`.

    `current_point` is a slot or a unix timestamp, matching `pool.activation_type`.

    Raises:
        InvalidAmountError: `in_amount` is zero, nets to zero after the transfer
            fee, or the pool has no liquidity.
        PriceRangeViolationError: the swap would push the price past a pool bound.
    """
    require_amount("in_amount", in_amount)
    if in_amount == 0:
        raise InvalidAmountError("in_amount must be positive")

    consumed_in_amount = calculate_transfer_fee_excluded_amount(in_amount, input_token_info).amount
    if consumed_in_amount == 0:
        raise InvalidAmountError("in_amount is fully consumed by the transfer fee")

    base_fee = pool.base_fee
    trade_fee_numerator = get_fee_numerator(
        current_point,
        pool.activation_point,
        base_fee.number_of_period,
        base_fee.period_frequency,
        base_fee.fee_scheduler_mode,
        base_fee.cliff_fee_numerator,
        base_fee.reduction_factor,
        pool.dynamic_fee,
    )

    swap = get_swap_amount(
        consumed_in_amount,
        pool.sqrt_price,
        pool.liquidity,
        trade_fee_numerator,
        a_to_b,
        pool.collect_fee_mode,
        pool.protocol_fee_percent,
        pool.partner_fee_percent,
        pool.referral_fee_percent,
        has_referral=has_referral,
        has_partner=pool.has_partner,
    )

    if not (pool.sqrt_min_price <= swap.next_sqrt_price <= pool.sqrt_max_price):
        raise PriceRangeViolationError(swap.next_sqrt_price, pool.sqrt_min_price, pool.sqrt_max_price)

    swap_out_amount = calculate_transfer_fee_excluded_amount(swap.amount_out, output_token_info).amount

    quote = SwapQuote(
        swap_in_amount=in_amount,
        consumed_in_amount=consumed_in_amount,
        swap_out_amount=swap_out_amount,
        min_swap_out_amount=get_min_amount_with_slippage(swap_out_amount, slippage_bps),
        total_fee=swap.total_fee,
        fee_breakdown=swap.fee_breakdown,
        next_sqrt_price=swap.next_sqrt_price,
        price_impact=get_price_impact(swap.next_sqrt_price, pool.sqrt_price),
        trade_direction=TradeDirection.A_TO_B if a_to_b else TradeDirection.B_TO_A,
    )
    logger.debug(
        "swap quote a_to_b=%s in=%d consumed=%d out=%d fee_numerator=%d total_fee=%d next_sqrt_price=%d",
        a_to_b,
        in_amount,
        consumed_in_amount,
        swap_out_amount,
        trade_fee_numerator,
        quote.total_fee,
        quote.next_sqrt_price,
    )
    return quote
