"""
Trading fee kernels (deterministic, integer-only).

The total trading fee is rounded UP in the pool's favour. It is then split
into LP, protocol, referral and partner shares with floor rounding; the LP
share absorbs every remainder, so the four parts always sum to the total.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import FEE_DENOMINATOR, MAX_FEE_NUMERATOR
from ..errors import ConfigurationError
from ..kernels.python.fixed_point import Rounding, check_u64, mul_div, require_nonneg
from ..state.pools import CollectFeeMode

PERCENT_DENOM = 100


@dataclass(frozen=True)
class FeeMode:
    """Which side of a swap pays the fee.

    `fee_on_input`: the fee is deducted from the input before the curve.
    `fees_on_token_a`: the fee is denominated in token A (output of a B->A swap).
    """

    fee_on_input: bool
    fees_on_token_a: bool


@dataclass(frozen=True)
class FeeOnAmountResult:
    amount: int
    lp_fee: int
    protocol_fee: int
    partner_fee: int
    referral_fee: int

    def __post_init__(self) -> None:
        for name, v in (
            ("amount", self.amount),
            ("lp_fee", self.lp_fee),
            ("protocol_fee", self.protocol_fee),
            ("partner_fee", self.partner_fee),
            ("referral_fee", self.referral_fee),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")

    @property
    def total_fee(self) -> int:
        return self.lp_fee + self.protocol_fee + self.partner_fee + self.referral_fee


def get_fee_mode(collect_fee_mode: CollectFeeMode, b_to_a: bool) -> FeeMode:
    """
    Fee is taken on the input only for B->A swaps in OnlyB pools, so those
    pools always collect fees in token B. Every other swap pays on output.
    """
    if not isinstance(collect_fee_mode, CollectFeeMode):
        raise TypeError("collect_fee_mode must be a CollectFeeMode")
    return FeeMode(
        fee_on_input=b_to_a and collect_fee_mode is CollectFeeMode.ONLY_B,
        fees_on_token_a=b_to_a and collect_fee_mode is CollectFeeMode.BOTH_TOKEN,
    )


def get_total_fee_on_amount(amount: int, trade_fee_numerator: int) -> int:
    """`ceil(amount * trade_fee_numerator / FEE_DENOMINATOR)`."""
    check_u64("amount", amount)
    require_nonneg("trade_fee_numerator", trade_fee_numerator)
    if trade_fee_numerator > MAX_FEE_NUMERATOR:
        raise ConfigurationError(f"trade_fee_numerator exceeds {MAX_FEE_NUMERATOR}: {trade_fee_numerator}")
    return mul_div(amount, trade_fee_numerator, FEE_DENOMINATOR, Rounding.UP)


def split_trading_fee(
    amount: int,
    trade_fee_numerator: int,
    protocol_fee_percent: int = 0,
    partner_fee_percent: int = 0,
    referral_fee_percent: int = 0,
    *,
    has_referral: bool = False,
    has_partner: bool = False,
) -> FeeOnAmountResult:
    """
    Deduct the trading fee from `amount` and split it.

        protocol = floor(total * protocol% / 100)
        referral = floor(protocol * referral% / 100)        (if has_referral)
        partner  = floor((protocol - referral) * partner% / 100)  (if has_partner)
        lp       = total - protocol

    `protocol_fee` in the result is what remains after referral and partner.
    """
    for name, v in (
        ("protocol_fee_percent", protocol_fee_percent),
        ("partner_fee_percent", partner_fee_percent),
        ("referral_fee_percent", referral_fee_percent),
    ):
        require_nonneg(name, v)
        if v > PERCENT_DENOM:
            raise ConfigurationError(f"{name} must be in [0, {PERCENT_DENOM}]: {v}")

    total_fee = get_total_fee_on_amount(amount, trade_fee_numerator)
    if total_fee > amount:
        raise AssertionError("trading fee exceeds amount")

    protocol_fee = mul_div(total_fee, protocol_fee_percent, PERCENT_DENOM, Rounding.DOWN)
    lp_fee = total_fee - protocol_fee

    referral_fee = mul_div(protocol_fee, referral_fee_percent, PERCENT_DENOM, Rounding.DOWN) if has_referral else 0
    protocol_fee_after_referral = protocol_fee - referral_fee

    partner_fee = (
        mul_div(protocol_fee_after_referral, partner_fee_percent, PERCENT_DENOM, Rounding.DOWN)
        if has_partner
        else 0
    )

    result = FeeOnAmountResult(
        amount=amount - total_fee,
        lp_fee=lp_fee,
        protocol_fee=protocol_fee_after_referral - partner_fee,
        partner_fee=partner_fee,
        referral_fee=referral_fee,
    )
    if result.total_fee != total_fee:
        raise AssertionError("fee split does not sum to the total fee")
    return result
