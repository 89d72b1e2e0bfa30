"""
Transfer-fee (fee-on-transfer mint) adjustments.

A mint with the transfer-fee extension withholds

    fee = min(ceil(amount * bps / 10_000), maximum_fee)

from every transfer. Quotes exclude that fee from amounts flowing into the
pool (the pool only receives the net) and from amounts flowing out (the user
only receives the net), and include it when the caller must send enough for
the pool to receive a given net amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..constants import MAX_FEE_BASIS_POINTS
from ..kernels.python.fixed_point import Rounding, check_u64, div_round
from ..state.tokens import TokenInfo, TransferFee, TransferFeeConfig


@dataclass(frozen=True)
class TransferFeeAmount:
    amount: int
    transfer_fee: int


def get_epoch_fee(config: TransferFeeConfig, epoch: int) -> TransferFee:
    if epoch >= config.newer_transfer_fee.epoch:
        return config.newer_transfer_fee
    return config.older_transfer_fee


def calculate_fee(transfer_fee: TransferFee, pre_fee_amount: int) -> int:
    check_u64("pre_fee_amount", pre_fee_amount)
    bps = transfer_fee.transfer_fee_basis_points
    if bps == 0 or pre_fee_amount == 0:
        return 0
    raw_fee = div_round(pre_fee_amount * bps, MAX_FEE_BASIS_POINTS, Rounding.UP)
    return min(raw_fee, transfer_fee.maximum_fee)


def calculate_pre_fee_amount(transfer_fee: TransferFee, post_fee_amount: int) -> int:
    """Smallest gross amount that nets `post_fee_amount` after the transfer fee."""
    check_u64("post_fee_amount", post_fee_amount)
    bps = transfer_fee.transfer_fee_basis_points
    if post_fee_amount == 0:
        return 0
    if bps == 0:
        return post_fee_amount
    if bps == MAX_FEE_BASIS_POINTS:
        return check_u64("pre_fee_amount", post_fee_amount + transfer_fee.maximum_fee)

    denominator = MAX_FEE_BASIS_POINTS - bps
    raw_pre_fee_amount = div_round(post_fee_amount * MAX_FEE_BASIS_POINTS, denominator, Rounding.UP)
    if raw_pre_fee_amount - post_fee_amount >= transfer_fee.maximum_fee:
        return check_u64("pre_fee_amount", post_fee_amount + transfer_fee.maximum_fee)
    return check_u64("pre_fee_amount", raw_pre_fee_amount)


def calculate_inverse_fee(transfer_fee: TransferFee, post_fee_amount: int) -> int:
    return calculate_fee(transfer_fee, calculate_pre_fee_amount(transfer_fee, post_fee_amount))


def calculate_transfer_fee_included_amount(
    transfer_fee_excluded_amount: int,
    token_info: Optional[TokenInfo],
) -> TransferFeeAmount:
    """Gross amount to send so that `transfer_fee_excluded_amount` arrives."""
    check_u64("transfer_fee_excluded_amount", transfer_fee_excluded_amount)
    if transfer_fee_excluded_amount == 0:
        return TransferFeeAmount(amount=0, transfer_fee=0)
    if token_info is None or token_info.transfer_fee_config is None:
        return TransferFeeAmount(amount=transfer_fee_excluded_amount, transfer_fee=0)

    epoch_fee = get_epoch_fee(token_info.transfer_fee_config, token_info.current_epoch)
    if epoch_fee.transfer_fee_basis_points == MAX_FEE_BASIS_POINTS:
        transfer_fee = epoch_fee.maximum_fee
    else:
        transfer_fee = calculate_inverse_fee(epoch_fee, transfer_fee_excluded_amount)

    return TransferFeeAmount(
        amount=check_u64("transfer_fee_included_amount", transfer_fee_excluded_amount + transfer_fee),
        transfer_fee=transfer_fee,
    )


def calculate_transfer_fee_excluded_amount(
    transfer_fee_included_amount: int,
    token_info: Optional[TokenInfo],
) -> TransferFeeAmount:
    """Net amount that arrives when `transfer_fee_included_amount` is sent."""
    check_u64("transfer_fee_included_amount", transfer_fee_included_amount)
    if token_info is None or token_info.transfer_fee_config is None:
        return TransferFeeAmount(amount=transfer_fee_included_amount, transfer_fee=0)

    epoch_fee = get_epoch_fee(token_info.transfer_fee_config, token_info.current_epoch)
    transfer_fee = calculate_fee(epoch_fee, transfer_fee_included_amount)
    return TransferFeeAmount(
        amount=transfer_fee_included_amount - transfer_fee,
        transfer_fee=transfer_fee,
    )
