"""
Fee model and quote engines
"""

from .dynamic_fee import get_dynamic_fee_numerator, get_dynamic_fee_params
from .fee_scheduler import (
    bps_to_fee_numerator,
    fee_numerator_to_bps,
    get_base_fee_numerator,
    get_base_fee_params,
    get_current_base_fee_numerator,
    get_fee_numerator,
)
from .fees import FeeMode, FeeOnAmountResult, get_fee_mode, get_total_fee_on_amount, split_trading_fee
from .liquidity_quote import (
    DepositQuote,
    PreparedPoolCreation,
    WithdrawQuote,
    get_deposit_quote,
    get_liquidity_delta,
    get_withdraw_quote,
    prepare_pool_creation_params,
    prepare_pool_creation_single_side,
)
from .positions import (
    UnclaimedReward,
    UnlockEligibility,
    can_unlock_position,
    get_unclaimed_reward,
    is_locked_position,
    is_permanent_locked_position,
)
from .price_math import (
    calculate_init_sqrt_price,
    get_max_amount_with_slippage,
    get_min_amount_with_slippage,
    get_price_from_sqrt_price,
    get_price_impact,
    get_sqrt_price_from_price,
)
from .swap_quote import SwapAmount, SwapQuote, get_swap_amount, get_swap_quote
from .transfer_fee import (
    TransferFeeAmount,
    calculate_transfer_fee_excluded_amount,
    calculate_transfer_fee_included_amount,
)
from .vesting import (
    VestingPhase,
    get_available_vesting_liquidity,
    get_max_unlocked_liquidity,
    get_total_locked_liquidity,
    get_vesting_phase,
    is_vesting_complete,
)

__all__ = [
    "get_dynamic_fee_numerator",
    "get_dynamic_fee_params",
    "bps_to_fee_numerator",
    "fee_numerator_to_bps",
    "get_base_fee_numerator",
    "get_base_fee_params",
    "get_current_base_fee_numerator",
    "get_fee_numerator",
    "FeeMode",
    "FeeOnAmountResult",
    "get_fee_mode",
    "get_total_fee_on_amount",
    "split_trading_fee",
    "DepositQuote",
    "PreparedPoolCreation",
    "WithdrawQuote",
    "get_deposit_quote",
    "get_liquidity_delta",
    "get_withdraw_quote",
    "prepare_pool_creation_params",
    "prepare_pool_creation_single_side",
    "UnclaimedReward",
    "UnlockEligibility",
    "can_unlock_position",
    "get_unclaimed_reward",
    "is_locked_position",
    "is_permanent_locked_position",
    "calculate_init_sqrt_price",
    "get_max_amount_with_slippage",
    "get_min_amount_with_slippage",
    "get_price_from_sqrt_price",
    "get_price_impact",
    "get_sqrt_price_from_price",
    "SwapAmount",
    "SwapQuote",
    "get_swap_amount",
    "get_swap_quote",
    "TransferFeeAmount",
    "calculate_transfer_fee_excluded_amount",
    "calculate_transfer_fee_included_amount",
    "VestingPhase",
    "get_available_vesting_liquidity",
    "get_max_unlocked_liquidity",
    "get_total_locked_liquidity",
    "get_vesting_phase",
    "is_vesting_complete",
]
