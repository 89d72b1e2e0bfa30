"""
Immutable input snapshots for the quote engine.
"""

from .pools import (
    ActivationType,
    BaseFee,
    CollectFeeMode,
    DynamicFeeConfig,
    DynamicFeeState,
    FeeSchedulerMode,
    PoolFees,
    PoolSnapshot,
    TradeDirection,
)
from .positions import PositionSnapshot, RewardInfo
from .tokens import TokenInfo, TransferFee, TransferFeeConfig
from .vesting import VestingSchedule

__all__ = [
    "ActivationType",
    "BaseFee",
    "CollectFeeMode",
    "DynamicFeeConfig",
    "DynamicFeeState",
    "FeeSchedulerMode",
    "PoolFees",
    "PoolSnapshot",
    "TradeDirection",
    "PositionSnapshot",
    "RewardInfo",
    "TokenInfo",
    "TransferFee",
    "TransferFeeConfig",
    "VestingSchedule",
]
