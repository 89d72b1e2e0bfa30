"""
Position snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..constants import U64_MAX, U256_MAX
from .pools import require_uint


@dataclass(frozen=True)
class RewardInfo:
    """Per-reward-slot accrual carried on a position."""

    reward_per_token_checkpoint: int = 0
    reward_pendings: int = 0
    total_claimed_rewards: int = 0

    def __post_init__(self) -> None:
        require_uint("reward_per_token_checkpoint", self.reward_per_token_checkpoint, U256_MAX)
        require_uint("reward_pendings", self.reward_pendings, U64_MAX)
        require_uint("total_claimed_rewards", self.total_claimed_rewards, U64_MAX)


@dataclass(frozen=True)
class PositionSnapshot:
    """Read-only view of a position account.

    Fee checkpoints are Q128 fee-per-liquidity values captured the last time
    the position's pending fees were settled.
    """

    unlocked_liquidity: int = 0
    vested_liquidity: int = 0
    permanent_locked_liquidity: int = 0
    fee_a_per_token_checkpoint: int = 0
    fee_b_per_token_checkpoint: int = 0
    fee_a_pending: int = 0
    fee_b_pending: int = 0
    reward_infos: Tuple[RewardInfo, ...] = ()

    def __post_init__(self) -> None:
        for name, v in (
            ("unlocked_liquidity", self.unlocked_liquidity),
            ("vested_liquidity", self.vested_liquidity),
            ("permanent_locked_liquidity", self.permanent_locked_liquidity),
            ("fee_a_pending", self.fee_a_pending),
            ("fee_b_pending", self.fee_b_pending),
        ):
            require_uint(name, v)
        require_uint("fee_a_per_token_checkpoint", self.fee_a_per_token_checkpoint, U256_MAX)
        require_uint("fee_b_per_token_checkpoint", self.fee_b_per_token_checkpoint, U256_MAX)
        if not isinstance(self.reward_infos, tuple):
            raise TypeError("reward_infos must be a tuple")
        for i, info in enumerate(self.reward_infos):
            if not isinstance(info, RewardInfo):
                raise TypeError(f"reward_infos[{i}] must be a RewardInfo")

    @property
    def total_liquidity(self) -> int:
        return self.unlocked_liquidity + self.vested_liquidity + self.permanent_locked_liquidity
