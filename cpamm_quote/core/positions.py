"""
Position lock checks and unclaimed fee accounting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..constants import LIQUIDITY_SCALE
from ..errors import ConfigurationError
from ..state.pools import PoolSnapshot
from ..state.positions import PositionSnapshot
from ..state.vesting import VestingSchedule
from .vesting import is_vesting_complete

PERMANENTLY_LOCKED_REASON = "Position is permanently locked"
INCOMPLETE_VESTING_REASON = "Position has incomplete vesting schedule"


@dataclass(frozen=True)
class UnlockEligibility:
    can_unlock: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class UnclaimedReward:
    fee_token_a: int
    fee_token_b: int
    rewards: Tuple[int, ...] = ()


def is_locked_position(position: PositionSnapshot) -> bool:
    return position.vested_liquidity + position.permanent_locked_liquidity > 0


def is_permanent_locked_position(position: PositionSnapshot) -> bool:
    return position.permanent_locked_liquidity > 0


def can_unlock_position(
    position: PositionSnapshot,
    vestings: Sequence[VestingSchedule],
    current_point: int,
) -> UnlockEligibility:
    """
    Whether every vesting attached to `position` has finished.

    Only positions with at least one vesting are checked; a position with no
    vestings can always be unlocked.
    """
    if vestings:
        if is_permanent_locked_position(position):
            return UnlockEligibility(can_unlock=False, reason=PERMANENTLY_LOCKED_REASON)
        for vesting in vestings:
            if not is_vesting_complete(vesting, current_point):
                return UnlockEligibility(can_unlock=False, reason=INCOMPLETE_VESTING_REASON)
    return UnlockEligibility(can_unlock=True)


def _accrued_fee(total_liquidity: int, fee_per_liquidity: int, checkpoint: int) -> int:
    if checkpoint > fee_per_liquidity:
        raise ConfigurationError(f"fee checkpoint {checkpoint} is ahead of the pool ({fee_per_liquidity})")
    return (total_liquidity * (fee_per_liquidity - checkpoint)) >> LIQUIDITY_SCALE


def get_unclaimed_reward(pool: PoolSnapshot, position: PositionSnapshot) -> UnclaimedReward:
    """Pending fees plus fees accrued since the position's last checkpoint."""
    total_liquidity = position.total_liquidity
    fee_a = _accrued_fee(total_liquidity, pool.fee_a_per_liquidity, position.fee_a_per_token_checkpoint)
    fee_b = _accrued_fee(total_liquidity, pool.fee_b_per_liquidity, position.fee_b_per_token_checkpoint)
    return UnclaimedReward(
        fee_token_a=position.fee_a_pending + fee_a,
        fee_token_b=position.fee_b_pending + fee_b,
        rewards=tuple(info.reward_pendings for info in position.reward_infos),
    )
