"""
Vesting release calculator.

A schedule unlocks `cliff_unlock_liquidity` at `cliff_point`, then
`liquidity_per_period` at every `period_frequency` boundary for
`number_of_period` periods:

    LOCKED          current < cliff_point
    CLIFF_RELEASED  cliff reached, no full period elapsed yet
    PERIODIC        at least one period elapsed, schedule not finished
    COMPLETE        current >= cliff_point + period_frequency * number_of_period

A schedule with `period_frequency == 0` (or no periods) is a pure cliff: it
goes straight from LOCKED to COMPLETE.
"""

from __future__ import annotations

from enum import Enum, unique

from ..kernels.python.fixed_point import require_nonneg
from ..state.vesting import VestingSchedule


@unique
class VestingPhase(Enum):
    LOCKED = "locked"
    CLIFF_RELEASED = "cliff_released"
    PERIODIC = "periodic"
    COMPLETE = "complete"


def get_total_locked_liquidity(schedule: VestingSchedule) -> int:
    return schedule.total_locked_liquidity


def _elapsed_periods(schedule: VestingSchedule, current_point: int) -> int:
    if schedule.period_frequency == 0:
        return schedule.number_of_period
    passed = (current_point - schedule.cliff_point) // schedule.period_frequency
    return min(passed, schedule.number_of_period)


def get_max_unlocked_liquidity(schedule: VestingSchedule, current_point: int) -> int:
    """Liquidity unlocked by `current_point`, ignoring what was already released."""
    require_nonneg("current_point", current_point)
    if current_point < schedule.cliff_point:
        return 0
    if schedule.period_frequency == 0:
        return schedule.cliff_unlock_liquidity
    return (
        schedule.cliff_unlock_liquidity
        + _elapsed_periods(schedule, current_point) * schedule.liquidity_per_period
    )


def get_available_vesting_liquidity(schedule: VestingSchedule, current_point: int) -> int:
    """Liquidity that can be released now (unlocked minus already released)."""
    unlocked = get_max_unlocked_liquidity(schedule, current_point)
    return max(0, unlocked - schedule.total_released_liquidity)


def is_vesting_complete(schedule: VestingSchedule, current_point: int) -> bool:
    require_nonneg("current_point", current_point)
    return current_point >= schedule.end_point


def get_vesting_phase(schedule: VestingSchedule, current_point: int) -> VestingPhase:
    require_nonneg("current_point", current_point)
    if current_point < schedule.cliff_point:
        return VestingPhase.LOCKED
    if is_vesting_complete(schedule, current_point):
        return VestingPhase.COMPLETE
    if _elapsed_periods(schedule, current_point) == 0:
        return VestingPhase.CLIFF_RELEASED
    return VestingPhase.PERIODIC
