# [TESTER] v1

from __future__ import annotations

import pytest

from cpamm_quote.core.vesting import (
    VestingPhase,
    get_available_vesting_liquidity,
    get_max_unlocked_liquidity,
    get_total_locked_liquidity,
    get_vesting_phase,
    is_vesting_complete,
)
from cpamm_quote.errors import ConfigurationError
from cpamm_quote.state import VestingSchedule


def _schedule(**overrides) -> VestingSchedule:
    fields = dict(
        cliff_point=100,
        period_frequency=10,
        cliff_unlock_liquidity=50,
        liquidity_per_period=10,
        number_of_period=5,
    )
    fields.update(overrides)
    return VestingSchedule(**fields)


def test_total_locked() -> None:
    assert get_total_locked_liquidity(_schedule()) == 100


def test_nothing_before_cliff() -> None:
    schedule = _schedule()
    assert get_available_vesting_liquidity(schedule, 99) == 0
    assert get_vesting_phase(schedule, 99) is VestingPhase.LOCKED


def test_cliff_then_periods() -> None:
    schedule = _schedule()
    assert get_available_vesting_liquidity(schedule, 100) == 50
    assert get_vesting_phase(schedule, 100) is VestingPhase.CLIFF_RELEASED
    assert get_available_vesting_liquidity(schedule, 109) == 50
    assert get_available_vesting_liquidity(schedule, 110) == 60
    assert get_vesting_phase(schedule, 110) is VestingPhase.PERIODIC
    assert get_available_vesting_liquidity(schedule, 139) == 80


def test_completion_boundary() -> None:
    schedule = _schedule()
    assert not is_vesting_complete(schedule, 149)
    assert get_vesting_phase(schedule, 149) is VestingPhase.PERIODIC
    assert is_vesting_complete(schedule, 150)
    assert get_vesting_phase(schedule, 150) is VestingPhase.COMPLETE
    assert get_available_vesting_liquidity(schedule, 150) == 100


def test_unlock_capped_at_number_of_periods() -> None:
    assert get_max_unlocked_liquidity(_schedule(), 10**9) == 100


def test_released_liquidity_is_subtracted() -> None:
    schedule = _schedule(total_released_liquidity=60)
    assert get_available_vesting_liquidity(schedule, 110) == 0
    assert get_available_vesting_liquidity(schedule, 130) == 20


def test_available_never_negative() -> None:
    schedule = _schedule(total_released_liquidity=100)
    assert get_available_vesting_liquidity(schedule, 100) == 0


def test_pure_cliff_schedule() -> None:
    schedule = _schedule(period_frequency=0, liquidity_per_period=0, number_of_period=0, cliff_unlock_liquidity=500)
    assert get_available_vesting_liquidity(schedule, 99) == 0
    assert get_available_vesting_liquidity(schedule, 100) == 500
    assert get_vesting_phase(schedule, 100) is VestingPhase.COMPLETE


def test_zero_frequency_releases_cliff_only() -> None:
    schedule = _schedule(period_frequency=0, total_released_liquidity=20)
    assert get_max_unlocked_liquidity(schedule, 1_000) == 50
    assert get_available_vesting_liquidity(schedule, 1_000) == 30


def test_schedule_rejects_over_release() -> None:
    with pytest.raises(ConfigurationError, match="total_released_liquidity"):
        _schedule(total_released_liquidity=101)


def test_negative_point_rejected() -> None:
    with pytest.raises(ValueError):
        get_max_unlocked_liquidity(_schedule(), -1)
