"""
Vesting schedule snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import U64_MAX
from ..errors import ConfigurationError
from .pools import require_uint


@dataclass(frozen=True)
class VestingSchedule:
    """Cliff plus linear per-period unlock of locked liquidity.

    `cliff_point` and `period_frequency` are in the pool's activation units
    (slots or seconds).
    """

    cliff_point: int
    period_frequency: int
    cliff_unlock_liquidity: int
    liquidity_per_period: int
    number_of_period: int
    total_released_liquidity: int = 0

    def __post_init__(self) -> None:
        require_uint("cliff_point", self.cliff_point, U64_MAX)
        require_uint("period_frequency", self.period_frequency, U64_MAX)
        require_uint("number_of_period", self.number_of_period, 0xFFFF)
        for name, v in (
            ("cliff_unlock_liquidity", self.cliff_unlock_liquidity),
            ("liquidity_per_period", self.liquidity_per_period),
            ("total_released_liquidity", self.total_released_liquidity),
        ):
            require_uint(name, v)
        if self.total_released_liquidity > self.total_locked_liquidity:
            raise ConfigurationError(
                "total_released_liquidity exceeds total locked liquidity: "
                f"{self.total_released_liquidity} > {self.total_locked_liquidity}"
            )

    @property
    def total_locked_liquidity(self) -> int:
        return self.cliff_unlock_liquidity + self.liquidity_per_period * self.number_of_period

    @property
    def end_point(self) -> int:
        return self.cliff_point + self.period_frequency * self.number_of_period
