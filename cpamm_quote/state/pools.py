"""
Pool snapshots and fee parameter records.

Snapshots are read-only copies of on-chain accounts supplied by the caller.
They are validated once on construction so the kernels can assume sane
bounds (ordered sqrt prices, in-range fee numerators).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional

from ..constants import MAX_FEE_NUMERATOR, MAX_SQRT_PRICE, MIN_SQRT_PRICE, U64_MAX, U128_MAX, U256_MAX
from ..errors import ConfigurationError


@unique
class FeeSchedulerMode(Enum):
    LINEAR = 0
    EXPONENTIAL = 1


@unique
class CollectFeeMode(Enum):
    BOTH_TOKEN = 0
    ONLY_B = 1


@unique
class ActivationType(Enum):
    SLOT = 0
    TIMESTAMP = 1


@unique
class TradeDirection(Enum):
    A_TO_B = 0
    B_TO_A = 1


def require_uint(name: str, value: int, max_value: int = U128_MAX) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not (0 <= value <= max_value):
        raise ConfigurationError(f"{name} must be in [0, {max_value}]: {value}")


def require_percent(name: str, value: int) -> None:
    require_uint(name, value, 100)


@dataclass(frozen=True)
class BaseFee:
    """Time-decaying base fee schedule (numerators over FEE_DENOMINATOR)."""

    cliff_fee_numerator: int
    number_of_period: int = 0
    period_frequency: int = 0
    reduction_factor: int = 0
    fee_scheduler_mode: FeeSchedulerMode = FeeSchedulerMode.LINEAR

    def __post_init__(self) -> None:
        require_uint("cliff_fee_numerator", self.cliff_fee_numerator, MAX_FEE_NUMERATOR)
        require_uint("number_of_period", self.number_of_period, 0xFFFF)
        require_uint("period_frequency", self.period_frequency, U64_MAX)
        require_uint("reduction_factor", self.reduction_factor, U64_MAX)
        if not isinstance(self.fee_scheduler_mode, FeeSchedulerMode):
            raise TypeError("fee_scheduler_mode must be a FeeSchedulerMode")


@dataclass(frozen=True)
class DynamicFeeConfig:
    """Dynamic fee parameters as stored in the pool's fee config."""

    bin_step: int
    bin_step_u128: int
    filter_period: int
    decay_period: int
    reduction_factor: int
    max_volatility_accumulator: int
    variable_fee_control: int

    def __post_init__(self) -> None:
        for name, v in (
            ("bin_step", self.bin_step),
            ("bin_step_u128", self.bin_step_u128),
            ("filter_period", self.filter_period),
            ("decay_period", self.decay_period),
            ("reduction_factor", self.reduction_factor),
            ("max_volatility_accumulator", self.max_volatility_accumulator),
            ("variable_fee_control", self.variable_fee_control),
        ):
            require_uint(name, v)
        if self.filter_period >= self.decay_period:
            raise ConfigurationError(
                f"filter_period must be below decay_period: {self.filter_period} >= {self.decay_period}"
            )


@dataclass(frozen=True)
class DynamicFeeState:
    """Live volatility state tracked by the settlement program (input only)."""

    volatility_accumulator: int
    bin_step: int
    variable_fee_control: int

    def __post_init__(self) -> None:
        for name, v in (
            ("volatility_accumulator", self.volatility_accumulator),
            ("bin_step", self.bin_step),
            ("variable_fee_control", self.variable_fee_control),
        ):
            require_uint(name, v)


@dataclass(frozen=True)
class PoolFees:
    """Fee parameters used when creating a pool."""

    base_fee: BaseFee
    protocol_fee_percent: int = 20
    partner_fee_percent: int = 0
    referral_fee_percent: int = 20
    dynamic_fee: Optional[DynamicFeeConfig] = None

    def __post_init__(self) -> None:
        require_percent("protocol_fee_percent", self.protocol_fee_percent)
        require_percent("partner_fee_percent", self.partner_fee_percent)
        require_percent("referral_fee_percent", self.referral_fee_percent)


@dataclass(frozen=True)
class PoolSnapshot:
    """Read-only view of a pool account at the time of quoting."""

    sqrt_price: int
    liquidity: int
    sqrt_min_price: int
    sqrt_max_price: int
    base_fee: BaseFee
    activation_type: ActivationType = ActivationType.TIMESTAMP
    activation_point: int = 0
    collect_fee_mode: CollectFeeMode = CollectFeeMode.BOTH_TOKEN
    dynamic_fee: Optional[DynamicFeeState] = None
    protocol_fee_percent: int = 0
    partner_fee_percent: int = 0
    referral_fee_percent: int = 0
    has_partner: bool = False
    # Q128 cumulative fee per unit of liquidity
    fee_a_per_liquidity: int = 0
    fee_b_per_liquidity: int = 0

    def __post_init__(self) -> None:
        for name, v in (
            ("sqrt_price", self.sqrt_price),
            ("liquidity", self.liquidity),
            ("sqrt_min_price", self.sqrt_min_price),
            ("sqrt_max_price", self.sqrt_max_price),
        ):
            require_uint(name, v)
        require_uint("activation_point", self.activation_point, U64_MAX)
        require_uint("fee_a_per_liquidity", self.fee_a_per_liquidity, U256_MAX)
        require_uint("fee_b_per_liquidity", self.fee_b_per_liquidity, U256_MAX)
        require_percent("protocol_fee_percent", self.protocol_fee_percent)
        require_percent("partner_fee_percent", self.partner_fee_percent)
        require_percent("referral_fee_percent", self.referral_fee_percent)

        if not isinstance(self.activation_type, ActivationType):
            raise TypeError("activation_type must be an ActivationType")
        if not isinstance(self.collect_fee_mode, CollectFeeMode):
            raise TypeError("collect_fee_mode must be a CollectFeeMode")
        if not (MIN_SQRT_PRICE <= self.sqrt_min_price < self.sqrt_max_price <= MAX_SQRT_PRICE):
            raise ConfigurationError(
                "sqrt price bounds must satisfy "
                f"{MIN_SQRT_PRICE} <= {self.sqrt_min_price} < {self.sqrt_max_price} <= {MAX_SQRT_PRICE}"
            )
        if not (self.sqrt_min_price <= self.sqrt_price <= self.sqrt_max_price):
            raise ConfigurationError(
                f"sqrt_price {self.sqrt_price} outside [{self.sqrt_min_price}, {self.sqrt_max_price}]"
            )
