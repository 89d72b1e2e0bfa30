"""
Base fee scheduler.

The base fee starts at `cliff_fee_numerator` at the pool's activation point and
decays once per `period_frequency` for at most `number_of_period` periods:

    Linear:       fee = cliff - period * reduction_factor
    Exponential:  fee = cliff * (1 - reduction_factor / 10_000) ** period

The exponential form is evaluated in Q64.64 with `pow_q64`, never with floats.
Floats appear only in `get_base_fee_params`, which derives a reduction factor
once at configuration time.
"""

from __future__ import annotations

from typing import Optional

from ..constants import BASIS_POINT_MAX, FEE_DENOMINATOR, MAX_FEE_NUMERATOR, ONE_Q64, SCALE_OFFSET
from ..errors import ConfigurationError
from ..kernels.python.fixed_point import mul_shr, pow_q64, require_int, require_nonneg
from ..state.pools import BaseFee, DynamicFeeState, FeeSchedulerMode
from .dynamic_fee import get_dynamic_fee_numerator


def bps_to_fee_numerator(bps: int) -> int:
    """1 bps = FEE_DENOMINATOR / 10_000 (floor)."""
    require_nonneg("bps", bps)
    return (bps * FEE_DENOMINATOR) // BASIS_POINT_MAX


def fee_numerator_to_bps(fee_numerator: int) -> int:
    require_nonneg("fee_numerator", fee_numerator)
    return (fee_numerator * BASIS_POINT_MAX) // FEE_DENOMINATOR


def get_base_fee_numerator(
    fee_scheduler_mode: FeeSchedulerMode,
    cliff_fee_numerator: int,
    period: int,
    reduction_factor: int,
) -> int:
    """Base fee numerator after `period` elapsed periods."""
    require_nonneg("cliff_fee_numerator", cliff_fee_numerator)
    require_nonneg("period", period)
    require_nonneg("reduction_factor", reduction_factor)

    if fee_scheduler_mode is FeeSchedulerMode.LINEAR:
        return max(0, cliff_fee_numerator - period * reduction_factor)

    if fee_scheduler_mode is FeeSchedulerMode.EXPONENTIAL:
        if reduction_factor > BASIS_POINT_MAX:
            raise ConfigurationError(f"reduction_factor must be at most {BASIS_POINT_MAX}: {reduction_factor}")
        bps = (reduction_factor << SCALE_OFFSET) // BASIS_POINT_MAX
        base = ONE_Q64 - bps
        result = pow_q64(base, period)
        return mul_shr(cliff_fee_numerator, result, SCALE_OFFSET)

    raise TypeError(f"unknown fee_scheduler_mode: {fee_scheduler_mode!r}")


def get_elapsed_period(
    current_point: int,
    activation_point: int,
    number_of_period: int,
    period_frequency: int,
) -> Optional[int]:
    """Periods elapsed since activation, capped at `number_of_period`.

    Returns None while the schedule is inactive (before activation, or no decay).
    """
    for name, v in (
        ("current_point", current_point),
        ("activation_point", activation_point),
        ("number_of_period", number_of_period),
        ("period_frequency", period_frequency),
    ):
        require_nonneg(name, v)
    if period_frequency == 0 or current_point < activation_point:
        return None
    return min(number_of_period, (current_point - activation_point) // period_frequency)


def get_current_base_fee_numerator(base_fee: BaseFee, current_point: int, activation_point: int) -> int:
    period = get_elapsed_period(
        current_point,
        activation_point,
        base_fee.number_of_period,
        base_fee.period_frequency,
    )
    if period is None:
        return base_fee.cliff_fee_numerator
    return get_base_fee_numerator(
        base_fee.fee_scheduler_mode,
        base_fee.cliff_fee_numerator,
        period,
        base_fee.reduction_factor,
    )


def get_fee_numerator(
    current_point: int,
    activation_point: int,
    number_of_period: int,
    period_frequency: int,
    fee_scheduler_mode: FeeSchedulerMode,
    cliff_fee_numerator: int,
    reduction_factor: int,
    dynamic_fee: Optional[DynamicFeeState] = None,
) -> int:
    """
    Total trade fee numerator: scheduled base fee plus dynamic fee.

    The base fee is the cliff fee while the schedule is inactive. The sum is
    capped at MAX_FEE_NUMERATOR.
    """
    base_fee = BaseFee(
        cliff_fee_numerator=cliff_fee_numerator,
        number_of_period=number_of_period,
        period_frequency=period_frequency,
        reduction_factor=reduction_factor,
        fee_scheduler_mode=fee_scheduler_mode,
    )
    fee_numerator = get_current_base_fee_numerator(base_fee, current_point, activation_point)

    if dynamic_fee is not None:
        fee_numerator += get_dynamic_fee_numerator(
            dynamic_fee.volatility_accumulator,
            dynamic_fee.bin_step,
            dynamic_fee.variable_fee_control,
        )
    return min(fee_numerator, MAX_FEE_NUMERATOR)


def get_base_fee_params(
    max_base_fee_bps: int,
    min_base_fee_bps: int,
    fee_scheduler_mode: FeeSchedulerMode,
    number_of_period: int,
    total_duration: int,
) -> BaseFee:
    """
    Derive a BaseFee that decays from `max_base_fee_bps` to `min_base_fee_bps`
    over `number_of_period` periods spread across `total_duration`.

    Equal min and max yields a flat fee and requires zero periods and duration.
    """
    for name, v in (
        ("max_base_fee_bps", max_base_fee_bps),
        ("min_base_fee_bps", min_base_fee_bps),
        ("number_of_period", number_of_period),
        ("total_duration", total_duration),
    ):
        require_int(name, v)
    if max_base_fee_bps < 0 or min_base_fee_bps < 0:
        raise ConfigurationError("fee bps must be non-negative")

    max_allowed_bps = fee_numerator_to_bps(MAX_FEE_NUMERATOR)
    if max_base_fee_bps > max_allowed_bps:
        raise ConfigurationError(
            f"max_base_fee_bps ({max_base_fee_bps} bps) exceeds maximum allowed value of {max_allowed_bps} bps"
        )

    if max_base_fee_bps == min_base_fee_bps:
        if number_of_period != 0 or total_duration != 0:
            raise ConfigurationError("number_of_period and total_duration must both be zero for a flat fee")
        return BaseFee(cliff_fee_numerator=bps_to_fee_numerator(max_base_fee_bps))

    if min_base_fee_bps > max_base_fee_bps:
        raise ConfigurationError("min_base_fee_bps must be less than or equal to max_base_fee_bps")
    if number_of_period <= 0 or total_duration <= 0:
        raise ConfigurationError("number_of_period and total_duration must both be greater than zero")

    max_base_fee_numerator = bps_to_fee_numerator(max_base_fee_bps)
    min_base_fee_numerator = bps_to_fee_numerator(min_base_fee_bps)
    period_frequency = total_duration // number_of_period

    if fee_scheduler_mode is FeeSchedulerMode.LINEAR:
        reduction_factor = (max_base_fee_numerator - min_base_fee_numerator) // number_of_period
    elif fee_scheduler_mode is FeeSchedulerMode.EXPONENTIAL:
        if min_base_fee_bps == 0:
            raise ConfigurationError("exponential schedule cannot decay to a zero fee")
        ratio = min_base_fee_numerator / max_base_fee_numerator
        decay_base = ratio ** (1 / number_of_period)
        reduction_factor = int(BASIS_POINT_MAX * (1 - decay_base))
    else:
        raise TypeError(f"unknown fee_scheduler_mode: {fee_scheduler_mode!r}")

    return BaseFee(
        cliff_fee_numerator=max_base_fee_numerator,
        number_of_period=number_of_period,
        period_frequency=period_frequency,
        reduction_factor=reduction_factor,
        fee_scheduler_mode=fee_scheduler_mode,
    )
