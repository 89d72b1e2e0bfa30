"""
Volatility-driven dynamic fee.

The settlement program tracks a volatility accumulator per pool; this module
only turns that accumulator into an additive fee numerator:

    fee = ceil(variable_fee_control * (volatility_accumulator * bin_step) ** 2 / 1e11)
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, localcontext

from ..constants import (
    BASIS_POINT_MAX,
    BIN_STEP_BPS_DEFAULT,
    BIN_STEP_BPS_U128_DEFAULT,
    DYNAMIC_FEE_DECAY_PERIOD_DEFAULT,
    DYNAMIC_FEE_FILTER_PERIOD_DEFAULT,
    DYNAMIC_FEE_REDUCTION_FACTOR_DEFAULT,
    DYNAMIC_FEE_SCALING_FACTOR,
    FEE_DENOMINATOR,
    MAX_PRICE_CHANGE_BPS_DEFAULT,
    ONE_Q64,
)
from ..errors import ConfigurationError
from ..kernels.python.fixed_point import Rounding, check_u128, div_round, require_nonneg
from ..state.pools import DynamicFeeConfig

# Share of the base fee reached by the dynamic fee at the max accumulator.
MAX_DYNAMIC_FEE_PERCENT = 20


def get_dynamic_fee_numerator(volatility_accumulator: int, bin_step: int, variable_fee_control: int) -> int:
    require_nonneg("volatility_accumulator", volatility_accumulator)
    require_nonneg("bin_step", bin_step)
    require_nonneg("variable_fee_control", variable_fee_control)
    if variable_fee_control == 0:
        return 0

    square_vfa_bin = (volatility_accumulator * bin_step) ** 2
    v_fee = variable_fee_control * square_vfa_bin
    return div_round(v_fee, DYNAMIC_FEE_SCALING_FACTOR, Rounding.UP)


def get_dynamic_fee_params(
    base_fee_bps: int,
    max_price_change_bps: int = MAX_PRICE_CHANGE_BPS_DEFAULT,
) -> DynamicFeeConfig:
    """
    Derive dynamic fee parameters for a pool whose base fee is `base_fee_bps`.

    The accumulator saturates at the bin distance covered by a price move of
    `max_price_change_bps`; at saturation the dynamic fee is ~20% of the base fee.
    """
    require_nonneg("base_fee_bps", base_fee_bps)
    require_nonneg("max_price_change_bps", max_price_change_bps)
    if max_price_change_bps > MAX_PRICE_CHANGE_BPS_DEFAULT:
        raise ConfigurationError(
            f"max_price_change_bps ({max_price_change_bps} bps) must be less than or equal to "
            f"{MAX_PRICE_CHANGE_BPS_DEFAULT}"
        )

    with localcontext() as ctx:
        ctx.prec = 50
        price_ratio = Decimal(max_price_change_bps) / Decimal(BASIS_POINT_MAX) + 1
        sqrt_price_ratio_q64 = int((price_ratio.sqrt() * Decimal(ONE_Q64)).to_integral_value(rounding=ROUND_FLOOR))

    delta_bin_id = ((sqrt_price_ratio_q64 - ONE_Q64) // BIN_STEP_BPS_U128_DEFAULT) * 2
    max_volatility_accumulator = delta_bin_id * BASIS_POINT_MAX
    square_vfa_bin = (max_volatility_accumulator * BIN_STEP_BPS_DEFAULT) ** 2

    base_fee_numerator = (base_fee_bps * FEE_DENOMINATOR) // BASIS_POINT_MAX
    max_dynamic_fee_numerator = base_fee_numerator * MAX_DYNAMIC_FEE_PERCENT // 100
    # Invert the ceil in get_dynamic_fee_numerator so the cap is never exceeded.
    v_fee = max(0, max_dynamic_fee_numerator * DYNAMIC_FEE_SCALING_FACTOR - (DYNAMIC_FEE_SCALING_FACTOR - 1))

    if square_vfa_bin == 0:
        raise ConfigurationError("max_price_change_bps too small to move the volatility accumulator")
    variable_fee_control = v_fee // square_vfa_bin

    return DynamicFeeConfig(
        bin_step=BIN_STEP_BPS_DEFAULT,
        bin_step_u128=BIN_STEP_BPS_U128_DEFAULT,
        filter_period=DYNAMIC_FEE_FILTER_PERIOD_DEFAULT,
        decay_period=DYNAMIC_FEE_DECAY_PERIOD_DEFAULT,
        reduction_factor=DYNAMIC_FEE_REDUCTION_FACTOR_DEFAULT,
        max_volatility_accumulator=check_u128("max_volatility_accumulator", max_volatility_accumulator),
        variable_fee_control=check_u128("variable_fee_control", variable_fee_control),
    )
