"""
Protocol constants shared by every kernel.

These must match the settlement program bit-for-bit; a quote computed with a
different denominator or price bound will fail the on-chain slippage check.
"""

from __future__ import annotations

# Fixed-point scales
SCALE_OFFSET: int = 64
LIQUIDITY_SCALE: int = 128
ONE_Q64: int = 1 << SCALE_OFFSET

# Integer widths used by the settlement program
U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1
U256_MAX: int = (1 << 256) - 1

# Fee denominators
BASIS_POINT_MAX: int = 10_000
FEE_DENOMINATOR: int = 1_000_000_000
MAX_FEE_NUMERATOR: int = 500_000_000

# Global sqrt price bounds (Q64.64)
MIN_SQRT_PRICE: int = 4_295_048_016
MAX_SQRT_PRICE: int = 79_226_673_521_066_979_257_578_248_091

# Exponent bound for Q64.64 pow
MAX_EXPONENTIAL: int = 0x80000

# Dynamic fee defaults
DYNAMIC_FEE_FILTER_PERIOD_DEFAULT: int = 10
DYNAMIC_FEE_DECAY_PERIOD_DEFAULT: int = 120
DYNAMIC_FEE_REDUCTION_FACTOR_DEFAULT: int = 5000  # 50%
DYNAMIC_FEE_SCALING_FACTOR: int = 100_000_000_000
BIN_STEP_BPS_DEFAULT: int = 1
# bin_step << 64 / BASIS_POINT_MAX
BIN_STEP_BPS_U128_DEFAULT: int = 1_844_674_407_370_955
MAX_PRICE_CHANGE_BPS_DEFAULT: int = 1500  # 15%

# Token-2022 transfer fee
MAX_FEE_BASIS_POINTS: int = 10_000
