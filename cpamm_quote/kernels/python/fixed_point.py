"""
Fixed-point primitives (Q64.64 / Q128) with explicit rounding.

Python ints are arbitrary precision, so the "double-width intermediate" of a
mul-div is free. What is *not* free is agreement with the settlement program,
which stores amounts in u64, prices and liquidity in u128 and intermediates in
u256. Every kernel result therefore goes through a width check that raises
instead of wrapping.

Rounding policy (consensus-critical):
- fees owed to the pool are rounded UP,
- amounts paid out to the user are rounded DOWN,
- amounts collected from the user are rounded UP.
"""

from __future__ import annotations

from enum import Enum, unique

from ...constants import MAX_EXPONENTIAL, ONE_Q64, SCALE_OFFSET, U64_MAX, U128_MAX, U256_MAX
from ...errors import ArithmeticOverflowError, InvalidAmountError


@unique
class Rounding(Enum):
    UP = "up"
    DOWN = "down"


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_nonneg(name: str, value: int) -> None:
    require_int(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


def _check_width(name: str, value: int, bits: int, max_value: int) -> int:
    require_int(name, value)
    if value < 0 or value > max_value:
        raise ArithmeticOverflowError(f"{name} does not fit in u{bits}: {value}")
    return value


def check_u64(name: str, value: int) -> int:
    return _check_width(name, value, 64, U64_MAX)


def check_u128(name: str, value: int) -> int:
    return _check_width(name, value, 128, U128_MAX)


def check_u256(name: str, value: int) -> int:
    return _check_width(name, value, 256, U256_MAX)


def require_amount(name: str, value: int) -> int:
    """Token amount: negative is an invalid amount, above u64 is an overflow."""
    require_int(name, value)
    if value < 0:
        raise InvalidAmountError(f"{name} must be non-negative: {value}")
    return check_u64(name, value)


def div_round(numerator: int, denominator: int, rounding: Rounding) -> int:
    """Non-negative integer division with the requested rounding."""
    require_nonneg("numerator", numerator)
    require_int("denominator", denominator)
    if denominator <= 0:
        raise ArithmeticOverflowError(f"division by non-positive denominator: {denominator}")
    q, r = divmod(numerator, denominator)
    if rounding is Rounding.UP and r != 0:
        q += 1
    return q


def mul_div(x: int, y: int, denominator: int, rounding: Rounding) -> int:
    """
    Compute ``x * y / denominator`` rounded per `rounding`.

    The product must fit in u256 (the settlement program's widest type).
    """
    require_nonneg("x", x)
    require_nonneg("y", y)
    prod = check_u256("x * y", x * y)
    return div_round(prod, denominator, rounding)


def mul_shr(x: int, y: int, offset: int) -> int:
    """``(x * y) >> offset`` (floor)."""
    require_nonneg("x", x)
    require_nonneg("y", y)
    return check_u256("x * y", x * y) >> offset


def shl_div(x: int, y: int, offset: int, rounding: Rounding) -> int:
    """``(x << offset) / y`` rounded per `rounding`."""
    require_nonneg("x", x)
    return div_round(check_u256("x << offset", x << offset), y, rounding)


def pow_q64(base: int, exp: int) -> int:
    """
    Q64.64 exponentiation by repeated squaring.

    Mirrors the settlement program: bases >= 1.0 are inverted before squaring
    (so intermediates stay below 2**128) and the result is inverted back.
    Raises ArithmeticOverflowError where the program would return None.
    """
    check_u128("base", base)
    require_int("exp", exp)

    invert = exp < 0
    if exp == 0:
        return ONE_Q64
    exp = -exp if invert else exp
    if exp >= MAX_EXPONENTIAL:
        raise ArithmeticOverflowError(f"exponent too large: {exp}")

    squared_base = base
    result = ONE_Q64
    if squared_base >= result:
        squared_base = U128_MAX // squared_base
        invert = not invert

    bit = 1
    while bit < MAX_EXPONENTIAL:
        if exp & bit:
            result = check_u128("pow result", result * squared_base) >> SCALE_OFFSET
        squared_base = check_u128("pow base", squared_base * squared_base) >> SCALE_OFFSET
        bit <<= 1

    if result == 0:
        raise ArithmeticOverflowError("pow underflowed to zero")
    if invert:
        result = U128_MAX // result
    return result
