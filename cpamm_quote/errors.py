"""Exception types for the quote engine.

Every engine error derives from ``ValueError`` so existing callers that
catch ``ValueError`` around a quote keep working.
"""

from __future__ import annotations


class CpAmmQuoteError(ValueError):
    """Base class for all quote engine errors."""


class InvalidAmountError(CpAmmQuoteError):
    """Raised when an amount is zero or negative where a positive one is required."""


class InvalidSingleSidedBootstrapError(CpAmmQuoteError):
    """Raised when a single-sided pool is bootstrapped away from the minimum price."""


class ConfigurationError(CpAmmQuoteError):
    """Raised for malformed fee-schedule, snapshot or preset parameters."""


class ArithmeticOverflowError(CpAmmQuoteError):
    """Raised when a value exceeds its fixed-point width or a division has no result."""


class PriceRangeViolationError(CpAmmQuoteError):
    """Raised when a swap would move the sqrt price outside the pool bounds."""

    def __init__(self, next_sqrt_price: int, sqrt_min_price: int, sqrt_max_price: int) -> None:
        self.next_sqrt_price = next_sqrt_price
        self.sqrt_min_price = sqrt_min_price
        self.sqrt_max_price = sqrt_max_price
        super().__init__(
            f"next sqrt price {next_sqrt_price} outside [{sqrt_min_price}, {sqrt_max_price}]"
        )
