"""
Token mint metadata relevant to quoting (transfer-fee extension).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..constants import MAX_FEE_BASIS_POINTS, U64_MAX
from .pools import require_uint


@dataclass(frozen=True)
class TransferFee:
    """Transfer fee in force from `epoch` onwards."""

    epoch: int
    maximum_fee: int
    transfer_fee_basis_points: int

    def __post_init__(self) -> None:
        require_uint("epoch", self.epoch, U64_MAX)
        require_uint("maximum_fee", self.maximum_fee, U64_MAX)
        require_uint("transfer_fee_basis_points", self.transfer_fee_basis_points, MAX_FEE_BASIS_POINTS)


@dataclass(frozen=True)
class TransferFeeConfig:
    older_transfer_fee: TransferFee
    newer_transfer_fee: TransferFee


@dataclass(frozen=True)
class TokenInfo:
    """A mint's transfer-fee config plus the epoch the quote is computed for.

    `transfer_fee_config=None` describes a mint without the extension.
    """

    transfer_fee_config: Optional[TransferFeeConfig]
    current_epoch: int

    def __post_init__(self) -> None:
        require_uint("current_epoch", self.current_epoch, U64_MAX)
