"""
Pool-fee presets.

A preset is a small YAML document describing how a pool's fees should be set
up at creation time:

    pool_fees:
      max_base_fee_bps: 4000
      min_base_fee_bps: 100
      number_of_period: 120
      total_duration: 60
      fee_scheduler_mode: linear
      use_dynamic_fee: true
      max_price_change_bps: 1500   # optional
    collect_fee_mode: both_token
    activation_type: timestamp

Parsing is strict: unknown keys, missing keys and wrong types are rejected
with ConfigurationError before any fee parameter is derived.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

from .constants import MAX_PRICE_CHANGE_BPS_DEFAULT
from .core.dynamic_fee import get_dynamic_fee_params
from .core.fee_scheduler import get_base_fee_params
from .errors import ConfigurationError
from .state.pools import ActivationType, CollectFeeMode, FeeSchedulerMode, PoolFees

logger = logging.getLogger(__name__)

_FEE_SCHEDULER_MODES = {
    "linear": FeeSchedulerMode.LINEAR,
    "exponential": FeeSchedulerMode.EXPONENTIAL,
}
_COLLECT_FEE_MODES = {
    "both_token": CollectFeeMode.BOTH_TOKEN,
    "only_b": CollectFeeMode.ONLY_B,
}
_ACTIVATION_TYPES = {
    "slot": ActivationType.SLOT,
    "timestamp": ActivationType.TIMESTAMP,
}

_REQUIRED_POOL_FEE_KEYS = (
    "max_base_fee_bps",
    "min_base_fee_bps",
    "number_of_period",
    "total_duration",
    "fee_scheduler_mode",
    "use_dynamic_fee",
)
_OPTIONAL_POOL_FEE_KEYS = ("max_price_change_bps",)
_TOP_LEVEL_KEYS = ("pool_fees", "collect_fee_mode", "activation_type")


@dataclass(frozen=True)
class PoolFeeConfig:
    max_base_fee_bps: int
    min_base_fee_bps: int
    number_of_period: int
    total_duration: int
    fee_scheduler_mode: FeeSchedulerMode
    use_dynamic_fee: bool
    max_price_change_bps: int = MAX_PRICE_CHANGE_BPS_DEFAULT
    collect_fee_mode: CollectFeeMode = CollectFeeMode.BOTH_TOKEN
    activation_type: ActivationType = ActivationType.TIMESTAMP

    def build_pool_fees(self) -> PoolFees:
        """Derive the on-chain fee parameters described by this preset."""
        base_fee = get_base_fee_params(
            self.max_base_fee_bps,
            self.min_base_fee_bps,
            self.fee_scheduler_mode,
            self.number_of_period,
            self.total_duration,
        )
        dynamic_fee = None
        if self.use_dynamic_fee:
            # Dynamic fee tracks the floor of the schedule.
            dynamic_fee = get_dynamic_fee_params(self.min_base_fee_bps, self.max_price_change_bps)
        return PoolFees(base_fee=base_fee, dynamic_fee=dynamic_fee)


def _require_keys(section: str, obj: Mapping[str, Any], required: tuple, optional: tuple = ()) -> None:
    unknown = sorted(set(obj) - set(required) - set(optional))
    if unknown:
        raise ConfigurationError(f"{section}: unknown keys {unknown}")
    missing = [k for k in required if k not in obj]
    if missing:
        raise ConfigurationError(f"{section}: missing keys {missing}")


def _int_field(section: str, obj: Mapping[str, Any], key: str) -> int:
    v = obj[key]
    if not isinstance(v, int) or isinstance(v, bool):
        raise ConfigurationError(f"{section}.{key} must be an int, got {type(v).__name__}")
    return v


def _enum_field(section: str, value: Any, choices: Mapping[str, Any], key: str) -> Any:
    if not isinstance(value, str) or value not in choices:
        raise ConfigurationError(f"{section}.{key} must be one of {sorted(choices)}: {value!r}")
    return choices[value]


def parse_pool_fee_config(obj: Mapping[str, Any]) -> PoolFeeConfig:
    if not isinstance(obj, Mapping):
        raise ConfigurationError("pool fee config must be a mapping")
    _require_keys("config", obj, ("pool_fees",), _TOP_LEVEL_KEYS[1:])

    fees = obj["pool_fees"]
    if not isinstance(fees, Mapping):
        raise ConfigurationError("pool_fees must be a mapping")
    _require_keys("pool_fees", fees, _REQUIRED_POOL_FEE_KEYS, _OPTIONAL_POOL_FEE_KEYS)

    use_dynamic_fee = fees["use_dynamic_fee"]
    if not isinstance(use_dynamic_fee, bool):
        raise ConfigurationError("pool_fees.use_dynamic_fee must be a bool")

    max_price_change_bps = MAX_PRICE_CHANGE_BPS_DEFAULT
    if "max_price_change_bps" in fees:
        max_price_change_bps = _int_field("pool_fees", fees, "max_price_change_bps")

    return PoolFeeConfig(
        max_base_fee_bps=_int_field("pool_fees", fees, "max_base_fee_bps"),
        min_base_fee_bps=_int_field("pool_fees", fees, "min_base_fee_bps"),
        number_of_period=_int_field("pool_fees", fees, "number_of_period"),
        total_duration=_int_field("pool_fees", fees, "total_duration"),
        fee_scheduler_mode=_enum_field(
            "pool_fees", fees["fee_scheduler_mode"], _FEE_SCHEDULER_MODES, "fee_scheduler_mode"
        ),
        use_dynamic_fee=use_dynamic_fee,
        max_price_change_bps=max_price_change_bps,
        collect_fee_mode=_enum_field(
            "config", obj.get("collect_fee_mode", "both_token"), _COLLECT_FEE_MODES, "collect_fee_mode"
        ),
        activation_type=_enum_field(
            "config", obj.get("activation_type", "timestamp"), _ACTIVATION_TYPES, "activation_type"
        ),
    )


def load_pool_fee_config(path: Path | str) -> PoolFeeConfig:
    path = Path(path)
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.warning("rejected pool fee config %s: %s", path, exc)
        raise ConfigurationError(f"{path}: invalid YAML: {exc}") from exc
    try:
        config = parse_pool_fee_config(obj)
    except ConfigurationError as exc:
        logger.warning("rejected pool fee config %s: %s", path, exc)
        raise
    logger.debug("loaded pool fee config %s: %s", path, config)
    return config


def _presets_dir() -> Path:
    return Path(__file__).resolve().parent / "presets"


@lru_cache(maxsize=None)
def load_preset(name: str) -> PoolFeeConfig:
    """Load a preset shipped with the package by name (file stem)."""
    path = _presets_dir() / f"{name}.yaml"
    if not path.is_file():
        raise ConfigurationError(f"unknown preset: {name!r}")
    return load_pool_fee_config(path)
