# [TESTER] v1

from __future__ import annotations

import pytest

from cpamm_quote.constants import MAX_FEE_NUMERATOR
from cpamm_quote.core.fees import FeeMode, FeeOnAmountResult, get_fee_mode, get_total_fee_on_amount, split_trading_fee
from cpamm_quote.errors import ConfigurationError
from cpamm_quote.state import CollectFeeMode


def test_fee_mode_table() -> None:
    assert get_fee_mode(CollectFeeMode.ONLY_B, b_to_a=True) == FeeMode(fee_on_input=True, fees_on_token_a=False)
    assert get_fee_mode(CollectFeeMode.ONLY_B, b_to_a=False) == FeeMode(fee_on_input=False, fees_on_token_a=False)
    assert get_fee_mode(CollectFeeMode.BOTH_TOKEN, b_to_a=True) == FeeMode(fee_on_input=False, fees_on_token_a=True)
    assert get_fee_mode(CollectFeeMode.BOTH_TOKEN, b_to_a=False) == FeeMode(fee_on_input=False, fees_on_token_a=False)


def test_fee_mode_rejects_raw_int() -> None:
    with pytest.raises(TypeError):
        get_fee_mode(1, b_to_a=True)  # type: ignore[arg-type]


def test_total_fee_rounds_up() -> None:
    assert get_total_fee_on_amount(1, 1) == 1
    assert get_total_fee_on_amount(1_000_000, 10_000_000) == 10_000
    assert get_total_fee_on_amount(0, 10_000_000) == 0


def test_total_fee_rejects_numerator_above_max() -> None:
    with pytest.raises(ConfigurationError, match="trade_fee_numerator"):
        get_total_fee_on_amount(1, MAX_FEE_NUMERATOR + 1)


def test_split_without_referral_or_partner() -> None:
    res = split_trading_fee(1_000_000, 10_000_000, protocol_fee_percent=20)
    assert res == FeeOnAmountResult(amount=990_000, lp_fee=8_000, protocol_fee=2_000, partner_fee=0, referral_fee=0)
    assert res.total_fee == 10_000


def test_split_with_referral_and_partner() -> None:
    res = split_trading_fee(
        1_000_000,
        10_000_000,
        protocol_fee_percent=20,
        partner_fee_percent=50,
        referral_fee_percent=20,
        has_referral=True,
        has_partner=True,
    )
    assert res.lp_fee == 8_000
    assert res.referral_fee == 400
    assert res.partner_fee == 800
    assert res.protocol_fee == 800
    assert res.total_fee == 10_000
    assert res.amount == 990_000


def test_split_parts_always_sum_to_total() -> None:
    for amount in (1, 7, 99, 12_345, 1_000_003):
        res = split_trading_fee(amount, 3_333_333, 33, 33, 33, has_referral=True, has_partner=True)
        assert res.amount + res.total_fee == amount
        assert res.total_fee == get_total_fee_on_amount(amount, 3_333_333)


def test_split_rejects_bad_percent() -> None:
    with pytest.raises(ConfigurationError, match="protocol_fee_percent"):
        split_trading_fee(100, 1_000, protocol_fee_percent=101)


def test_fee_result_rejects_negative() -> None:
    with pytest.raises(ValueError, match="lp_fee"):
        FeeOnAmountResult(amount=1, lp_fee=-1, protocol_fee=0, partner_fee=0, referral_fee=0)
