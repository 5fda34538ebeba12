from datetime import timedelta

import pytest

from app.core.additional_fee import (
    AdditionalFeeResult, EntryCategory, apply_fee_discount,
    compute_additional_fee, entry_category, next_accrual_at,
)
from app.core.time_tier import TimeTier
from conftest import kst

DAY_PRICE = 10000
NIGHT_PRICE = 15000


def fee(entry, tier, now, **kwargs) -> AdditionalFeeResult:
    return compute_additional_fee(entry, tier, DAY_PRICE, NIGHT_PRICE, now, **kwargs)


def test_day_entry_first_midnight_charges_difference() -> None:
    entry = kst(2024, 1, 1, 14, 0)
    result = fee(entry, TimeTier.DAY, kst(2024, 1, 2, 0, 0))
    assert result == AdditionalFeeResult(fee_amount=5000, periods_elapsed=1, accrual_count=1)


def test_day_entry_second_midnight_adds_night_price() -> None:
    entry = kst(2024, 1, 1, 14, 0)
    result = fee(entry, TimeTier.DAY, kst(2024, 1, 3, 0, 0))
    assert result.fee_amount == 20000
    assert result.accrual_count == 2


def test_day_entry_before_first_midnight_is_free() -> None:
    entry = kst(2024, 1, 1, 14, 0)
    result = fee(entry, TimeTier.DAY, kst(2024, 1, 1, 23, 59, 59))
    assert result == AdditionalFeeResult()
    assert not result.has_accrual


def test_day_entry_difference_never_negative() -> None:
    entry = kst(2024, 1, 1, 14, 0)
    result = compute_additional_fee(entry, TimeTier.DAY, 15000, 12000, kst(2024, 1, 2, 1, 0))
    assert result.fee_amount == 0
    assert result.accrual_count == 1


def test_evening_entry_first_midnight_is_grace() -> None:
    entry = kst(2024, 1, 1, 20, 0)
    result = fee(entry, TimeTier.NIGHT, kst(2024, 1, 2, 23, 0))
    assert result.fee_amount == 0
    assert result.accrual_count == 0
    assert result.periods_elapsed == 1


def test_evening_entry_grace_ends_exactly_at_second_midnight() -> None:
    entry = kst(2024, 1, 1, 20, 0)
    just_before = kst(2024, 1, 3, 0, 0) - timedelta(milliseconds=1)
    assert fee(entry, TimeTier.NIGHT, just_before).accrual_count == 0

    result = fee(entry, TimeTier.NIGHT, kst(2024, 1, 3, 0, 5))
    assert result.fee_amount == 15000
    assert result.accrual_count == 1


def test_early_morning_entry_charges_from_first_midnight() -> None:
    entry = kst(2024, 1, 1, 3, 0)
    assert entry_category(entry, TimeTier.NIGHT) == EntryCategory.EARLY_MORNING
    result = fee(entry, TimeTier.NIGHT, kst(2024, 1, 2, 0, 0))
    assert result.fee_amount == 15000
    assert result.accrual_count == 1


def test_entry_exactly_at_midnight_waits_for_next_midnight() -> None:
    entry = kst(2024, 1, 1, 0, 0)
    assert fee(entry, TimeTier.NIGHT, kst(2024, 1, 1, 23, 59)).fee_amount == 0
    assert fee(entry, TimeTier.NIGHT, kst(2024, 1, 2, 0, 0)).fee_amount == 15000


def test_foreign_visitor_uses_fixed_periods_from_entry() -> None:
    entry = kst(2024, 1, 1, 20, 0)
    assert fee(entry, TimeTier.NIGHT, entry + timedelta(hours=23), is_foreigner=True).fee_amount == 0

    result = fee(entry, TimeTier.NIGHT, entry + timedelta(hours=25), is_foreigner=True)
    assert result == AdditionalFeeResult(fee_amount=NIGHT_PRICE, periods_elapsed=1, accrual_count=1)

    result = fee(entry, TimeTier.NIGHT, entry + timedelta(hours=48), is_foreigner=True)
    assert result.fee_amount == 2 * NIGHT_PRICE


def test_foreign_visitor_ignores_entry_tier_and_accepts_unit_override() -> None:
    entry = kst(2024, 1, 1, 14, 0)
    now = entry + timedelta(hours=24)
    assert fee(entry, TimeTier.DAY, now, is_foreigner=True).fee_amount == NIGHT_PRICE
    assert fee(entry, TimeTier.DAY, now, is_foreigner=True, foreign_unit_price=20000).fee_amount == 20000


def test_foreign_period_length_is_configurable() -> None:
    entry = kst(2024, 1, 1, 20, 0)
    result = fee(entry, TimeTier.NIGHT, entry + timedelta(hours=13), is_foreigner=True,
                 foreign_accrual_period_hours=12)
    assert result.accrual_count == 1


def test_domestic_checkpoint_hour_is_configurable() -> None:
    entry = kst(2024, 1, 1, 14, 0)
    assert fee(entry, TimeTier.DAY, kst(2024, 1, 2, 9, 59), domestic_checkpoint_hour=10).fee_amount == 0
    assert fee(entry, TimeTier.DAY, kst(2024, 1, 2, 10, 0), domestic_checkpoint_hour=10).fee_amount == 5000


def test_now_before_entry_is_clamped_to_zero() -> None:
    entry = kst(2024, 1, 1, 14, 0)
    assert fee(entry, TimeTier.DAY, entry - timedelta(hours=30)) == AdditionalFeeResult()


@pytest.mark.parametrize(
    "entry, tier, is_foreigner",
    [
        (kst(2024, 1, 1, 14, 0), TimeTier.DAY, False),
        (kst(2024, 1, 1, 20, 0), TimeTier.NIGHT, False),
        (kst(2024, 1, 1, 3, 0), TimeTier.NIGHT, False),
        (kst(2024, 1, 1, 20, 0), TimeTier.NIGHT, True),
    ],
)
def test_fee_is_monotonic_in_now(entry, tier, is_foreigner) -> None:
    previous = AdditionalFeeResult()
    now = entry
    for _ in range(4 * 24 * 2):
        current = fee(entry, tier, now, is_foreigner=is_foreigner)
        assert current.fee_amount >= previous.fee_amount
        assert current.accrual_count >= previous.accrual_count
        previous = current
        now += timedelta(minutes=30)


def test_next_accrual_skips_evening_grace_boundary() -> None:
    entry = kst(2024, 1, 1, 20, 0)
    assert next_accrual_at(entry, TimeTier.NIGHT, kst(2024, 1, 1, 21, 0)) == kst(2024, 1, 3, 0, 0)


def test_next_accrual_for_day_entry_and_foreigner() -> None:
    entry = kst(2024, 1, 1, 14, 0)
    assert next_accrual_at(entry, TimeTier.DAY, kst(2024, 1, 2, 0, 30)) == kst(2024, 1, 3, 0, 0)
    assert next_accrual_at(entry, TimeTier.DAY, entry, is_foreigner=True) == kst(2024, 1, 2, 14, 0)


def test_apply_fee_discount() -> None:
    assert apply_fee_discount(15000) == 15000
    assert apply_fee_discount(15000, 5000) == 10000
    assert apply_fee_discount(15000, 15000) == 0
    with pytest.raises(ValueError):
        apply_fee_discount(15000, 15001)
    with pytest.raises(ValueError):
        apply_fee_discount(15000, -1)
