from datetime import datetime, timedelta

import pytest

from app.core.business_day import (
    business_day_range, current_business_day, resolve_business_day,
    shift_business_day, validate_start_hour,
)
from app.core.errors import ConfigurationError
from app.core.settings import FacilitySettings
from app.core.time_tier import TimeTier, base_price, classify
from conftest import kst


def test_before_start_hour_belongs_to_previous_day() -> None:
    assert resolve_business_day(kst(2024, 1, 2, 9, 59, 59), 10) == "2024-01-01"


def test_advances_exactly_at_start_hour() -> None:
    assert resolve_business_day(kst(2024, 1, 2, 10, 0), 10) == "2024-01-02"


def test_midnight_start_hour_uses_calendar_date() -> None:
    assert resolve_business_day(kst(2024, 1, 2, 0, 0), 0) == "2024-01-02"
    assert resolve_business_day(kst(2024, 1, 1, 23, 59), 0) == "2024-01-01"


def test_naive_timestamp_is_treated_as_utc() -> None:
    # 01:00 UTC == 10:00 KST
    assert resolve_business_day(datetime(2024, 1, 2, 1, 0), 10) == "2024-01-02"
    assert resolve_business_day(datetime(2024, 1, 2, 0, 59), 10) == "2024-01-01"


def test_labels_are_monotonic_over_a_week() -> None:
    moment = kst(2024, 2, 27, 0, 0)
    labels = []
    for _ in range(7 * 24 * 4):
        labels.append(resolve_business_day(moment, 10))
        moment += timedelta(minutes=15)
    assert labels == sorted(labels)
    # 윤년 2월 29일 포함
    assert "2024-02-29" in labels


def test_business_day_range_spans_one_day_from_start_hour() -> None:
    start, end = business_day_range("2024-01-01", 10)
    assert start == kst(2024, 1, 1, 10)
    assert end == kst(2024, 1, 2, 10)
    assert resolve_business_day(start, 10) == "2024-01-01"
    assert resolve_business_day(end - timedelta(microseconds=1), 10) == "2024-01-01"
    assert resolve_business_day(end, 10) == "2024-01-02"


def test_current_business_day_uses_injected_clock() -> None:
    assert current_business_day(10, now=kst(2024, 5, 5, 3, 0)) == "2024-05-04"


def test_shift_business_day() -> None:
    assert shift_business_day("2024-03-01", -1) == "2024-02-29"
    assert shift_business_day("2024-12-31", 1) == "2025-01-01"


@pytest.mark.parametrize("hour", [-1, 24, 100])
def test_start_hour_out_of_range_is_rejected(hour) -> None:
    with pytest.raises(ConfigurationError):
        validate_start_hour(hour)
    with pytest.raises(ConfigurationError):
        FacilitySettings(business_day_start_hour=hour)


def test_settings_reject_invalid_accrual_period() -> None:
    with pytest.raises(ConfigurationError):
        FacilitySettings(foreign_accrual_period_hours=0)
    with pytest.raises(ConfigurationError):
        FacilitySettings(night_price=-1)


@pytest.mark.parametrize(
    "moment, expected",
    [
        (kst(2024, 1, 1, 6, 59, 59), TimeTier.NIGHT),
        (kst(2024, 1, 1, 7, 0), TimeTier.DAY),
        (kst(2024, 1, 1, 18, 59, 59), TimeTier.DAY),
        (kst(2024, 1, 1, 19, 0), TimeTier.NIGHT),
        (kst(2024, 1, 1, 0, 0), TimeTier.NIGHT),
    ],
)
def test_time_tier_boundaries(moment, expected) -> None:
    assert classify(moment) == expected


def test_every_hour_maps_to_exactly_one_tier() -> None:
    tiers = [classify(kst(2024, 1, 1, hour)) for hour in range(24)]
    assert tiers.count(TimeTier.DAY) == 12
    assert tiers.count(TimeTier.NIGHT) == 12


def test_tier_labels_and_base_price() -> None:
    assert TimeTier.DAY.value == "주간"
    assert TimeTier.NIGHT.value == "야간"
    assert base_price(TimeTier.DAY, 10000, 13000) == 10000
    assert base_price(TimeTier.NIGHT, 10000, 13000) == 13000
