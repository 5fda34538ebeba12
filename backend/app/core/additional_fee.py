"""
추가요금(초과 이용료) 계산

초과 이용은 이산적인 "기간" 단위로 청구한다.

- 내국인: 입실 이후 처음 도래하는 현지 기준 시각(기본 자정)부터 하루 단위로 경계가 생긴다.
  입실 시간대에 따라 경계별 청구 규칙이 다르다.
    * 주간 입실: 첫 경계에서 야간-주간 차액, 이후 경계마다 야간 요금
    * 야간 19시 이후 입실: 첫 경계는 무료, 두 번째 경계부터 야간 요금
    * 야간 07시 이전 입실(새벽): 첫 경계부터 야간 요금
- 외국인: 입실 시각부터 N시간(기본 24시간) 단위의 고정 구간. 입실 시간대와 무관하며
  구간마다 야간 요금(또는 별도 지정 단가)을 청구한다.

경계 시각과 같거나 지난 시점부터 해당 경계를 넘은 것으로 본다.
현재 시각이 입실 시각보다 이르면(단말 시계 오차) 경과 기간 0으로 처리한다.
"""
import enum
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional, Tuple, Union

from app.core.clock import KST, ensure_utc, to_local
from app.core.time_tier import DAY_START_HOUR, TimeTier

ONE_DAY = timedelta(days=1)


class EntryCategory(str, enum.Enum):
    """추가요금 규칙 구분용 입실 시간대"""
    DAY = "day"
    EVENING = "evening"
    EARLY_MORNING = "early_morning"


@dataclass(frozen=True)
class AdditionalFeeResult:
    """
    fee_amount: 누적 추가요금
    periods_elapsed: 지나간 경계 수 (무료 경계 포함)
    accrual_count: 실제 요금이 붙은 경계 수 (화면 배지 표시용)
    """
    fee_amount: int = 0
    periods_elapsed: int = 0
    accrual_count: int = 0

    @property
    def has_accrual(self) -> bool:
        return self.accrual_count > 0


def entry_category(entry_time: datetime, entry_tier: Union[TimeTier, str]) -> EntryCategory:
    """입실 시각과 입실 당시 확정된 시간대로 규칙 구분 결정"""
    if TimeTier(entry_tier) == TimeTier.DAY:
        return EntryCategory.DAY
    if to_local(entry_time).hour < DAY_START_HOUR:
        return EntryCategory.EARLY_MORNING
    return EntryCategory.EVENING


def _first_checkpoint_after(entry_local: datetime, checkpoint_hour: int) -> datetime:
    candidate = datetime.combine(entry_local.date(), time(hour=checkpoint_hour), tzinfo=KST)
    if candidate <= entry_local:
        candidate += ONE_DAY
    return candidate


def _boundary_schedule(
    entry_time: datetime,
    is_foreigner: bool,
    domestic_checkpoint_hour: int,
    foreign_accrual_period_hours: int,
) -> Tuple[datetime, timedelta]:
    """(첫 경계 시각, 경계 간격)"""
    if is_foreigner:
        period = timedelta(hours=foreign_accrual_period_hours)
        return to_local(entry_time) + period, period
    return _first_checkpoint_after(to_local(entry_time), domestic_checkpoint_hour), ONE_DAY


def _count_boundaries(first_boundary: datetime, period: timedelta, now: datetime) -> int:
    now_local = to_local(now)
    if now_local < first_boundary:
        return 0
    return (now_local - first_boundary) // period + 1


def _first_charged_boundary(category: EntryCategory, is_foreigner: bool) -> int:
    """요금이 처음 붙는 경계 번호 (1부터)"""
    if not is_foreigner and category == EntryCategory.EVENING:
        return 2
    return 1


def compute_additional_fee(
    entry_time: datetime,
    entry_tier: Union[TimeTier, str],
    day_price: int,
    night_price: int,
    now: datetime,
    is_foreigner: bool = False,
    domestic_checkpoint_hour: int = 0,
    foreign_accrual_period_hours: int = 24,
    foreign_unit_price: Optional[int] = None,
) -> AdditionalFeeResult:
    """
    입실 시각부터 now까지의 추가요금 계산

    순수 함수로, 화면 갱신 주기마다 호출자가 다시 계산한다.
    외국인 구간 단가는 foreign_unit_price를 지정하지 않으면 야간 요금과 같다.
    """
    if ensure_utc(now) < ensure_utc(entry_time):
        return AdditionalFeeResult()

    first_boundary, period = _boundary_schedule(
        entry_time, is_foreigner, domestic_checkpoint_hour, foreign_accrual_period_hours
    )
    periods = _count_boundaries(first_boundary, period, now)
    if periods == 0:
        return AdditionalFeeResult()

    if is_foreigner:
        unit = night_price if foreign_unit_price is None else foreign_unit_price
        return AdditionalFeeResult(fee_amount=unit * periods, periods_elapsed=periods, accrual_count=periods)

    category = entry_category(entry_time, entry_tier)
    if category == EntryCategory.DAY:
        first_charge = max(night_price - day_price, 0)
        fee = first_charge + night_price * (periods - 1)
        return AdditionalFeeResult(fee_amount=fee, periods_elapsed=periods, accrual_count=periods)

    charged = periods - (_first_charged_boundary(category, is_foreigner) - 1)
    charged = max(charged, 0)
    return AdditionalFeeResult(fee_amount=night_price * charged, periods_elapsed=periods, accrual_count=charged)


def next_accrual_at(
    entry_time: datetime,
    entry_tier: Union[TimeTier, str],
    now: datetime,
    is_foreigner: bool = False,
    domestic_checkpoint_hour: int = 0,
    foreign_accrual_period_hours: int = 24,
) -> datetime:
    """다음으로 요금이 붙는 경계 시각 (현지 시간)"""
    first_boundary, period = _boundary_schedule(
        entry_time, is_foreigner, domestic_checkpoint_hour, foreign_accrual_period_hours
    )
    passed = 0
    if ensure_utc(now) >= ensure_utc(entry_time):
        passed = _count_boundaries(first_boundary, period, now)
    category = entry_category(entry_time, entry_tier)
    index = max(passed + 1, _first_charged_boundary(category, is_foreigner))
    return first_boundary + period * (index - 1)


def apply_fee_discount(original_amount: int, discount: int = 0) -> int:
    """퇴실 시 추가요금 할인 적용"""
    if discount < 0:
        raise ValueError("추가요금 할인 금액은 0 이상이어야 합니다")
    if discount > original_amount:
        raise ValueError(
            f"추가요금 할인 금액({discount:,}원)이 추가요금({original_amount:,}원)보다 클 수 없습니다"
        )
    return original_amount - discount
