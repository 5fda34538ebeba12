"""
영업일 계산
영업일은 설정된 시작 시각(예: 오전 10시)부터 다음날 같은 시각 직전까지의 24시간 정산 구간이다
"""
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from app.core.clock import KST, resolve_now, to_local
from app.core.errors import ConfigurationError

DATE_FORMAT = "%Y-%m-%d"


def validate_start_hour(start_hour: int) -> int:
    """영업일 시작 시각 검증 (설정 저장 시점에 호출)"""
    if not isinstance(start_hour, int) or isinstance(start_hour, bool) or not 0 <= start_hour <= 23:
        raise ConfigurationError(f"영업일 시작 시각은 0~23 사이여야 합니다 (입력값: {start_hour})")
    return start_hour


def parse_business_day(label: str) -> date:
    return datetime.strptime(label, DATE_FORMAT).date()


def resolve_business_day(timestamp: datetime, start_hour: int) -> str:
    """
    주어진 시각이 속한 영업일 (YYYY-MM-DD)

    현지 시각이 시작 시각 이전이면 전날 영업일로 집계한다
    """
    local = to_local(timestamp)
    day = local.date()
    if local.hour < start_hour:
        day = day - timedelta(days=1)
    return day.strftime(DATE_FORMAT)


def business_day_range(label: str, start_hour: int) -> Tuple[datetime, datetime]:
    """영업일 구간 [시작, 종료) - 현지 시간 기준 시각"""
    start = datetime.combine(parse_business_day(label), time(hour=start_hour), tzinfo=KST)
    return start, start + timedelta(days=1)


def current_business_day(start_hour: int, now: Optional[datetime] = None) -> str:
    return resolve_business_day(resolve_now(now), start_hour)


def shift_business_day(label: str, days: int) -> str:
    return (parse_business_day(label) + timedelta(days=days)).strftime(DATE_FORMAT)
