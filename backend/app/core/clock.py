"""
시간대 정규화
모든 영업일/요금 계산은 시설 현지 시간(KST) 기준으로 수행한다
"""
from datetime import datetime, timezone, timedelta
from typing import Optional

# 한국 표준시 UTC+9 (서머타임 없음)
KST = timezone(timedelta(hours=9))


def ensure_utc(dt: datetime) -> datetime:
    """UTC 시각으로 변환 (시간대 정보가 없으면 UTC로 간주)"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local(dt: datetime) -> datetime:
    """시설 현지 시간으로 변환"""
    return ensure_utc(dt).astimezone(KST)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """호출자가 주입한 현재 시각을 우선 사용"""
    return ensure_utc(now) if now is not None else now_utc()


def format_datetime_local(dt: Optional[datetime]) -> Optional[str]:
    """UTC 시각을 현지 시간 문자열로 변환"""
    if dt is None:
        return None
    return to_local(dt).strftime("%Y-%m-%d %H:%M:%S")
