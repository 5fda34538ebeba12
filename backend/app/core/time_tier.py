"""
주간/야간 요금 구분
주간: 현지 07:00 ~ 18:59, 야간: 19:00 ~ 06:59
"""
import enum
from datetime import datetime

from app.core.clock import to_local

DAY_START_HOUR = 7
NIGHT_START_HOUR = 19


class TimeTier(str, enum.Enum):
    DAY = "주간"
    NIGHT = "야간"


def classify(timestamp: datetime) -> TimeTier:
    hour = to_local(timestamp).hour
    if DAY_START_HOUR <= hour < NIGHT_START_HOUR:
        return TimeTier.DAY
    return TimeTier.NIGHT


def base_price(tier: TimeTier, day_price: int, night_price: int) -> int:
    return day_price if tier == TimeTier.DAY else night_price
