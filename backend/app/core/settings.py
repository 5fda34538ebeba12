"""
시설 설정값 (계산 엔진에 명시적으로 주입)
"""
from dataclasses import asdict, dataclass

from app.core.business_day import validate_start_hour
from app.core.errors import ConfigurationError


@dataclass(frozen=True)
class FacilitySettings:
    business_day_start_hour: int = 10
    day_price: int = 10000
    night_price: int = 13000
    discount_amount: int = 2000
    foreigner_price: int = 25000
    domestic_checkpoint_hour: int = 0
    foreign_accrual_period_hours: int = 24

    def __post_init__(self):
        validate_start_hour(self.business_day_start_hour)
        if not 0 <= self.domestic_checkpoint_hour <= 23:
            raise ConfigurationError("추가요금 기준 시각은 0~23 사이여야 합니다")
        if self.foreign_accrual_period_hours < 1:
            raise ConfigurationError("외국인 추가요금 기준 시간은 1시간 이상이어야 합니다")
        for name in ("day_price", "night_price", "discount_amount", "foreigner_price"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} 값은 0 이상이어야 합니다")

    def as_dict(self) -> dict:
        return asdict(self)


DEFAULT_SETTINGS = FacilitySettings()
