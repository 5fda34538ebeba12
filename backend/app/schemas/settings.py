"""
시설 설정 관련 Pydantic 모델
"""
from pydantic import BaseModel, Field
from typing import Optional


class FacilitySettingsResponse(BaseModel):
    """시설 설정"""
    business_day_start_hour: int
    day_price: int
    night_price: int
    discount_amount: int
    foreigner_price: int
    domestic_checkpoint_hour: int
    foreign_accrual_period_hours: int


class FacilitySettingsUpdate(BaseModel):
    """시설 설정 수정 (입력한 항목만 변경)"""
    business_day_start_hour: Optional[int] = Field(None, ge=0, le=23, description="영업일 시작 시각")
    day_price: Optional[int] = Field(None, ge=0, description="주간 요금")
    night_price: Optional[int] = Field(None, ge=0, description="야간 요금")
    discount_amount: Optional[int] = Field(None, ge=0, description="기본 할인 금액")
    foreigner_price: Optional[int] = Field(None, ge=0, description="외국인 요금")
    domestic_checkpoint_hour: Optional[int] = Field(None, ge=0, le=23, description="내국인 추가요금 기준 시각")
    foreign_accrual_period_hours: Optional[int] = Field(None, ge=1, description="외국인 추가요금 기준 시간")


class BusinessDayInfo(BaseModel):
    """현재 영업일/요금 시간대"""
    business_day: str
    start_time: str
    end_time: str
    time_type: str
    base_price: int
