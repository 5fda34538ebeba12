"""
정산 관련 Pydantic 모델
"""
from pydantic import BaseModel, Field, field_serializer
from typing import Optional
from datetime import datetime

from app.core.clock import format_datetime_local
from app.schemas.statistics import SalesBreakdownResponse


class ClosingSaveRequest(BaseModel):
    """정산 저장 요청"""
    opening_float: int = Field(..., ge=0, description="시작 시재금")
    target_float: int = Field(..., ge=0, description="목표 시재금")
    actual_cash: Optional[int] = Field(None, ge=0, description="금전함 실잔액")
    bank_deposit: Optional[int] = Field(None, ge=0, description="은행 입금액")
    notes: Optional[str] = Field(None, description="비고")


class ClosingResponse(BaseModel):
    """정산 정보 (저장 전에는 미리보기)"""
    business_day: str
    saved: bool = False
    opening_float: int
    target_float: int
    actual_cash: Optional[int] = None
    expected_cash: int
    discrepancy: Optional[int] = None
    suggested_bank_deposit: Optional[int] = None
    bank_deposit: Optional[int] = None
    notes: Optional[str] = None
    is_confirmed: bool = False
    confirmed_at: Optional[datetime] = None
    sales: SalesBreakdownResponse

    @field_serializer('confirmed_at')
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)
