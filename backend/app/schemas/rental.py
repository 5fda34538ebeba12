"""
대여 품목/거래 관련 Pydantic 모델
"""
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from typing import Optional, Literal
from datetime import datetime

from app.core.clock import format_datetime_local
from app.schemas.locker import PaymentInput


class RentalItemCreate(BaseModel):
    """대여 품목 생성"""
    name: str = Field(..., description="항목명", max_length=100)
    rental_fee: int = Field(0, ge=0, description="대여비")
    deposit_amount: int = Field(0, ge=0, description="보증금")
    sort_order: int = Field(0, description="표시 순서")
    is_default: bool = Field(False, description="기본 항목 여부")


class RentalItemUpdate(BaseModel):
    """대여 품목 수정"""
    name: Optional[str] = Field(None, description="항목명", max_length=100)
    rental_fee: Optional[int] = Field(None, ge=0, description="대여비")
    deposit_amount: Optional[int] = Field(None, ge=0, description="보증금")
    sort_order: Optional[int] = Field(None, description="표시 순서")
    is_default: Optional[bool] = Field(None, description="기본 항목 여부")


class RentalItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    rental_fee: int
    deposit_amount: int
    sort_order: int
    is_default: bool


class RentalCreateRequest(BaseModel):
    """대여 등록 요청"""
    item_id: int = Field(..., description="대여 품목 ID")
    rental_time: Optional[datetime] = Field(None, description="대여 시간 (미입력 시 현재 시간)")


class RentalSettleRequest(BaseModel):
    """대여 정산 요청 (반납/보증금 처리)"""
    deposit_status: Literal["refunded", "forfeited", "none"] = Field(..., description="보증금 처리")
    payment: PaymentInput = Field(default_factory=PaymentInput, description="대여 매출 결제 내역")
    return_time: Optional[datetime] = Field(None, description="반납 시간 (미입력 시 현재 시간)")


class RentalTransactionResponse(BaseModel):
    """대여 거래 응답 모델"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    locker_log_id: int
    item_id: int
    item_name: str
    locker_number: int
    rental_time: datetime
    return_time: Optional[datetime] = None
    business_day: str
    rental_fee: int
    deposit_amount: int
    deposit_status: str
    revenue: int
    payment_cash: int
    payment_card: int
    payment_transfer: int

    @field_serializer('rental_time', 'return_time')
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)
