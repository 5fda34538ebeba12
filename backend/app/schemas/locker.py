"""
락커 입출 관련 Pydantic 모델
"""
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from typing import Optional, List
from datetime import datetime

from app.core.clock import format_datetime_local
from app.core.pricing import OptionType


class PaymentInput(BaseModel):
    """결제수단별 금액"""
    cash: int = Field(0, description="현금")
    card: int = Field(0, description="카드")
    transfer: int = Field(0, description="이체")


class CheckInRequest(BaseModel):
    """입실 요청"""
    locker_number: int = Field(..., gt=0, description="락커 번호")
    entry_time: Optional[datetime] = Field(None, description="입실 시간 (미입력 시 현재 시간)")
    option_type: OptionType = Field(OptionType.NONE, description="요금 옵션")
    option_amount: Optional[int] = Field(None, ge=0, description="할인 금액 또는 직접입력 금액")
    notes: Optional[str] = Field(None, description="비고")
    parent_locker: Optional[int] = Field(None, gt=0, description="부모 락커 번호")
    payment: Optional[PaymentInput] = Field(None, description="입실 시 결제 내역")


class UpdateOptionRequest(BaseModel):
    """요금 옵션 변경 요청"""
    option_type: OptionType = Field(..., description="요금 옵션")
    option_amount: Optional[int] = Field(None, ge=0, description="할인 금액 또는 직접입력 금액")
    payment: Optional[PaymentInput] = Field(None, description="변경된 요금의 결제 내역 (미입력 시 기존 내역이 맞지 않으면 초기화)")


class UpdateNotesRequest(BaseModel):
    """비고 수정 요청"""
    notes: Optional[str] = Field(None, description="비고")


class CheckoutRequest(BaseModel):
    """퇴실 요청"""
    checkout_time: Optional[datetime] = Field(None, description="퇴실 시간 (미입력 시 현재 시간)")
    payment: Optional[PaymentInput] = Field(None, description="입실 요금 결제 내역 (미입력 시 저장된 내역 사용)")
    additional_fee_payment: Optional[PaymentInput] = Field(None, description="추가요금 결제 내역")
    additional_fee_discount: int = Field(0, ge=0, description="추가요금 할인 금액")


class LockerLogResponse(BaseModel):
    """락커 기록 응답 모델"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    locker_number: int
    entry_time: datetime
    exit_time: Optional[datetime] = None
    business_day: str
    time_type: str
    base_price: int
    option_type: str
    option_amount: Optional[int] = None
    final_price: int
    status: str
    payment_cash: int
    payment_card: int
    payment_transfer: int
    notes: Optional[str] = None
    parent_locker: Optional[int] = None
    warning: Optional[str] = None

    @field_serializer('entry_time', 'exit_time')
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)


class AdditionalFeeQuote(BaseModel):
    """현재 시점 추가요금"""
    fee_amount: int
    periods_elapsed: int
    accrual_count: int
    next_accrual_at: Optional[datetime] = None

    @field_serializer('next_accrual_at')
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)


class AdditionalFeeEventResponse(BaseModel):
    """추가요금 이벤트 응답 모델"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    locker_log_id: int
    locker_number: int
    checkout_time: datetime
    fee_amount: int
    original_fee_amount: int
    accrual_count: int
    business_day: str
    payment_cash: int
    payment_card: int
    payment_transfer: int

    @field_serializer('checkout_time')
    def serialize_datetime(self, dt: datetime) -> str:
        return format_datetime_local(dt)


class LockerLogDetailResponse(LockerLogResponse):
    """락커 기록 상세 (추가요금, 대여 포함)"""
    additional_fee: Optional[AdditionalFeeQuote] = None
    additional_fee_events: List[AdditionalFeeEventResponse] = []
    rental_transaction_ids: List[int] = []


class CheckoutResponse(BaseModel):
    """퇴실 응답"""
    message: str
    log: LockerLogResponse
    additional_fee: AdditionalFeeQuote
    additional_fee_event: Optional[AdditionalFeeEventResponse] = None


class LockerLogListResponse(BaseModel):
    """락커 기록 목록 (커서 페이지네이션)"""
    data: List[LockerLogResponse]
    next_cursor: Optional[str] = None


class LockerBoardItem(BaseModel):
    """락커 현황판 항목"""
    locker_number: int
    display_status: str = Field(..., description="empty, day, night, carryover, fee_due, fee_multiple")
    badge: str
    log_id: Optional[int] = None
    entry_time: Optional[datetime] = None
    time_type: Optional[str] = None
    business_day: Optional[str] = None
    option_type: Optional[str] = None
    final_price: Optional[int] = None
    additional_fee: int = 0
    accrual_count: int = 0
    next_accrual_at: Optional[datetime] = None

    @field_serializer('entry_time', 'next_accrual_at')
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)
