"""
지출 관련 Pydantic 모델
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
import datetime

PaymentMethod = Literal["cash", "card", "transfer"]


class ExpenseCreate(BaseModel):
    """지출 등록"""
    date: datetime.date = Field(..., description="지출 날짜")
    time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$", description="지출 시간 (HH:MM)")
    category: str = Field(..., description="지출 항목", max_length=100)
    amount: int = Field(..., gt=0, description="금액")
    quantity: int = Field(1, ge=1, description="수량")
    payment_method: PaymentMethod = Field("cash", description="결제 방식")
    business_day: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="영업일 (미입력 시 날짜/시간으로 계산)")
    notes: Optional[str] = Field(None, description="비고")


class ExpenseUpdate(BaseModel):
    """지출 수정"""
    category: Optional[str] = Field(None, description="지출 항목", max_length=100)
    amount: Optional[int] = Field(None, gt=0, description="금액")
    quantity: Optional[int] = Field(None, ge=1, description="수량")
    payment_method: Optional[PaymentMethod] = Field(None, description="결제 방식")
    notes: Optional[str] = Field(None, description="비고")


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: str
    time: str
    category: str
    amount: int
    quantity: int
    payment_method: str
    business_day: str
    notes: Optional[str] = None


class ExpenseSummary(BaseModel):
    """영업일별 지출 합계"""
    business_day: str
    cash_total: int = 0
    card_total: int = 0
    transfer_total: int = 0
    total: int = 0
