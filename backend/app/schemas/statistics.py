"""
매출 집계 관련 Pydantic 모델
"""
from pydantic import BaseModel, ConfigDict


class DailySummaryResponse(BaseModel):
    """일별 매출 집계"""
    model_config = ConfigDict(from_attributes=True)

    business_day: str
    total_visitors: int = 0
    total_sales: int = 0
    cancellations: int = 0
    total_discount: int = 0
    foreigner_count: int = 0
    foreigner_sales: int = 0
    day_visitors: int = 0
    night_visitors: int = 0


class PaymentTotals(BaseModel):
    """결제수단별 합계"""
    cash: int = 0
    card: int = 0
    transfer: int = 0
    total: int = 0


class SalesBreakdownResponse(BaseModel):
    """영업일 매출 상세"""
    business_day: str
    start_time: str
    end_time: str
    base_entry: PaymentTotals
    additional_fee: PaymentTotals
    entry_total: PaymentTotals
    rental: PaymentTotals
    total: PaymentTotals
    expenses: PaymentTotals
