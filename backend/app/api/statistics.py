"""
매출 집계API
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import and_
from app.db.database import get_db
from app.models.locker_log import LockerLog
from app.models.additional_fee_event import AdditionalFeeEvent
from app.models.rental_transaction import RentalTransaction
from app.models.expense import Expense
from app.models.daily_summary import DailySummary
from app.schemas.statistics import DailySummaryResponse, PaymentTotals, SalesBreakdownResponse
from app.core.business_day import business_day_range, parse_business_day
from app.core.clock import format_datetime_local
from app.core.payment import PaymentSplit, combine_payments
from app.core.pricing import OptionType
from app.core.settings import FacilitySettings
from app.core.time_tier import TimeTier
from app.api.common import payment_of
from app.api.settings import get_facility_settings

router = APIRouter(prefix="/api/statistics", tags=["매출 집계"])


def recalculate_daily_summary(db: Session, business_day: str) -> DailySummary:
    """
    영업일 집계 재계산 (upsert)
    입실/옵션 변경/퇴실/취소 후 호출하며 commit은 호출자가 한다
    """
    db.flush()
    logs = db.query(LockerLog).filter(LockerLog.business_day == business_day).all()
    active = [log for log in logs if log.status != "cancelled"]
    foreigners = [log for log in active if log.option_type == OptionType.FOREIGNER.value]

    summary = db.query(DailySummary).filter(DailySummary.business_day == business_day).first()
    if not summary:
        summary = DailySummary(business_day=business_day)
        db.add(summary)

    summary.total_visitors = len(active)
    summary.total_sales = sum(log.final_price for log in active)
    summary.cancellations = len(logs) - len(active)
    summary.total_discount = sum(
        max(log.base_price - log.final_price, 0)
        for log in active
        if log.option_type in (OptionType.DISCOUNT.value, OptionType.CUSTOM.value)
    )
    summary.foreigner_count = len(foreigners)
    summary.foreigner_sales = sum(log.final_price for log in foreigners)
    summary.day_visitors = sum(1 for log in active if log.time_type == TimeTier.DAY.value)
    summary.night_visitors = sum(1 for log in active if log.time_type == TimeTier.NIGHT.value)
    return summary


def _totals(split: PaymentSplit) -> PaymentTotals:
    return PaymentTotals(cash=split.cash, card=split.card, transfer=split.transfer, total=split.total)


def _sum_payments(records) -> PaymentSplit:
    total = PaymentSplit()
    for record in records:
        total = combine_payments(total, payment_of(record))
    return total


def compute_sales_breakdown(db: Session, business_day: str, settings: FacilitySettings) -> SalesBreakdownResponse:
    """
    영업일 매출 상세 (결제수단별)

    입실 요금: 입실 시 확정된 영업일이 같은 기록 (취소 제외)
    추가요금: 퇴실 시점 영업일로 기록된 추가요금 이벤트
    대여: 정산 완료되어 해당 영업일로 기록된 대여 거래
    """
    start, end = business_day_range(business_day, settings.business_day_start_hour)

    logs = db.query(LockerLog).filter(
        and_(
            LockerLog.business_day == business_day,
            LockerLog.status != "cancelled"
        )
    ).all()
    fee_events = db.query(AdditionalFeeEvent).filter(AdditionalFeeEvent.business_day == business_day).all()
    rentals = db.query(RentalTransaction).filter(
        and_(
            RentalTransaction.business_day == business_day,
            RentalTransaction.deposit_status != "received"
        )
    ).all()
    expenses = db.query(Expense).filter(Expense.business_day == business_day).all()

    base_entry = _sum_payments(logs)
    additional_fee = _sum_payments(fee_events)
    entry_total = combine_payments(base_entry, additional_fee)
    rental = _sum_payments(rentals)

    expense_split = PaymentSplit()
    for expense in expenses:
        expense_split = combine_payments(expense_split, PaymentSplit(**{expense.payment_method: expense.amount}))

    return SalesBreakdownResponse(
        business_day=business_day,
        start_time=format_datetime_local(start),
        end_time=format_datetime_local(end),
        base_entry=_totals(base_entry),
        additional_fee=_totals(additional_fee),
        entry_total=_totals(entry_total),
        rental=_totals(rental),
        total=_totals(combine_payments(entry_total, rental)),
        expenses=_totals(expense_split),
    )


def _check_label(business_day: str) -> None:
    try:
        parse_business_day(business_day)
    except ValueError:
        raise HTTPException(status_code=400, detail="영업일 형식이 올바르지 않습니다 (YYYY-MM-DD)")


@router.get("/daily-summary/{business_day}", response_model=DailySummaryResponse)
def get_daily_summary(business_day: str, db: Session = Depends(get_db)):
    """영업일 집계 조회 (집계가 없으면 0으로 반환)"""
    _check_label(business_day)
    summary = db.query(DailySummary).filter(DailySummary.business_day == business_day).first()
    if not summary:
        return DailySummaryResponse(business_day=business_day)
    return summary


@router.post("/daily-summary/{business_day}/recalculate", response_model=DailySummaryResponse)
def recalculate_summary(business_day: str, db: Session = Depends(get_db)):
    """영업일 집계 재계산"""
    _check_label(business_day)
    try:
        summary = recalculate_daily_summary(db, business_day)
        db.commit()
        db.refresh(summary)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"집계 재계산 실패: {str(e)}")
    return summary


@router.get("/sales/{business_day}", response_model=SalesBreakdownResponse)
def get_sales_breakdown(
    business_day: str,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """영업일 매출 상세"""
    _check_label(business_day)
    return compute_sales_breakdown(db, business_day, settings)
