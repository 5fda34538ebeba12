"""
영업일 정산API
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional
from app.db.database import get_db
from app.models.closing_day import ClosingDay
from app.schemas.closing import ClosingSaveRequest, ClosingResponse
from app.schemas.statistics import SalesBreakdownResponse
from app.core.business_day import business_day_range, parse_business_day
from app.core.clock import ensure_utc, now_utc
from app.core.settings import FacilitySettings
from app.api.settings import get_facility_settings
from app.api.statistics import compute_sales_breakdown

router = APIRouter(prefix="/api/closing", tags=["정산"])


def _check_label(business_day: str) -> None:
    try:
        parse_business_day(business_day)
    except ValueError:
        raise HTTPException(status_code=400, detail="영업일 형식이 올바르지 않습니다 (YYYY-MM-DD)")


def expected_cash(opening_float: int, sales: SalesBreakdownResponse) -> int:
    """기대 잔액 = 시작 시재금 + 현금 매출 - 현금 지출"""
    return opening_float + sales.total.cash - sales.expenses.cash


def _default_float(db: Session, business_day: str) -> int:
    """직전 정산의 목표 시재금 (없으면 0)"""
    latest = db.query(ClosingDay).filter(
        ClosingDay.business_day < business_day
    ).order_by(ClosingDay.business_day.desc()).first()
    return latest.target_float if latest else 0


def _build_response(
    business_day: str,
    sales: SalesBreakdownResponse,
    opening_float: int,
    target_float: int,
    actual_cash: Optional[int],
    closing: Optional[ClosingDay] = None,
) -> ClosingResponse:
    expected = expected_cash(opening_float, sales)
    return ClosingResponse(
        business_day=business_day,
        saved=closing is not None,
        opening_float=opening_float,
        target_float=target_float,
        actual_cash=actual_cash,
        expected_cash=expected,
        discrepancy=actual_cash - expected if actual_cash is not None else None,
        suggested_bank_deposit=actual_cash - target_float if actual_cash is not None else None,
        bank_deposit=closing.bank_deposit if closing else None,
        notes=closing.notes if closing else None,
        is_confirmed=closing.is_confirmed if closing else False,
        confirmed_at=closing.confirmed_at if closing else None,
        sales=sales,
    )


@router.get("/{business_day}", response_model=ClosingResponse)
def get_closing(
    business_day: str,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """
    정산 조회
    저장된 정산이 없으면 직전 정산의 목표 시재금을 시작 시재금으로 한 미리보기를 반환한다
    """
    _check_label(business_day)
    sales = compute_sales_breakdown(db, business_day, settings)
    closing = db.query(ClosingDay).filter(ClosingDay.business_day == business_day).first()
    if closing:
        return _build_response(
            business_day, sales, closing.opening_float, closing.target_float, closing.actual_cash, closing
        )
    default_float = _default_float(db, business_day)
    return _build_response(business_day, sales, default_float, default_float, None)


@router.put("/{business_day}", response_model=ClosingResponse)
def save_closing(
    business_day: str,
    request: ClosingSaveRequest,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """정산 저장 (확정된 정산은 수정 불가)"""
    _check_label(business_day)
    closing = db.query(ClosingDay).filter(ClosingDay.business_day == business_day).first()
    if closing and closing.is_confirmed:
        raise HTTPException(status_code=400, detail="확정된 정산은 수정할 수 없습니다")

    sales = compute_sales_breakdown(db, business_day, settings)
    expected = expected_cash(request.opening_float, sales)
    start, end = business_day_range(business_day, settings.business_day_start_hour)

    if not closing:
        closing = ClosingDay(business_day=business_day)
        db.add(closing)

    closing.start_time = ensure_utc(start)
    closing.end_time = ensure_utc(end)
    closing.opening_float = request.opening_float
    closing.target_float = request.target_float
    closing.actual_cash = request.actual_cash
    closing.expected_cash = expected
    closing.discrepancy = request.actual_cash - expected if request.actual_cash is not None else 0
    closing.bank_deposit = request.bank_deposit
    closing.notes = request.notes

    try:
        db.commit()
        db.refresh(closing)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"정산 저장 실패: {str(e)}")

    return _build_response(
        business_day, sales, closing.opening_float, closing.target_float, closing.actual_cash, closing
    )


@router.post("/{business_day}/confirm", response_model=ClosingResponse)
def confirm_closing(
    business_day: str,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """정산 확정 (금전함 실잔액 입력 후에만 가능)"""
    _check_label(business_day)
    closing = db.query(ClosingDay).filter(ClosingDay.business_day == business_day).first()
    if not closing:
        raise HTTPException(status_code=404, detail="저장된 정산이 없습니다")
    if closing.is_confirmed:
        raise HTTPException(status_code=400, detail="이미 확정된 정산입니다")
    if closing.actual_cash is None:
        raise HTTPException(status_code=400, detail="금전함 실잔액을 입력해야 확정할 수 있습니다")

    closing.is_confirmed = True
    closing.confirmed_at = now_utc()
    db.commit()
    db.refresh(closing)

    sales = compute_sales_breakdown(db, business_day, settings)
    return _build_response(
        business_day, sales, closing.opening_float, closing.target_float, closing.actual_cash, closing
    )
