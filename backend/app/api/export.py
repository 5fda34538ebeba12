"""
데이터 내보내기API
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
import io
import csv
from app.db.database import get_db
from app.models.locker_log import LockerLog
from app.models.closing_day import ClosingDay
from app.models.expense import Expense
from app.core.clock import format_datetime_local
from app.core.payment import format_payment_breakdown
from app.core.settings import FacilitySettings
from app.api.common import payment_of
from app.api.settings import get_facility_settings
from app.api.statistics import compute_sales_breakdown
from app.api.closing import expected_cash

router = APIRouter(prefix="/api/export", tags=["데이터 내보내기"])

STATUS_LABELS = {"in_use": "사용중", "checked_out": "퇴실", "cancelled": "취소"}
OPTION_LABELS = {
    "none": "없음",
    "discount": "할인",
    "custom": "할인(직접)",
    "foreigner": "외국인",
    "direct_price": "요금직접입력",
}


def generate_csv(data, headers):
    """CSV 데이터 생성"""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    for row in data:
        writer.writerow(row)
    output.seek(0)
    return output.getvalue()


def _csv_response(csv_content: str, filename: str) -> StreamingResponse:
    # 엑셀에서 한글이 깨지지 않도록 BOM 포함
    return StreamingResponse(
        io.BytesIO(csv_content.encode("utf-8-sig")),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


@router.get("/logs")
def export_logs(
    business_day: Optional[str] = Query(None, description="영업일 (YYYY-MM-DD)"),
    start_date: Optional[str] = Query(None, description="시작 영업일"),
    end_date: Optional[str] = Query(None, description="종료 영업일"),
    db: Session = Depends(get_db)
):
    """락커 기록 내보내기"""
    query = db.query(LockerLog)
    if business_day:
        query = query.filter(LockerLog.business_day == business_day)
    else:
        if start_date:
            query = query.filter(LockerLog.business_day >= start_date)
        if end_date:
            query = query.filter(LockerLog.business_day <= end_date)
    logs = query.order_by(LockerLog.entry_time.asc()).all()

    headers = [
        "영업일", "락커번호", "입실시간", "퇴실시간", "주간/야간", "옵션",
        "기본요금", "최종요금", "결제", "추가요금", "추가요금결제", "상태", "비고"
    ]
    data = []
    for log in logs:
        fee_amount = sum(event.fee_amount for event in log.additional_fee_events)
        fee_payments = ", ".join(
            format_payment_breakdown(payment_of(event)) for event in log.additional_fee_events
        )
        data.append([
            log.business_day,
            log.locker_number,
            format_datetime_local(log.entry_time),
            format_datetime_local(log.exit_time) or "",
            log.time_type,
            OPTION_LABELS.get(log.option_type, log.option_type),
            log.base_price,
            log.final_price,
            format_payment_breakdown(payment_of(log)),
            fee_amount,
            fee_payments,
            STATUS_LABELS.get(log.status, log.status),
            log.notes or "",
        ])

    suffix = business_day or datetime.now().strftime('%Y%m%d_%H%M%S')
    return _csv_response(generate_csv(data, headers), f"locker_logs_{suffix}.csv")


@router.get("/closing/{business_day}")
def export_closing(
    business_day: str,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """정산 내역 내보내기"""
    closing = db.query(ClosingDay).filter(ClosingDay.business_day == business_day).first()
    if not closing:
        raise HTTPException(status_code=404, detail="저장된 정산이 없습니다")

    sales = compute_sales_breakdown(db, business_day, settings)
    expenses = db.query(Expense).filter(Expense.business_day == business_day).order_by(
        Expense.date.asc(), Expense.time.asc()
    ).all()

    headers = ["구분", "현금", "카드", "이체", "합계"]
    data = []
    for label, totals in (
        ("입실요금", sales.base_entry),
        ("추가요금", sales.additional_fee),
        ("대여", sales.rental),
        ("매출합계", sales.total),
        ("지출", sales.expenses),
    ):
        data.append([label, totals.cash, totals.card, totals.transfer, totals.total])

    data.append([])
    data.append(["시작 시재금", closing.opening_float])
    data.append(["기대 잔액", expected_cash(closing.opening_float, sales)])
    data.append(["실잔액", closing.actual_cash if closing.actual_cash is not None else ""])
    data.append(["과부족", closing.discrepancy or 0])
    data.append(["목표 시재금", closing.target_float])
    data.append(["은행 입금액", closing.bank_deposit if closing.bank_deposit is not None else ""])
    data.append(["확정", "예" if closing.is_confirmed else "아니오"])
    data.append(["비고", closing.notes or ""])

    if expenses:
        data.append([])
        data.append(["지출 날짜", "시간", "항목", "수량", "금액", "결제"])
        for expense in expenses:
            data.append([
                expense.date, expense.time, expense.category,
                expense.quantity, expense.amount, expense.payment_method
            ])

    return _csv_response(generate_csv(data, headers), f"closing_{business_day}.csv")
