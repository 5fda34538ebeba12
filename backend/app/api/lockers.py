"""
락커 입출 관리API
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_
from typing import List, Optional
from datetime import datetime
from app.db.database import get_db
from app.models.locker_log import LockerLog
from app.models.locker_group import LockerGroup
from app.models.additional_fee_event import AdditionalFeeEvent
from app.models.additional_revenue_item import AdditionalRevenueItem
from app.models.rental_transaction import RentalTransaction
from app.schemas.locker import (
    CheckInRequest, UpdateOptionRequest, UpdateNotesRequest, CheckoutRequest, PaymentInput,
    LockerLogResponse, LockerLogDetailResponse, LockerLogListResponse, LockerBoardItem,
    AdditionalFeeQuote, AdditionalFeeEventResponse, CheckoutResponse
)
from app.schemas.rental import RentalCreateRequest, RentalTransactionResponse
from app.core.additional_fee import AdditionalFeeResult, apply_fee_discount, compute_additional_fee, next_accrual_at
from app.core.business_day import current_business_day, resolve_business_day
from app.core.clock import ensure_utc, resolve_now
from app.core.payment import PaymentSplit
from app.core.pricing import OptionType, build_option, discount_exceeds_base, resolve_final_price
from app.core.settings import FacilitySettings
from app.core.time_tier import TimeTier, base_price, classify
from app.api.common import apply_payment, payment_of, validate_payment
from app.api.settings import get_facility_settings
from app.api.statistics import recalculate_daily_summary

router = APIRouter(prefix="/api/lockers", tags=["락커 관리"])

DISCOUNT_WARNING = "할인 금액이 기본 요금보다 큽니다. 최종 요금을 0원으로 처리했습니다"


def _get_log(db: Session, log_id: int) -> LockerLog:
    log = db.query(LockerLog).filter(LockerLog.id == log_id).first()
    if not log:
        raise HTTPException(status_code=404, detail="락커 기록이 존재하지 않습니다")
    return log


def _require_in_use(log: LockerLog) -> None:
    if log.status != "in_use":
        raise HTTPException(status_code=400, detail="이미 퇴실 또는 취소된 기록은 변경할 수 없습니다")


def _price_for(base: int, option_type, option_amount, settings: FacilitySettings):
    """(최종 요금, 경고) - 할인이 기본 요금보다 크면 0원으로 처리하고 경고"""
    try:
        option = build_option(option_type, option_amount, settings.discount_amount, settings.foreigner_price)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if discount_exceeds_base(base, option):
        return 0, DISCOUNT_WARNING
    return resolve_final_price(base, option), None


def _is_foreigner(log: LockerLog) -> bool:
    return log.option_type == OptionType.FOREIGNER.value


def quote_additional_fee(log: LockerLog, settings: FacilitySettings, now: datetime) -> AdditionalFeeResult:
    """기록의 now 시점 추가요금"""
    return compute_additional_fee(
        entry_time=log.entry_time,
        entry_tier=log.time_type,
        day_price=settings.day_price,
        night_price=settings.night_price,
        now=now,
        is_foreigner=_is_foreigner(log),
        domestic_checkpoint_hour=settings.domestic_checkpoint_hour,
        foreign_accrual_period_hours=settings.foreign_accrual_period_hours,
    )


def _next_accrual(log: LockerLog, settings: FacilitySettings, now: datetime) -> datetime:
    return next_accrual_at(
        entry_time=log.entry_time,
        entry_tier=log.time_type,
        now=now,
        is_foreigner=_is_foreigner(log),
        domestic_checkpoint_hour=settings.domestic_checkpoint_hour,
        foreign_accrual_period_hours=settings.foreign_accrual_period_hours,
    )


def _fee_quote(log: LockerLog, settings: FacilitySettings, now: datetime) -> AdditionalFeeQuote:
    result = quote_additional_fee(log, settings, now)
    return AdditionalFeeQuote(
        fee_amount=result.fee_amount,
        periods_elapsed=result.periods_elapsed,
        accrual_count=result.accrual_count,
        next_accrual_at=_next_accrual(log, settings, now),
    )


def _with_warning(log: LockerLog, warning: Optional[str]) -> LockerLogResponse:
    return LockerLogResponse.model_validate(log).model_copy(update={"warning": warning})


@router.post("/check-in", response_model=LockerLogResponse)
def check_in(
    request: CheckInRequest,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """
    입실
    영업일, 주간/야간, 기본 요금은 입실 시점에 확정되며 이후 설정이 바뀌어도 변경되지 않는다
    """
    occupied = db.query(LockerLog).filter(
        and_(LockerLog.locker_number == request.locker_number, LockerLog.status == "in_use")
    ).first()
    if occupied:
        raise HTTPException(status_code=409, detail=f"{request.locker_number}번 락커는 사용 중입니다")

    entry_time = resolve_now(request.entry_time)
    tier = classify(entry_time)
    base = base_price(tier, settings.day_price, settings.night_price)
    final_price, warning = _price_for(base, request.option_type, request.option_amount, settings)

    log = LockerLog(
        locker_number=request.locker_number,
        entry_time=entry_time,
        business_day=resolve_business_day(entry_time, settings.business_day_start_hour),
        time_type=tier.value,
        base_price=base,
        option_type=request.option_type.value,
        option_amount=request.option_amount,
        final_price=final_price,
        status="in_use",
        notes=request.notes,
        parent_locker=request.parent_locker,
    )
    if request.payment is not None:
        apply_payment(log, validate_payment(request.payment, final_price, "입실 요금"))

    try:
        db.add(log)
        recalculate_daily_summary(db, log.business_day)
        db.commit()
        db.refresh(log)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"입실 처리 실패: {str(e)}")
    return _with_warning(log, warning)


@router.get("/active", response_model=List[LockerLogResponse])
def get_active_lockers(db: Session = Depends(get_db)):
    """사용 중인 락커 (입실 순)"""
    return db.query(LockerLog).filter(LockerLog.status == "in_use").order_by(LockerLog.entry_time.asc()).all()


@router.get("/board", response_model=List[LockerBoardItem])
def get_locker_board(
    now: Optional[datetime] = Query(None, description="기준 시각 (미입력 시 현재 시간)"),
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """
    락커 현황판
    그룹에 속한 빈 락커와 사용 중인 락커를 번호순으로 반환한다. 추가요금은 요청마다 다시 계산한다.
    """
    moment = resolve_now(now)
    today = current_business_day(settings.business_day_start_hour, moment)

    numbers = set()
    for group in db.query(LockerGroup).all():
        numbers.update(range(group.start_number, group.end_number + 1))

    active = {
        log.locker_number: log
        for log in db.query(LockerLog).filter(LockerLog.status == "in_use").all()
    }
    numbers.update(active.keys())

    board = []
    for number in sorted(numbers):
        log = active.get(number)
        if log is None:
            board.append(LockerBoardItem(locker_number=number, display_status="empty", badge=""))
            continue

        result = quote_additional_fee(log, settings, moment)
        if result.accrual_count >= 2:
            display_status = "fee_multiple"
        elif result.accrual_count == 1:
            display_status = "fee_due"
        elif log.business_day != today:
            display_status = "carryover"
        elif log.time_type == TimeTier.NIGHT.value:
            display_status = "night"
        else:
            display_status = "day"

        board.append(LockerBoardItem(
            locker_number=number,
            display_status=display_status,
            badge=f"추가요금 ×{result.accrual_count}" if result.has_accrual else "사용중",
            log_id=log.id,
            entry_time=log.entry_time,
            time_type=log.time_type,
            business_day=log.business_day,
            option_type=log.option_type,
            final_price=log.final_price,
            additional_fee=result.fee_amount,
            accrual_count=result.accrual_count,
            next_accrual_at=_next_accrual(log, settings, moment),
        ))
    return board


def _parse_cursor(cursor: str):
    """커서 "입실시간|기록ID" 해석"""
    try:
        raw_time, raw_id = cursor.rsplit("|", 1)
        return ensure_utc(datetime.fromisoformat(raw_time)), int(raw_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="커서 형식이 올바르지 않습니다")


@router.get("/logs", response_model=LockerLogListResponse)
def get_locker_logs(
    business_day: Optional[str] = Query(None, description="영업일 (YYYY-MM-DD)"),
    start_date: Optional[str] = Query(None, description="시작 영업일 (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="종료 영업일 (YYYY-MM-DD)"),
    status: Optional[str] = Query(None, description="상태：in_use, checked_out, cancelled"),
    cursor: Optional[str] = Query(None, description="이전 페이지 응답의 next_cursor"),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db)
):
    """락커 기록 목록 (입실 시간 역순, 커서 페이지네이션)"""
    query = db.query(LockerLog)

    if business_day:
        query = query.filter(LockerLog.business_day == business_day)
    else:
        if start_date:
            query = query.filter(LockerLog.business_day >= start_date)
        if end_date:
            query = query.filter(LockerLog.business_day <= end_date)

    if status:
        query = query.filter(LockerLog.status == status)

    if cursor:
        cursor_time, cursor_id = _parse_cursor(cursor)
        query = query.filter(or_(
            LockerLog.entry_time < cursor_time,
            and_(LockerLog.entry_time == cursor_time, LockerLog.id < cursor_id)
        ))

    logs = query.order_by(LockerLog.entry_time.desc(), LockerLog.id.desc()).limit(limit + 1).all()
    next_cursor = None
    if len(logs) > limit:
        logs = logs[:limit]
        next_cursor = f"{ensure_utc(logs[-1].entry_time).isoformat()}|{logs[-1].id}"
    return LockerLogListResponse(data=logs, next_cursor=next_cursor)


@router.get("/logs/{log_id}", response_model=LockerLogDetailResponse)
def get_locker_log(
    log_id: int,
    now: Optional[datetime] = Query(None, description="추가요금 기준 시각"),
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """락커 기록 상세 (사용 중이면 현재 추가요금 포함)"""
    log = _get_log(db, log_id)
    detail = LockerLogDetailResponse.model_validate(log)
    detail.additional_fee_events = [
        AdditionalFeeEventResponse.model_validate(event) for event in log.additional_fee_events
    ]
    detail.rental_transaction_ids = [rental.id for rental in log.rental_transactions]
    if log.status == "in_use":
        detail.additional_fee = _fee_quote(log, settings, resolve_now(now))
    return detail


@router.put("/logs/{log_id}/option", response_model=LockerLogResponse)
def update_option(
    log_id: int,
    request: UpdateOptionRequest,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """요금 옵션 변경 (입실 시 확정된 기본 요금 기준으로 재계산)"""
    log = _get_log(db, log_id)
    _require_in_use(log)

    final_price, warning = _price_for(log.base_price, request.option_type, request.option_amount, settings)
    if request.payment is not None:
        split = validate_payment(request.payment, final_price, "입실 요금")
    elif payment_of(log).total != final_price:
        # 기존 결제 내역은 이전 요금 기준이므로 퇴실 시 다시 받는다
        split = PaymentSplit()
    else:
        split = None

    log.option_type = request.option_type.value
    log.option_amount = request.option_amount
    log.final_price = final_price
    apply_payment(log, split)

    try:
        recalculate_daily_summary(db, log.business_day)
        db.commit()
        db.refresh(log)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"옵션 변경 실패: {str(e)}")
    return _with_warning(log, warning)


@router.put("/logs/{log_id}/notes", response_model=LockerLogResponse)
def update_notes(log_id: int, request: UpdateNotesRequest, db: Session = Depends(get_db)):
    """비고 수정"""
    log = _get_log(db, log_id)
    _require_in_use(log)
    log.notes = request.notes
    db.commit()
    db.refresh(log)
    return log


@router.post("/logs/{log_id}/checkout", response_model=CheckoutResponse)
def checkout(
    log_id: int,
    request: CheckoutRequest = None,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """
    퇴실

    입실 요금과 추가요금은 별도의 정산으로 각각 검증한다.
    - 입실 요금 결제 내역이 없으면 입실 시 저장된 내역을 사용하고, 저장된 내역도 없으면 전액 현금으로 처리
    - 추가요금이 발생하면 할인 적용 후 금액으로 추가요금 이벤트를 기록 (퇴실 시점 영업일 기준)
    - 추가요금이 남아 있으면 추가요금 결제 내역을 반드시 입력해야 한다
    """
    request = request or CheckoutRequest()
    log = _get_log(db, log_id)
    _require_in_use(log)

    checkout_time = resolve_now(request.checkout_time)

    stored = payment_of(log)
    base_payment = request.payment
    if base_payment is None:
        base_payment = PaymentInput(**stored.as_dict()) if stored.total else PaymentInput(cash=log.final_price)
    base_split = validate_payment(base_payment, log.final_price, "입실 요금")

    result = quote_additional_fee(log, settings, checkout_time)
    try:
        fee_due = apply_fee_discount(result.fee_amount, request.additional_fee_discount)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    fee_payment = request.additional_fee_payment
    if fee_payment is None:
        if fee_due > 0:
            raise HTTPException(
                status_code=400,
                detail=f"추가요금 {fee_due:,}원의 결제 내역을 입력해주세요"
            )
        fee_payment = PaymentInput()
    fee_split = validate_payment(fee_payment, fee_due, "추가요금")

    apply_payment(log, base_split)
    log.status = "checked_out"
    log.exit_time = checkout_time

    event = None
    if result.fee_amount > 0:
        event = AdditionalFeeEvent(
            locker_log_id=log.id,
            locker_number=log.locker_number,
            checkout_time=checkout_time,
            fee_amount=fee_due,
            original_fee_amount=result.fee_amount,
            accrual_count=result.accrual_count,
            business_day=resolve_business_day(checkout_time, settings.business_day_start_hour),
        )
        apply_payment(event, fee_split)
        db.add(event)

    try:
        recalculate_daily_summary(db, log.business_day)
        db.commit()
        db.refresh(log)
        if event is not None:
            db.refresh(event)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"퇴실 처리 실패: {str(e)}")

    return CheckoutResponse(
        message=f"{log.locker_number}번 락커 퇴실 완료",
        log=LockerLogResponse.model_validate(log),
        additional_fee=AdditionalFeeQuote(
            fee_amount=fee_due,
            periods_elapsed=result.periods_elapsed,
            accrual_count=result.accrual_count,
        ),
        additional_fee_event=AdditionalFeeEventResponse.model_validate(event) if event else None,
    )


@router.post("/logs/{log_id}/cancel", response_model=LockerLogResponse)
def cancel(log_id: int, db: Session = Depends(get_db)):
    """입실 취소 (보증금을 돌려주지 않은 대여가 있으면 취소 불가)"""
    log = _get_log(db, log_id)
    _require_in_use(log)

    pending = [rental for rental in log.rental_transactions if rental.deposit_status == "received"]
    if pending:
        names = ", ".join(rental.item_name for rental in pending)
        raise HTTPException(status_code=409, detail=f"보증금 처리가 끝나지 않은 대여가 있습니다: {names}")

    log.status = "cancelled"
    log.exit_time = resolve_now()

    try:
        recalculate_daily_summary(db, log.business_day)
        db.commit()
        db.refresh(log)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"취소 처리 실패: {str(e)}")
    return log


@router.post("/logs/{log_id}/rentals", response_model=RentalTransactionResponse)
def create_rental(
    log_id: int,
    request: RentalCreateRequest,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """대여 등록 (보증금이 있는 품목은 보증금 수령 상태로 기록)"""
    log = _get_log(db, log_id)
    _require_in_use(log)

    item = db.query(AdditionalRevenueItem).filter(AdditionalRevenueItem.id == request.item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail="대여 품목이 존재하지 않습니다")

    rental_time = resolve_now(request.rental_time)
    rental = RentalTransaction(
        locker_log_id=log.id,
        item_id=item.id,
        item_name=item.name,
        locker_number=log.locker_number,
        rental_time=rental_time,
        business_day=resolve_business_day(rental_time, settings.business_day_start_hour),
        rental_fee=item.rental_fee,
        deposit_amount=item.deposit_amount,
        deposit_status="received" if item.deposit_amount > 0 else "none",
        revenue=item.rental_fee,
    )
    db.add(rental)
    db.commit()
    db.refresh(rental)
    return rental
