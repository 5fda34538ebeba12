"""
대여 거래API
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.database import get_db
from app.models.rental_transaction import RentalTransaction
from app.schemas.rental import RentalSettleRequest, RentalTransactionResponse
from app.core.business_day import resolve_business_day
from app.core.clock import resolve_now
from app.core.settings import FacilitySettings
from app.api.common import apply_payment, validate_payment
from app.api.settings import get_facility_settings

router = APIRouter(prefix="/api/rentals", tags=["대여 관리"])


def _get_rental(db: Session, rental_id: int) -> RentalTransaction:
    rental = db.query(RentalTransaction).filter(RentalTransaction.id == rental_id).first()
    if not rental:
        raise HTTPException(status_code=404, detail="대여 기록이 존재하지 않습니다")
    return rental


@router.get("", response_model=List[RentalTransactionResponse])
def get_rentals(
    business_day: Optional[str] = Query(None, description="영업일 (YYYY-MM-DD)"),
    locker_log_id: Optional[int] = Query(None, description="락커 기록 ID"),
    deposit_status: Optional[str] = Query(None, description="보증금 상태"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """대여 거래 목록"""
    query = db.query(RentalTransaction)
    if business_day:
        query = query.filter(RentalTransaction.business_day == business_day)
    if locker_log_id:
        query = query.filter(RentalTransaction.locker_log_id == locker_log_id)
    if deposit_status:
        query = query.filter(RentalTransaction.deposit_status == deposit_status)
    return query.order_by(RentalTransaction.rental_time.desc()).offset(skip).limit(limit).all()


@router.get("/{rental_id}", response_model=RentalTransactionResponse)
def get_rental(rental_id: int, db: Session = Depends(get_db)):
    """대여 거래 상세"""
    return _get_rental(db, rental_id)


@router.post("/{rental_id}/settle", response_model=RentalTransactionResponse)
def settle_rental(
    rental_id: int,
    request: RentalSettleRequest,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """
    대여 정산 (반납)
    매출 = 대여비 + 몰수된 보증금이며, 정산 시점의 영업일로 다시 기록한다
    """
    rental = _get_rental(db, rental_id)
    if rental.return_time is not None:
        raise HTTPException(status_code=400, detail="이미 정산된 대여입니다")

    if rental.deposit_amount > 0 and request.deposit_status == "none":
        raise HTTPException(status_code=400, detail="보증금 환급 또는 몰수를 선택해야 합니다")
    if rental.deposit_amount == 0 and request.deposit_status != "none":
        raise HTTPException(status_code=400, detail="보증금이 없는 대여입니다")

    revenue = rental.rental_fee
    if request.deposit_status == "forfeited":
        revenue += rental.deposit_amount
    split = validate_payment(request.payment, revenue, "대여 매출")

    return_time = resolve_now(request.return_time)
    rental.return_time = return_time
    rental.deposit_status = request.deposit_status
    rental.revenue = revenue
    rental.business_day = resolve_business_day(return_time, settings.business_day_start_hour)
    apply_payment(rental, split)

    try:
        db.commit()
        db.refresh(rental)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"대여 정산 실패: {str(e)}")
    return rental
