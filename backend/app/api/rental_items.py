"""
대여 품목 관리API
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from app.db.database import get_db
from app.models.additional_revenue_item import AdditionalRevenueItem
from app.models.rental_transaction import RentalTransaction
from app.schemas.rental import RentalItemCreate, RentalItemUpdate, RentalItemResponse

router = APIRouter(prefix="/api/rental-items", tags=["대여 품목"])


@router.get("", response_model=List[RentalItemResponse])
def get_rental_items(db: Session = Depends(get_db)):
    """대여 품목 목록"""
    return db.query(AdditionalRevenueItem).order_by(
        AdditionalRevenueItem.sort_order.asc(), AdditionalRevenueItem.id.asc()
    ).all()


@router.post("", response_model=RentalItemResponse)
def create_rental_item(item: RentalItemCreate, db: Session = Depends(get_db)):
    """대여 품목 생성"""
    db_item = AdditionalRevenueItem(**item.model_dump())
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


@router.put("/{item_id}", response_model=RentalItemResponse)
def update_rental_item(item_id: int, item: RentalItemUpdate, db: Session = Depends(get_db)):
    """대여 품목 수정 (이미 등록된 대여 거래 금액은 변경되지 않음)"""
    db_item = db.query(AdditionalRevenueItem).filter(AdditionalRevenueItem.id == item_id).first()
    if not db_item:
        raise HTTPException(status_code=404, detail="대여 품목이 존재하지 않습니다")

    for key, value in item.model_dump(exclude_none=True).items():
        setattr(db_item, key, value)

    db.commit()
    db.refresh(db_item)
    return db_item


@router.delete("/{item_id}")
def delete_rental_item(item_id: int, db: Session = Depends(get_db)):
    """
    대여 품목 삭제
    대여 기록이 있는 품목은 삭제할 수 없다
    """
    db_item = db.query(AdditionalRevenueItem).filter(AdditionalRevenueItem.id == item_id).first()
    if not db_item:
        raise HTTPException(status_code=404, detail="대여 품목이 존재하지 않습니다")

    used = db.query(RentalTransaction).filter(RentalTransaction.item_id == item_id).count()
    if used > 0:
        raise HTTPException(status_code=400, detail="대여 기록이 있는 품목은 삭제할 수 없습니다")

    try:
        db.delete(db_item)
        db.commit()
        return {"message": f"대여 품목 {db_item.name} 삭제 완료"}
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"삭제 실패: {str(e)}")
