"""
락커 그룹 관리API
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from app.db.database import get_db
from app.models.locker_group import LockerGroup
from app.schemas.locker_group import LockerGroupCreate, LockerGroupUpdate, LockerGroupResponse

router = APIRouter(prefix="/api/locker-groups", tags=["락커 그룹"])


def _get_group(db: Session, group_id: int) -> LockerGroup:
    group = db.query(LockerGroup).filter(LockerGroup.id == group_id).first()
    if not group:
        raise HTTPException(status_code=404, detail="락커 그룹이 존재하지 않습니다")
    return group


@router.get("", response_model=List[LockerGroupResponse])
def get_locker_groups(db: Session = Depends(get_db)):
    """락커 그룹 목록"""
    return db.query(LockerGroup).order_by(LockerGroup.sort_order.asc(), LockerGroup.start_number.asc()).all()


@router.post("", response_model=LockerGroupResponse)
def create_locker_group(group: LockerGroupCreate, db: Session = Depends(get_db)):
    """락커 그룹 생성"""
    db_group = LockerGroup(**group.model_dump())
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    return db_group


@router.put("/{group_id}", response_model=LockerGroupResponse)
def update_locker_group(group_id: int, group: LockerGroupUpdate, db: Session = Depends(get_db)):
    """락커 그룹 수정"""
    db_group = _get_group(db, group_id)
    changes = group.model_dump(exclude_none=True)

    start = changes.get("start_number", db_group.start_number)
    end = changes.get("end_number", db_group.end_number)
    if start > end:
        raise HTTPException(status_code=400, detail="시작 번호는 종료 번호보다 작거나 같아야 합니다")

    for key, value in changes.items():
        setattr(db_group, key, value)

    db.commit()
    db.refresh(db_group)
    return db_group


@router.delete("/{group_id}")
def delete_locker_group(group_id: int, db: Session = Depends(get_db)):
    """락커 그룹 삭제 (기존 락커 기록은 유지)"""
    db_group = _get_group(db, group_id)
    db.delete(db_group)
    db.commit()
    return {"message": f"락커 그룹 {db_group.name} 삭제 완료"}
