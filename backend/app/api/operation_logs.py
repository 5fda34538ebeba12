"""
작업 로그API
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import List, Optional
from datetime import datetime, timedelta
from app.db.database import get_db
from app.models.operation_log import OperationLog
from pydantic import BaseModel, ConfigDict, field_serializer
from app.core.clock import format_datetime_local, now_utc

router = APIRouter(prefix="/api/operation-logs", tags=["작업 로그"])


class OperationLogResponse(BaseModel):
    """작업 로그 응답 모델"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    action: str
    module: str
    method: str
    path: str
    ip_address: Optional[str] = None
    request_data: Optional[str] = None
    status_code: Optional[int] = None
    error_message: Optional[str] = None
    execution_time: Optional[int] = None
    created_at: datetime

    @field_serializer('created_at')
    def serialize_datetime(self, dt: datetime) -> str:
        return format_datetime_local(dt)


@router.get("", response_model=List[OperationLogResponse])
def get_operation_logs(
    skip: int = Query(0, ge=0, description="건너뛸 건수"),
    limit: int = Query(50, ge=1, le=1000, description="반환 건수"),
    action: Optional[str] = Query(None, description="작업 유형"),
    module: Optional[str] = Query(None, description="모듈"),
    db: Session = Depends(get_db)
):
    """작업 로그 목록 (최신순)"""
    query = db.query(OperationLog)

    if action:
        query = query.filter(OperationLog.action.like(f"%{action}%"))
    if module:
        query = query.filter(OperationLog.module.like(f"%{module}%"))

    return query.order_by(desc(OperationLog.created_at), desc(OperationLog.id)).offset(skip).limit(limit).all()


@router.get("/{log_id}", response_model=OperationLogResponse)
def get_operation_log(log_id: int, db: Session = Depends(get_db)):
    """작업 로그 상세"""
    log = db.query(OperationLog).filter(OperationLog.id == log_id).first()
    if not log:
        raise HTTPException(status_code=404, detail="작업 로그가 존재하지 않습니다")
    return log


@router.delete("")
def clear_operation_logs(
    days: int = Query(30, ge=1, le=365, description="최근 N일 로그만 유지"),
    db: Session = Depends(get_db)
):
    """오래된 작업 로그 정리"""
    cutoff = now_utc() - timedelta(days=days)
    deleted_count = db.query(OperationLog).filter(OperationLog.created_at < cutoff).delete()
    db.commit()
    return {"message": f"작업 로그 {deleted_count}건 삭제"}
