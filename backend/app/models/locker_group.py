"""
락커 그룹 모델 (번호대별 그룹)
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.db.database import Base


class LockerGroup(Base):
    """락커 그룹표"""
    __tablename__ = "locker_groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, comment="그룹명 (예: 1층)")
    start_number = Column(Integer, nullable=False, comment="시작 번호")
    end_number = Column(Integer, nullable=False, comment="종료 번호")
    sort_order = Column(Integer, nullable=False, default=0, comment="표시 순서")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, comment="생성 시간")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, comment="수정 시간")
