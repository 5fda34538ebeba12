"""
일별 매출 집계 모델
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.db.database import Base


class DailySummary(Base):
    """일별 매출 집계표 (영업일 기준 upsert)"""
    __tablename__ = "locker_daily_summaries"

    business_day = Column(String(10), primary_key=True, comment="영업일")
    total_visitors = Column(Integer, nullable=False, default=0, comment="입실 인원 (취소 제외)")
    total_sales = Column(Integer, nullable=False, default=0, comment="입실 매출")
    cancellations = Column(Integer, nullable=False, default=0, comment="취소 건수")
    total_discount = Column(Integer, nullable=False, default=0, comment="할인 합계")
    foreigner_count = Column(Integer, nullable=False, default=0, comment="외국인 인원")
    foreigner_sales = Column(Integer, nullable=False, default=0, comment="외국인 매출")
    day_visitors = Column(Integer, nullable=False, default=0, comment="주간 인원")
    night_visitors = Column(Integer, nullable=False, default=0, comment="야간 인원")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, comment="생성 시간")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, comment="수정 시간")
