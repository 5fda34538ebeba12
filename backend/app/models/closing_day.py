"""
정산 기록 모델
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func
from app.db.database import Base


class ClosingDay(Base):
    """정산 기록표"""
    __tablename__ = "closing_days"

    id = Column(Integer, primary_key=True, index=True)
    business_day = Column(String(10), unique=True, nullable=False, index=True, comment="정산 영업일")
    start_time = Column(DateTime(timezone=True), nullable=False, comment="정산 시작 시간")
    end_time = Column(DateTime(timezone=True), nullable=False, comment="정산 종료 시간")
    opening_float = Column(Integer, nullable=False, default=0, comment="시작 시재금")
    target_float = Column(Integer, nullable=False, default=0, comment="목표 시재금")
    actual_cash = Column(Integer, comment="금전함 실잔액 (직원 입력)")
    expected_cash = Column(Integer, comment="기대 잔액 (계산값)")
    discrepancy = Column(Integer, default=0, comment="과부족 (실잔액 - 기대잔액)")
    bank_deposit = Column(Integer, comment="은행 입금액")
    notes = Column(Text, comment="비고 (과부족 사유 등)")
    is_confirmed = Column(Boolean, nullable=False, default=False, comment="정산 확정 여부")
    confirmed_at = Column(DateTime(timezone=True), comment="확정 시간")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, comment="생성 시간")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, comment="수정 시간")
