"""
지출 기록 모델
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, Index
from sqlalchemy.sql import func
from app.db.database import Base


class Expense(Base):
    """지출 기록표"""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(String(10), nullable=False, comment="지출 날짜 (YYYY-MM-DD)")
    time = Column(String(5), nullable=False, comment="지출 시간 (HH:MM)")
    category = Column(String(100), nullable=False, comment="지출 항목 (예: 간식, 비품)")
    amount = Column(Integer, nullable=False, comment="금액")
    quantity = Column(Integer, nullable=False, default=1, comment="수량")
    payment_method = Column(String(20), nullable=False, default="cash", comment="결제 방식：cash, card, transfer")
    business_day = Column(String(10), nullable=False, index=True, comment="영업일 (정산 기준일)")
    notes = Column(Text, comment="비고")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, comment="생성 시간")

    __table_args__ = (
        Index("idx_expenses_business_day", "business_day"),
    )
