"""
대여 거래 모델
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.database import Base


class RentalTransaction(Base):
    """대여 거래표"""
    __tablename__ = "rental_transactions"

    id = Column(Integer, primary_key=True, index=True)
    locker_log_id = Column(Integer, ForeignKey("locker_logs.id"), nullable=False, index=True, comment="락커 기록 ID")
    item_id = Column(Integer, ForeignKey("additional_revenue_items.id"), nullable=False, comment="추가매출 항목 ID")
    item_name = Column(String(100), nullable=False, comment="항목명")
    locker_number = Column(Integer, nullable=False, comment="락커 번호")
    rental_time = Column(DateTime(timezone=True), nullable=False, comment="대여 시간 (UTC)")
    return_time = Column(DateTime(timezone=True), comment="반납 시간 (UTC)")
    business_day = Column(String(10), nullable=False, index=True, comment="영업일 (대여 또는 정산 시점 기준)")
    rental_fee = Column(Integer, nullable=False, comment="대여비")
    deposit_amount = Column(Integer, nullable=False, default=0, comment="보증금")
    deposit_status = Column(String(20), nullable=False, default="none", comment="보증금 상태：received, refunded, forfeited, none")
    revenue = Column(Integer, nullable=False, default=0, comment="매출 (대여비 + 몰수 보증금)")
    payment_cash = Column(Integer, nullable=False, default=0, comment="현금 결제액")
    payment_card = Column(Integer, nullable=False, default=0, comment="카드 결제액")
    payment_transfer = Column(Integer, nullable=False, default=0, comment="이체 결제액")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, comment="생성 시간")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, comment="수정 시간")

    # 관계
    locker_log = relationship("LockerLog", back_populates="rental_transactions")

    __table_args__ = (
        Index("idx_rental_transactions_deposit_status", "deposit_status"),
    )
