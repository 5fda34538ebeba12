"""
락커 입출 기록 모델
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.database import Base


class LockerLog(Base):
    """락커 입출 기록표"""
    __tablename__ = "locker_logs"

    id = Column(Integer, primary_key=True, index=True)
    locker_number = Column(Integer, nullable=False, index=True, comment="락커 번호")
    entry_time = Column(DateTime(timezone=True), nullable=False, comment="입실 시간 (UTC)")
    exit_time = Column(DateTime(timezone=True), comment="퇴실 시간 (UTC)")
    business_day = Column(String(10), nullable=False, index=True, comment="영업일 (입실 시 확정)")
    time_type = Column(String(10), nullable=False, comment="주간/야간 (입실 시 확정)")
    base_price = Column(Integer, nullable=False, comment="기본 요금 (입실 시 확정)")
    option_type = Column(String(20), nullable=False, default="none", comment="옵션：none, discount, custom, foreigner, direct_price")
    option_amount = Column(Integer, comment="할인 금액 또는 직접입력 금액")
    final_price = Column(Integer, nullable=False, comment="최종 입실 요금 (추가요금 제외)")
    status = Column(String(20), nullable=False, default="in_use", index=True, comment="상태：in_use, checked_out, cancelled")
    payment_cash = Column(Integer, nullable=False, default=0, comment="현금 결제액")
    payment_card = Column(Integer, nullable=False, default=0, comment="카드 결제액")
    payment_transfer = Column(Integer, nullable=False, default=0, comment="이체 결제액")
    notes = Column(Text, comment="비고")
    parent_locker = Column(Integer, comment="부모 락커 번호 (자식 락커인 경우)")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, comment="생성 시간")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, comment="수정 시간")

    # 관계
    additional_fee_events = relationship("AdditionalFeeEvent", back_populates="locker_log")
    rental_transactions = relationship("RentalTransaction", back_populates="locker_log")

    __table_args__ = (
        Index("idx_locker_logs_status", "status"),
        Index("idx_locker_logs_business_day", "business_day"),
        Index("idx_locker_logs_entry_time", "entry_time"),
    )
