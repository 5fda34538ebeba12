"""
추가요금 이벤트 모델 (퇴실 시 발생, 추가 전용)
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.database import Base


class AdditionalFeeEvent(Base):
    """추가요금 이벤트표"""
    __tablename__ = "additional_fee_events"

    id = Column(Integer, primary_key=True, index=True)
    locker_log_id = Column(Integer, ForeignKey("locker_logs.id"), nullable=False, index=True, comment="락커 기록 ID")
    locker_number = Column(Integer, nullable=False, comment="락커 번호")
    checkout_time = Column(DateTime(timezone=True), nullable=False, comment="퇴실 시간 (UTC)")
    fee_amount = Column(Integer, nullable=False, comment="추가요금 (할인 적용 후)")
    original_fee_amount = Column(Integer, nullable=False, comment="추가요금 원금 (할인 전)")
    accrual_count = Column(Integer, nullable=False, default=0, comment="추가요금 발생 횟수")
    business_day = Column(String(10), nullable=False, index=True, comment="영업일 (퇴실 기준)")
    payment_cash = Column(Integer, nullable=False, default=0, comment="현금 결제액")
    payment_card = Column(Integer, nullable=False, default=0, comment="카드 결제액")
    payment_transfer = Column(Integer, nullable=False, default=0, comment="이체 결제액")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, comment="생성 시간")

    # 관계
    locker_log = relationship("LockerLog", back_populates="additional_fee_events")

    __table_args__ = (
        Index("idx_additional_fee_events_checkout_time", "checkout_time"),
    )
