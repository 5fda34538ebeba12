"""
추가매출 항목 모델 (롱타올, 담요 등 대여 품목)
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from app.db.database import Base


class AdditionalRevenueItem(Base):
    """추가매출 항목표"""
    __tablename__ = "additional_revenue_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, comment="항목명")
    rental_fee = Column(Integer, nullable=False, default=0, comment="대여비")
    deposit_amount = Column(Integer, nullable=False, default=0, comment="보증금")
    sort_order = Column(Integer, nullable=False, default=0, comment="표시 순서")
    is_default = Column(Boolean, nullable=False, default=False, comment="기본 항목 여부")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, comment="생성 시간")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, comment="수정 시간")
