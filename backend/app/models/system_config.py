"""
시스템 설정 모델
"""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from app.db.database import Base


class SystemConfig(Base):
    """시스템 설정표 (키-값)"""
    __tablename__ = "system_configs"

    key = Column(String(100), primary_key=True, comment="설정 키")
    value = Column(Text, nullable=False, comment="설정 값")
    description = Column(String(200), comment="설정 설명")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, comment="수정 시간")
