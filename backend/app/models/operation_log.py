"""
작업 로그 모델
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func
from app.db.database import Base


class OperationLog(Base):
    """작업 로그표"""
    __tablename__ = "operation_logs"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String(100), nullable=False, index=True, comment="작업 유형：입실, 퇴실, 취소 등")
    module = Column(String(50), nullable=False, index=True, comment="작업 모듈：락커 관리, 정산 등")
    method = Column(String(10), nullable=False, comment="HTTP 메서드")
    path = Column(String(500), nullable=False, comment="요청 경로")
    ip_address = Column(String(50), comment="IP 주소")
    request_data = Column(Text, comment="요청 데이터")
    status_code = Column(Integer, comment="HTTP 상태 코드")
    error_message = Column(Text, comment="오류 메시지")
    execution_time = Column(Integer, comment="실행 시간 (밀리초)")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True, comment="생성 시간")

    __table_args__ = (
        Index("idx_operation_logs_module", "module"),
        Index("idx_operation_logs_created_at", "created_at"),
    )
