"""
데이터베이스 설정 및 연결
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os

# SQLite 데이터베이스 경로
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./database.db")

# SQLite만 스레드 검사 해제가 필요
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    echo=False  # True로 설정하면 SQL 출력
)

# 세션 팩토리
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 기본 모델 클래스
Base = declarative_base()


def get_db():
    """요청 단위 데이터베이스 세션"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
