"""
데이터베이스 초기화 스크립트
"""
from sqlalchemy.orm import Session
from app.db.database import engine, Base, SessionLocal
from app.models import AdditionalRevenueItem, SystemConfig
from app.core.settings import DEFAULT_SETTINGS
from app.api.settings import SETTING_DESCRIPTIONS

DEFAULT_RENTAL_ITEMS = [
    {"name": "롱타올대여", "rental_fee": 1000, "deposit_amount": 5000, "sort_order": 1, "is_default": True},
    {"name": "담요대여", "rental_fee": 1000, "deposit_amount": 5000, "sort_order": 2, "is_default": True},
]


def seed_defaults(db: Session) -> None:
    """기본 설정값과 기본 대여 품목 등록 (이미 있으면 건너뜀)"""
    for key, value in DEFAULT_SETTINGS.as_dict().items():
        if not db.query(SystemConfig).filter(SystemConfig.key == key).first():
            db.add(SystemConfig(key=key, value=str(value), description=SETTING_DESCRIPTIONS[key]))

    if db.query(AdditionalRevenueItem).count() == 0:
        for item in DEFAULT_RENTAL_ITEMS:
            db.add(AdditionalRevenueItem(**item))

    db.commit()


def init_db():
    """데이터베이스 초기화, 모든 테이블 생성 후 기본값 등록"""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()
    print("데이터베이스 테이블 생성 완료!")


if __name__ == "__main__":
    init_db()
