import os
import tempfile

import pytest

# 앱 임포트 전에 테스트용 SQLite 파일 지정
_tmp_dir = tempfile.mkdtemp(prefix="locker-pos-test-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["BACKUP_DIR"] = os.path.join(_tmp_dir, "backups")

from datetime import datetime  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402

from app.core.clock import KST  # noqa: E402
from app.db.database import Base, SessionLocal, engine  # noqa: E402
from app.db.init_db import seed_defaults  # noqa: E402
from app.main import app  # noqa: E402


def kst(year, month, day, hour=0, minute=0, second=0, microsecond=0) -> datetime:
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=KST)


@pytest.fixture()
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()


@pytest.fixture()
def client(reset_database):
    with TestClient(app) as test_client:
        yield test_client
