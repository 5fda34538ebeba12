"""
데이터 백업 및 정리API
"""
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session
from app.db.database import get_db, DATABASE_URL
from app.models.locker_log import LockerLog
from app.models.additional_fee_event import AdditionalFeeEvent
from app.models.rental_transaction import RentalTransaction
from app.models.daily_summary import DailySummary
from app.models.expense import Expense
from app.models.closing_day import ClosingDay
from app.models.system_config import SystemConfig
from app.core.business_day import current_business_day, shift_business_day
from app.core.settings import FacilitySettings
from app.api.settings import get_facility_settings
import os
import shutil
from datetime import datetime
from pathlib import Path

router = APIRouter(prefix="/api/maintenance", tags=["데이터 관리"])

# 백업 디렉터리
BACKUP_DIR = Path(os.getenv("BACKUP_DIR", Path(__file__).parent.parent.parent / "backups"))

# 보관 기간 (일)
RETENTION_DAYS = 365

LAST_CLEANUP_KEY = "last_cleanup_date"


def get_database_path() -> Path:
    """데이터베이스 파일 경로"""
    if DATABASE_URL.startswith("sqlite:///"):
        db_path = DATABASE_URL.replace("sqlite:///", "")
        if not os.path.isabs(db_path):
            # 상대 경로는 backend 디렉터리 기준
            db_path = Path(__file__).parent.parent.parent / db_path
        return Path(db_path)
    raise HTTPException(status_code=500, detail="지원하지 않는 데이터베이스 유형입니다")


def _backup_to(prefix: str) -> str:
    db_path = get_database_path()
    if not db_path.exists():
        raise HTTPException(status_code=404, detail="데이터베이스 파일이 존재하지 않습니다")
    BACKUP_DIR.mkdir(parents=True, exist_ok=True)
    filename = f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.db"
    shutil.copy2(db_path, BACKUP_DIR / filename)
    return filename


def delete_transactions_before(db: Session, cutoff_day: str) -> dict:
    """cutoff_day 이전 영업일의 거래 데이터 삭제 (설정, 품목, 그룹은 유지)"""
    old_log_ids = [
        row.id for row in db.query(LockerLog.id).filter(LockerLog.business_day < cutoff_day).all()
    ]
    counts = {
        "additional_fee_events": db.query(AdditionalFeeEvent).filter(
            AdditionalFeeEvent.locker_log_id.in_(old_log_ids)
        ).delete(synchronize_session=False),
        "rental_transactions": db.query(RentalTransaction).filter(
            RentalTransaction.locker_log_id.in_(old_log_ids)
        ).delete(synchronize_session=False),
    }
    counts["locker_logs"] = db.query(LockerLog).filter(
        LockerLog.id.in_(old_log_ids)
    ).delete(synchronize_session=False)
    counts["daily_summaries"] = db.query(DailySummary).filter(
        DailySummary.business_day < cutoff_day
    ).delete(synchronize_session=False)
    counts["expenses"] = db.query(Expense).filter(
        Expense.business_day < cutoff_day
    ).delete(synchronize_session=False)
    counts["closing_days"] = db.query(ClosingDay).filter(
        ClosingDay.business_day < cutoff_day
    ).delete(synchronize_session=False)
    return counts


@router.post("/backup")
def create_backup():
    """데이터 백업"""
    try:
        filename = _backup_to("backup")
        backup_path = BACKUP_DIR / filename
        return {
            "message": "백업 완료",
            "filename": filename,
            "size": backup_path.stat().st_size,
            "created_at": datetime.now().isoformat()
        }
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"백업 실패: {str(e)}")


@router.get("/backups")
def list_backups():
    """백업 목록"""
    if not BACKUP_DIR.exists():
        return {"backups": []}
    backups = []
    for file in sorted(BACKUP_DIR.glob("*.db"), reverse=True):
        stat = file.stat()
        backups.append({
            "filename": file.name,
            "size": stat.st_size,
            "created_at": datetime.fromtimestamp(stat.st_mtime).isoformat(),
        })
    return {"backups": backups}


@router.post("/cleanup-old")
def cleanup_old_data(
    force: bool = Query(False, description="오늘 이미 실행했더라도 다시 실행"),
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """
    1년 지난 거래 데이터 삭제
    하루 한 번만 실행되며 마지막 실행일은 system_configs에 기록한다
    """
    today = current_business_day(settings.business_day_start_hour)
    last = db.query(SystemConfig).filter(SystemConfig.key == LAST_CLEANUP_KEY).first()
    if last and last.value == today and not force:
        return {"message": "오늘 이미 정리를 실행했습니다", "skipped": True, "deleted": {}}

    cutoff_day = shift_business_day(today, -RETENTION_DAYS)
    try:
        counts = delete_transactions_before(db, cutoff_day)
        if last:
            last.value = today
        else:
            db.add(SystemConfig(key=LAST_CLEANUP_KEY, value=today, description="마지막 데이터 정리 날짜"))
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"데이터 정리 실패: {str(e)}")

    print(f"{cutoff_day} 이전 데이터 정리 완료: {counts}")
    return {"message": "데이터 정리 완료", "skipped": False, "cutoff_day": cutoff_day, "deleted": counts}


@router.post("/clear")
def clear_all_data(db: Session = Depends(get_db)):
    """모든 거래 데이터 삭제 (삭제 전 자동 백업, 설정/품목/그룹은 유지)"""
    backup_filename = None
    try:
        if get_database_path().exists():
            backup_filename = _backup_to("clear_backup")

        counts = {
            "additional_fee_events": db.query(AdditionalFeeEvent).delete(),
            "rental_transactions": db.query(RentalTransaction).delete(),
            "locker_logs": db.query(LockerLog).delete(),
            "daily_summaries": db.query(DailySummary).delete(),
            "expenses": db.query(Expense).delete(),
            "closing_days": db.query(ClosingDay).delete(),
        }
        db.commit()
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"데이터 삭제 실패: {str(e)}")

    return {"message": "데이터 삭제 완료", "backup_file": backup_filename, "deleted": counts}
