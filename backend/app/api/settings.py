"""
시설 설정 관리API
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
from dataclasses import fields, replace
from app.db.database import get_db
from app.models.system_config import SystemConfig
from app.schemas.settings import FacilitySettingsResponse, FacilitySettingsUpdate, BusinessDayInfo
from app.core.business_day import business_day_range, current_business_day
from app.core.clock import format_datetime_local, resolve_now
from app.core.errors import ConfigurationError
from app.core.settings import DEFAULT_SETTINGS, FacilitySettings
from app.core.time_tier import base_price, classify

router = APIRouter(prefix="/api/settings", tags=["시설 설정"])

SETTING_DESCRIPTIONS = {
    "business_day_start_hour": "영업일 시작 시각 (0~23시)",
    "day_price": "주간 요금",
    "night_price": "야간 요금",
    "discount_amount": "기본 할인 금액",
    "foreigner_price": "외국인 요금",
    "domestic_checkpoint_hour": "내국인 추가요금 기준 시각 (0~23시)",
    "foreign_accrual_period_hours": "외국인 추가요금 기준 시간",
}


def load_facility_settings(db: Session) -> FacilitySettings:
    """
    system_configs 테이블에서 시설 설정 조회
    저장값이 없거나 숫자가 아니면 기본값을 사용한다
    """
    stored = {
        config.key: config.value
        for config in db.query(SystemConfig).filter(SystemConfig.key.in_(list(SETTING_DESCRIPTIONS))).all()
    }
    values = {}
    for field in fields(FacilitySettings):
        raw = stored.get(field.name)
        if raw is None:
            continue
        try:
            values[field.name] = int(raw)
        except ValueError:
            print(f"잘못된 설정값 무시: {field.name}={raw!r}")
    try:
        return replace(DEFAULT_SETTINGS, **values)
    except ConfigurationError as e:
        print(f"설정값 검증 실패, 기본값 사용: {e}")
        return DEFAULT_SETTINGS


def get_facility_settings(db: Session = Depends(get_db)) -> FacilitySettings:
    """라우트 의존성: 요청마다 현재 설정 주입"""
    return load_facility_settings(db)


def save_facility_settings(db: Session, settings: FacilitySettings) -> None:
    for key, value in settings.as_dict().items():
        config = db.query(SystemConfig).filter(SystemConfig.key == key).first()
        if config:
            config.value = str(value)
        else:
            db.add(SystemConfig(key=key, value=str(value), description=SETTING_DESCRIPTIONS[key]))


@router.get("", response_model=FacilitySettingsResponse)
def get_settings(settings: FacilitySettings = Depends(get_facility_settings)):
    """시설 설정 조회"""
    return settings.as_dict()


@router.put("", response_model=FacilitySettingsResponse)
def update_settings(request: FacilitySettingsUpdate, db: Session = Depends(get_db)):
    """시설 설정 수정 (입력한 항목만 변경, 기존 영업일 기록은 변경하지 않음)"""
    current = load_facility_settings(db)
    changes = request.model_dump(exclude_none=True)
    try:
        updated = replace(current, **changes)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        save_facility_settings(db, updated)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"설정 저장 실패: {str(e)}")
    return updated.as_dict()


@router.get("/business-day", response_model=BusinessDayInfo)
def get_current_business_day(
    now: Optional[datetime] = Query(None, description="기준 시각 (미입력 시 현재 시간)"),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """현재 영업일과 요금 시간대"""
    moment = resolve_now(now)
    label = current_business_day(settings.business_day_start_hour, moment)
    start, end = business_day_range(label, settings.business_day_start_hour)
    tier = classify(moment)
    return BusinessDayInfo(
        business_day=label,
        start_time=format_datetime_local(start),
        end_time=format_datetime_local(end),
        time_type=tier.value,
        base_price=base_price(tier, settings.day_price, settings.night_price),
    )
