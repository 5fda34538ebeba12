"""
인증API
"""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
import os
import secrets

router = APIRouter(prefix="/api/auth", tags=["인증"])


class VerifyRequest(BaseModel):
    """비밀번호 확인 요청"""
    password: str = Field(..., description="비밀번호")


def get_app_password() -> str:
    return os.getenv("APP_PASSWORD", "")


@router.post("/verify")
def verify_password(request: VerifyRequest):
    """
    앱 비밀번호 확인
    APP_PASSWORD 환경변수가 설정되지 않은 경우 항상 거부한다
    """
    expected = get_app_password()
    if not expected:
        raise HTTPException(status_code=503, detail="비밀번호가 설정되지 않았습니다")
    if not secrets.compare_digest(request.password, expected):
        raise HTTPException(status_code=401, detail="비밀번호가 올바르지 않습니다")
    return {"success": True}
