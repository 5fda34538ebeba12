"""
FastAPI 메인 애플리케이션
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.db.init_db import init_db
from app.middleware.operation_log import OperationLogMiddleware
import traceback

# 테이블 생성 및 기본값 등록
init_db()

# FastAPI 애플리케이션 생성
app = FastAPI(
    title="락커 관리 시스템 API",
    description="찜질방/사우나 락커 입출 및 매출 관리 백엔드 API",
    version="1.0.0"
)

# 작업 로그 기록
app.add_middleware(OperationLogMiddleware)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 개발 환경은 모든 출처 허용
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 전역 예외 처리
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """처리되지 않은 예외도 CORS 헤더와 함께 반환"""
    error_detail = str(exc)
    traceback_str = traceback.format_exc()
    print(f"처리되지 않은 예외: {error_detail}")
    print(traceback_str)
    return JSONResponse(
        status_code=500,
        content={
            "detail": f"내부 서버 오류: {error_detail}",
            "traceback": traceback_str if app.debug else None
        },
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "*",
            "Access-Control-Allow-Headers": "*",
        }
    )


@app.get("/")
async def root():
    """루트 경로"""
    return {"message": "락커 관리 시스템 API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """상태 확인"""
    return {"status": "ok"}


# API 라우터 등록
from app.api import (
    auth, settings, lockers, rentals, rental_items, locker_groups,
    expenses, statistics, closing, export, maintenance, operation_logs
)
app.include_router(auth.router)
app.include_router(settings.router)
app.include_router(lockers.router)
app.include_router(rentals.router)
app.include_router(rental_items.router)
app.include_router(locker_groups.router)
app.include_router(expenses.router)
app.include_router(statistics.router)
app.include_router(closing.router)
app.include_router(export.router)
app.include_router(maintenance.router)
app.include_router(operation_logs.router)
