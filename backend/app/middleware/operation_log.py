"""
작업 로그 미들웨어
모든 API 호출을 operation_logs 테이블에 기록한다
"""
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.orm import Session
from app.db.database import SessionLocal
from app.models.operation_log import OperationLog


class OperationLogMiddleware(BaseHTTPMiddleware):
    """작업 로그 미들웨어"""

    # 기록하지 않는 경로
    EXCLUDED_PATHS = [
        "/",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/api/operation-logs",  # 로그 조회 자체는 기록하지 않음
    ]

    # 요청 본문을 기록하지 않는 경로 (비밀번호)
    BODY_EXCLUDED_PATHS = [
        "/api/auth",
    ]

    # 경로로 모듈 판단
    MODULE_MAP = {
        "/api/lockers": "락커 관리",
        "/api/rentals": "대여 관리",
        "/api/rental-items": "대여 품목",
        "/api/locker-groups": "락커 그룹",
        "/api/expenses": "지출 관리",
        "/api/statistics": "매출 집계",
        "/api/closing": "정산",
        "/api/export": "데이터 내보내기",
        "/api/maintenance": "데이터 관리",
        "/api/settings": "시설 설정",
        "/api/auth": "인증",
    }

    # HTTP 메서드로 작업 유형 판단
    ACTION_MAP = {
        "GET": "조회",
        "POST": "생성",
        "PUT": "수정",
        "DELETE": "삭제",
        "PATCH": "수정",
    }

    # 경로 끝부분으로 구체적인 작업 판단 (POST/PUT)
    PATH_ACTIONS = [
        ("/check-in", "입실"),
        ("/checkout", "퇴실"),
        ("/cancel", "입실 취소"),
        ("/rentals", "대여 등록"),
        ("/settle", "대여 정산"),
        ("/option", "요금 옵션 변경"),
        ("/notes", "비고 수정"),
        ("/recalculate", "집계 재계산"),
        ("/confirm", "정산 확정"),
        ("/backup", "데이터 백업"),
        ("/cleanup-old", "오래된 데이터 정리"),
        ("/clear", "전체 데이터 삭제"),
        ("/verify", "비밀번호 확인"),
    ]

    def resolve_module(self, path: str) -> str:
        for path_prefix, module_name in self.MODULE_MAP.items():
            if path.startswith(path_prefix):
                return module_name
        return "기타"

    def resolve_action(self, method: str, path: str) -> str:
        if method in ("POST", "PUT"):
            for suffix, action in self.PATH_ACTIONS:
                if path.endswith(suffix):
                    return action
        return self.ACTION_MAP.get(method, method)

    async def dispatch(self, request: Request, call_next):
        """요청 처리 후 로그 기록"""
        start_time = time.time()

        # CORS 사전 요청은 기록하지 않음
        if request.method == "OPTIONS":
            return await call_next(request)

        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        method = request.method
        path = request.url.path
        ip_address = request.client.host if request.client else None

        request_data = None
        if method in ["POST", "PUT", "PATCH"] and not any(path.startswith(p) for p in self.BODY_EXCLUDED_PATHS):
            try:
                body = await request.body()
                if body:
                    request_data = body.decode("utf-8")[:2000]  # 길이 제한
            except (RuntimeError, UnicodeDecodeError) as e:
                print(f"요청 본문 읽기 실패: {e}")

        response = await call_next(request)

        execution_time = int((time.time() - start_time) * 1000)
        status_code = response.status_code
        error_message = f"HTTP {status_code} 오류" if status_code >= 400 else None

        db: Session = SessionLocal()
        try:
            db.add(OperationLog(
                action=self.resolve_action(method, path),
                module=self.resolve_module(path),
                method=method,
                path=path,
                ip_address=ip_address,
                request_data=request_data,
                status_code=status_code,
                error_message=error_message,
                execution_time=execution_time
            ))
            db.commit()
        except Exception as e:
            db.rollback()
            print(f"작업 로그 기록 실패: {e}")
        finally:
            db.close()

        return response
