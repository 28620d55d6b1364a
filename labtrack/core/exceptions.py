# labtrack/core/exceptions.py

"""
애플리케이션 전역 오류 분류와 예외 처리기를 정의하는 모듈입니다.

모든 도메인 예외는 HTTPException을 상속하므로 CRUD/의존성 코드 어디에서든
기존처럼 raise 할 수 있으며, 등록된 처리기가 `{"message": ...}` 형태로 응답합니다.
"""

import logging
from typing import Optional, Dict

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class LabTrackError(HTTPException):
    """도메인 오류의 기본 클래스입니다. 하위 클래스가 상태 코드와 기본 메시지를 정합니다."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(status_code=self.status_code, detail=message or self.message, headers=headers)


class Unauthorized(LabTrackError):
    """세션 쿠키가 없거나 토큰이 유효하지 않은 경우"""
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized access"


class Forbidden(LabTrackError):
    """유효한 세션이지만 권한이 부족하거나 신원이 일치하지 않는 경우"""
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden access"


class ReferenceNotFound(LabTrackError):
    """쓰기 시점에 참조 대상(채혈 담당자)을 찾지 못한 경우"""
    status_code = status.HTTP_404_NOT_FOUND
    message = "Referenced record not found"


class InvalidCredentials(LabTrackError):
    """로그인 실패. 존재하지 않는 사용자와 잘못된 비밀번호를 구분하지 않습니다."""
    status_code = status.HTTP_404_NOT_FOUND
    message = "Invalid username or password"


class DuplicateKey(LabTrackError):
    """유니크 제약 조건 위반"""
    status_code = status.HTTP_409_CONFLICT
    message = "Duplicate key"


class Unclassified(LabTrackError):
    """분류되지 않은 저장소 오류. 상세 내용은 로그에만 남깁니다."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"


# =============================================================================
# 예외 처리기
# =============================================================================
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 오류도 `{"message": ...}` 형태로 응답합니다. 예: "body.invoice: Field required"."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg', 'invalid value')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=422,
        content={"message": "; ".join(problems) or "Invalid request"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": Unclassified.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
