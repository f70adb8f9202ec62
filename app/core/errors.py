"""
errors.py

중앙 예외 핸들러 등록.

서비스 계층에서 발생한 AppError 계열 예외를 HTTP 상태 코드와
구조화된 JSON 본문으로 변환한다.

응답 형식:
    {"status": 404, "message": "...", "timestamp": "2026-01-01T00:00:00+00:00"}
    검증 실패 시 "errors": [{"field": "...", "message": "..."}] 추가

- RequestValidationError(Pydantic)도 같은 형식의 422로 변환
- 처리되지 않은 예외는 500 + 로그

"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import AppError, ValidationFailedError

logger = logging.getLogger(__name__)


def error_body(status_code: int, message: str, errors: list[dict] | None = None) -> dict:
    body = {
        "status": status_code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if errors is not None:
        body["errors"] = errors
    return body


def _location(loc) -> str:
    # ("body", "username") -> "username"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "request"


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        errors = None
        if isinstance(exc, ValidationFailedError):
            errors = [{"field": e.field, "message": e.message} for e in exc.errors]
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message, errors))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [{"field": _location(e.get("loc", ())), "message": e.get("msg", "")} for e in exc.errors()]
        return JSONResponse(status_code=422, content=error_body(422, "Validation failed", errors))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body(500, "Internal server error"))
