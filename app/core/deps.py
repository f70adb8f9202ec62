from dataclasses import dataclass
from typing import Generator

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AccountDisabledError
from app.core.policy import Principal, enforce
from app.core.security import TokenKind, decode_token
from app.db.session import SessionLocal
from app.repositories import user_repository
from app.services import validation

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def principal_from_token(token: str) -> Principal:
    """access 토큰만으로 Principal 생성 (DB 조회 없음, WebSocket 용)."""
    claims = decode_token(token, TokenKind.ACCESS)
    return Principal(user_id=None, username=claims.subject, roles=claims.roles)


def get_current_principal(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Principal:
    if cred is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # 만료 → ExpiredTokenError, 그 외 → InvalidTokenError (둘 다 401)
    claims = decode_token(cred.credentials, TokenKind.ACCESS)

    user = user_repository.get_by_username(db, claims.subject)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise AccountDisabledError()

    return Principal(user_id=user.id, username=user.username, roles=claims.roles)


def require(action: str, owner_param: str | None = None):
    """
    핸들러 실행 전 정책 검사.
    owner_param을 주면 해당 path 파라미터(user id)를 소유자로 본다.
    """
    def _checker(request: Request, principal: Principal = Depends(get_current_principal)) -> Principal:
        owner = None
        if owner_param is not None:
            raw = request.path_params.get(owner_param)
            owner = int(raw) if raw is not None and str(raw).isdigit() else None
        enforce(principal, action, owner)
        return principal
    return _checker


@dataclass(frozen=True)
class PageParams:
    page: int
    size: int


def get_page_params(
    page: int = Query(1, description="1부터 시작"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE),
) -> PageParams:
    validation.raise_if_errors(validation.validate_pagination(page, size))
    return PageParams(page=page, size=size)
