"""
services/auth.py

인증 흐름(로그인 / 가입 / 토큰 재발급 / 로그아웃) 오케스트레이션.

- 로그인: 비밀번호 검증 → access + refresh 발급 → refresh 원장 저장
- 재발급: 원장 조회 → 만료 확인 → 서명 검증 → 이전 행 조건부 삭제(회전) → 새 쌍 발급
- 로그아웃: 해당 유저의 모든 refresh token 삭제

설계 원칙:
- 실패는 모두 도메인 예외로 표현 (HTTP 변환은 중앙 핸들러)
- 원장 행 삭제 + 새 행 저장은 하나의 트랜잭션에서 커밋
- 동시에 같은 refresh token으로 재발급하면 조건부 DELETE에서 한쪽만 성공

관련 파일:
- app.core.security               : 토큰 서명 / 검증, 비밀번호 해시
- app.services.refresh_token      : 원장 저장 / 조회 / 만료 판정
- app.repositories.refresh_token_repository

"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.exceptions import (
    AccessDeniedError,
    AccountDisabledError,
    BadCredentialsError,
    ExpiredTokenError,
    InvalidRoleError,
    LogoutFailedError,
    RefreshTokenNotFoundError,
)
from app.core.policy import Principal
from app.core.security import (
    TokenKind,
    create_access_token,
    create_refresh_token,
    decode_token,
    verify_password,
)
from app.models.user import RoleName, User
from app.repositories import refresh_token_repository, user_repository
from app.schemas.auth import RegisterRequest
from app.schemas.user import UserCreate
from app.services import refresh_token as refresh_token_service
from app.services import users as user_service
from app.services.common import commit

logger = logging.getLogger(__name__)

# 자가 가입으로 얻을 수 있는 역할
SELF_REGISTER_ROLES = {RoleName.ROLE_USER, RoleName.ROLE_TRANSLATOR}


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def _issue_pair(db: Session, user: User) -> TokenPair:
    access = create_access_token(user.username, user.role_names)
    refresh = create_refresh_token(user.username)
    refresh_token_service.store_refresh_token(db, user, refresh)
    return TokenPair(access_token=access, refresh_token=refresh)


"""
로그인

- username / password 불일치 → BadCredentialsError (원장 기록 없음)
- 비활성 계정 → AccountDisabledError

"""

def authenticate(db: Session, username: str, password: str) -> TokenPair:
    logger.debug("Login attempt for %s", username)

    user = user_repository.get_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Bad credentials for %s", username)
        raise BadCredentialsError()

    if not user.is_active:
        logger.warning("Login rejected, account disabled: %s", username)
        raise AccountDisabledError()

    pair = _issue_pair(db, user)
    commit(db)

    logger.info("User logged in: %s", username)
    return pair


def register(db: Session, data: RegisterRequest) -> User:
    try:
        role = RoleName.parse(data.role)
    except ValueError:
        raise InvalidRoleError(data.role)
    if role not in SELF_REGISTER_ROLES:
        logger.warning("Self registration with role %s rejected", role.value)
        raise InvalidRoleError(role.value)

    create = UserCreate(
        username=data.username,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        roles=[role.value],
    )
    return user_service.create_user(db, create)


"""
토큰 재발급 (rotate-on-use)

1) 원장 조회 → 없으면 RefreshTokenNotFoundError
2) 원장 만료 → 행 삭제 후 ExpiredTokenError
3) JWT 서명 / 종류 검증
4) 이전 행 조건부 삭제 (삭제된 행이 1이 아니면 이미 회전된 토큰)
5) 새 access + refresh 발급, 새 행 저장, 커밋

"""

def refresh(db: Session, token: str) -> TokenPair:
    row = refresh_token_service.find_by_token_or_raise(db, token)
    user = row.user

    if refresh_token_service.is_expired(row):
        refresh_token_repository.delete_by_token(db, token)
        commit(db)
        logger.warning("Expired refresh token removed for user %s", user.username)
        raise ExpiredTokenError()

    try:
        decode_token(token, TokenKind.REFRESH)
    except ExpiredTokenError:
        refresh_token_repository.delete_by_token(db, token)
        commit(db)
        raise

    if not user.is_active:
        raise AccountDisabledError()

    if refresh_token_repository.delete_by_token(db, token) != 1:
        db.rollback()
        logger.warning("Refresh token already rotated for user %s", user.username)
        raise RefreshTokenNotFoundError()

    pair = _issue_pair(db, user)
    commit(db)

    logger.info("Refresh token rotated for user %s", user.username)
    return pair


def logout(db: Session, token: str, principal: Principal) -> int:
    """해당 유저의 refresh token 전부 삭제. 삭제된 행 수 반환."""
    row = refresh_token_repository.get_by_token(db, token)
    if row is None:
        logger.warning("Logout with unknown refresh token by %s", principal.username)
        raise LogoutFailedError("Refresh token not found")

    if row.user_id != principal.user_id:
        logger.warning("Logout with another user's refresh token by %s", principal.username)
        raise AccessDeniedError()

    deleted = refresh_token_repository.delete_by_user(db, row.user_id)
    commit(db)

    logger.info("User logged out: %s (%d refresh tokens removed)", principal.username, deleted)
    return deleted
