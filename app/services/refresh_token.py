"""
services/refresh_token.py

Refresh Token 원장(Ledger) 서비스.

- 발급된 refresh token 문자열을 소유 유저 / 만료 시각과 함께 저장
- 원장에 없는 토큰은 서명이 유효해도 사용 불가

"""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.core.exceptions import RefreshTokenNotFoundError
from app.core.security import refresh_token_lifetime
from app.db.base import utcnow
from app.models.refresh_token import RefreshToken
from app.models.user import User
from app.repositories import refresh_token_repository

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite는 tz 정보 없이 돌려주므로 UTC로 간주
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def store_refresh_token(db: Session, user: User, token: str) -> RefreshToken:
    """원장에 새 행 추가 (flush만, 커밋은 호출자)."""
    now = utcnow()
    row = RefreshToken(token=token, user_id=user.id, created_at=now, expires_at=now + refresh_token_lifetime())
    refresh_token_repository.add(db, row)
    logger.debug("Stored refresh token for user %s (expires %s)", user.username, row.expires_at.isoformat())
    return row


def find_by_token_or_raise(db: Session, token: str) -> RefreshToken:
    row = refresh_token_repository.get_by_token(db, token)
    if row is None:
        logger.warning("Refresh token not found in ledger")
        raise RefreshTokenNotFoundError()
    return row


def is_expired(row: RefreshToken, now: datetime | None = None) -> bool:
    return _as_utc(row.expires_at) <= (now or utcnow())
