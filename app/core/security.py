"""
security.py

비밀번호 해싱 및 JWT 토큰 서명/검증(Token Codec)을 담당하는 보안 유틸리티 모음.

이 파일은 인증(auth) 로직에서 사용하는
저수준(low-level) 보안 기능만을 제공하며,
라우터나 비즈니스 로직은 포함하지 않는다.

주요 기능:
- 비밀번호 해싱 및 검증 (bcrypt)
- 토큰 종류(access / refresh)별 JWT 생성
- 토큰 종류별 디코딩 및 검증 → (subject, roles)

설계 원칙:
- Access Token과 Refresh Token은 서로 다른 시크릿 / 만료 시간을 사용
- 만료는 ExpiredTokenError, 그 외 모든 실패는 InvalidTokenError
- 같은 초(second)에 발급되어도 토큰 문자열이 겹치지 않도록 jti 포함
- 시간 기반(exp) 만료는 UTC 기준으로 처리

관련 파일:
- app.core.config        : JWT 시크릿 키 및 만료 설정
- app.core.policy        : access 토큰 → Principal 변환
- app.services.auth      : 로그인 / 재발급 / 로그아웃

"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, Optional

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from app.core.config import settings
from app.core.exceptions import ExpiredTokenError, InvalidTokenError


# bcrypt 기반 비밀번호 해싱 컨텍스트
# deprecated="auto"로 향후 알고리즘 교체 가능하도록 설정

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    roles: frozenset[str] = field(default_factory=frozenset)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def _secret_for(kind: TokenKind) -> str:
    if kind == TokenKind.ACCESS:
        return settings.ACCESS_SECRET_KEY
    return settings.REFRESH_SECRET_KEY


def _expiration_for(kind: TokenKind) -> timedelta:
    if kind == TokenKind.ACCESS:
        return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)


def refresh_token_lifetime() -> timedelta:
    return _expiration_for(TokenKind.REFRESH)


"""
JWT 토큰 생성 공통 함수

- subject(sub): 사용자 username (전화번호 형태)
- type: access 또는 refresh
- roles: access 토큰에만 포함 (권한 판단용)
- jti: 토큰 고유 식별자
- exp / iat: UTC timestamp

"""

def create_token(
    subject: str,
    roles: Optional[Iterable[str]],
    kind: TokenKind,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else _expiration_for(kind))
    payload = {
        "sub": subject,
        "type": kind.value,
        "jti": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    if kind == TokenKind.ACCESS:
        payload["roles"] = sorted(roles or [])
    return jwt.encode(payload, _secret_for(kind), algorithm=settings.ALGORITHM)


def create_access_token(subject: str, roles: Iterable[str], expires_delta: Optional[timedelta] = None) -> str:
    return create_token(subject, roles, TokenKind.ACCESS, expires_delta)


def create_refresh_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    return create_token(subject, None, TokenKind.REFRESH, expires_delta)


"""
토큰 디코딩 및 검증 함수

- kind에 맞는 시크릿으로 서명 검증
- 만료된 토큰        → ExpiredTokenError
- 서명 불일치 / 형식 오류 / 토큰 종류 불일치 / sub 누락 → InvalidTokenError

"""

def decode_token(token: str, kind: TokenKind) -> TokenClaims:
    try:
        payload = jwt.decode(token, _secret_for(kind), algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise ExpiredTokenError()
    except (JWTError, AttributeError, TypeError, ValueError):
        raise InvalidTokenError()

    if payload.get("type") != kind.value:
        raise InvalidTokenError()

    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError()

    roles = payload.get("roles") or []
    if not isinstance(roles, list):
        raise InvalidTokenError()

    return TokenClaims(subject=subject, roles=frozenset(str(r) for r in roles))
