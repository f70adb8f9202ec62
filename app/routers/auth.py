"""
auth.py

인증(Authentication) API 모음.

이 파일은 회원 가입, 로그인, 토큰 재발급, 로그아웃과 같이
사용자 인증 흐름 전반을 담당한다.
JWT 기반 인증 방식을 사용하며, Access Token + Refresh Token 구조를 따른다.

주요 기능:
- 회원 가입 (USER / TRANSLATOR 역할만 자가 가입 가능)
- 로그인 및 토큰 발급
- Refresh Token 기반 토큰 재발급 (회전)
- 로그아웃 (해당 사용자의 모든 Refresh Token 삭제)

설계 원칙:
- Access Token은 Authorization Header로 전달
- Refresh Token은 요청 바디(refreshToken)로 전달, 서버 원장(ledger)에 저장
- 재발급 시 이전 Refresh Token은 즉시 삭제 (재사용 불가)
- 실패 응답은 중앙 예외 핸들러가 {status, message, timestamp}로 변환

관련 파일:
- app.services.auth        : 로그인 / 재발급 / 로그아웃 로직
- app.core.security        : 비밀번호 해시 / JWT 생성·검증
- app.core.deps            : 인증 의존성(get_current_principal)
- app.schemas.auth         : 인증 관련 요청/응답

"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_principal, get_db
from app.core.policy import Principal
from app.schemas.auth import LoginRequest, RefreshTokenRequest, RegisterRequest, TokenResponse
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse
from app.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


"""
로그인 API

- username(전화번호) / 비밀번호 인증
- 실패 시 401, Refresh Token 원장에는 아무것도 기록되지 않음
- 비활성 계정은 403

"""

@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    pair = auth_service.authenticate(db, data.username, data.password)
    return TokenResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


"""
회원 가입 API

- 가입 시 UserProfile 자동 생성
- TRANSLATOR 로 가입하면 비어 있는 통역사 프로필도 함께 생성
- ADMIN 역할로는 가입 불가 (403)

"""

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    return auth_service.register(db, data)


"""
토큰 재발급 API

- 원장에 없는 토큰 / 이미 사용된 토큰 / 만료된 토큰은 모두 401
- 성공 시 access + refresh 를 새로 발급 (이전 refresh 는 삭제됨)

"""

@router.post("/refresh_token", response_model=TokenResponse)
def refresh_token(data: RefreshTokenRequest, db: Session = Depends(get_db)):
    pair = auth_service.refresh(db, data.refresh_token)
    return TokenResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


"""
로그아웃 API

- 본인 소유 refresh token 이어야 함
- 해당 사용자의 refresh token 을 모두 삭제 (모든 기기 로그아웃)
- 알 수 없는 토큰이면 400

"""

@router.post("/logout", response_model=MessageResponse)
def logout(
    data: RefreshTokenRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    auth_service.logout(db, data.refresh_token, principal)
    return MessageResponse(message="Logged out successfully")
