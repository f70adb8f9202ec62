"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

이 파일은 서버 실행 시 가장 먼저 로드되며,
애플리케이션 전반의 설정과 라우터 등록을 담당한다.

주요 역할:
- FastAPI 앱 인스턴스 생성 및 lifespan(로깅 초기화, 역할/관리자 시딩)
- CORS 미들웨어 설정
- 중앙 예외 핸들러 등록
- 각 도메인별 라우터(auth, users, translator-profiles, 입출금, 평가, 통화, WebSocket) 등록
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임
- 운영 환경에서도 안전하게 상태 확인 가능하도록 health/db-ping 제공

관련 파일:
- app.core.config        : 환경 변수 및 설정 로드
- app.core.errors        : 예외 → HTTP 응답 변환
- app.services.seed      : 초기 데이터 시딩
- app.routers.*          : 기능별 API 라우터

"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.core.config import settings
from app.core.deps import get_db
from app.core.errors import register_exception_handlers
from app.core.logging_config import setup_logging
from app.db.session import SessionLocal
from app.routers import (
    auth,
    calls,
    catalog,
    deposits,
    ratings,
    translator_profiles,
    user_profiles,
    users,
    withdrawals,
    ws,
)
from app.services.seed import run_seed

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 수명 주기: 로깅 설정 → (옵션) 역할 / 테스트 관리자 시딩."""
    setup_logging()
    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            run_seed(db)
        finally:
            db.close()
    yield
    logger.info("Shutting down")


app = FastAPI(title="Morago Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(translator_profiles.router)
app.include_router(catalog.languages_router)
app.include_router(catalog.themes_router)
app.include_router(user_profiles.router)
app.include_router(deposits.router)
app.include_router(withdrawals.router)
app.include_router(ratings.router)
app.include_router(calls.router)
app.include_router(ws.router)

"""
서버 헬스 체크 엔드포인트

- 애플리케이션 프로세스가 정상 동작 중인지 확인
- 로드밸런서 / 배포 환경에서 서버 상태 확인 용도

"""
@app.get("/health")
def health():
    return {"status": "ok"}

"""
데이터베이스 연결 상태 확인 엔드포인트

- 간단한 SELECT 1 쿼리를 통해 DB 연결 여부 확인
- 서버는 살아 있으나 DB가 죽은 상황을 분리해서 감지 가능

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
