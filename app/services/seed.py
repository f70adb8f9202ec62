"""
services/seed.py

초기 데이터 시딩.

- seed_roles : ROLE_TRANSLATOR / ROLE_USER / ROLE_ADMIN (이미 있으면 건너뜀)
- seed_admin : 설정된 테스트 ADMIN 계정 (없을 때만 생성)

서버 기동(lifespan, SEED_ON_STARTUP=True) 과 scripts/seed.py 에서 호출된다.

"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_password_hash
from app.models.user import Role, RoleName, User
from app.models.user_profile import UserProfile
from app.repositories import user_repository

logger = logging.getLogger(__name__)


def seed_roles(db: Session) -> list[Role]:
    existing = {r.name for r in db.scalars(select(Role))}
    created = []
    for name in RoleName:
        if name not in existing:
            role = Role(name=name)
            db.add(role)
            created.append(role)
    db.commit()

    if created:
        logger.info("Seeded roles: %s", ", ".join(r.name.value for r in created))
    return created


def seed_admin(db: Session, username: str | None = None, password: str | None = None) -> User | None:
    username = username or settings.SEED_ADMIN_USERNAME
    password = password or settings.SEED_ADMIN_PASSWORD

    if user_repository.get_by_username(db, username):
        logger.debug("Seed admin already exists: %s", username)
        return None

    admin_role = user_repository.get_role(db, RoleName.ROLE_ADMIN)
    if admin_role is None:
        raise RuntimeError("ROLE_ADMIN is missing, run seed_roles first")

    admin = User(
        username=username,
        password_hash=get_password_hash(password),
        first_name="Admin",
        last_name="User",
        balance=0,
        is_active=True,
        roles=[admin_role],
    )
    user_repository.add(db, admin)
    db.add(UserProfile(user_id=admin.id, is_free_call_made=False))
    db.commit()

    logger.info("Seeded admin user: %s", username)
    return admin


def run_seed(db: Session) -> None:
    seed_roles(db)
    seed_admin(db)
