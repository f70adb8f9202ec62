"""
services/users.py

사용자(User) 도메인 비즈니스 로직.

- 관리자 사용자 생성 / 자가 가입 공통 생성 로직
- 생성 시 UserProfile 자동 생성, TRANSLATOR 역할이면 TranslatorProfile 도 함께 생성
- 역할 / 잔액 / 활성화 상태 변경은 관리자만 가능
- TRANSLATOR 역할이 빠지면 통역사 프로필(평가 포함)도 함께 삭제
- 삭제는 연관 데이터를 명시적으로 함께 삭제

"""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFoundError, UsernameAlreadyExistsError
from app.core.policy import Principal, enforce
from app.core.security import get_password_hash
from app.models.translator_profile import TranslatorProfile
from app.models.user import Role, RoleName, User
from app.models.user_profile import UserProfile
from app.repositories import translator_profile_repository, user_repository
from app.schemas.user import UserCreate, UserUpdate
from app.services import validation
from app.services.common import commit

logger = logging.getLogger(__name__)


def resolve_roles(db: Session, names: list[str]) -> list[Role]:
    wanted = sorted({RoleName.parse(n) for n in names}, key=lambda r: r.value)
    roles = user_repository.get_roles(db, wanted)
    found = {r.name for r in roles}
    missing = [r.value for r in wanted if r not in found]
    if missing:
        raise ResourceNotFoundError(f"Role not found: {', '.join(missing)}")
    return roles


def get_user(db: Session, user_id: int) -> User:
    user = user_repository.get_by_id(db, user_id)
    if not user:
        raise ResourceNotFoundError(f"User not found with id {user_id}")
    return user


def list_users(db: Session, *, page: int, size: int) -> tuple[list[User], int]:
    return user_repository.list_users(db, page=page, size=size)


"""
사용자 생성

- username 중복 시 UsernameAlreadyExistsError (409)
- UserProfile 은 항상 생성
- TRANSLATOR 역할이면 비어 있는 TranslatorProfile 생성 (available / online = False)

"""

def create_user(db: Session, data: UserCreate) -> User:
    logger.debug("Creating user %s", data.username)
    validation.raise_if_errors(validation.validate_user_create(data))

    if user_repository.username_exists(db, data.username):
        logger.warning("Username already exists: %s", data.username)
        raise UsernameAlreadyExistsError(data.username)

    roles = resolve_roles(db, data.roles)

    user = User(
        username=data.username,
        password_hash=get_password_hash(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        balance=data.balance if data.balance is not None else 0,
        is_active=data.is_active,
        on_boarding_status=data.on_boarding_status,
        roles=roles,
    )
    user_repository.add(db, user)

    db.add(UserProfile(user_id=user.id, is_free_call_made=False))
    if user.has_role(RoleName.ROLE_TRANSLATOR):
        db.add(TranslatorProfile(user_id=user.id, is_available=False, is_online=False))

    commit(db, conflict=UsernameAlreadyExistsError(data.username))
    db.refresh(user)

    logger.info("User created: id=%s username=%s roles=%s", user.id, user.username, sorted(user.role_names))
    return user


def _drop_translator_profile(db: Session, user_id: int) -> None:
    # 통역사 프로필 소유자는 항상 ROLE_TRANSLATOR 보유
    profile = translator_profile_repository.get_by_user_id(db, user_id)
    if profile is None:
        return
    profile_id = profile.id
    db.expunge(profile)
    translator_profile_repository.delete_cascade(db, profile_id)
    logger.info("Translator profile %s removed, user %s no longer has ROLE_TRANSLATOR", profile_id, user_id)


def update_user(db: Session, user_id: int, data: UserUpdate, principal: Principal) -> User:
    logger.debug("Updating user %s by %s", user_id, principal.username)
    validation.raise_if_errors(validation.validate_user_update(data))

    # 역할 / 잔액 / 활성화 상태는 관리자만
    if data.roles is not None or data.balance is not None or data.is_active is not None:
        enforce(principal, "users:manage")

    user = get_user(db, user_id)

    if data.username is not None and data.username != user.username:
        if user_repository.username_exists(db, data.username, exclude_id=user.id):
            raise UsernameAlreadyExistsError(data.username)
        user.username = data.username

    if data.password:
        user.password_hash = get_password_hash(data.password)
    if data.first_name is not None:
        user.first_name = data.first_name
    if data.last_name is not None:
        user.last_name = data.last_name
    if data.balance is not None:
        user.balance = data.balance
    if data.is_active is not None:
        user.is_active = data.is_active
    if data.on_boarding_status is not None:
        user.on_boarding_status = data.on_boarding_status
    if data.roles is not None:
        user.roles = resolve_roles(db, data.roles)
        if not user.has_role(RoleName.ROLE_TRANSLATOR):
            _drop_translator_profile(db, user.id)

    commit(db, conflict=UsernameAlreadyExistsError(user.username))
    db.refresh(user)

    logger.info("User updated: id=%s", user.id)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    username = user.username

    # 세션의 ORM 객체를 먼저 분리한 뒤 벌크 삭제
    db.expunge(user)
    user_repository.delete_cascade(db, user_id)
    commit(db)

    logger.info("User deleted with related data: id=%s username=%s", user_id, username)

