"""User / Role Repository. DB 쿼리만 수행."""

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session, selectinload

from app.models.call import Call
from app.models.finance import Deposit, Withdrawal
from app.models.rating import Rating
from app.models.refresh_token import RefreshToken
from app.models.translator_profile import TranslatorProfile, translator_languages, translator_themes
from app.models.user import Role, RoleName, User, user_roles
from app.models.user_profile import UserProfile
from app.repositories.common import paginate


def get_by_id(db: Session, user_id: int) -> User | None:
    """id로 유저 조회 (roles 함께 로드)."""
    return db.scalar(select(User).options(selectinload(User.roles)).where(User.id == user_id))


def get_by_username(db: Session, username: str) -> User | None:
    """username으로 유저 조회 (roles 함께 로드)."""
    return db.scalar(select(User).options(selectinload(User.roles)).where(User.username == username))


def username_exists(db: Session, username: str, *, exclude_id: int | None = None) -> bool:
    stmt = select(User.id).where(User.username == username)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return db.scalar(stmt) is not None


def list_users(db: Session, *, page: int, size: int) -> tuple[list[User], int]:
    stmt = select(User).order_by(User.id)
    return paginate(db, stmt, page=page, size=size, options=(selectinload(User.roles),))


def get_roles(db: Session, names: list[RoleName]) -> list[Role]:
    """이름 목록에 해당하는 Role 조회. 없는 이름은 결과에서 빠진다."""
    if not names:
        return []
    return list(db.scalars(select(Role).where(Role.name.in_(names)).order_by(Role.id)))


def get_role(db: Session, name: RoleName) -> Role | None:
    return db.scalar(select(Role).where(Role.name == name))


def add(db: Session, user: User) -> User:
    db.add(user)
    db.flush()
    return user


def delete_cascade(db: Session, user_id: int) -> None:
    """
    유저와 연관된 모든 행을 명시적으로 삭제.
    커밋은 호출자(서비스) 책임.

    순서: refresh token → 평가 → 통화 → 입출금 → 통역사 프로필(언어/주제 연관 포함)
          → 사용자 프로필 → 역할 연관 → 유저
    """
    profile_id = db.scalar(select(TranslatorProfile.id).where(TranslatorProfile.user_id == user_id))

    db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))

    rating_filter = Rating.user_id == user_id
    if profile_id is not None:
        rating_filter = or_(rating_filter, Rating.translator_profile_id == profile_id)
    db.execute(delete(Rating).where(rating_filter))

    db.execute(delete(Call).where(or_(Call.caller_id == user_id, Call.recipient_id == user_id)))
    db.execute(delete(Deposit).where(Deposit.user_id == user_id))
    db.execute(delete(Withdrawal).where(Withdrawal.user_id == user_id))

    if profile_id is not None:
        db.execute(delete(translator_languages).where(translator_languages.c.translator_profile_id == profile_id))
        db.execute(delete(translator_themes).where(translator_themes.c.translator_profile_id == profile_id))
        db.execute(delete(TranslatorProfile).where(TranslatorProfile.id == profile_id))

    db.execute(delete(UserProfile).where(UserProfile.user_id == user_id))
    db.execute(delete(user_roles).where(user_roles.c.user_id == user_id))
    db.execute(delete(User).where(User.id == user_id))
