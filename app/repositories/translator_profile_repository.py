"""TranslatorProfile / Language / Theme Repository. DB 쿼리만 수행."""

from dataclasses import dataclass

from sqlalchemy import delete, exists, func, or_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from app.models.call import ACTIVE_CALL_STATUSES, Call
from app.models.rating import Rating
from app.models.translator_profile import (
    Language,
    Theme,
    TranslatorProfile,
    translator_languages,
    translator_themes,
)
from app.models.user import User
from app.repositories.common import paginate


@dataclass
class ProfileFilter:
    is_available: bool | None = None
    is_online: bool | None = None
    language_id: int | None = None
    theme_id: int | None = None
    level_of_korean: str | None = None
    search: str | None = None


_ASSOCIATIONS = (
    joinedload(TranslatorProfile.user),
    selectinload(TranslatorProfile.languages),
    selectinload(TranslatorProfile.themes),
)


def _with_associations(stmt):
    return stmt.options(*_ASSOCIATIONS)


def get_by_id(db: Session, profile_id: int) -> TranslatorProfile | None:
    """id로 프로필 조회. user / languages / themes 함께 로드."""
    stmt = _with_associations(select(TranslatorProfile)).where(TranslatorProfile.id == profile_id)
    return db.scalars(stmt).unique().one_or_none()


def get_by_user_id(db: Session, user_id: int) -> TranslatorProfile | None:
    stmt = _with_associations(select(TranslatorProfile)).where(TranslatorProfile.user_id == user_id)
    return db.scalars(stmt).unique().one_or_none()


def exists_for_user(db: Session, user_id: int) -> bool:
    return db.scalar(select(TranslatorProfile.id).where(TranslatorProfile.user_id == user_id)) is not None


def email_exists(db: Session, email: str, *, exclude_id: int | None = None) -> bool:
    stmt = select(TranslatorProfile.id).where(func.lower(TranslatorProfile.email) == email.lower())
    if exclude_id is not None:
        stmt = stmt.where(TranslatorProfile.id != exclude_id)
    return db.scalar(stmt) is not None


def add(db: Session, profile: TranslatorProfile) -> TranslatorProfile:
    db.add(profile)
    db.flush()
    return profile


"""
필터 검색

- 언어 / 주제 조건은 EXISTS 서브쿼리 (중복 행 없이 count 가능)
- search: 이름 / 성 / 이메일 / 한국어 수준 부분 일치 (대소문자 무시)

"""

def search(db: Session, filters: ProfileFilter, *, page: int, size: int) -> tuple[list[TranslatorProfile], int]:
    stmt = select(TranslatorProfile).join(User, User.id == TranslatorProfile.user_id)

    if filters.is_available is not None:
        stmt = stmt.where(TranslatorProfile.is_available.is_(filters.is_available))
    if filters.is_online is not None:
        stmt = stmt.where(TranslatorProfile.is_online.is_(filters.is_online))
    if filters.level_of_korean:
        stmt = stmt.where(func.lower(TranslatorProfile.level_of_korean) == filters.level_of_korean.lower())
    if filters.language_id is not None:
        stmt = stmt.where(
            exists().where(
                translator_languages.c.translator_profile_id == TranslatorProfile.id,
                translator_languages.c.language_id == filters.language_id,
            )
        )
    if filters.theme_id is not None:
        stmt = stmt.where(
            exists().where(
                translator_themes.c.translator_profile_id == TranslatorProfile.id,
                translator_themes.c.theme_id == filters.theme_id,
            )
        )
    if filters.search:
        pattern = f"%{filters.search.lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(User.first_name).like(pattern),
                func.lower(User.last_name).like(pattern),
                func.lower(TranslatorProfile.email).like(pattern),
                func.lower(TranslatorProfile.level_of_korean).like(pattern),
            )
        )

    stmt = stmt.order_by(TranslatorProfile.id)
    return paginate(db, stmt, page=page, size=size, options=_ASSOCIATIONS)


def list_available_by_theme(db: Session, theme_id: int) -> list[TranslatorProfile]:
    """해당 주제를 다루면서 available + online 인 통역사."""
    stmt = _with_associations(select(TranslatorProfile)).where(
        TranslatorProfile.is_available.is_(True),
        TranslatorProfile.is_online.is_(True),
        exists().where(
            translator_themes.c.translator_profile_id == TranslatorProfile.id,
            translator_themes.c.theme_id == theme_id,
        ),
    ).order_by(TranslatorProfile.id)
    return list(db.scalars(stmt).unique())


def rating_stats(db: Session, profile_id: int) -> tuple[float | None, int]:
    """(평균 점수, 평가 수). 평가가 없으면 (None, 0)."""
    avg, count = db.execute(
        select(func.avg(Rating.score), func.count(Rating.id)).where(Rating.translator_profile_id == profile_id)
    ).one()
    return (round(float(avg), 2) if avg is not None else None), count


def count_calls(db: Session, user_id: int) -> int:
    """통역사(수신자)로 참여한 통화 수."""
    return db.scalar(select(func.count(Call.id)).where(Call.recipient_id == user_id)) or 0


def users_in_call(db: Session, user_ids: list[int]) -> set[int]:
    """현재 종료되지 않은 통화에 수신자로 참여 중인 user id 집합."""
    if not user_ids:
        return set()
    rows = db.scalars(
        select(Call.recipient_id).where(
            Call.recipient_id.in_(user_ids),
            Call.is_end_call.is_(False),
            Call.call_status.in_(ACTIVE_CALL_STATUSES),
        )
    )
    return set(rows)


def delete_cascade(db: Session, profile_id: int) -> None:
    """프로필 + 평가 + 언어/주제 연관 명시적 삭제."""
    db.execute(delete(Rating).where(Rating.translator_profile_id == profile_id))
    db.execute(delete(translator_languages).where(translator_languages.c.translator_profile_id == profile_id))
    db.execute(delete(translator_themes).where(translator_themes.c.translator_profile_id == profile_id))
    db.execute(delete(TranslatorProfile).where(TranslatorProfile.id == profile_id))


def get_languages(db: Session, ids: list[int]) -> list[Language]:
    if not ids:
        return []
    return list(db.scalars(select(Language).where(Language.id.in_(ids)).order_by(Language.id)))


def get_themes(db: Session, ids: list[int]) -> list[Theme]:
    if not ids:
        return []
    return list(db.scalars(select(Theme).where(Theme.id.in_(ids)).order_by(Theme.id)))
