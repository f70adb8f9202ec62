"""
services/translator_profiles.py

통역사 프로필 비즈니스 로직.

- 프로필 소유자는 ROLE_TRANSLATOR 권한 필수 (없으면 InvalidRoleError)
- 사용자당 프로필 1개 (중복 시 ProfileAlreadyExistsError)
- 언어 / 주제 id 가 존재하지 않으면 404
- 상세 응답에는 평균 평점 / 평가 수 / 통화 수 포함

관련 파일:
- app.repositories.translator_profile_repository : 필터 검색 / 통계 쿼리
- app.routers.translator_profiles               : API

"""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import (
    ConflictError,
    InvalidRoleError,
    ProfileAlreadyExistsError,
    ResourceNotFoundError,
)
from app.core.policy import Principal, enforce
from app.models.translator_profile import Language, Theme, TranslatorProfile
from app.models.user import RoleName
from app.repositories import translator_profile_repository as repo
from app.repositories.translator_profile_repository import ProfileFilter
from app.schemas.catalog import LanguageResponse, ThemeResponse
from app.schemas.translator_profile import (
    TranslatorProfileCreate,
    TranslatorProfileResponse,
    TranslatorProfileSummary,
    TranslatorProfileUpdate,
)
from app.services import users as user_service
from app.services import validation
from app.services.common import commit, get_or_404

logger = logging.getLogger(__name__)


def _load_languages(db: Session, ids: list[int]) -> list[Language]:
    languages = repo.get_languages(db, ids)
    missing = sorted(set(ids) - {l.id for l in languages})
    if missing:
        raise ResourceNotFoundError(f"Language not found with id {', '.join(map(str, missing))}")
    return languages


def _load_themes(db: Session, ids: list[int]) -> list[Theme]:
    themes = repo.get_themes(db, ids)
    missing = sorted(set(ids) - {t.id for t in themes})
    if missing:
        raise ResourceNotFoundError(f"Theme not found with id {', '.join(map(str, missing))}")
    return themes


def get_profile(db: Session, profile_id: int) -> TranslatorProfile:
    profile = repo.get_by_id(db, profile_id)
    if not profile:
        raise ResourceNotFoundError(f"Translator profile not found with id {profile_id}")
    return profile


def to_response(db: Session, profile: TranslatorProfile) -> TranslatorProfileResponse:
    average, total_ratings = repo.rating_stats(db, profile.id)
    return TranslatorProfileResponse(
        id=profile.id,
        user_id=profile.user_id,
        first_name=profile.user.first_name,
        last_name=profile.user.last_name,
        username=profile.user.username,
        date_of_birth=profile.date_of_birth,
        email=profile.email,
        level_of_korean=profile.level_of_korean,
        is_available=profile.is_available,
        is_online=profile.is_online,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
        languages=[LanguageResponse.model_validate(l) for l in profile.languages],
        themes=[ThemeResponse.model_validate(t) for t in profile.themes],
        average_rating=average,
        total_ratings=total_ratings,
        total_calls=repo.count_calls(db, profile.user_id),
    )


def to_summaries(db: Session, profiles: list[TranslatorProfile]) -> list[TranslatorProfileSummary]:
    busy = repo.users_in_call(db, [p.user_id for p in profiles])
    summaries = []
    for p in profiles:
        average, _ = repo.rating_stats(db, p.id)
        full_name = " ".join(n for n in (p.user.first_name, p.user.last_name) if n)
        summaries.append(
            TranslatorProfileSummary(
                id=p.id,
                user_id=p.user_id,
                full_name=full_name or p.user.username,
                email=p.email,
                level_of_korean=p.level_of_korean,
                is_available=p.is_available,
                is_online=p.is_online,
                language_names=sorted(l.name for l in p.languages),
                theme_names=sorted(t.name for t in p.themes),
                average_rating=average,
                total_calls=repo.count_calls(db, p.user_id),
                in_call=p.user_id in busy,
            )
        )
    return summaries


"""
프로필 생성

- 관리자: 누구에게나 생성 가능
- 통역사: 본인(userId == 본인 id) 프로필만 생성 가능
- 대상 사용자에게 ROLE_TRANSLATOR 가 없으면 InvalidRoleError
- 이미 프로필이 있으면 ProfileAlreadyExistsError

"""

def create_profile(db: Session, data: TranslatorProfileCreate, principal: Principal) -> TranslatorProfile:
    logger.debug("Creating translator profile for user %s by %s", data.user_id, principal.username)
    enforce(principal, "translator_profiles:create", data.user_id)
    validation.raise_if_errors(validation.validate_translator_profile(data))

    user = user_service.get_user(db, data.user_id)
    if not user.has_role(RoleName.ROLE_TRANSLATOR):
        logger.warning("User %s lacks ROLE_TRANSLATOR", user.username)
        raise InvalidRoleError(RoleName.ROLE_TRANSLATOR.value)

    if repo.exists_for_user(db, user.id):
        logger.warning("Translator profile already exists for user %s", user.id)
        raise ProfileAlreadyExistsError(user.id)

    if repo.email_exists(db, data.email):
        raise ConflictError(f"Email '{data.email}' already in use")

    profile = TranslatorProfile(
        user_id=user.id,
        date_of_birth=data.date_of_birth,
        email=data.email,
        level_of_korean=data.level_of_korean,
        is_available=data.is_available,
        is_online=data.is_online,
        languages=_load_languages(db, data.language_ids),
        themes=_load_themes(db, data.theme_ids),
    )
    repo.add(db, profile)
    commit(db, conflict=ProfileAlreadyExistsError(user.id))

    logger.info("Translator profile created: id=%s user=%s", profile.id, user.id)
    return get_profile(db, profile.id)


def search_profiles(db: Session, filters: ProfileFilter, *, page: int, size: int):
    return repo.search(db, filters, page=page, size=size)


def available_by_theme(db: Session, theme_id: int) -> list[TranslatorProfile]:
    get_or_404(db, Theme, theme_id, "Theme")
    return repo.list_available_by_theme(db, theme_id)


def update_profile(
    db: Session, profile_id: int, data: TranslatorProfileUpdate, principal: Principal
) -> TranslatorProfile:
    profile = get_profile(db, profile_id)
    enforce(principal, "translator_profiles:update", profile.user_id)
    validation.raise_if_errors(validation.validate_translator_profile(data))

    if data.email is not None and data.email != profile.email:
        if repo.email_exists(db, data.email, exclude_id=profile.id):
            raise ConflictError(f"Email '{data.email}' already in use")
        profile.email = data.email
    if data.date_of_birth is not None:
        profile.date_of_birth = data.date_of_birth
    if data.level_of_korean is not None:
        profile.level_of_korean = data.level_of_korean
    if data.is_available is not None:
        profile.is_available = data.is_available
    if data.is_online is not None:
        profile.is_online = data.is_online
    if data.language_ids is not None:
        profile.languages = _load_languages(db, data.language_ids)
    if data.theme_ids is not None:
        profile.themes = _load_themes(db, data.theme_ids)

    commit(db)
    logger.info("Translator profile updated: id=%s", profile_id)
    return get_profile(db, profile_id)


def set_availability(db: Session, profile_id: int, is_available: bool, principal: Principal) -> TranslatorProfile:
    profile = get_profile(db, profile_id)
    enforce(principal, "translator_profiles:update", profile.user_id)
    profile.is_available = is_available
    commit(db)
    logger.info("Translator profile %s availability -> %s", profile_id, is_available)
    return get_profile(db, profile_id)


def set_online_status(db: Session, profile_id: int, is_online: bool, principal: Principal) -> TranslatorProfile:
    profile = get_profile(db, profile_id)
    enforce(principal, "translator_profiles:update", profile.user_id)
    profile.is_online = is_online
    commit(db)
    logger.info("Translator profile %s online -> %s", profile_id, is_online)
    return get_profile(db, profile_id)


def delete_profile(db: Session, profile_id: int, principal: Principal) -> None:
    profile = get_profile(db, profile_id)
    enforce(principal, "translator_profiles:delete", profile.user_id)

    db.expunge(profile)
    repo.delete_cascade(db, profile_id)
    commit(db)
    logger.info("Translator profile deleted: id=%s", profile_id)


def get_profile_for_user(db: Session, user_id: int) -> TranslatorProfile:
    profile = repo.get_by_user_id(db, user_id)
    if not profile:
        raise ResourceNotFoundError(f"Translator profile not found for user id {user_id}")
    return profile
