import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFoundError
from app.core.policy import Principal, enforce
from app.models.user_profile import UserProfile
from app.repositories.common import paginate
from app.schemas.user import UserProfileUpdate
from app.services.common import commit, get_or_404

logger = logging.getLogger(__name__)


def get_for_user(db: Session, user_id: int) -> UserProfile:
    profile = db.scalar(select(UserProfile).where(UserProfile.user_id == user_id))
    if not profile:
        raise ResourceNotFoundError(f"User profile not found for user id {user_id}")
    return profile


def get_profile(db: Session, profile_id: int, principal: Principal) -> UserProfile:
    profile = get_or_404(db, UserProfile, profile_id, "User profile")
    enforce(principal, "user_profiles:read", profile.user_id)
    return profile


def list_profiles(db: Session, *, page: int, size: int) -> tuple[list[UserProfile], int]:
    return paginate(db, select(UserProfile).order_by(UserProfile.id), page=page, size=size)


def update_profile(db: Session, profile_id: int, data: UserProfileUpdate) -> UserProfile:
    profile = get_or_404(db, UserProfile, profile_id, "User profile")
    profile.is_free_call_made = data.is_free_call_made
    commit(db)
    db.refresh(profile)
    logger.info("User profile updated: id=%s isFreeCallMade=%s", profile_id, profile.is_free_call_made)
    return profile
