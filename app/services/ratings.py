"""통역사 평가(Rating) 서비스. 작성자 = 현재 사용자."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.policy import Principal, enforce
from app.models.rating import Rating
from app.models.translator_profile import TranslatorProfile
from app.repositories.common import paginate
from app.schemas.rating import RatingCreate, RatingUpdate
from app.services import validation
from app.services.common import commit, get_or_404

logger = logging.getLogger(__name__)


def create_rating(db: Session, data: RatingCreate, principal: Principal) -> Rating:
    enforce(principal, "ratings:create", principal.user_id)
    validation.raise_if_errors(validation.validate_rating(data))
    get_or_404(db, TranslatorProfile, data.translator_profile_id, "Translator profile")

    rating = Rating(
        user_id=principal.user_id,
        translator_profile_id=data.translator_profile_id,
        score=data.score,
        comment=data.comment,
    )
    db.add(rating)
    commit(db)
    db.refresh(rating)

    logger.info("Rating created: id=%s profile=%s score=%s", rating.id, rating.translator_profile_id, rating.score)
    return rating


def list_ratings(
    db: Session, *, translator_profile_id: int | None, page: int, size: int
) -> tuple[list[Rating], int]:
    stmt = select(Rating).order_by(Rating.id.desc())
    if translator_profile_id is not None:
        stmt = stmt.where(Rating.translator_profile_id == translator_profile_id)
    return paginate(db, stmt, page=page, size=size)


def get_rating(db: Session, rating_id: int) -> Rating:
    return get_or_404(db, Rating, rating_id, "Rating")


def update_rating(db: Session, rating_id: int, data: RatingUpdate, principal: Principal) -> Rating:
    rating = get_rating(db, rating_id)
    enforce(principal, "ratings:update", rating.user_id)
    validation.raise_if_errors(validation.validate_rating(data))

    if data.score is not None:
        rating.score = data.score
    if data.comment is not None:
        rating.comment = data.comment

    commit(db)
    db.refresh(rating)
    logger.info("Rating updated: id=%s", rating_id)
    return rating


def delete_rating(db: Session, rating_id: int, principal: Principal) -> None:
    rating = get_rating(db, rating_id)
    enforce(principal, "ratings:delete", rating.user_id)
    db.delete(rating)
    commit(db)
    logger.info("Rating deleted: id=%s", rating_id)
