from datetime import datetime

from app.schemas.common import CamelModel


class RatingCreate(CamelModel):
    translator_profile_id: int
    score: int
    comment: str | None = None


class RatingUpdate(CamelModel):
    score: int | None = None
    comment: str | None = None


class RatingResponse(CamelModel):
    id: int
    user_id: int
    translator_profile_id: int
    score: int
    comment: str | None = None
    created_at: datetime
