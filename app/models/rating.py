from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class Rating(TimestampMixin, Base):
    """사용자 → 통역사 평가.

    score: 1 ~ 5
    생성 후에는 작성자(또는 관리자)만 수정 가능
    """

    __tablename__ = "ratings"
    __table_args__ = (
        Index("ix_ratings_translator_profile_id", "translator_profile_id"),
        CheckConstraint("score BETWEEN 1 AND 5", name="ck_ratings_score_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    translator_profile_id: Mapped[int] = mapped_column(
        ForeignKey("translator_profiles.id", ondelete="CASCADE"), nullable=False
    )

    score: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
