from sqlalchemy import Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class UserProfile(TimestampMixin, Base):
    """일반 사용자 프로필. 모든 사용자 생성 시 함께 만들어진다.

    is_free_call_made: 첫 무료 통화 사용 여부
    """

    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    is_free_call_made: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
