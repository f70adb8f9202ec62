"""
translator_profile.py

통역사 프로필 및 언어 / 주제(Theme) 카탈로그 모델.

- TranslatorProfile 은 User 와 1:1 (user_id unique)
- 프로필 소유자는 반드시 ROLE_TRANSLATOR 권한을 가져야 함 (서비스 계층에서 검증)
- 구사 언어 / 전문 주제는 다대다 연관

"""

from datetime import date

from sqlalchemy import Boolean, Column, Date, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.user import User


translator_languages = Table(
    "translator_languages",
    Base.metadata,
    Column("translator_profile_id", ForeignKey("translator_profiles.id", ondelete="CASCADE"), primary_key=True),
    Column("language_id", ForeignKey("languages.id", ondelete="CASCADE"), primary_key=True),
)

translator_themes = Table(
    "translator_themes",
    Base.metadata,
    Column("translator_profile_id", ForeignKey("translator_profiles.id", ondelete="CASCADE"), primary_key=True),
    Column("theme_id", ForeignKey("themes.id", ondelete="CASCADE"), primary_key=True),
)


class Language(TimestampMixin, Base):
    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)


class Theme(TimestampMixin, Base):
    """통화 주제 (예: 의료, 법률, 비즈니스)."""

    __tablename__ = "themes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class TranslatorProfile(TimestampMixin, Base):
    __tablename__ = "translator_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), unique=True, nullable=True)

    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    level_of_korean: Mapped[str | None] = mapped_column(String(200), nullable=True)

    user: Mapped[User] = relationship(lazy="joined")
    languages: Mapped[list[Language]] = relationship(secondary=translator_languages, lazy="selectin")
    themes: Mapped[list[Theme]] = relationship(secondary=translator_themes, lazy="selectin")
