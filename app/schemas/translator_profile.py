"""
translator_profile.py

통역사 프로필 요청/응답 스키마.

- 상세 응답(TranslatorProfileResponse): 언어/주제 목록 + 평점 통계 포함
- 목록 응답(TranslatorProfileSummary): 이름 / 언어명 / 주제명 + 통화 중 여부

"""

from datetime import date, datetime

from pydantic import EmailStr, Field

from app.schemas.catalog import LanguageResponse, ThemeResponse
from app.schemas.common import CamelModel


class TranslatorProfileCreate(CamelModel):
    user_id: int
    date_of_birth: date | None = None
    email: EmailStr
    level_of_korean: str | None = Field(default=None, max_length=200)
    is_available: bool = False
    is_online: bool = False
    language_ids: list[int] = Field(default_factory=list)
    theme_ids: list[int] = Field(default_factory=list)


class TranslatorProfileUpdate(CamelModel):
    date_of_birth: date | None = None
    email: EmailStr | None = None
    level_of_korean: str | None = Field(default=None, max_length=200)
    is_available: bool | None = None
    is_online: bool | None = None
    language_ids: list[int] | None = None
    theme_ids: list[int] | None = None


class TranslatorProfileResponse(CamelModel):
    id: int
    user_id: int
    first_name: str | None = None
    last_name: str | None = None
    username: str
    date_of_birth: date | None = None
    email: str | None = None
    level_of_korean: str | None = None
    is_available: bool
    is_online: bool
    created_at: datetime
    updated_at: datetime
    languages: list[LanguageResponse] = []
    themes: list[ThemeResponse] = []
    average_rating: float | None = None
    total_ratings: int = 0
    total_calls: int = 0


class TranslatorProfileSummary(CamelModel):
    id: int
    user_id: int
    full_name: str
    email: str | None = None
    level_of_korean: str | None = None
    is_available: bool
    is_online: bool
    language_names: list[str] = []
    theme_names: list[str] = []
    average_rating: float | None = None
    total_calls: int = 0
    in_call: bool = False
