from decimal import Decimal

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


def _role_names(value) -> list[str]:
    # Role ORM 객체 / RoleName / 문자열 모두 "ROLE_*" 문자열로 정규화
    names = []
    for r in value or []:
        name = getattr(r, "name", r)
        names.append(getattr(name, "value", str(name)))
    return sorted(names)


# 🔹 관리자 사용자 생성 요청
class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=20)
    password: str | None = None
    first_name: str | None = Field(default=None, max_length=200)
    last_name: str | None = Field(default=None, max_length=200)
    balance: Decimal | None = None
    is_active: bool = True
    on_boarding_status: int | None = None
    roles: list[str] = Field(default_factory=lambda: ["USER"])


# 🔹 사용자 수정 요청 (None이면 기존 값 유지)
class UserUpdate(CamelModel):
    username: str | None = Field(default=None, max_length=20)
    password: str | None = None
    first_name: str | None = Field(default=None, max_length=200)
    last_name: str | None = Field(default=None, max_length=200)
    balance: Decimal | None = None
    is_active: bool | None = None
    on_boarding_status: int | None = None
    roles: list[str] | None = None


# 🔹 사용자 응답용
class UserResponse(CamelModel):
    id: int
    username: str
    first_name: str | None = None
    last_name: str | None = None
    balance: Decimal
    is_active: bool
    on_boarding_status: int | None = None
    roles: list[str] = []

    @field_validator("roles", mode="before")
    @classmethod
    def _normalize_roles(cls, v):
        return _role_names(v)


class UserProfileResponse(CamelModel):
    id: int
    user_id: int
    is_free_call_made: bool


class UserProfileUpdate(CamelModel):
    is_free_call_made: bool
