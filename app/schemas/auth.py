from pydantic import Field

from app.schemas.common import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(min_length=1, max_length=20)
    password: str = Field(min_length=1)


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1, max_length=20)
    password: str = Field(min_length=1, max_length=64)
    first_name: str | None = Field(default=None, max_length=200)
    last_name: str | None = Field(default=None, max_length=200)
    # USER / TRANSLATOR 만 허용 (ADMIN 자가 가입 불가)
    role: str = "USER"


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class TokenResponse(CamelModel):
    access_token: str
    refresh_token: str
