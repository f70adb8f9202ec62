from pydantic import Field

from app.schemas.common import CamelModel


class LanguageCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)


class LanguageResponse(CamelModel):
    id: int
    name: str


class ThemeCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None


class ThemeResponse(CamelModel):
    id: int
    name: str
    description: str | None = None
