"""
common.py

공통 스키마.

- CamelModel : 모든 요청/응답 스키마의 베이스 (JSON 키는 camelCase)
- Page       : 목록 API 공통 페이지네이션 응답
- MessageResponse : 단순 메시지 응답

"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    # snake_case 필드 ↔ camelCase JSON, ORM 객체에서 바로 변환
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Page(CamelModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    size: int
    pages: int

    @classmethod
    def build(cls, items: list, total: int, page: int, size: int) -> "Page[T]":
        return cls(items=items, total=total, page=page, size=size, pages=math.ceil(total / size) if size else 0)


class MessageResponse(CamelModel):
    message: str
