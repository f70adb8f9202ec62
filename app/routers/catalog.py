"""
catalog.py

언어(Language) / 주제(Theme) 카탈로그 API.

- 조회는 로그인 사용자 누구나
- 등록은 ADMIN 전용

"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import PageParams, get_db, get_page_params, require
from app.core.policy import Principal
from app.schemas.catalog import LanguageCreate, LanguageResponse, ThemeCreate, ThemeResponse
from app.schemas.common import Page
from app.services import catalog as catalog_service

languages_router = APIRouter(prefix="/api/languages", tags=["catalog"])
themes_router = APIRouter(prefix="/api/themes", tags=["catalog"])


@languages_router.get("", response_model=Page[LanguageResponse])
def list_languages(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: Principal = Depends(require("catalog:read")),
):
    items, total = catalog_service.list_languages(db, page=params.page, size=params.size)
    return Page.build([LanguageResponse.model_validate(i) for i in items], total, params.page, params.size)


@languages_router.post("", response_model=LanguageResponse, status_code=status.HTTP_201_CREATED)
def create_language(
    data: LanguageCreate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("catalog:write")),
):
    return catalog_service.create_language(db, data.name)


@themes_router.get("", response_model=Page[ThemeResponse])
def list_themes(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: Principal = Depends(require("catalog:read")),
):
    items, total = catalog_service.list_themes(db, page=params.page, size=params.size)
    return Page.build([ThemeResponse.model_validate(i) for i in items], total, params.page, params.size)


@themes_router.post("", response_model=ThemeResponse, status_code=status.HTTP_201_CREATED)
def create_theme(
    data: ThemeCreate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("catalog:write")),
):
    return catalog_service.create_theme(db, data.name, data.description)
