"""
translator_profiles.py

통역사 프로필 API.

주요 기능:
- 프로필 생성 (ADMIN 또는 통역사 본인)
- 필터 검색 (가능 여부 / 온라인 / 언어 / 주제 / 한국어 수준 / 키워드) + 페이지네이션
- 특정 주제로 지금 통화 가능한 통역사 목록
- 상세 조회 (평균 평점 / 평가 수 / 통화 수 포함)
- 수정 / 가능 여부 변경 / 온라인 상태 변경 / 삭제 (ADMIN 또는 본인)

"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.deps import PageParams, get_current_principal, get_db, get_page_params, require
from app.core.policy import Principal
from app.repositories.translator_profile_repository import ProfileFilter
from app.schemas.common import Page
from app.schemas.translator_profile import (
    TranslatorProfileCreate,
    TranslatorProfileResponse,
    TranslatorProfileSummary,
    TranslatorProfileUpdate,
)
from app.services import translator_profiles as profile_service

router = APIRouter(prefix="/api/translator-profiles", tags=["translator-profiles"])


@router.post("", response_model=TranslatorProfileResponse, status_code=status.HTTP_201_CREATED)
def create_profile(
    data: TranslatorProfileCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    profile = profile_service.create_profile(db, data, principal)
    return profile_service.to_response(db, profile)


"""
통역사 검색 API

- 모든 조건은 선택, 주어진 조건끼리는 AND
- search: 이름 / 성 / 이메일 / 한국어 수준 부분 일치

"""

@router.get("", response_model=Page[TranslatorProfileSummary])
def search_profiles(
    is_available: bool | None = Query(None, alias="isAvailable"),
    is_online: bool | None = Query(None, alias="isOnline"),
    language_id: int | None = Query(None, alias="languageId"),
    theme_id: int | None = Query(None, alias="themeId"),
    level_of_korean: str | None = Query(None, alias="levelOfKorean"),
    search: str | None = Query(None),
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: Principal = Depends(require("translator_profiles:read")),
):
    filters = ProfileFilter(
        is_available=is_available,
        is_online=is_online,
        language_id=language_id,
        theme_id=theme_id,
        level_of_korean=level_of_korean,
        search=search.strip() if search else None,
    )
    profiles, total = profile_service.search_profiles(db, filters, page=params.page, size=params.size)
    return Page.build(profile_service.to_summaries(db, profiles), total, params.page, params.size)


# 해당 주제를 다루는 available + online 통역사
@router.get("/available/theme/{theme_id}", response_model=list[TranslatorProfileSummary])
def available_by_theme(
    theme_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("translator_profiles:read")),
):
    return profile_service.to_summaries(db, profile_service.available_by_theme(db, theme_id))


@router.get("/user/{user_id}", response_model=TranslatorProfileResponse)
def get_profile_by_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("translator_profiles:read")),
):
    return profile_service.to_response(db, profile_service.get_profile_for_user(db, user_id))


@router.get("/{profile_id}", response_model=TranslatorProfileResponse)
def get_profile(
    profile_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("translator_profiles:read")),
):
    return profile_service.to_response(db, profile_service.get_profile(db, profile_id))


@router.put("/{profile_id}", response_model=TranslatorProfileResponse)
def update_profile(
    profile_id: int,
    data: TranslatorProfileUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    profile = profile_service.update_profile(db, profile_id, data, principal)
    return profile_service.to_response(db, profile)


@router.patch("/{profile_id}/availability", response_model=TranslatorProfileResponse)
def update_availability(
    profile_id: int,
    is_available: bool = Query(..., alias="isAvailable"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    profile = profile_service.set_availability(db, profile_id, is_available, principal)
    return profile_service.to_response(db, profile)


@router.patch("/{profile_id}/online-status", response_model=TranslatorProfileResponse)
def update_online_status(
    profile_id: int,
    is_online: bool = Query(..., alias="isOnline"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    profile = profile_service.set_online_status(db, profile_id, is_online, principal)
    return profile_service.to_response(db, profile)


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(
    profile_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    profile_service.delete_profile(db, profile_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
