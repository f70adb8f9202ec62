from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import PageParams, get_current_principal, get_db, get_page_params, require
from app.core.policy import Principal
from app.schemas.common import Page
from app.schemas.user import UserProfileResponse, UserProfileUpdate
from app.services import user_profiles as user_profile_service

router = APIRouter(prefix="/api/user-profiles", tags=["user-profiles"])


@router.get("/me", response_model=UserProfileResponse)
def get_my_profile(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return user_profile_service.get_for_user(db, principal.user_id)


@router.get("", response_model=Page[UserProfileResponse])
def list_profiles(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: Principal = Depends(require("user_profiles:list")),
):
    items, total = user_profile_service.list_profiles(db, page=params.page, size=params.size)
    return Page.build([UserProfileResponse.model_validate(i) for i in items], total, params.page, params.size)


@router.get("/{profile_id}", response_model=UserProfileResponse)
def get_profile(
    profile_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return user_profile_service.get_profile(db, profile_id, principal)


# 무료 통화 사용 여부 변경 (관리자)
@router.put("/{profile_id}", response_model=UserProfileResponse)
def update_profile(
    profile_id: int,
    data: UserProfileUpdate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("user_profiles:update")),
):
    return user_profile_service.update_profile(db, profile_id, data)
