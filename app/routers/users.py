"""
users.py

사용자(User) 관리 API.

- 생성 / 목록 / 삭제는 ADMIN 전용
- 단건 조회 / 수정은 ADMIN 또는 본인
- 역할 / 잔액 / 활성화 상태 변경은 ADMIN 만 가능 (서비스 계층에서 검사)

"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.deps import PageParams, get_current_principal, get_db, get_page_params, require
from app.core.policy import Principal
from app.schemas.common import Page
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services import users as user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("users:create")),
):
    return user_service.create_user(db, data)


@router.get("", response_model=Page[UserResponse])
def list_users(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: Principal = Depends(require("users:list")),
):
    users, total = user_service.list_users(db, page=params.page, size=params.size)
    items = [UserResponse.model_validate(u) for u in users]
    return Page.build(items, total, params.page, params.size)


# 내 정보 조회
@router.get("/me", response_model=UserResponse)
def get_me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return user_service.get_user(db, principal.user_id)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("users:read", owner_param="user_id")),
):
    return user_service.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require("users:update", owner_param="user_id")),
):
    return user_service.update_user(db, user_id, data, principal)


"""
사용자 삭제 API

- refresh token / 평가 / 통화 / 입출금 / 프로필을 명시적으로 함께 삭제

"""

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("users:delete")),
):
    user_service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
