"""
deposits.py

입금(Deposit) 요청 API.

- 생성: 로그인 사용자 (일반 사용자는 본인 명의만)
- 목록: ADMIN 은 전체, 그 외는 본인 요청만
- 단건 조회: ADMIN 또는 본인
- 수정(상태 변경) / 삭제: ADMIN 전용

"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.deps import PageParams, get_current_principal, get_db, get_page_params, require
from app.core.policy import Principal
from app.schemas.common import Page
from app.schemas.finance import DepositCreate, DepositResponse, DepositUpdate
from app.services import finance as finance_service

router = APIRouter(prefix="/api/deposits", tags=["deposits"])


@router.post("", response_model=DepositResponse, status_code=status.HTTP_201_CREATED)
def create_deposit(
    data: DepositCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return finance_service.create_deposit(db, data, principal)


@router.get("", response_model=Page[DepositResponse])
def list_deposits(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require("deposits:list")),
):
    items, total = finance_service.list_deposits(db, principal, page=params.page, size=params.size)
    return Page.build([DepositResponse.model_validate(i) for i in items], total, params.page, params.size)


@router.get("/{deposit_id}", response_model=DepositResponse)
def get_deposit(
    deposit_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return finance_service.get_deposit(db, deposit_id, principal)


@router.put("/{deposit_id}", response_model=DepositResponse)
def update_deposit(
    deposit_id: int,
    data: DepositUpdate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("deposits:update")),
):
    return finance_service.update_deposit(db, deposit_id, data)


@router.delete("/{deposit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_deposit(
    deposit_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("deposits:delete")),
):
    finance_service.delete_deposit(db, deposit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
