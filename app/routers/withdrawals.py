from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.deps import PageParams, get_current_principal, get_db, get_page_params, require
from app.core.policy import Principal
from app.schemas.common import Page
from app.schemas.finance import WithdrawalCreate, WithdrawalResponse, WithdrawalUpdate
from app.services import finance as finance_service

router = APIRouter(prefix="/api/withdrawals", tags=["withdrawals"])


"""
출금 요청 API

- 통역사 정산용, 규칙은 입금 API 와 동일
- 계좌번호 / 예금주 / 은행명 / 금액 필수

"""

@router.post("", response_model=WithdrawalResponse, status_code=status.HTTP_201_CREATED)
def create_withdrawal(
    data: WithdrawalCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return finance_service.create_withdrawal(db, data, principal)


@router.get("", response_model=Page[WithdrawalResponse])
def list_withdrawals(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require("withdrawals:list")),
):
    items, total = finance_service.list_withdrawals(db, principal, page=params.page, size=params.size)
    return Page.build([WithdrawalResponse.model_validate(i) for i in items], total, params.page, params.size)


@router.get("/{withdrawal_id}", response_model=WithdrawalResponse)
def get_withdrawal(
    withdrawal_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return finance_service.get_withdrawal(db, withdrawal_id, principal)


@router.put("/{withdrawal_id}", response_model=WithdrawalResponse)
def update_withdrawal(
    withdrawal_id: int,
    data: WithdrawalUpdate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("withdrawals:update")),
):
    return finance_service.update_withdrawal(db, withdrawal_id, data)


@router.delete("/{withdrawal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_withdrawal(
    withdrawal_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("withdrawals:delete")),
):
    finance_service.delete_withdrawal(db, withdrawal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
