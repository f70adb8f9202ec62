"""
calls.py

통화(Call) 기록 API.

- 생성: 호출자 = 현재 사용자 (ADMIN 은 callerId 지정 가능)
- 목록: ADMIN 은 전체, 그 외는 본인이 참여한 통화
- 조회 / 수정: 참여자 또는 ADMIN
- 삭제: ADMIN 전용

"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.deps import PageParams, get_current_principal, get_db, get_page_params, require
from app.core.policy import Principal
from app.schemas.call import CallCreate, CallResponse, CallUpdate
from app.schemas.common import Page
from app.services import calls as call_service

router = APIRouter(prefix="/api/calls", tags=["calls"])


@router.post("", response_model=CallResponse, status_code=status.HTTP_201_CREATED)
def create_call(
    data: CallCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return call_service.create_call(db, data, principal)


@router.get("", response_model=Page[CallResponse])
def list_calls(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require("calls:list")),
):
    items, total = call_service.list_calls(db, principal, page=params.page, size=params.size)
    return Page.build([CallResponse.model_validate(i) for i in items], total, params.page, params.size)


@router.get("/{call_id}", response_model=CallResponse)
def get_call(
    call_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return call_service.get_call(db, call_id, principal)


@router.put("/{call_id}", response_model=CallResponse)
def update_call(
    call_id: int,
    data: CallUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return call_service.update_call(db, call_id, data, principal)


@router.delete("/{call_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_call(
    call_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("calls:delete")),
):
    call_service.delete_call(db, call_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
