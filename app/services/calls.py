"""
services/calls.py

통화(Call) 기록 비즈니스 로직.

- 생성 시 호출자는 현재 사용자 (관리자는 임의 지정 가능)
- 호출자와 수신자는 서로 달라야 함
- 조회 / 수정은 참여자(호출자 또는 수신자) 또는 관리자

"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core.policy import Principal, enforce
from app.models.call import Call, CallStatus
from app.models.translator_profile import Theme
from app.models.user import User
from app.repositories.common import paginate
from app.schemas.call import CallCreate, CallUpdate
from app.services import validation
from app.services.common import commit, get_or_404

logger = logging.getLogger(__name__)

_UPDATABLE = (
    "duration",
    "status",
    "sum_decimal",
    "commission",
    "translator_has_joined",
    "user_has_rated",
    "channel_name",
    "call_status",
    "is_end_call",
)


def _participants(call: Call) -> tuple[int, int]:
    return call.caller_id, call.recipient_id


def create_call(db: Session, data: CallCreate, principal: Principal) -> Call:
    caller_id = data.caller_id if data.caller_id is not None else principal.user_id
    enforce(principal, "calls:create", caller_id)
    validation.raise_if_errors(validation.validate_call(data, caller_id=caller_id))

    get_or_404(db, User, caller_id, "User")
    get_or_404(db, User, data.recipient_id, "User")
    if data.theme_id is not None:
        get_or_404(db, Theme, data.theme_id, "Theme")

    call = Call(
        caller_id=caller_id,
        recipient_id=data.recipient_id,
        theme_id=data.theme_id,
        channel_name=data.channel_name,
        call_status=CallStatus.CONNECT_NOT_SET,
    )
    db.add(call)
    commit(db)
    db.refresh(call)

    logger.info("Call created: id=%s caller=%s recipient=%s", call.id, caller_id, data.recipient_id)
    return call


def list_calls(db: Session, principal: Principal, *, page: int, size: int) -> tuple[list[Call], int]:
    stmt = select(Call).order_by(Call.id.desc())
    if not principal.is_admin:
        stmt = stmt.where(or_(Call.caller_id == principal.user_id, Call.recipient_id == principal.user_id))
    return paginate(db, stmt, page=page, size=size)


def get_call(db: Session, call_id: int, principal: Principal) -> Call:
    call = get_or_404(db, Call, call_id, "Call")
    enforce(principal, "calls:read", _participants(call))
    return call


def update_call(db: Session, call_id: int, data: CallUpdate, principal: Principal) -> Call:
    call = get_or_404(db, Call, call_id, "Call")
    enforce(principal, "calls:update", _participants(call))
    validation.raise_if_errors(validation.validate_call(data))

    for name in _UPDATABLE:
        value = getattr(data, name)
        if value is not None:
            setattr(call, name, value)

    commit(db)
    db.refresh(call)
    logger.info("Call updated: id=%s status=%s ended=%s", call.id, call.call_status.value, call.is_end_call)
    return call


def delete_call(db: Session, call_id: int) -> None:
    call = get_or_404(db, Call, call_id, "Call")
    db.delete(call)
    commit(db)
    logger.info("Call deleted: id=%s", call_id)
