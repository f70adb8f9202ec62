from datetime import datetime
from decimal import Decimal

from pydantic import Field

from app.models.call import CallStatus
from app.schemas.common import CamelModel


class CallCreate(CamelModel):
    # 생략 시 호출자 = 현재 사용자 (관리자만 지정 가능)
    caller_id: int | None = None
    recipient_id: int
    theme_id: int | None = None
    channel_name: str | None = Field(default=None, max_length=50)


class CallUpdate(CamelModel):
    duration: int | None = None
    status: bool | None = None
    sum_decimal: Decimal | None = None
    commission: Decimal | None = None
    translator_has_joined: bool | None = None
    user_has_rated: bool | None = None
    channel_name: str | None = Field(default=None, max_length=50)
    call_status: CallStatus | None = None
    is_end_call: bool | None = None


class CallResponse(CamelModel):
    id: int
    caller_id: int
    recipient_id: int
    theme_id: int | None = None
    duration: int
    status: bool
    sum_decimal: Decimal | None = None
    commission: Decimal | None = None
    translator_has_joined: bool
    user_has_rated: bool
    channel_name: str | None = None
    call_status: CallStatus
    is_end_call: bool
    created_at: datetime
    updated_at: datetime
