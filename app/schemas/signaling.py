"""
signaling.py

WebSocket 시그널링 / 알림 메시지 스키마.

- CallSignalMessage   : /call.* 목적지로 주고받는 통화 시그널
- NotificationMessage : /notification.send 및 서버 발송 알림
- data 필드는 WebRTC offer / answer / ICE candidate 등 임의 페이로드

"""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict

from app.schemas.common import CamelModel


class CallSignalMessage(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    call_id: str | None = None
    caller_id: str | None = None
    recipient_id: str | None = None
    translator_id: str | None = None
    type: str | None = None
    channel_name: str | None = None
    theme_id: str | None = None
    data: Any = None
    status: str | None = None
    timestamp: datetime | None = None


class NotificationMessage(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str | None = None
    title: str | None = None
    text: str | None = None
    recipient_id: str | None = None
    sender: str | None = None
    type: str | None = None
    data: Any = None
    timestamp: datetime | None = None
