"""
ws.py

통화 시그널링 / 알림 WebSocket 엔드포인트.

접속: GET /ws?token=<access token>  (토큰이 없거나 유효하지 않으면 1008로 종료)

클라이언트 → 서버 프레임 (JSON):
- {"command": "SUBSCRIBE",   "destination": "/topic/..."}  → {"command": "RECEIPT", ...}
- {"command": "UNSUBSCRIBE", "destination": "/topic/..."}  → {"command": "RECEIPT", ...}
- {"command": "SEND", "destination": "/call.initiate", "payload": {...}}

서버 → 클라이언트 프레임:
- {"command": "MESSAGE", "destination": "...", "payload": {...}}
- {"command": "ERROR", "message": "..."}

개인 큐(/queue/calls, /queue/notifications)는 구독 없이 해당 사용자의 모든 연결로 전달된다.

"""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from app.core.deps import principal_from_token
from app.core.exceptions import AppError
from app.realtime import notifications, signaling
from app.realtime.broker import TOPIC_PREFIX, MessageBroker, broker, error_frame, receipt_frame
from app.schemas.signaling import CallSignalMessage, NotificationMessage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])

NOTIFICATION_DESTINATION = "/notification.send"


async def dispatch(broker: MessageBroker, sender: str, destination: str, payload: dict) -> None:
    """SEND 프레임을 destination 별 핸들러로 전달. 알 수 없는 destination 은 ValueError."""
    if destination == NOTIFICATION_DESTINATION:
        await notifications.send_notification(broker, NotificationMessage.model_validate(payload), sender)
        return

    if destination.startswith(signaling.SIGNAL_PREFIX):
        call_id = destination[len(signaling.SIGNAL_PREFIX):]
        if not call_id:
            raise ValueError("Missing call id")
        await signaling.relay_signal(broker, call_id, CallSignalMessage.model_validate(payload))
        return

    handler = signaling.CALL_HANDLERS.get(destination)
    if handler is None:
        raise ValueError(f"Unknown destination: {destination}")
    await handler(broker, CallSignalMessage.model_validate(payload), sender)


async def handle_frame(websocket: WebSocket, sender: str, frame: dict) -> None:
    command = str(frame.get("command", "")).upper()
    destination = frame.get("destination") or ""
    if not isinstance(destination, str):
        await websocket.send_json(error_frame("destination must be a string"))
        return

    if command in ("SUBSCRIBE", "UNSUBSCRIBE"):
        if not destination.startswith(TOPIC_PREFIX):
            await websocket.send_json(error_frame(f"Only {TOPIC_PREFIX}* destinations can be subscribed"))
            return
        if command == "SUBSCRIBE":
            broker.subscribe(websocket, destination)
        else:
            broker.unsubscribe(websocket, destination)
        await websocket.send_json(receipt_frame(destination))
        return

    if command == "SEND":
        payload = frame.get("payload") or {}
        if not isinstance(payload, dict):
            await websocket.send_json(error_frame("payload must be an object"))
            return
        try:
            await dispatch(broker, sender, destination, payload)
        except ValidationError as e:
            await websocket.send_json(error_frame(f"Invalid payload: {e.error_count()} error(s)"))
        except ValueError as e:
            await websocket.send_json(error_frame(str(e)))
        return

    await websocket.send_json(error_frame(f"Unknown command: {command or '(empty)'}"))


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, token: str | None = None):
    try:
        principal = principal_from_token(token or "")
    except AppError as e:
        logger.warning("WebSocket rejected: %s", e.message)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    username = principal.username
    # accept 전에 등록: 연결 직후 도착하는 메시지도 받도록
    broker.connect(username, websocket)
    await websocket.accept()
    logger.info("WebSocket connected: %s", username)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = json.loads(raw)
            except json.JSONDecodeError:
                await websocket.send_json(error_frame("Malformed JSON frame"))
                continue
            if not isinstance(frame, dict):
                await websocket.send_json(error_frame("Frame must be a JSON object"))
                continue
            await handle_frame(websocket, username, frame)
    except WebSocketDisconnect:
        logger.info("WebSocket disconnected: %s", username)
    finally:
        broker.disconnect(username, websocket)
