"""
signaling.py

통화 시그널링 메시지 변환 / 전달.

모든 핸들러는 상태를 갖지 않는다:
받은 메시지에 type / 발신자 / timestamp 를 붙여 사용자 큐 또는 통화방 토픽으로 보낸다.

- /call.initiate          → CALL_INITIATE     → 수신자 /queue/calls
- /call.accept            → CALL_ACCEPTED     → 호출자 /queue/calls + 통화방
- /call.reject            → CALL_REJECTED     → 호출자 /queue/calls
- /call.end               → CALL_ENDED        → 통화방
- /call.signal/{callId}   → 원본 유지 (offer / answer / ICE) → 통화방
- /call.translator.join   → TRANSLATOR_JOINED → 통화방

"""

import logging

from app.db.base import utcnow
from app.realtime.broker import MessageBroker
from app.schemas.signaling import CallSignalMessage

logger = logging.getLogger(__name__)

CALLS_QUEUE = "/queue/calls"


def call_room(call_id: str | None) -> str:
    return f"/topic/call-room/{call_id}"


def to_payload(message) -> dict:
    return message.model_dump(mode="json", by_alias=True, exclude_none=True)


def build_call_message(original: CallSignalMessage, message_type: str, caller_id: str | None = None) -> CallSignalMessage:
    return CallSignalMessage(
        call_id=original.call_id,
        caller_id=caller_id if caller_id is not None else original.caller_id,
        recipient_id=original.recipient_id,
        translator_id=original.translator_id,
        type=message_type,
        channel_name=original.channel_name,
        theme_id=original.theme_id,
        data=original.data,
        status=original.status,
        timestamp=utcnow(),
    )


async def initiate_call(broker: MessageBroker, message: CallSignalMessage, sender: str | None) -> CallSignalMessage:
    caller = sender or message.caller_id
    out = build_call_message(message, "CALL_INITIATE", caller_id=caller)
    logger.info("Call initiated from %s to %s for call ID: %s", caller, message.recipient_id, message.call_id)
    await broker.send_to_user(message.recipient_id, CALLS_QUEUE, to_payload(out))
    return out


async def accept_call(broker: MessageBroker, message: CallSignalMessage, sender: str | None) -> CallSignalMessage:
    out = build_call_message(message, "CALL_ACCEPTED")
    logger.info("Call accepted for call ID: %s by recipient: %s", message.call_id, message.recipient_id)
    await broker.send_to_user(message.caller_id, CALLS_QUEUE, to_payload(out))
    await broker.publish(call_room(message.call_id), to_payload(out))
    return out


async def reject_call(broker: MessageBroker, message: CallSignalMessage, sender: str | None) -> CallSignalMessage:
    out = build_call_message(message, "CALL_REJECTED")
    logger.info("Call rejected for call ID: %s by recipient: %s", message.call_id, message.recipient_id)
    await broker.send_to_user(message.caller_id, CALLS_QUEUE, to_payload(out))
    return out


async def end_call(broker: MessageBroker, message: CallSignalMessage, sender: str | None) -> CallSignalMessage:
    out = build_call_message(message, "CALL_ENDED")
    logger.info("Call ended for call ID: %s", message.call_id)
    await broker.publish(call_room(message.call_id), to_payload(out))
    return out


async def relay_signal(broker: MessageBroker, call_id: str, message: CallSignalMessage) -> CallSignalMessage:
    out = message.model_copy(update={"call_id": call_id, "timestamp": utcnow()})
    logger.debug("WebRTC signaling for call ID: %s, type: %s", call_id, message.type)
    await broker.publish(call_room(call_id), to_payload(out))
    return out


async def translator_join(broker: MessageBroker, message: CallSignalMessage, sender: str | None) -> CallSignalMessage:
    translator_id = sender or message.translator_id
    out = build_call_message(message, "TRANSLATOR_JOINED")
    out.translator_id = translator_id
    logger.info("Translator %s joined call ID: %s", translator_id, message.call_id)
    await broker.publish(call_room(message.call_id), to_payload(out))
    return out


# 고정 destination → 핸들러
CALL_HANDLERS = {
    "/call.initiate": initiate_call,
    "/call.accept": accept_call,
    "/call.reject": reject_call,
    "/call.end": end_call,
    "/call.translator.join": translator_join,
}

SIGNAL_PREFIX = "/call.signal/"
