"""
notifications.py

알림 메시지 전달.

- 클라이언트 발송(/notification.send): 발신자 = 인증된 username
  recipientId 가 있으면 해당 사용자 /queue/notifications, 없으면 /topic/notifications 브로드캐스트
- 서버 내부 발송(send_notification_to_user / broadcast_notification): 발신자 "System"

"""

import logging

from app.db.base import utcnow
from app.realtime.broker import MessageBroker
from app.schemas.signaling import NotificationMessage

logger = logging.getLogger(__name__)

NOTIFICATIONS_QUEUE = "/queue/notifications"
NOTIFICATIONS_TOPIC = "/topic/notifications"
SYSTEM_SENDER = "System"


def prepare_notification(original: NotificationMessage, sender: str) -> NotificationMessage:
    return NotificationMessage(
        id=original.id,
        title=original.title,
        text=original.text,
        recipient_id=original.recipient_id,
        sender=sender,
        type=original.type,
        data=original.data,
        timestamp=utcnow(),
    )


def is_targeted(message: NotificationMessage) -> bool:
    return message.recipient_id is not None and message.recipient_id.strip() != ""


def _payload(message: NotificationMessage) -> dict:
    return message.model_dump(mode="json", by_alias=True, exclude_none=True)


async def send_notification(broker: MessageBroker, message: NotificationMessage, sender: str | None) -> NotificationMessage:
    out = prepare_notification(message, sender or SYSTEM_SENDER)

    if is_targeted(out):
        await broker.send_to_user(out.recipient_id, NOTIFICATIONS_QUEUE, _payload(out))
        logger.info("Targeted notification sent to user: %s with title: %s", out.recipient_id, out.title)
    else:
        await broker.publish(NOTIFICATIONS_TOPIC, _payload(out))
        logger.info("Notification broadcasted to all users with title: %s", out.title)
    return out


async def send_notification_to_user(broker: MessageBroker, username: str, message: NotificationMessage) -> NotificationMessage:
    out = prepare_notification(message, SYSTEM_SENDER)
    await broker.send_to_user(username, NOTIFICATIONS_QUEUE, _payload(out))
    logger.info("Notification sent to user: %s with title: %s", username, out.title)
    return out


async def broadcast_notification(broker: MessageBroker, message: NotificationMessage) -> NotificationMessage:
    out = prepare_notification(message, SYSTEM_SENDER)
    await broker.publish(NOTIFICATIONS_TOPIC, _payload(out))
    logger.info("Notification broadcasted with title: %s", out.title)
    return out
