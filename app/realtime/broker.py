"""
broker.py

인메모리 메시지 브로커 (WebSocket 연결 레지스트리).

- 사용자별(username) 연결 목록: /queue/* 개인 메시지 전달 대상
- 목적지(destination)별 구독 목록: /topic/* 브로드캐스트 전달 대상

단일 프로세스 / 단일 이벤트 루프 기준. 전달 보장, ACK, 재전송 없음.

"""

import logging
from collections import defaultdict
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

TOPIC_PREFIX = "/topic/"


def message_frame(destination: str, payload: Any) -> dict:
    return {"command": "MESSAGE", "destination": destination, "payload": payload}


def error_frame(message: str) -> dict:
    return {"command": "ERROR", "message": message}


def receipt_frame(destination: str) -> dict:
    return {"command": "RECEIPT", "destination": destination}


class MessageBroker:
    def __init__(self) -> None:
        self._connections: dict[str, set[WebSocket]] = defaultdict(set)
        self._subscriptions: dict[str, set[WebSocket]] = defaultdict(set)

    def connect(self, username: str, websocket: WebSocket) -> None:
        self._connections[username].add(websocket)
        logger.debug("WebSocket registered for %s (%d open)", username, len(self._connections[username]))

    def disconnect(self, username: str, websocket: WebSocket) -> None:
        sockets = self._connections.get(username)
        if sockets is not None:
            sockets.discard(websocket)
            if not sockets:
                del self._connections[username]
        for destination in list(self._subscriptions):
            self.unsubscribe(websocket, destination)
        logger.debug("WebSocket removed for %s", username)

    def subscribe(self, websocket: WebSocket, destination: str) -> None:
        self._subscriptions[destination].add(websocket)

    def unsubscribe(self, websocket: WebSocket, destination: str) -> None:
        subscribers = self._subscriptions.get(destination)
        if subscribers is None:
            return
        subscribers.discard(websocket)
        if not subscribers:
            del self._subscriptions[destination]

    def is_connected(self, username: str) -> bool:
        return bool(self._connections.get(username))

    def subscriber_count(self, destination: str) -> int:
        return len(self._subscriptions.get(destination, ()))

    async def send_to_user(self, username: str, destination: str, payload: Any) -> int:
        """사용자의 모든 연결로 전송. 전송된 연결 수 반환 (오프라인이면 0, 메시지는 버려짐)."""
        sockets = list(self._connections.get(username, ()))
        if not sockets:
            logger.debug("User %s not connected, dropping message for %s", username, destination)
        return await self._deliver(sockets, message_frame(destination, payload))

    async def publish(self, destination: str, payload: Any) -> int:
        """destination 구독자 전체에게 전송."""
        sockets = list(self._subscriptions.get(destination, ()))
        return await self._deliver(sockets, message_frame(destination, payload))

    async def _deliver(self, sockets: list[WebSocket], frame: dict) -> int:
        delivered = 0
        for ws in sockets:
            try:
                await ws.send_json(frame)
                delivered += 1
            except (RuntimeError, WebSocketDisconnect) as e:
                # 이미 닫힌 연결
                logger.warning("Failed to deliver to %s: %s", frame["destination"], e)
        return delivered


# 애플리케이션 전역 브로커
broker = MessageBroker()
