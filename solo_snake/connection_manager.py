"""WebSocket connection management and message encoding."""

import json
import logging
from typing import Optional

from fastapi import WebSocket

from .errors import UnknownIntentError
from .models import Direction, GameSnapshot

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.connections.add(ws)

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except Exception:
                disconnected.append(ws)
        for ws in disconnected:
            logger.debug("Dropping dead connection %s", id(ws))
            self.connections.discard(ws)

    async def send_personal(self, ws: WebSocket, message: str):
        await ws.send_text(message)


def build_state_msg(snapshot: GameSnapshot) -> str:
    return json.dumps({"type": "state", **snapshot.to_dict()})


def build_error_msg(detail: str) -> str:
    return json.dumps({"type": "error", "detail": detail})


def parse_direction(value) -> Optional[Direction]:
    if value is None:
        return None
    try:
        return Direction(str(value).lower())
    except ValueError:
        raise UnknownIntentError(f"unknown direction {value!r}") from None


def parse_intent_msg(raw: str) -> tuple[str, Optional[Direction]]:
    """Decode ``{"type": "intent", "intent": ..., "direction": ...}``."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        raise UnknownIntentError("message is not valid JSON") from None
    if not isinstance(msg, dict) or msg.get("type") != "intent":
        raise UnknownIntentError("expected a message of type 'intent'")
    name = msg.get("intent")
    if not isinstance(name, str):
        raise UnknownIntentError("missing intent name")
    return name, parse_direction(msg.get("direction"))
