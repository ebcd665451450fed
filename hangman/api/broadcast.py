"""WebSocket fan-out of room outcomes."""

from __future__ import annotations

from fastapi import WebSocket

from ..engine_core.outcome import Outcome
from ..logging_config import get_logger
from ..session.coordinator import RoomSnapshot
from .convert import snapshot_to_response

logger = get_logger(__name__)


class WebSocketBroadcaster:
    """
    Broadcaster that pushes one message per outcome to every socket in a room.

    Message shape: {"type": "<outcome>", "payload": <RoomResponse>}
    """

    def __init__(self):
        self.active_connections: dict[str, list[WebSocket]] = {}

    def connect(self, room_id: str, websocket: WebSocket) -> None:
        self.active_connections.setdefault(room_id, []).append(websocket)

    def disconnect(self, room_id: str, websocket: WebSocket) -> None:
        connections = self.active_connections.get(room_id)
        if not connections:
            return
        if websocket in connections:
            connections.remove(websocket)
        if not connections:
            del self.active_connections[room_id]

    async def publish(self, room_id: str, outcome: Outcome, snapshot: RoomSnapshot) -> None:
        connections = list(self.active_connections.get(room_id, []))
        if not connections:
            return

        message = {
            "type": outcome.value,
            "payload": snapshot_to_response(snapshot).model_dump(mode="json"),
        }
        dead_connections = []
        for ws in connections:
            try:
                await ws.send_json(message)
            except Exception:
                dead_connections.append(ws)
        for ws in dead_connections:
            logger.info("Dropping dead websocket in room %s", room_id)
            self.disconnect(room_id, ws)
