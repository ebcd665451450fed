"""
Room Manager - The arena of rooms.

Rooms are indexed by id and each one gets exactly one RoomCoordinator.
Operations never span rooms, so the manager itself holds no per-room
state beyond the index.

LIFECYCLE:
1. create_room(name) -> coordinator for a fresh room
2. Players join, hosts start rounds, players guess (via the coordinator)
3. close_room(room_id) drops the room from memory

Listing and discovering rooms is left to the storage layer.
"""

from __future__ import annotations
import itertools
import time
import uuid

from ..config import HangmanConfig
from ..engine_core.membership import MembershipManager
from ..engine_core.round_engine import RoundEngine
from ..engine_core.state import Room
from ..errors import NotFound
from ..logging_config import get_logger
from .collaborators import (
    Broadcaster,
    InMemoryPlayerDirectory,
    PlayerDirectory,
    TransitionRecorder,
    validate_name,
)
from .coordinator import RoomCoordinator

logger = get_logger(__name__)


class RoomManager:
    """
    Manages rooms and their coordinators.

    Responsibilities:
    - Create rooms with validated names
    - Hand out the single coordinator of a room
    - Drop closed rooms

    No persistence - the recorder collaborator mirrors transitions.
    """

    def __init__(
        self,
        config: HangmanConfig | None = None,
        players: PlayerDirectory | None = None,
        recorder: TransitionRecorder | None = None,
        broadcaster: Broadcaster | None = None,
    ):
        self.config = config or HangmanConfig()
        self.players = players if players is not None else InMemoryPlayerDirectory()
        self.recorder = recorder
        self.broadcaster = broadcaster
        self.round_engine = RoundEngine(starting_health=self.config.starting_health)
        self.membership_manager = MembershipManager()
        self._coordinators: dict[str, RoomCoordinator] = {}
        self._sequence = itertools.count(1)

    def create_room(self, name: str) -> RoomCoordinator:
        """
        Create a new, empty room.

        Args:
            name: Display name, 1-100 characters

        Returns:
            The room's coordinator
        """
        room = Room(
            room_id=uuid.uuid4().hex,
            name=validate_name(name, "Room name"),
            created_at=time.time(),
            sequence=next(self._sequence),
        )
        coordinator = RoomCoordinator(
            room=room,
            players=self.players,
            round_engine=self.round_engine,
            membership_manager=self.membership_manager,
            recorder=self.recorder,
            broadcaster=self.broadcaster,
        )
        self._coordinators[room.room_id] = coordinator
        logger.info("Room %s created: name=%r", room.room_id, room.name)
        return coordinator

    def get_coordinator(self, room_id: str) -> RoomCoordinator:
        coordinator = self._coordinators.get(room_id)
        if coordinator is None:
            raise NotFound(f"Room {room_id} not found")
        return coordinator

    def close_room(self, room_id: str) -> bool:
        """Remove a room from memory. Returns False if it did not exist."""
        coordinator = self._coordinators.pop(room_id, None)
        if coordinator is None:
            return False
        logger.info("Room %s closed", room_id)
        return True

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._coordinators
