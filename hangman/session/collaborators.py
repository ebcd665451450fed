"""
Collaborators - Interfaces the room core depends on but does not own.

- PlayerDirectory: resolves player identities
- TransitionRecorder: mirrors committed transitions to storage (best-effort)
- Broadcaster: fans outcome events out to connected clients

The in-memory implementations here back the API and the tests. Real
storage or transport layers implement the same protocols.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Protocol
import time
import uuid

from ..engine_core.outcome import Outcome
from ..engine_core.state import Player
from ..errors import InvalidInput, NotFound

if TYPE_CHECKING:
    from .coordinator import RoomSnapshot

MAX_NAME_LENGTH = 100


def validate_name(name: str, what: str = "Name") -> str:
    """Trim a display name and enforce 1..MAX_NAME_LENGTH characters."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput(f"{what} is required")
    cleaned = name.strip()
    if len(cleaned) > MAX_NAME_LENGTH:
        raise InvalidInput(f"{what} can't exceed {MAX_NAME_LENGTH} characters")
    return cleaned


@dataclass(frozen=True)
class TransitionRecord:
    """A committed room transition, handed to the persistence layer."""
    room_id: str
    outcome: Outcome
    player_id: Optional[str]
    snapshot: RoomSnapshot
    timestamp: float = field(default_factory=time.time)


class PlayerDirectory(Protocol):
    """
    Abstraction over player identity.

    The core treats player_id as an opaque, stable key.
    """

    def get_player(self, player_id: str) -> Optional[Player]:
        """Return the player with the given ID, or None if not found."""

        ...

    def register(self, name: str) -> Player:
        """Create a new player identity."""

        ...


class TransitionRecorder(Protocol):
    """
    Persistence collaborator.

    Called once after each committed transition. The core does not retry;
    a raised exception is reported as a PersistenceWarning.
    """

    async def record(self, record: TransitionRecord) -> None:
        ...


class Broadcaster(Protocol):
    """Delivers one outcome event per operation to a room's clients."""

    async def publish(self, room_id: str, outcome: Outcome, snapshot: RoomSnapshot) -> None:
        ...


class InMemoryPlayerDirectory:
    """Player directory backed by a dict."""

    def __init__(self):
        self._players: dict[str, Player] = {}

    def register(self, name: str) -> Player:
        player = Player(player_id=uuid.uuid4().hex, name=validate_name(name, "Player name"))
        self._players[player.player_id] = player
        return player

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def require_player(self, player_id: str) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise NotFound(f"Player {player_id} not found")
        return player


class InMemoryTransitionLog:
    """Keeps every recorded transition in a list."""

    def __init__(self):
        self.records: list[TransitionRecord] = []

    async def record(self, record: TransitionRecord) -> None:
        self.records.append(record)

    def for_room(self, room_id: str) -> list[TransitionRecord]:
        return [r for r in self.records if r.room_id == room_id]


class NullBroadcaster:
    """Drops every event."""

    async def publish(self, room_id: str, outcome: Outcome, snapshot: RoomSnapshot) -> None:
        return None
