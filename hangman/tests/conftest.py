"""
Pytest fixtures for hangman tests.
"""

import pytest

from ..config import HangmanConfig
from ..engine_core.membership import MembershipManager
from ..engine_core.round_engine import RoundEngine
from ..engine_core.state import Player, Room
from ..session import InMemoryPlayerDirectory, InMemoryTransitionLog, RoomManager


class RecordingBroadcaster:
    """Collects every published event."""

    def __init__(self):
        self.events = []

    async def publish(self, room_id, outcome, snapshot):
        self.events.append((room_id, outcome, snapshot))


class FailingRecorder:
    """Persistence collaborator that always fails."""

    def __init__(self):
        self.calls = 0

    async def record(self, record):
        self.calls += 1
        raise ConnectionError("database unavailable")


@pytest.fixture
def config() -> HangmanConfig:
    return HangmanConfig(starting_health=3)


@pytest.fixture
def room() -> Room:
    return Room(room_id="r1", name="R1")


@pytest.fixture
def host() -> Player:
    return Player(player_id="h", name="Host")


@pytest.fixture
def guesser() -> Player:
    return Player(player_id="p", name="Guesser")


@pytest.fixture
def memberships() -> MembershipManager:
    return MembershipManager()


@pytest.fixture
def engine(config: HangmanConfig) -> RoundEngine:
    return RoundEngine(starting_health=config.starting_health)


@pytest.fixture
def hosted_room(room, host, guesser, memberships) -> Room:
    """Room with an active host and an active guesser."""
    memberships.join(room, host, as_host=True)
    memberships.join(room, guesser)
    return room


@pytest.fixture
def recorder() -> InMemoryTransitionLog:
    return InMemoryTransitionLog()


@pytest.fixture
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture
def manager(config, recorder, broadcaster) -> RoomManager:
    return RoomManager(
        config=config,
        players=InMemoryPlayerDirectory(),
        recorder=recorder,
        broadcaster=broadcaster,
    )
