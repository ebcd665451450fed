"""
Room State - In-memory model of rooms, players, memberships and rounds.

Design principles:
- Arena-friendly: a Room owns its memberships and rounds as embedded
  structures; players and rooms are referenced by id, never by object
- Single writer: only the room's coordinator mutates a Room
- At most one round per room is IN_PROGRESS
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import time
import uuid

from .health import HealthTracker
from .outcome import Outcome


class RoundStatus(str, Enum):
    """Lifecycle of a round."""
    WAITING_FOR_WORD = "waiting_for_word"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in {RoundStatus.WON, RoundStatus.LOST}


class GuessKind(str, Enum):
    LETTER = "letter"
    WORD = "word"


@dataclass(frozen=True)
class Player:
    """A player identity. Shared across rooms, immutable once created."""
    player_id: str
    name: str


@dataclass
class Membership:
    """
    The (room, player) record.

    Created on first join and never deleted: leaving only clears
    is_in_room, so a rejoin reactivates the same record.
    """
    room_id: str
    player_id: str
    is_host: bool = False
    is_banned: bool = False
    is_in_room: bool = True
    joined_at: float = field(default_factory=time.time)

    @property
    def is_active(self) -> bool:
        return self.is_in_room and not self.is_banned


@dataclass(frozen=True)
class Attempt:
    """One applied guess, kept in the round's attempt log."""
    player_id: str
    kind: GuessKind
    value: str
    outcome: Outcome
    timestamp: float = field(default_factory=time.time)


@dataclass
class Round:
    """
    One game of hangman inside a room.

    The word is stored upper-cased. revealed_positions are indexes into
    the word; guessed_letters and guessed_words only grow.
    """
    room_id: str
    word: str
    health: HealthTracker
    started_by: str
    round_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: RoundStatus = RoundStatus.IN_PROGRESS
    guessed_letters: set[str] = field(default_factory=set)
    guessed_words: set[str] = field(default_factory=set)
    revealed_positions: set[int] = field(default_factory=set)
    attempts: list[Attempt] = field(default_factory=list)
    started_at: float = field(default_factory=time.time)
    finished_at: float | None = None

    @property
    def is_in_progress(self) -> bool:
        return self.status == RoundStatus.IN_PROGRESS


@dataclass
class Room:
    """
    A game room.

    rounds is the round history in start order; only the last one can be
    in progress.
    """
    room_id: str
    name: str
    created_at: float = field(default_factory=time.time)
    sequence: int = 0
    memberships: dict[str, Membership] = field(default_factory=dict)
    rounds: list[Round] = field(default_factory=list)

    @property
    def active_round(self) -> Round | None:
        """The IN_PROGRESS round, if any."""
        if self.rounds and self.rounds[-1].is_in_progress:
            return self.rounds[-1]
        return None

    @property
    def latest_round(self) -> Round | None:
        return self.rounds[-1] if self.rounds else None

    @property
    def round_status(self) -> RoundStatus:
        """WAITING_FOR_WORD between games, otherwise the active round's status."""
        active = self.active_round
        return active.status if active else RoundStatus.WAITING_FOR_WORD

    @property
    def archived_rounds(self) -> list[Round]:
        return [r for r in self.rounds if r.status.is_terminal]

    def get_membership(self, player_id: str) -> Membership | None:
        return self.memberships.get(player_id)

    def active_members(self) -> list[Membership]:
        return [m for m in self.memberships.values() if m.is_active]
