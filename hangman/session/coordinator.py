"""
Room Coordinator - The per-room actor.

Every membership and round operation for a room goes through its
coordinator, which holds an asyncio.Lock for the whole read-modify-write
sequence. asyncio.Lock hands the lock to waiters in FIFO order, so
operations on one room are totally ordered while different rooms run
independently.

Inside the lock only synchronous in-memory transitions run. Persistence
and broadcast happen after the lock is released:

    acquire -> validate -> mutate -> snapshot -> release
            -> record (best-effort) -> publish (best-effort)

A persistence failure is returned as a PersistenceWarning; it never rolls
back the committed transition.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional
import asyncio

from ..engine_core.evaluator import mask_word
from ..engine_core.membership import MembershipManager
from ..engine_core.outcome import Outcome
from ..engine_core.round_engine import RoundEngine
from ..engine_core.state import Membership, Player, Room, Round, RoundStatus
from ..errors import Conflict, HangmanError, InvalidInput, NotFound, NotInRoom, PersistenceWarning
from ..logging_config import get_logger
from .collaborators import (
    Broadcaster,
    NullBroadcaster,
    PlayerDirectory,
    TransitionRecord,
    TransitionRecorder,
)

logger = get_logger(__name__)


# =============================================================================
# Snapshot views
# =============================================================================

@dataclass(frozen=True)
class MemberView:
    """A membership as shown to clients."""
    player_id: str
    name: str
    is_host: bool
    is_banned: bool
    is_in_room: bool
    joined_at: float


@dataclass(frozen=True)
class RoundView:
    """
    A round as shown to clients.

    word is only filled in once the round is over; until then clients
    see masked_word.
    """
    round_id: str
    status: RoundStatus
    masked_word: str
    word_length: int
    word: Optional[str]
    guessed_letters: list[str]
    guessed_words: list[str]
    revealed_positions: list[int]
    remaining_health: int
    starting_health: int
    started_by: str
    attempt_count: int


@dataclass(frozen=True)
class RoomSnapshot:
    """Post-operation view of a room."""
    room_id: str
    name: str
    created_at: float
    round_status: RoundStatus
    members: list[MemberView]
    round: Optional[RoundView]
    rounds_played: int


@dataclass
class OperationResult:
    """What a coordinator operation returns to the request layer."""
    outcome: Outcome
    snapshot: RoomSnapshot
    warnings: list[PersistenceWarning] = field(default_factory=list)


def build_round_view(game_round: Round) -> RoundView:
    finished = game_round.status.is_terminal
    return RoundView(
        round_id=game_round.round_id,
        status=game_round.status,
        masked_word=mask_word(game_round.word, game_round.revealed_positions),
        word_length=len(game_round.word),
        word=game_round.word if finished else None,
        guessed_letters=sorted(game_round.guessed_letters),
        guessed_words=sorted(game_round.guessed_words),
        revealed_positions=sorted(game_round.revealed_positions),
        remaining_health=game_round.health.remaining,
        starting_health=game_round.health.budget,
        started_by=game_round.started_by,
        attempt_count=len(game_round.attempts),
    )


# =============================================================================
# Coordinator
# =============================================================================

class RoomCoordinator:
    """
    Serializes all operations for one room.

    The Room's rounds and memberships are only ever written from inside
    this class's lock.
    """

    def __init__(
        self,
        room: Room,
        players: PlayerDirectory,
        round_engine: RoundEngine | None = None,
        membership_manager: MembershipManager | None = None,
        recorder: TransitionRecorder | None = None,
        broadcaster: Broadcaster | None = None,
    ):
        self.room = room
        self.players = players
        self.round_engine = round_engine or RoundEngine()
        self.membership_manager = membership_manager or MembershipManager()
        self.recorder = recorder
        self.broadcaster = broadcaster or NullBroadcaster()
        self._lock = asyncio.Lock()

    @property
    def room_id(self) -> str:
        return self.room.room_id

    # -------------------------------------------------------------------------
    # Membership operations
    # -------------------------------------------------------------------------

    async def join_room(self, player_id: str, as_host: bool = False) -> OperationResult:
        """Join (or rejoin) the room. Banned players get Forbidden."""
        player = self._resolve_player(player_id)

        def transition() -> Outcome:
            before = self.room.get_membership(player_id)
            was_active = before is not None and before.is_in_room
            was_host = before is not None and before.is_host
            membership = self.membership_manager.join(self.room, player, as_host=as_host)
            if was_active and membership.is_host == was_host:
                return Outcome.NO_CHANGE
            return Outcome.PLAYER_JOINED

        return await self._run(player_id, transition)

    async def leave_room(self, player_id: str) -> OperationResult:
        """Leave the room. Leaving twice is a no-op."""

        def transition() -> Outcome:
            membership = self.room.get_membership(player_id)
            if membership is None:
                raise NotInRoom(f"Player {player_id} has never joined room {self.room_id}")
            if not membership.is_in_room:
                return Outcome.NO_CHANGE
            self.membership_manager.leave(membership)
            return Outcome.PLAYER_LEFT

        return await self._run(player_id, transition)

    async def ban_player(self, actor_id: str, target_id: str) -> OperationResult:
        """Host-only: ban a player from the room for good."""

        def transition() -> Outcome:
            self.membership_manager.require_host(self.room, actor_id)
            if actor_id == target_id:
                raise InvalidInput("A host cannot ban themselves")
            target = self.room.get_membership(target_id)
            if target is None:
                raise NotInRoom(f"Player {target_id} has never joined room {self.room_id}")
            if target.is_banned:
                return Outcome.NO_CHANGE
            self.membership_manager.ban(target)
            return Outcome.PLAYER_BANNED

        return await self._run(actor_id, transition)

    async def promote_host(self, actor_id: str, target_id: str) -> OperationResult:
        """Host-only: make another active member a host."""

        def transition() -> Outcome:
            self.membership_manager.require_host(self.room, actor_id)
            target = self.membership_manager.require_active_member(self.room, target_id)
            if target.is_host:
                return Outcome.NO_CHANGE
            self.membership_manager.promote_host(target)
            return Outcome.HOST_PROMOTED

        return await self._run(actor_id, transition)

    # -------------------------------------------------------------------------
    # Round operations
    # -------------------------------------------------------------------------

    async def start_round(self, player_id: str, word: str) -> OperationResult:
        """Host-only: hide a word and start a round."""

        def transition() -> Outcome:
            membership = self.membership_manager.require_active_member(self.room, player_id)
            self.round_engine.start_round(self.room, membership, word)
            return Outcome.ROUND_STARTED

        return await self._run(player_id, transition)

    async def guess_letter(self, player_id: str, letter: str) -> OperationResult:

        def transition() -> Outcome:
            membership = self.membership_manager.require_active_member(self.room, player_id)
            game_round = self._require_active_round()
            return self.round_engine.submit_letter_guess(game_round, membership, letter).outcome

        return await self._run(player_id, transition)

    async def guess_word(self, player_id: str, word: str) -> OperationResult:

        def transition() -> Outcome:
            membership = self.membership_manager.require_active_member(self.room, player_id)
            game_round = self._require_active_round()
            return self.round_engine.submit_word_guess(game_round, membership, word).outcome

        return await self._run(player_id, transition)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_snapshot(self) -> RoomSnapshot:
        async with self._lock:
            return self._snapshot()

    async def get_membership(self, player_id: str) -> MemberView:
        """The (room, player) record, active or not."""
        async with self._lock:
            membership = self.membership_manager.get_membership(self.room, player_id)
            if membership is None:
                raise NotInRoom(f"Player {player_id} has never joined room {self.room_id}")
            return self._member_view(membership)

    async def list_guessed_words(self) -> list[str]:
        """Words of finished rounds, oldest first. The active word is never listed."""
        async with self._lock:
            return [r.word for r in self.room.archived_rounds]

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _run(self, player_id: str | None, transition: Callable[[], Outcome]) -> OperationResult:
        """Run one transition under the room lock, then mirror it outside."""
        async with self._lock:
            try:
                outcome = transition()
            except HangmanError as e:
                logger.debug(
                    "Rejected operation in room %s by %s: %s (%s)",
                    self.room_id, player_id, e.message, e.error_code.value,
                )
                raise
            snapshot = self._snapshot()

        logger.info("room=%s player=%s outcome=%s", self.room_id, player_id, outcome.value)

        warnings = await self._record(player_id, outcome, snapshot)
        await self._publish(outcome, snapshot)
        return OperationResult(outcome=outcome, snapshot=snapshot, warnings=warnings)

    async def _record(
        self,
        player_id: str | None,
        outcome: Outcome,
        snapshot: RoomSnapshot,
    ) -> list[PersistenceWarning]:
        if self.recorder is None:
            return []
        record = TransitionRecord(
            room_id=self.room_id,
            outcome=outcome,
            player_id=player_id,
            snapshot=snapshot,
        )
        try:
            await self.recorder.record(record)
        except Exception as e:
            logger.warning(
                "Failed to record %s for room %s: %s",
                outcome.value, self.room_id, e, exc_info=True,
            )
            return [PersistenceWarning(
                f"Transition {outcome.value} was applied but not recorded: {e}",
                details={"room_id": self.room_id, "outcome": outcome.value},
            )]
        return []

    async def _publish(self, outcome: Outcome, snapshot: RoomSnapshot) -> None:
        try:
            await self.broadcaster.publish(self.room_id, outcome, snapshot)
        except Exception as e:
            logger.warning(
                "Failed to broadcast %s for room %s: %s",
                outcome.value, self.room_id, e, exc_info=True,
            )

    def _resolve_player(self, player_id: str) -> Player:
        player = self.players.get_player(player_id)
        if player is None:
            raise NotFound(f"Player {player_id} not found")
        return player

    def _require_active_round(self) -> Round:
        game_round = self.room.active_round
        if game_round is None:
            raise Conflict(f"Room {self.room_id} has no round in progress")
        return game_round

    def _member_view(self, membership: Membership) -> MemberView:
        player = self.players.get_player(membership.player_id)
        return MemberView(
            player_id=membership.player_id,
            name=player.name if player else "",
            is_host=membership.is_host,
            is_banned=membership.is_banned,
            is_in_room=membership.is_in_room,
            joined_at=membership.joined_at,
        )

    def _snapshot(self) -> RoomSnapshot:
        latest = self.room.latest_round
        return RoomSnapshot(
            room_id=self.room.room_id,
            name=self.room.name,
            created_at=self.room.created_at,
            round_status=self.room.round_status,
            members=[self._member_view(m) for m in self.room.memberships.values()],
            round=build_round_view(latest) if latest else None,
            rounds_played=len(self.room.archived_rounds),
        )
