"""
Tests for the room coordinator and room manager.

Tests:
- Full room scenarios through the coordinator
- Serialization of concurrent operations within a room
- Persistence warnings and broadcast events
- Snapshots never leak the active word
"""

import asyncio

import pytest

from ..engine_core.outcome import Outcome
from ..engine_core.state import RoundStatus
from ..errors import Conflict, Forbidden, InvalidInput, NotFound, NotInRoom, PersistenceWarning
from ..session import InMemoryPlayerDirectory, OperationResult, RoomManager
from .conftest import FailingRecorder


def setup_room(manager):
    """Create R1 with a host H and a guesser P."""
    coordinator = manager.create_room("R1")
    host = manager.players.register("H")
    guesser = manager.players.register("P")
    return coordinator, host, guesser


class TestRoomScenarios:
    """End-to-end scenarios through the coordinator."""

    def test_wolf_scenario(self, manager):
        coordinator, host, guesser = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.join_room(guesser.player_id)
            started = await coordinator.start_round(host.player_id, "WOLF")
            assert started.outcome == Outcome.ROUND_STARTED

            accepted = await coordinator.guess_letter(guesser.player_id, "o")
            assert accepted.outcome == Outcome.LETTER_ACCEPTED
            assert accepted.snapshot.round.revealed_positions == [1]
            assert accepted.snapshot.round.masked_word == "_ O _ _"

            missed = await coordinator.guess_letter(guesser.player_id, "z")
            assert missed.outcome == Outcome.LETTER_REJECTED_MISS
            assert missed.snapshot.round.remaining_health == 2

            return await coordinator.guess_word(guesser.player_id, "wolf")

        won = asyncio.run(scenario())

        assert won.outcome == Outcome.ROUND_WON
        assert won.snapshot.round.status == RoundStatus.WON
        assert won.snapshot.round.revealed_positions == [0, 1, 2, 3]
        assert won.snapshot.round.word == "WOLF"
        assert won.snapshot.round_status == RoundStatus.WAITING_FOR_WORD
        assert won.snapshot.rounds_played == 1

    def test_single_life_scenario(self, recorder):
        from ..config import HangmanConfig

        manager = RoomManager(config=HangmanConfig(starting_health=1), recorder=recorder)
        coordinator, host, guesser = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.join_room(guesser.player_id)
            await coordinator.start_round(host.player_id, "WOLF")
            lost = await coordinator.guess_letter(guesser.player_id, "z")
            before = await coordinator.get_snapshot()
            with pytest.raises(Conflict):
                await coordinator.guess_letter(guesser.player_id, "o")
            after = await coordinator.get_snapshot()
            return lost, before, after

        lost, before, after = asyncio.run(scenario())

        assert lost.outcome == Outcome.ROUND_LOST
        assert before == after
        assert after.round.status == RoundStatus.LOST

    def test_active_word_is_hidden(self, manager):
        coordinator, host, _ = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            return await coordinator.start_round(host.player_id, "secret")

        result = asyncio.run(scenario())
        assert result.snapshot.round.word is None
        assert result.snapshot.round.masked_word == "_ _ _ _ _ _"

    def test_guessed_words_lists_finished_rounds_only(self, manager):
        coordinator, host, guesser = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.join_room(guesser.player_id)
            await coordinator.start_round(host.player_id, "wolf")
            await coordinator.guess_word(guesser.player_id, "wolf")
            await coordinator.start_round(host.player_id, "bear")
            return await coordinator.list_guessed_words()

        assert asyncio.run(scenario()) == ["WOLF"]

    def test_guess_without_round_conflicts(self, manager):
        coordinator, host, _ = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.guess_letter(host.player_id, "a")

        with pytest.raises(Conflict):
            asyncio.run(scenario())

    def test_guess_requires_membership(self, manager):
        coordinator, host, guesser = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.start_round(host.player_id, "wolf")
            await coordinator.guess_letter(guesser.player_id, "w")

        with pytest.raises(NotInRoom):
            asyncio.run(scenario())


class TestMembershipOperations:
    """Tests for join/leave/ban/promote through the coordinator."""

    def test_leave_and_rejoin_keeps_host(self, manager):
        coordinator, host, _ = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            left = await coordinator.leave_room(host.player_id)
            again = await coordinator.leave_room(host.player_id)
            rejoined = await coordinator.join_room(host.player_id)
            return left, again, rejoined

        left, again, rejoined = asyncio.run(scenario())

        assert left.outcome == Outcome.PLAYER_LEFT
        assert again.outcome == Outcome.NO_CHANGE
        assert rejoined.outcome == Outcome.PLAYER_JOINED
        assert len(rejoined.snapshot.members) == 1
        assert rejoined.snapshot.members[0].is_host
        assert rejoined.snapshot.members[0].is_in_room

    def test_join_twice_is_no_change(self, manager):
        coordinator, _, guesser = setup_room(manager)

        async def scenario():
            await coordinator.join_room(guesser.player_id)
            return await coordinator.join_room(guesser.player_id)

        assert asyncio.run(scenario()).outcome == Outcome.NO_CHANGE

    def test_unknown_player(self, manager):
        coordinator = manager.create_room("R1")
        with pytest.raises(NotFound):
            asyncio.run(coordinator.join_room("ghost"))

    def test_leave_without_join(self, manager):
        coordinator, _, guesser = setup_room(manager)
        with pytest.raises(NotInRoom):
            asyncio.run(coordinator.leave_room(guesser.player_id))

    def test_ban_flow(self, manager):
        coordinator, host, guesser = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.join_room(guesser.player_id)
            banned = await coordinator.ban_player(host.player_id, guesser.player_id)
            with pytest.raises(Forbidden):
                await coordinator.join_room(guesser.player_id)
            membership = await coordinator.get_membership(guesser.player_id)
            return banned, membership

        banned, membership = asyncio.run(scenario())
        assert banned.outcome == Outcome.PLAYER_BANNED
        assert membership.is_banned
        assert not membership.is_in_room

    def test_only_hosts_moderate(self, manager):
        coordinator, host, guesser = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.join_room(guesser.player_id)
            with pytest.raises(Forbidden):
                await coordinator.ban_player(guesser.player_id, host.player_id)
            with pytest.raises(Forbidden):
                await coordinator.start_round(guesser.player_id, "wolf")
            with pytest.raises(InvalidInput):
                await coordinator.ban_player(host.player_id, host.player_id)
            promoted = await coordinator.promote_host(host.player_id, guesser.player_id)
            started = await coordinator.start_round(guesser.player_id, "wolf")
            return promoted, started

        promoted, started = asyncio.run(scenario())
        assert promoted.outcome == Outcome.HOST_PROMOTED
        assert started.outcome == Outcome.ROUND_STARTED


class TestConcurrency:
    """Operations on one room are serialized."""

    def test_concurrent_start_round_single_winner(self, manager):
        coordinator, host, _ = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            return await asyncio.gather(
                *(coordinator.start_round(host.player_id, w) for w in ["wolf", "bear", "lion", "fox"]),
                return_exceptions=True,
            )

        results = asyncio.run(scenario())

        started = [r for r in results if isinstance(r, OperationResult)]
        conflicts = [r for r in results if isinstance(r, Conflict)]
        assert len(started) == 1
        assert len(conflicts) == 3
        assert sum(1 for r in coordinator.room.rounds if r.is_in_progress) == 1

    def test_concurrent_misses_never_overdraw(self, manager):
        coordinator, host, guesser = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.join_room(guesser.player_id)
            await coordinator.start_round(host.player_id, "wolf")
            return await asyncio.gather(
                *(coordinator.guess_letter(guesser.player_id, ch) for ch in "abcde"),
                return_exceptions=True,
            )

        results = asyncio.run(scenario())

        outcomes = [r.outcome for r in results if isinstance(r, OperationResult)]
        assert outcomes == [
            Outcome.LETTER_REJECTED_MISS,
            Outcome.LETTER_REJECTED_MISS,
            Outcome.ROUND_LOST,
        ]
        assert all(isinstance(r, Conflict) for r in results[3:])
        assert coordinator.room.latest_round.health.remaining == 0

    def test_rooms_are_independent(self, manager):
        first, host, guesser = setup_room(manager)
        second = manager.create_room("R2")

        async def scenario():
            await first.join_room(host.player_id, as_host=True)
            await second.join_room(host.player_id, as_host=True)
            await asyncio.gather(
                first.start_round(host.player_id, "wolf"),
                second.start_round(host.player_id, "bear"),
            )

        asyncio.run(scenario())
        assert first.room.active_round.word == "WOLF"
        assert second.room.active_round.word == "BEAR"


class TestCollaborators:
    """Persistence and broadcast happen after commit."""

    def test_each_operation_recorded_and_published_once(self, manager, recorder, broadcaster):
        coordinator, host, _ = setup_room(manager)

        async def scenario():
            await coordinator.join_room(host.player_id, as_host=True)
            await coordinator.start_round(host.player_id, "wolf")

        asyncio.run(scenario())

        assert [r.outcome for r in recorder.for_room(coordinator.room_id)] == [
            Outcome.PLAYER_JOINED,
            Outcome.ROUND_STARTED,
        ]
        assert [e[1] for e in broadcaster.events] == [
            Outcome.PLAYER_JOINED,
            Outcome.ROUND_STARTED,
        ]

    def test_persistence_failure_is_a_warning(self, config):
        failing = FailingRecorder()
        manager = RoomManager(config=config, players=InMemoryPlayerDirectory(), recorder=failing)
        coordinator, host, _ = setup_room(manager)

        result = asyncio.run(coordinator.join_room(host.player_id, as_host=True))

        assert result.outcome == Outcome.PLAYER_JOINED
        assert len(result.warnings) == 1
        assert isinstance(result.warnings[0], PersistenceWarning)
        assert coordinator.room.get_membership(host.player_id).is_in_room
        assert failing.calls == 1

    def test_rejected_operation_not_recorded(self, manager, recorder):
        coordinator, _, guesser = setup_room(manager)
        with pytest.raises(NotInRoom):
            asyncio.run(coordinator.leave_room(guesser.player_id))
        assert recorder.records == []


class TestRoomManager:
    """Tests for the room arena."""

    def test_create_and_get(self, manager):
        coordinator = manager.create_room("  Lobby  ")
        assert coordinator.room.name == "Lobby"
        assert manager.get_coordinator(coordinator.room_id) is coordinator

    def test_creation_order(self, manager):
        first = manager.create_room("A")
        second = manager.create_room("B")
        assert first.room.sequence < second.room.sequence

    @pytest.mark.parametrize("name", ["", "   ", "x" * 101])
    def test_invalid_name(self, manager, name):
        with pytest.raises(InvalidInput):
            manager.create_room(name)

    def test_close_room(self, manager):
        coordinator = manager.create_room("A")
        assert manager.close_room(coordinator.room_id)
        assert not manager.close_room(coordinator.room_id)
        with pytest.raises(NotFound):
            manager.get_coordinator(coordinator.room_id)
