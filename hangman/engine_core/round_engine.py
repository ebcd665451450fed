"""
Round Engine - Applies guesses to the active round.

The engine is the single point of round mutation. Callers must hold the
room's serialization turn (see RoomCoordinator) for the whole call.

    start_round         WAITING_FOR_WORD -> IN_PROGRESS
    submit_letter_guess IN_PROGRESS -> IN_PROGRESS | WON | LOST
    submit_word_guess   IN_PROGRESS -> IN_PROGRESS | WON | LOST

All validation happens before the first mutation, so a rejected guess
leaves the round untouched.
"""

from __future__ import annotations
from dataclasses import dataclass
import time

from ..config import DEFAULT_STARTING_HEALTH
from ..errors import Conflict, Forbidden, NotInRoom
from ..logging_config import get_logger
from .evaluator import (
    evaluate_letter,
    evaluate_word,
    is_fully_revealed,
    normalize_letter,
    normalize_word,
)
from .health import HealthTracker
from .outcome import GuessResult, Outcome
from .state import Attempt, GuessKind, Membership, Room, Round, RoundStatus

logger = get_logger(__name__)


@dataclass
class RoundEngine:
    """
    Round state machine.

    Stateless apart from the configured starting health; all game state
    is in the Round.
    """
    starting_health: int = DEFAULT_STARTING_HEALTH

    def start_round(self, room: Room, host_membership: Membership, word: str) -> Round:
        """Begin a new round with a host-supplied word."""
        if room.active_round is not None:
            raise Conflict(f"Room {room.room_id} already has a round in progress")
        if host_membership.room_id != room.room_id or not host_membership.is_host:
            raise Forbidden("Only a host can start a round")

        target = normalize_word(word)
        game_round = Round(
            room_id=room.room_id,
            word=target,
            health=HealthTracker(budget=self.starting_health),
            started_by=host_membership.player_id,
            status=RoundStatus.IN_PROGRESS,
        )
        room.rounds.append(game_round)
        logger.debug(
            "Round %s started in room %s (%d letters, health %d)",
            game_round.round_id, room.room_id, len(target), self.starting_health,
        )
        return game_round

    def submit_letter_guess(self, game_round: Round, membership: Membership, letter: str) -> GuessResult:
        """
        Guess one letter.

        A letter already guessed is a no-op: it costs no health and is
        not an error.
        """
        self._require_in_progress(game_round)
        self._require_guesser(game_round, membership)
        guessed = normalize_letter(letter)

        if guessed in game_round.guessed_letters:
            return GuessResult(round=game_round, outcome=Outcome.NO_CHANGE)

        evaluation = evaluate_letter(game_round.word, guessed)
        game_round.guessed_letters.add(guessed)

        if evaluation.matches:
            game_round.revealed_positions |= evaluation.positions
            if is_fully_revealed(game_round.word, game_round.revealed_positions):
                outcome = self._finish(game_round, RoundStatus.WON)
            else:
                outcome = Outcome.LETTER_ACCEPTED
        else:
            outcome = self._apply_miss(game_round)

        self._log_attempt(game_round, membership, GuessKind.LETTER, guessed, outcome)
        return GuessResult(round=game_round, outcome=outcome)

    def submit_word_guess(self, game_round: Round, membership: Membership, guess_word: str) -> GuessResult:
        """
        Guess the whole word.

        A wrong word costs one hit, like a wrong letter. Repeating a wrong
        word already tried this round is a no-op.
        """
        self._require_in_progress(game_round)
        self._require_guesser(game_round, membership)
        guessed = normalize_word(guess_word)

        if evaluate_word(game_round.word, guessed):
            game_round.revealed_positions = set(range(len(game_round.word)))
            outcome = self._finish(game_round, RoundStatus.WON)
        elif guessed in game_round.guessed_words:
            return GuessResult(round=game_round, outcome=Outcome.NO_CHANGE)
        else:
            game_round.guessed_words.add(guessed)
            outcome = self._apply_miss(game_round)

        self._log_attempt(game_round, membership, GuessKind.WORD, guessed, outcome)
        return GuessResult(round=game_round, outcome=outcome)

    def _apply_miss(self, game_round: Round) -> Outcome:
        game_round.health.register_miss()
        if not game_round.health.is_alive():
            return self._finish(game_round, RoundStatus.LOST)
        return Outcome.LETTER_REJECTED_MISS

    def _finish(self, game_round: Round, status: RoundStatus) -> Outcome:
        game_round.status = status
        game_round.finished_at = time.time()
        logger.debug("Round %s finished: %s", game_round.round_id, status.value)
        return Outcome.ROUND_WON if status == RoundStatus.WON else Outcome.ROUND_LOST

    def _require_in_progress(self, game_round: Round) -> None:
        if not game_round.is_in_progress:
            raise Conflict(f"Round {game_round.round_id} is not in progress ({game_round.status.value})")

    def _require_guesser(self, game_round: Round, membership: Membership) -> None:
        if membership.room_id != game_round.room_id:
            raise NotInRoom(f"Player {membership.player_id} is not in this round's room")
        if membership.is_banned:
            raise Forbidden(f"Player {membership.player_id} is banned")
        if not membership.is_in_room:
            raise NotInRoom(f"Player {membership.player_id} is not in the room")

    def _log_attempt(
        self,
        game_round: Round,
        membership: Membership,
        kind: GuessKind,
        value: str,
        outcome: Outcome,
    ) -> None:
        game_round.attempts.append(Attempt(
            player_id=membership.player_id,
            kind=kind,
            value=value,
            outcome=outcome,
        ))
