"""
Outcomes - The single event each room operation emits.

Broadcasters use the outcome to decide what to announce; the core
never formats messages itself.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Round


class Outcome(str, Enum):
    """Outcome of one atomic room operation."""
    # Guess outcomes
    NO_CHANGE = "no_change"
    LETTER_ACCEPTED = "letter_accepted"
    LETTER_REJECTED_MISS = "letter_rejected_miss"
    ROUND_WON = "round_won"
    ROUND_LOST = "round_lost"

    # Membership and round lifecycle
    PLAYER_JOINED = "player_joined"
    PLAYER_LEFT = "player_left"
    PLAYER_BANNED = "player_banned"
    HOST_PROMOTED = "host_promoted"
    ROUND_STARTED = "round_started"

    @property
    def is_terminal(self) -> bool:
        return self in {Outcome.ROUND_WON, Outcome.ROUND_LOST}


@dataclass
class GuessResult:
    """Round after a guess, plus what happened."""
    round: Round
    outcome: Outcome
