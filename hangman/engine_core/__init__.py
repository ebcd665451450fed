"""
Engine Core - Deterministic room and round state management.

The engine:
1. Models rooms, players, memberships and rounds
2. Evaluates letter and word guesses (pure functions)
3. Tracks the shared health budget of a round
4. Applies membership transitions
5. Applies guesses and decides win/loss
"""

from .state import Room, Player, Membership, Round, RoundStatus, Attempt, GuessKind
from .outcome import Outcome, GuessResult
from .health import HealthTracker
from .evaluator import (
    LetterEvaluation,
    evaluate_letter,
    evaluate_word,
    is_fully_revealed,
    mask_word,
    normalize_letter,
    normalize_word,
)
from .membership import MembershipManager
from .round_engine import RoundEngine

__all__ = [
    "Room",
    "Player",
    "Membership",
    "Round",
    "RoundStatus",
    "Attempt",
    "GuessKind",
    "Outcome",
    "GuessResult",
    "HealthTracker",
    "LetterEvaluation",
    "evaluate_letter",
    "evaluate_word",
    "is_fully_revealed",
    "mask_word",
    "normalize_letter",
    "normalize_word",
    "MembershipManager",
    "RoundEngine",
]
