"""Health Tracker - The shared lives budget of one round."""

from __future__ import annotations
from dataclasses import dataclass, field

from ..errors import AlreadyDepleted, InvalidInput


@dataclass
class HealthTracker:
    """
    Remaining wrong guesses for a round.

    remaining starts at budget and only goes down, never below zero.
    """
    budget: int
    remaining: int = field(default=-1)

    def __post_init__(self):
        if self.budget <= 0:
            raise InvalidInput(f"Health budget must be positive, got {self.budget}")
        if self.remaining < 0:
            self.remaining = self.budget

    def register_miss(self) -> int:
        """Take one hit. Returns the remaining health."""
        if self.remaining == 0:
            raise AlreadyDepleted("Health is already depleted")
        self.remaining = max(0, self.remaining - 1)
        return self.remaining

    def is_alive(self) -> bool:
        return self.remaining > 0
