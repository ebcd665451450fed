"""
Configuration - Environment-driven settings.

    HANGMAN_STARTING_HEALTH  Wrong guesses allowed per round (default 6)
    HANGMAN_ENV              Deployment environment (default "development")
    HANGMAN_LOG_LEVEL        Log level (default "INFO")
    HANGMAN_LOG_FILE         Optional log file path
    ALLOWED_ORIGINS          Comma-separated CORS origins (default "*")
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os

from .errors import InvalidInput

DEFAULT_STARTING_HEALTH = 6


@dataclass
class HangmanConfig:
    """Runtime configuration shared by the engine, coordinator and API."""
    starting_health: int = DEFAULT_STARTING_HEALTH
    env: str = "development"
    log_level: str = "INFO"
    log_file: str | None = None
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        if isinstance(self.starting_health, bool) or not isinstance(self.starting_health, int):
            raise InvalidInput(f"starting_health must be an integer, got {self.starting_health!r}")
        if self.starting_health <= 0:
            raise InvalidInput(f"starting_health must be positive, got {self.starting_health}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> HangmanConfig:
        """Build a config from environment variables."""
        env = os.environ if environ is None else environ

        raw_health = env.get("HANGMAN_STARTING_HEALTH", str(DEFAULT_STARTING_HEALTH))
        try:
            starting_health = int(raw_health)
        except ValueError:
            raise InvalidInput(f"HANGMAN_STARTING_HEALTH must be an integer, got {raw_health!r}")

        origins = [o.strip() for o in env.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

        return cls(
            starting_health=starting_health,
            env=env.get("HANGMAN_ENV", "development"),
            log_level=env.get("HANGMAN_LOG_LEVEL", "INFO"),
            log_file=env.get("HANGMAN_LOG_FILE") or None,
            allowed_origins=origins or ["*"],
        )
