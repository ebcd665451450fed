"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the room core.

Error Codes:
- INVALID_INPUT: Malformed letter, word or name
- NOT_FOUND: Room or player does not exist
- NOT_IN_ROOM: Player has not joined the room or has left it
- FORBIDDEN: Player is banned, or is not a host for a host-only action
- CONFLICT: A round is already in progress, or none is in progress
- ALREADY_DEPLETED: Health already at zero
"""

from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.outcome import Outcome
from ..engine_core.state import RoundStatus
from ..errors import ErrorCode

NAME_MAX_LENGTH = 100


# =============================================================================
# Shared Models
# =============================================================================

class MemberInfo(BaseModel):
    """A room membership for display."""
    player_id: str
    name: str
    is_host: bool = False
    is_banned: bool = False
    is_in_room: bool = True
    joined_at: float

    model_config = {"from_attributes": True}


class RoundInfo(BaseModel):
    """The latest round of a room. `word` is null while the round is in progress."""
    round_id: str
    status: RoundStatus
    masked_word: str = Field(description="e.g. '_ O _ _' for WOLF with O guessed")
    word_length: int
    word: Optional[str] = None
    guessed_letters: list[str] = Field(default_factory=list)
    guessed_words: list[str] = Field(default_factory=list)
    revealed_positions: list[int] = Field(default_factory=list)
    remaining_health: int = Field(ge=0)
    starting_health: int = Field(gt=0)
    started_by: str
    attempt_count: int = 0

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreatePlayerRequest(BaseModel):
    """Register a player identity."""
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)


class CreateRoomRequest(BaseModel):
    """Create a new room."""
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)


class JoinRoomRequest(BaseModel):
    """Join (or rejoin) a room."""
    player_id: str
    is_host: bool = False


class LeaveRoomRequest(BaseModel):
    player_id: str


class ModerationRequest(BaseModel):
    """Host-only action on another member (ban, promote)."""
    host_player_id: str
    player_id: str


class StartRoundRequest(BaseModel):
    """Host supplies the word to guess."""
    player_id: str
    word: str


class GuessLetterRequest(BaseModel):
    player_id: str
    letter: str


class GuessWordRequest(BaseModel):
    player_id: str
    word: str


# =============================================================================
# Response Models
# =============================================================================

class PlayerResponse(BaseModel):
    player_id: str
    name: str


class RoomResponse(BaseModel):
    """Snapshot of a room."""
    room_id: str
    name: str
    created_at: float
    round_status: RoundStatus
    members: list[MemberInfo] = Field(default_factory=list)
    round: Optional[RoundInfo] = None
    rounds_played: int = 0
    api_version: str = "v1"


class OperationResponse(BaseModel):
    """
    Result of a room operation.

    `outcome` is the single event emitted for the operation; `warnings`
    lists non-fatal persistence failures.
    """
    outcome: Outcome
    room: RoomResponse
    warnings: list[str] = Field(default_factory=list)


class GuessedWordsResponse(BaseModel):
    """Words of finished rounds, oldest first."""
    room_id: str
    words: list[str] = Field(default_factory=list)


class EndRoomResponse(BaseModel):
    success: bool
    room_id: str


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str = "hangman-rooms"
    version: str


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
