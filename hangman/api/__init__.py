"""
API Module - HTTP/WebSocket interface to hangman rooms.

Clients:
1. Register players
2. Create rooms and join them
3. Start rounds (hosts) and submit guesses
4. Listen on the room WebSocket for outcome events

All room state lives in memory behind each room's coordinator.
"""

from .schemas import (
    # Requests
    CreatePlayerRequest,
    CreateRoomRequest,
    JoinRoomRequest,
    LeaveRoomRequest,
    ModerationRequest,
    StartRoundRequest,
    GuessLetterRequest,
    GuessWordRequest,
    # Responses
    PlayerResponse,
    RoomResponse,
    OperationResponse,
    GuessedWordsResponse,
    EndRoomResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    MemberInfo,
    RoundInfo,
)
from .service import APIService
from .broadcast import WebSocketBroadcaster
from .app import create_app

__all__ = [
    # Requests
    "CreatePlayerRequest",
    "CreateRoomRequest",
    "JoinRoomRequest",
    "LeaveRoomRequest",
    "ModerationRequest",
    "StartRoundRequest",
    "GuessLetterRequest",
    "GuessWordRequest",
    # Responses
    "PlayerResponse",
    "RoomResponse",
    "OperationResponse",
    "GuessedWordsResponse",
    "EndRoomResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "MemberInfo",
    "RoundInfo",
    # Service
    "APIService",
    "WebSocketBroadcaster",
    "create_app",
]
