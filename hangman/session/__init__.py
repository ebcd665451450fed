"""
Session Module - Live rooms and their coordinators.

A room lives in memory from creation until it is closed:
- The RoomManager indexes rooms by id
- Each room has one RoomCoordinator that serializes its operations
- Collaborators (player directory, recorder, broadcaster) sit outside
  the serialized section

In-memory state is authoritative; persistence only mirrors it.
"""

from .collaborators import (
    PlayerDirectory,
    TransitionRecorder,
    Broadcaster,
    TransitionRecord,
    InMemoryPlayerDirectory,
    InMemoryTransitionLog,
    NullBroadcaster,
    validate_name,
)
from .coordinator import RoomCoordinator, RoomSnapshot, RoundView, MemberView, OperationResult
from .manager import RoomManager

__all__ = [
    "PlayerDirectory",
    "TransitionRecorder",
    "Broadcaster",
    "TransitionRecord",
    "InMemoryPlayerDirectory",
    "InMemoryTransitionLog",
    "NullBroadcaster",
    "validate_name",
    "RoomCoordinator",
    "RoomSnapshot",
    "RoundView",
    "MemberView",
    "OperationResult",
    "RoomManager",
]
