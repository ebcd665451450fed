"""
API Service - Business logic layer between the routes and the room core.

The service:
1. Resolves rooms through the RoomManager
2. Translates requests into coordinator operations
3. Formats snapshots for clients

Errors from the core propagate unchanged; the app maps them to HTTP
statuses. This layer does not depend on FastAPI routing.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..config import HangmanConfig
from ..session import InMemoryTransitionLog, RoomManager
from .broadcast import WebSocketBroadcaster
from .convert import member_to_info, result_to_response, snapshot_to_response
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
    MemberInfo,
)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(config=HangmanConfig(starting_health=6))

        player = service.create_player(CreatePlayerRequest(name="Ana"))
        room = await service.create_room(CreateRoomRequest(name="R1"))
        await service.join_room(room.room_id, JoinRoomRequest(player_id=player.player_id, is_host=True))
    """
    config: HangmanConfig = field(default_factory=HangmanConfig.from_env)
    broadcaster: WebSocketBroadcaster = field(default_factory=WebSocketBroadcaster)
    recorder: InMemoryTransitionLog = field(default_factory=InMemoryTransitionLog)
    room_manager: RoomManager | None = None

    def __post_init__(self):
        if self.room_manager is None:
            self.room_manager = RoomManager(
                config=self.config,
                recorder=self.recorder,
                broadcaster=self.broadcaster,
            )

    # -------------------------------------------------------------------------
    # Players and rooms
    # -------------------------------------------------------------------------

    def create_player(self, request: CreatePlayerRequest) -> PlayerResponse:
        player = self.room_manager.players.register(request.name)
        return PlayerResponse(player_id=player.player_id, name=player.name)

    async def create_room(self, request: CreateRoomRequest) -> RoomResponse:
        coordinator = self.room_manager.create_room(request.name)
        return snapshot_to_response(await coordinator.get_snapshot())

    async def get_room(self, room_id: str) -> RoomResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        return snapshot_to_response(await coordinator.get_snapshot())

    def close_room(self, room_id: str) -> bool:
        return self.room_manager.close_room(room_id)

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    async def join_room(self, room_id: str, request: JoinRoomRequest) -> OperationResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        result = await coordinator.join_room(request.player_id, as_host=request.is_host)
        return result_to_response(result)

    async def leave_room(self, room_id: str, request: LeaveRoomRequest) -> OperationResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        return result_to_response(await coordinator.leave_room(request.player_id))

    async def ban_player(self, room_id: str, request: ModerationRequest) -> OperationResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        result = await coordinator.ban_player(request.host_player_id, request.player_id)
        return result_to_response(result)

    async def promote_host(self, room_id: str, request: ModerationRequest) -> OperationResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        result = await coordinator.promote_host(request.host_player_id, request.player_id)
        return result_to_response(result)

    async def get_membership(self, room_id: str, player_id: str) -> MemberInfo:
        coordinator = self.room_manager.get_coordinator(room_id)
        return member_to_info(await coordinator.get_membership(player_id))

    # -------------------------------------------------------------------------
    # Rounds
    # -------------------------------------------------------------------------

    async def start_round(self, room_id: str, request: StartRoundRequest) -> OperationResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        return result_to_response(await coordinator.start_round(request.player_id, request.word))

    async def guess_letter(self, room_id: str, request: GuessLetterRequest) -> OperationResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        return result_to_response(await coordinator.guess_letter(request.player_id, request.letter))

    async def guess_word(self, room_id: str, request: GuessWordRequest) -> OperationResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        return result_to_response(await coordinator.guess_word(request.player_id, request.word))

    async def list_guessed_words(self, room_id: str) -> GuessedWordsResponse:
        coordinator = self.room_manager.get_coordinator(room_id)
        return GuessedWordsResponse(room_id=room_id, words=await coordinator.list_guessed_words())
