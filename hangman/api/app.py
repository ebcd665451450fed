"""
FastAPI Application - REST and WebSocket API for hangman rooms.

Endpoints:
    POST   /api/v1/players                              Register a player
    POST   /api/v1/rooms                                Create a room
    GET    /api/v1/rooms/{id}                           Room snapshot
    DELETE /api/v1/rooms/{id}                           Close a room
    POST   /api/v1/rooms/{id}/join                      Join or rejoin
    POST   /api/v1/rooms/{id}/leave                     Leave
    POST   /api/v1/rooms/{id}/ban                       Host bans a member
    POST   /api/v1/rooms/{id}/hosts                     Host promotes a member
    POST   /api/v1/rooms/{id}/rounds                    Host starts a round
    POST   /api/v1/rooms/{id}/guesses/letter            Guess a letter
    POST   /api/v1/rooms/{id}/guesses/word              Guess the word
    GET    /api/v1/rooms/{id}/words                     Words of finished rounds
    GET    /api/v1/rooms/{id}/players/{player_id}       A player's membership
    WS     /api/v1/rooms/{id}/ws                        Outcome events

Every operation answers with the room snapshot after the operation and
the single outcome it produced. The same outcome is pushed to the room's
WebSocket clients.
"""

from typing import Optional
import json

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import HangmanConfig
from ..errors import ErrorCode, HangmanError
from ..logging_config import get_logger, setup_logging
from .convert import snapshot_to_response
from .service import APIService
from .schemas import (
    # Request models
    CreatePlayerRequest,
    CreateRoomRequest,
    JoinRoomRequest,
    LeaveRoomRequest,
    ModerationRequest,
    StartRoundRequest,
    GuessLetterRequest,
    GuessWordRequest,
    # Response models
    PlayerResponse,
    RoomResponse,
    OperationResponse,
    GuessedWordsResponse,
    MemberInfo,
    EndRoomResponse,
    HealthResponse,
    ErrorResponse,
)

logger = get_logger(__name__)

ERROR_STATUS = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.NOT_IN_ROOM: 403,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.CONFLICT: 409,
    ErrorCode.ALREADY_DEPLETED: 409,
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed letter, word or name"},
    403: {"model": ErrorResponse, "description": "Not in room, banned, or not a host"},
    404: {"model": ErrorResponse, "description": "Room or player not found"},
    409: {"model": ErrorResponse, "description": "Round state does not allow this"},
}


def make_error_response(
    error_code: ErrorCode,
    message: str,
    status_code: int = 400,
    details: Optional[dict] = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=message,
            error_code=error_code,
            details=details,
        ).model_dump(mode="json"),
    )


def create_app(service: Optional[APIService] = None, config: Optional[HangmanConfig] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        config: Optional config; read from the environment by default

    Returns:
        FastAPI application instance
    """
    if service is None:
        service = APIService(config=config or HangmanConfig.from_env())
    config = service.config

    setup_logging(log_level=config.log_level, log_file=config.log_file)

    app = FastAPI(
        title="Hangman Rooms API",
        description="Multiplayer hangman: shared rooms, host-supplied words, shared health.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = service

    @app.exception_handler(HangmanError)
    async def handle_hangman_error(request: Request, exc: HangmanError) -> JSONResponse:
        status_code = ERROR_STATUS.get(exc.error_code, 500)
        if status_code == 500:
            logger.error("Unhandled core error on %s: %s", request.url.path, exc.message)
        return make_error_response(exc.error_code, exc.message, status_code, exc.details or None)

    # =========================================================================
    # Players & Rooms
    # =========================================================================

    @app.post(
        "/api/v1/players",
        response_model=PlayerResponse,
        status_code=201,
        responses={400: ERROR_RESPONSES[400]},
        tags=["Players"],
        summary="Register a player",
    )
    async def create_player(body: CreatePlayerRequest) -> PlayerResponse:
        return service.create_player(body)

    @app.post(
        "/api/v1/rooms",
        response_model=RoomResponse,
        status_code=201,
        responses={400: ERROR_RESPONSES[400]},
        tags=["Rooms"],
        summary="Create a room",
    )
    async def create_room(body: CreateRoomRequest) -> RoomResponse:
        return await service.create_room(body)

    @app.get(
        "/api/v1/rooms/{room_id}",
        response_model=RoomResponse,
        responses={404: ERROR_RESPONSES[404]},
        tags=["Rooms"],
        summary="Get a room snapshot",
    )
    async def get_room(room_id: str) -> RoomResponse:
        return await service.get_room(room_id)

    @app.delete(
        "/api/v1/rooms/{room_id}",
        response_model=EndRoomResponse,
        tags=["Rooms"],
        summary="Close a room",
    )
    async def close_room(room_id: str) -> EndRoomResponse:
        return EndRoomResponse(success=service.close_room(room_id), room_id=room_id)

    # =========================================================================
    # Membership
    # =========================================================================

    @app.post(
        "/api/v1/rooms/{room_id}/join",
        response_model=OperationResponse,
        responses=ERROR_RESPONSES,
        tags=["Membership"],
        summary="Join or rejoin a room",
    )
    async def join_room(room_id: str, body: JoinRoomRequest) -> OperationResponse:
        return await service.join_room(room_id, body)

    @app.post(
        "/api/v1/rooms/{room_id}/leave",
        response_model=OperationResponse,
        responses=ERROR_RESPONSES,
        tags=["Membership"],
        summary="Leave a room",
    )
    async def leave_room(room_id: str, body: LeaveRoomRequest) -> OperationResponse:
        return await service.leave_room(room_id, body)

    @app.post(
        "/api/v1/rooms/{room_id}/ban",
        response_model=OperationResponse,
        responses=ERROR_RESPONSES,
        tags=["Membership"],
        summary="Ban a member (host only)",
    )
    async def ban_player(room_id: str, body: ModerationRequest) -> OperationResponse:
        return await service.ban_player(room_id, body)

    @app.post(
        "/api/v1/rooms/{room_id}/hosts",
        response_model=OperationResponse,
        responses=ERROR_RESPONSES,
        tags=["Membership"],
        summary="Promote a member to host (host only)",
    )
    async def promote_host(room_id: str, body: ModerationRequest) -> OperationResponse:
        return await service.promote_host(room_id, body)

    @app.get(
        "/api/v1/rooms/{room_id}/players/{player_id}",
        response_model=MemberInfo,
        responses=ERROR_RESPONSES,
        tags=["Membership"],
        summary="Get a player's membership in a room",
    )
    async def get_membership(room_id: str, player_id: str) -> MemberInfo:
        return await service.get_membership(room_id, player_id)

    # =========================================================================
    # Rounds
    # =========================================================================

    @app.post(
        "/api/v1/rooms/{room_id}/rounds",
        response_model=OperationResponse,
        responses=ERROR_RESPONSES,
        tags=["Rounds"],
        summary="Start a round with a hidden word (host only)",
    )
    async def start_round(room_id: str, body: StartRoundRequest) -> OperationResponse:
        return await service.start_round(room_id, body)

    @app.post(
        "/api/v1/rooms/{room_id}/guesses/letter",
        response_model=OperationResponse,
        responses=ERROR_RESPONSES,
        tags=["Rounds"],
        summary="Guess a letter",
    )
    async def guess_letter(room_id: str, body: GuessLetterRequest) -> OperationResponse:
        return await service.guess_letter(room_id, body)

    @app.post(
        "/api/v1/rooms/{room_id}/guesses/word",
        response_model=OperationResponse,
        responses=ERROR_RESPONSES,
        tags=["Rounds"],
        summary="Guess the whole word",
    )
    async def guess_word(room_id: str, body: GuessWordRequest) -> OperationResponse:
        return await service.guess_word(room_id, body)

    @app.get(
        "/api/v1/rooms/{room_id}/words",
        response_model=GuessedWordsResponse,
        responses={404: ERROR_RESPONSES[404]},
        tags=["Rounds"],
        summary="Words of finished rounds",
    )
    async def list_guessed_words(room_id: str) -> GuessedWordsResponse:
        return await service.list_guessed_words(room_id)

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/rooms/{room_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, room_id: str):
        """
        WebSocket for outcome events.

        Messages from server:
        - state: Initial snapshot on connect
        - <outcome>: One message per room operation (player_joined,
          letter_accepted, round_won, ...), payload is the room snapshot

        Messages from client:
        - ping: Keep-alive
        """
        if room_id not in service.room_manager:
            await websocket.close(code=4404)
            return

        await websocket.accept()
        service.broadcaster.connect(room_id, websocket)

        try:
            coordinator = service.room_manager.get_coordinator(room_id)
            snapshot = await coordinator.get_snapshot()
            await websocket.send_json({
                "type": "state",
                "payload": snapshot_to_response(snapshot).model_dump(mode="json"),
            })

            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if isinstance(message, dict) and message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})

        except WebSocketDisconnect:
            pass
        except HangmanError:
            # Room closed while connected.
            await websocket.close(code=4404)
        finally:
            service.broadcaster.disconnect(room_id, websocket)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(version=__version__)

    return app
