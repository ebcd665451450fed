"""
Tests for API Pydantic schemas.

Validates that:
- Snapshots convert into response models
- Enums serialize to their wire values
- Request models enforce name limits
"""

import pytest
from pydantic import ValidationError

from ..engine_core.outcome import Outcome
from ..engine_core.state import RoundStatus
from ..errors import ErrorCode, PersistenceWarning
from ..session.coordinator import MemberView, OperationResult, RoomSnapshot, RoundView


def make_snapshot(round_view=None) -> RoomSnapshot:
    return RoomSnapshot(
        room_id="room-1",
        name="R1",
        created_at=1234567890.0,
        round_status=RoundStatus.IN_PROGRESS if round_view else RoundStatus.WAITING_FOR_WORD,
        members=[
            MemberView(
                player_id="h",
                name="Host",
                is_host=True,
                is_banned=False,
                is_in_room=True,
                joined_at=1234567890.0,
            ),
        ],
        round=round_view,
        rounds_played=0,
    )


class TestPydanticSchemas:
    """Tests for schema conversion and validation."""

    def test_room_response_from_snapshot(self):
        from ..api.convert import snapshot_to_response

        data = snapshot_to_response(make_snapshot()).model_dump(mode="json")

        assert data["room_id"] == "room-1"
        assert data["round_status"] == "waiting_for_word"
        assert data["members"][0]["is_host"] is True
        assert data["round"] is None
        assert data["api_version"] == "v1"

    def test_round_info_hides_word(self):
        from ..api.convert import snapshot_to_response

        view = RoundView(
            round_id="round-1",
            status=RoundStatus.IN_PROGRESS,
            masked_word="_ O _ _",
            word_length=4,
            word=None,
            guessed_letters=["O", "Z"],
            guessed_words=[],
            revealed_positions=[1],
            remaining_health=5,
            starting_health=6,
            started_by="h",
            attempt_count=2,
        )

        data = snapshot_to_response(make_snapshot(view)).model_dump(mode="json")

        assert data["round"]["word"] is None
        assert data["round"]["masked_word"] == "_ O _ _"
        assert data["round"]["status"] == "in_progress"

    def test_operation_response_warnings(self):
        from ..api.convert import result_to_response

        result = OperationResult(
            outcome=Outcome.PLAYER_JOINED,
            snapshot=make_snapshot(),
            warnings=[PersistenceWarning("not recorded")],
        )

        data = result_to_response(result).model_dump(mode="json")

        assert data["outcome"] == "player_joined"
        assert data["warnings"] == ["not recorded"]

    def test_error_response(self):
        from ..api.schemas import ErrorResponse

        data = ErrorResponse(error="nope", error_code=ErrorCode.CONFLICT).model_dump(mode="json")
        assert data == {"error": "nope", "error_code": "CONFLICT", "details": None}

    @pytest.mark.parametrize("name", ["", "x" * 101])
    def test_name_limits(self, name):
        from ..api.schemas import CreatePlayerRequest, CreateRoomRequest

        with pytest.raises(ValidationError):
            CreatePlayerRequest(name=name)
        with pytest.raises(ValidationError):
            CreateRoomRequest(name=name)

    def test_join_defaults(self):
        from ..api.schemas import JoinRoomRequest

        request = JoinRoomRequest(player_id="p")
        assert request.is_host is False
