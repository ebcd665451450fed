"""Conversion helpers from core snapshots to API schemas."""

from __future__ import annotations

from ..session.coordinator import MemberView, OperationResult, RoomSnapshot, RoundView
from .schemas import MemberInfo, OperationResponse, RoomResponse, RoundInfo


def member_to_info(member: MemberView) -> MemberInfo:
    return MemberInfo(
        player_id=member.player_id,
        name=member.name,
        is_host=member.is_host,
        is_banned=member.is_banned,
        is_in_room=member.is_in_room,
        joined_at=member.joined_at,
    )


def round_to_info(view: RoundView) -> RoundInfo:
    return RoundInfo(
        round_id=view.round_id,
        status=view.status,
        masked_word=view.masked_word,
        word_length=view.word_length,
        word=view.word,
        guessed_letters=view.guessed_letters,
        guessed_words=view.guessed_words,
        revealed_positions=view.revealed_positions,
        remaining_health=view.remaining_health,
        starting_health=view.starting_health,
        started_by=view.started_by,
        attempt_count=view.attempt_count,
    )


def snapshot_to_response(snapshot: RoomSnapshot) -> RoomResponse:
    return RoomResponse(
        room_id=snapshot.room_id,
        name=snapshot.name,
        created_at=snapshot.created_at,
        round_status=snapshot.round_status,
        members=[member_to_info(m) for m in snapshot.members],
        round=round_to_info(snapshot.round) if snapshot.round else None,
        rounds_played=snapshot.rounds_played,
    )


def result_to_response(result: OperationResult) -> OperationResponse:
    return OperationResponse(
        outcome=result.outcome,
        room=snapshot_to_response(result.snapshot),
        warnings=[w.message for w in result.warnings],
    )
