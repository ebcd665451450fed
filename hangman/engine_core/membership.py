"""
Membership Manager - Join/leave/host/ban transitions for a room roster.

Per (room, player) state machine:

    NeverJoined -> InRoom -> Left -> InRoom -> ...
    InRoom | Left -> Banned (absorbing)

Records are looked up by (room, player) and mutated in place; there is
never more than one Membership per pair.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..errors import Forbidden, NotInRoom
from ..logging_config import get_logger
from .state import Membership, Player, Room

logger = get_logger(__name__)


@dataclass
class MembershipManager:
    """
    Applies membership transitions to a Room.

    Stateless - all state lives in Room.memberships.
    """

    def join(self, room: Room, player: Player, as_host: bool = False) -> Membership:
        """
        Put a player in the room.

        A previous record is reactivated: is_host is kept (as_host can
        promote but never demotes). Banned players are refused.
        """
        existing = room.get_membership(player.player_id)

        if existing is not None:
            if existing.is_banned:
                raise Forbidden(f"Player {player.player_id} is banned from room {room.room_id}")
            logger.debug("Player %s rejoining room %s", player.player_id, room.room_id)
            existing.is_in_room = True
            existing.is_host = existing.is_host or as_host
            return existing

        logger.debug("Player %s joining room %s for the first time", player.player_id, room.room_id)
        membership = Membership(
            room_id=room.room_id,
            player_id=player.player_id,
            is_host=as_host,
            is_banned=False,
            is_in_room=True,
        )
        room.memberships[player.player_id] = membership
        return membership

    def leave(self, membership: Membership) -> Membership:
        """Mark the player as gone. Idempotent; the record is kept."""
        membership.is_in_room = False
        return membership

    def ban(self, membership: Membership) -> Membership:
        membership.is_banned = True
        membership.is_in_room = False
        return membership

    def promote_host(self, membership: Membership) -> Membership:
        membership.is_host = True
        return membership

    def get_membership(self, room: Room, player_id: str) -> Membership | None:
        return room.get_membership(player_id)

    def require_active_member(self, room: Room, player_id: str) -> Membership:
        """Return the membership of a player currently in the room."""
        membership = room.get_membership(player_id)
        if membership is None:
            raise NotInRoom(f"Player {player_id} has never joined room {room.room_id}")
        if membership.is_banned:
            raise Forbidden(f"Player {player_id} is banned from room {room.room_id}")
        if not membership.is_in_room:
            raise NotInRoom(f"Player {player_id} is not in room {room.room_id}")
        return membership

    def require_host(self, room: Room, player_id: str) -> Membership:
        membership = self.require_active_member(room, player_id)
        if not membership.is_host:
            raise Forbidden(f"Player {player_id} is not a host of room {room.room_id}")
        return membership
