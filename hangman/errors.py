"""
Errors - Typed failures raised by the room/round core.

Every gameplay rule violation is raised to the immediate caller as a
subclass of HangmanError. The API layer maps error_code to an HTTP status.
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_INPUT = "INVALID_INPUT"
    NOT_IN_ROOM = "NOT_IN_ROOM"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    ALREADY_DEPLETED = "ALREADY_DEPLETED"
    PERSISTENCE_WARNING = "PERSISTENCE_WARNING"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class HangmanError(Exception):
    """Base class for all core failures."""
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInput(HangmanError):
    """Malformed letter, word or name."""
    error_code = ErrorCode.INVALID_INPUT


class NotInRoom(HangmanError):
    """Membership missing or inactive."""
    error_code = ErrorCode.NOT_IN_ROOM


class Forbidden(HangmanError):
    """Banned player, or non-host attempting a host-only action."""
    error_code = ErrorCode.FORBIDDEN


class Conflict(HangmanError):
    """Round is (or is not) in progress as the operation requires."""
    error_code = ErrorCode.CONFLICT


class AlreadyDepleted(HangmanError):
    """Health is already at zero."""
    error_code = ErrorCode.ALREADY_DEPLETED


class NotFound(HangmanError):
    """Unknown room or player id."""
    error_code = ErrorCode.NOT_FOUND


class PersistenceWarning(HangmanError):
    """
    The persistence collaborator failed to record a committed transition.

    Never raised by the coordinator: it is reported in
    OperationResult.warnings and the in-memory state stays authoritative.
    """
    error_code = ErrorCode.PERSISTENCE_WARNING
