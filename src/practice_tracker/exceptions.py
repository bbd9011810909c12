"""
Custom exceptions for the practice tracker.

Every error raised by the package derives from PracticeTrackerError and
carries:
- A descriptive message
- An error code
- Optional details for debugging

Read paths (calendar, streak widget, history) catch these and degrade to
an empty state; they are only surfaced to callers by the low-level client,
the stores and the challenge tracker.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Backend API errors
    UNAUTHORIZED = "UNAUTHORIZED"
    API_ERROR = "API_ERROR"
    API_CONNECTION_ERROR = "API_CONNECTION_ERROR"

    # Local storage errors
    STORAGE_ERROR = "STORAGE_ERROR"

    # Challenge errors
    CHALLENGE_NOT_FOUND = "CHALLENGE_NOT_FOUND"
    CHALLENGE_SWITCH_REQUIRES_CONFIRMATION = "CHALLENGE_SWITCH_REQUIRES_CONFIRMATION"


class PracticeTrackerError(Exception):
    """
    Base exception for all practice tracker errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a serialisable dictionary."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class ValidationError(PracticeTrackerError):
    """Raised when a date, month key or payload fails validation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


# ============================================================================
# Backend API Errors
# ============================================================================

class AuthenticationError(PracticeTrackerError):
    """Raised when no session token is present or the backend rejects it."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message=message, code=ErrorCode.UNAUTHORIZED)


class ApiError(PracticeTrackerError):
    """Raised when the backend answers with an error status or a bad body."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        details: Dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if endpoint:
            details["endpoint"] = endpoint
        super().__init__(message=message, code=ErrorCode.API_ERROR, details=details)


class ApiConnectionError(PracticeTrackerError):
    """Raised when the backend cannot be reached."""

    def __init__(self, message: str, endpoint: Optional[str] = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.API_CONNECTION_ERROR,
            details={"endpoint": endpoint} if endpoint else None,
        )


# ============================================================================
# Storage Errors
# ============================================================================

class StorageError(PracticeTrackerError):
    """Raised when the local key-value store cannot be read or written."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.STORAGE_ERROR,
            details={"key": key} if key else None,
        )


# ============================================================================
# Challenge Errors
# ============================================================================

class ChallengeNotFoundError(PracticeTrackerError):
    """Raised when a challenge id is not in the catalog."""

    def __init__(self, challenge_id: str) -> None:
        self.challenge_id = challenge_id
        super().__init__(
            message=f"Unknown challenge: {challenge_id}",
            code=ErrorCode.CHALLENGE_NOT_FOUND,
            details={"challenge_id": challenge_id},
        )


class ChallengeSwitchError(PracticeTrackerError):
    """Raised when starting a new challenge would discard one in progress."""

    def __init__(self, active_type: str, requested_type: str) -> None:
        self.active_type = active_type
        self.requested_type = requested_type
        super().__init__(
            message=(
                f"'{active_type}' is still in progress; starting "
                f"'{requested_type}' would discard it"
            ),
            code=ErrorCode.CHALLENGE_SWITCH_REQUIRES_CONFIRMATION,
            details={"active_type": active_type, "requested_type": requested_type},
        )
