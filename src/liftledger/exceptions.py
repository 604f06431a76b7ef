"""
Custom exceptions for LiftLedger.

The analytics engines never raise on messy history: malformed records are
skipped and logged. Exceptions are reserved for:
- Invalid input handed to an explicit validation boundary
- Ownership failures reported by storage collaborators
- Failures of the remote insight service
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error payloads."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"

    # Record errors
    RECORD_VALIDATION_ERROR = "RECORD_VALIDATION_ERROR"

    # Insight service errors
    INSIGHT_REQUEST_INVALID = "INSIGHT_REQUEST_INVALID"
    INSIGHT_TIMEOUT = "INSIGHT_TIMEOUT"
    INSIGHT_NETWORK_ERROR = "INSIGHT_NETWORK_ERROR"
    INSIGHT_HTTP_ERROR = "INSIGHT_HTTP_ERROR"
    INSIGHT_RESPONSE_INVALID = "INSIGHT_RESPONSE_INVALID"


class LiftLedgerError(Exception):
    """
    Base exception for all LiftLedger errors.

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
        """Convert exception to a serializable dictionary."""
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


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(LiftLedgerError):
    """Raised when input validation fails."""

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


class RecordValidationError(ValidationError):
    """Raised when a stored record cannot be read as a workout or day at all."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.RECORD_VALIDATION_ERROR


# ============================================================================
# Authorization Errors
# ============================================================================

class AuthorizationError(LiftLedgerError):
    """Raised by storage collaborators when a record belongs to another user."""

    def __init__(
        self,
        record_id: str,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["record_id"] = record_id
        if user_id:
            error_details["user_id"] = user_id
        super().__init__(
            message=f"Not authorized to access record {record_id}",
            code=ErrorCode.FORBIDDEN,
            details=error_details,
        )


# ============================================================================
# Insight Service Errors
# ============================================================================

class InsightServiceError(LiftLedgerError):
    """Base class for insight service failures."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INSIGHT_NETWORK_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details)


class InsightRequestError(InsightServiceError):
    """Raised before any network call when the request payload is invalid."""

    def __init__(
        self,
        message: str = "Invalid request: exercise, metric, and history are required",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.INSIGHT_REQUEST_INVALID,
            details=details,
        )


class InsightTimeoutError(InsightServiceError):
    """Raised when the insight service does not answer in time."""

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if timeout_seconds:
            error_details["timeout_seconds"] = timeout_seconds
        super().__init__(
            message="Request timeout: insights service did not respond in time",
            code=ErrorCode.INSIGHT_TIMEOUT,
            details=error_details,
        )


class InsightNetworkError(InsightServiceError):
    """Raised when the insight service cannot be reached."""

    def __init__(
        self,
        message: str = "Network error: unable to reach insights service",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.INSIGHT_NETWORK_ERROR,
            details=details,
        )


class InsightHTTPError(InsightServiceError):
    """Raised when the insight service answers with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        error_details = details or {}
        error_details["status_code"] = status_code
        if status_code == 400:
            message = f"Bad Request: {reason}".rstrip(": ")
        else:
            message = f"HTTP {status_code}: {reason}".rstrip(": ")
        super().__init__(
            message=message,
            code=ErrorCode.INSIGHT_HTTP_ERROR,
            details=error_details,
        )


class InsightResponseError(InsightServiceError):
    """Raised when the insight service answers with malformed JSON or shape."""

    def __init__(
        self,
        message: str = "Invalid response structure from insights API",
        raw_response: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if raw_response:
            error_details["raw_response_preview"] = raw_response[:500]
        super().__init__(
            message=message,
            code=ErrorCode.INSIGHT_RESPONSE_INVALID,
            details=error_details,
        )
