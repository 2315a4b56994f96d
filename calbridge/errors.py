"""Error taxonomy for the calendar bridge and the envelope it is rendered into."""

from typing import List, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: List[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    DECODE_ERROR = "DECODE_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    BACKEND_ERROR = "BACKEND_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CalendarBridgeError(Exception):
    """Base exception; carries the HTTP status and code it should map to."""

    status_code = 500
    code = ErrorCodes.INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, code=self.code, details=self.details)


class InvalidInputError(CalendarBridgeError):
    status_code = 400
    code = ErrorCodes.INVALID_REQUEST


class ForbiddenError(CalendarBridgeError):
    """A required path parameter is missing."""

    status_code = 403
    code = ErrorCodes.FORBIDDEN


class NotFoundError(CalendarBridgeError):
    status_code = 404
    code = ErrorCodes.NOT_FOUND


class MethodNotAllowedError(CalendarBridgeError):
    status_code = 405
    code = ErrorCodes.METHOD_NOT_ALLOWED


class DecodeError(CalendarBridgeError):
    """Request body could not be decoded into an event."""

    status_code = 400
    code = ErrorCodes.DECODE_ERROR


class CalendarBackendError(CalendarBridgeError):
    """
    Any failure reported by the calendar provider.

    Rendered as a 500 carrying the provider's message unless a handler
    translates it. ``upstream_status`` is the provider's HTTP status when known.
    """

    status_code = 500
    code = ErrorCodes.BACKEND_ERROR

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class BadGatewayError(CalendarBridgeError):
    status_code = 502
    code = ErrorCodes.BACKEND_ERROR
