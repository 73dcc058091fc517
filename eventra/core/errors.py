"""
Domain exceptions mapped to HTTP error responses by the global handlers
"""

from typing import Any, Optional


class EventraError(Exception):
    """Base exception for all request-level failures"""

    http_status = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailedError(EventraError):
    http_status = 400
    error_code = "VALIDATION_FAILED"


class DuplicateError(EventraError):
    http_status = 400
    error_code = "DUPLICATE"


class AuthenticationError(EventraError):
    http_status = 401
    error_code = "UNAUTHORIZED"


class PermissionDeniedError(EventraError):
    http_status = 403
    error_code = "FORBIDDEN"


class LimitReachedError(EventraError):
    http_status = 403
    error_code = "LIMIT_REACHED"


class NotFoundError(EventraError):
    http_status = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", message: Optional[str] = None):
        super().__init__(message or f"{resource} not found")
        self.resource = resource


class RateLimitedError(EventraError):
    http_status = 429
    error_code = "RATE_LIMITED"


class AIServiceError(EventraError):
    """Raised when the LLM call fails or returns unusable content"""

    http_status = 502
    error_code = "AI_UNAVAILABLE"
