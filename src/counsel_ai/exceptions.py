"""Error taxonomy for the AI layer.

Every failure the gateway surfaces is an ``AIServiceError`` carrying an
``ErrorKind``. Callers that only care about "the model did not answer"
catch the base class; the HTTP layer inspects ``kind`` to pick a status.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Categories of AI gateway failures."""

    INVALID_INPUT = "invalid_input"
    SERVICE_UNAVAILABLE = "service_unavailable"
    AUTHENTICATION_FAILED = "authentication_failed"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"


class AIServiceError(Exception):
    """Base class for errors raised by the AI gateway."""

    kind: ErrorKind = ErrorKind.SERVICE_UNAVAILABLE
    default_message = "AI service temporarily unavailable"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidInput(AIServiceError):
    """Empty prompt or unknown mode. Never sent to the model."""

    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid AI query"


class ServiceUnavailable(AIServiceError):
    """Network failure, unexpected status or malformed response body."""

    kind = ErrorKind.SERVICE_UNAVAILABLE


class AuthenticationFailed(AIServiceError):
    kind = ErrorKind.AUTHENTICATION_FAILED
    default_message = "AI service authentication failed"


class RateLimited(AIServiceError):
    """The model endpoint reported quota or rate exhaustion (HTTP 429)."""

    kind = ErrorKind.RATE_LIMITED
    default_message = "AI service rate limit exceeded. Please try again later"


class RequestTimeout(AIServiceError):
    kind = ErrorKind.TIMEOUT
    default_message = "AI service request timeout"


class ResponseParseError(ValueError):
    """Model output could not be read as a JSON object."""
