"""Exception types raised by the Social Sports client.

Every failure surfaced to callers is an ``ApiError``:
- ``AuthenticationRequiredError``: no token, or the backend rejected it (401)
- ``ClientValidationError``: input rejected before any request is sent
- ``NetworkError``: host unreachable, timeout, or a success body that is not JSON
- plain ``ApiError``: any other non-2xx, message taken from the backend when present
"""
from typing import Any, Optional

AUTH_REQUIRED_MESSAGE = "Authentication required. Please login again."


class ApiError(Exception):
    """A failed backend call with a human-readable message."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code!r})"


class AuthenticationRequiredError(ApiError):
    def __init__(self, message: str = AUTH_REQUIRED_MESSAGE, status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)


class ClientValidationError(ApiError):
    """Raised before a request is issued when required input is missing or malformed."""


class NetworkError(ApiError):
    """Raised when the backend could not be reached or answered with an unreadable body."""


def message_from_payload(payload: Any, status_code: int) -> str:
    """Pick the backend's ``message`` field, falling back to a generic status message."""
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return f"API error: {status_code}"
