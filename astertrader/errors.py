from __future__ import annotations
from typing import Optional, Union


class AsterError(Exception):
    """Base class for every error raised by the Aster client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NetworkError(AsterError):
    """No response was received (connect failure, timeout, protocol error)."""

    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(f"Network Error {code}: {message}")


class NonApiResponseError(AsterError):
    """The server answered with an HTML page instead of a JSON API payload."""

    def __init__(self, status_code: int, reason: str, url: str):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(
            f"Server Error: {status_code} {reason} from {url} - "
            "Server returned HTML error page instead of JSON"
        )


class ApiError(AsterError):
    """Structured `{code, msg}` error returned by the exchange."""

    def __init__(self, code: Union[int, str], msg: str, status_code: int, url: str):
        self.code = code
        self.msg = msg
        self.status_code = status_code
        self.url = url
        super().__init__(f"API Error {code}: {msg} ({status_code} from {url})")


class InvalidRequestError(AsterError, ValueError):
    """Raised locally, before any network call, for malformed requests."""


class AuthenticationError(AsterError):
    """Signed request rejected with an HTML page; usually clock skew vs recvWindow."""

    def __init__(self, original: Optional[AsterError] = None):
        self.original = original
        detail = original.message if original is not None else "no detail"
        super().__init__(
            "Authentication failed - likely timestamp synchronization issue. "
            f"Original error: {detail}"
        )
