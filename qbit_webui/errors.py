"""
Exceptions raised by the WebUI client.

Every failure surfaces as a ClientError, so callers that only care about
"did the request work" can catch that one class:
- HttpError: the server could not be reached or answered with a non-2xx status
- AuthorizationError: the client is not logged in, or the login was rejected
- JsonError: the response body was not the JSON shape that was expected
"""

from typing import Optional


class ClientError(Exception):
    """Base exception for all WebUI client errors."""
    pass


class HttpError(ClientError):
    """Raised on transport failures and non-success HTTP statuses."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthorizationError(ClientError):
    """Raised when a request needs a session the client does not have."""
    pass


class JsonError(ClientError):
    """Raised when a response cannot be deserialized."""
    pass
