"""
threema_gateway.errors
----------------------
Domain errors surfaced by the gateway client and the status-code mapper.

Every failure that crosses the library boundary is an ApiError subclass;
callers can catch the base class or a specific kind.
"""

from __future__ import annotations
from typing import Optional


class ApiError(Exception):
    """Base class for all gateway errors."""
    description = "API error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.description)

    def __eq__(self, other):
        return type(self) is type(other) and self.args == other.args

    def __hash__(self):
        return hash((type(self), self.args))


class BadCredentials(ApiError):
    description = "Bad credentials"


class NoCredits(ApiError):
    description = "Insufficient credits"


class IdNotFound(ApiError):
    description = "Identity not found"


class MessageTooLong(ApiError):
    description = "Message too long"


class BadBlobId(ApiError):
    description = "Malformed blob id"


class BadSenderOrRecipient(ApiError):
    description = "Bad sender or recipient"


class BadBlob(ApiError):
    description = "Bad blob"


class ServerError(ApiError):
    description = "Server error"


class DecryptionFailed(ApiError):
    description = "Decryption failed"


class OtherError(ApiError):
    """Unclassified error; the message carries the original status text."""
    description = "Unknown error"


_STATUS_ERRORS = {
    401: BadCredentials,
    402: NoCredits,
    404: IdNotFound,
    413: MessageTooLong,
    500: ServerError,
}


def classify_status(status: int, bad_request_meaning: Optional[ApiError] = None) -> Optional[ApiError]:
    """
    Translate a response status code into a domain error.

    Returns None for 200. A 400 means different things on different
    endpoints, so the caller passes its meaning in; without one it is
    reported as unclassified like any unknown code.
    """
    if status == 200:
        return None
    if status == 400 and bad_request_meaning is not None:
        return bad_request_meaning
    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is not None:
        return error_cls()
    return OtherError(f"Bad response status code: {status}")


def map_response_code(status: int, bad_request_meaning: Optional[ApiError] = None) -> None:
    error = classify_status(status, bad_request_meaning)
    if error is not None:
        raise error
