"""Errors raised by the invitation client.

Every failure that reaches a controller is an ``InvitationError`` carrying an
``ErrorKind`` and a human-readable message. Transport-level exceptions are
translated by the gateway and never escape it.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of invitation failures."""

    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    ALREADY_PROCESSED = "already_processed"
    INVALID_REQUEST = "invalid_request"
    UNAUTHORIZED = "unauthorized"
    TRANSPORT_FAILURE = "transport_failure"


class InvitationError(Exception):
    """Base class for all invitation errors."""

    kind: ErrorKind = ErrorKind.TRANSPORT_FAILURE
    default_message: str = "An error occurred while processing the invitation"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class InvitationNotFoundError(InvitationError):
    """Raised when the invitation does not exist (404)."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Invitation not found"


class InvitationExpiredError(InvitationError):
    """Raised when the invitation has expired (410)."""

    kind = ErrorKind.EXPIRED
    default_message = "The invitation has expired"


class InvitationAlreadyProcessedError(InvitationError):
    """Raised when the invitation was already handled or is forbidden (403)."""

    kind = ErrorKind.ALREADY_PROCESSED
    default_message = "The invitation has already been processed or is unavailable"


class InvalidInvitationRequestError(InvitationError):
    """Raised when the backend rejects the request payload (400)."""

    kind = ErrorKind.INVALID_REQUEST
    default_message = "Invalid request data"


class AuthenticationRequiredError(InvitationError):
    """Raised when the backend rejects the credential (401)."""

    kind = ErrorKind.UNAUTHORIZED
    default_message = "Authentication required"


class TransportFailureError(InvitationError):
    """Raised on network errors, timeouts and unexpected responses."""


class InvitationStateError(InvitationError):
    """Raised when a local transition or invariant check fails."""

    kind = ErrorKind.ALREADY_PROCESSED
    default_message = InvitationAlreadyProcessedError.default_message
