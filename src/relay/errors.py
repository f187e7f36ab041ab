"""Exception types raised by the relay core."""


class RelayError(Exception):
    """Base exception for relay core errors."""


class BindRejectedError(RelayError):
    """A transport's attachment request was refused.

    The connection is closed with a policy-violation status and
    ``reason`` as the close reason. No session state is touched.
    """

    reason: str = "Rejected"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.reason)


class MissingParametersError(BindRejectedError):
    reason = "Missing sessionId or role"


class InvalidRoleError(BindRejectedError):
    reason = "Invalid role"


class SessionNotFoundError(BindRejectedError):
    reason = "Session not found"


class InvalidHostSecretError(BindRejectedError):
    reason = "Invalid host secret"


class MalformedMessageError(RelayError):
    """An inbound frame is not a JSON object with a string ``type``."""
