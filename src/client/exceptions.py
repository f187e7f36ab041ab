"""Exception types for the relay client library."""


class RelayClientError(Exception):
    """Base exception for all relay client errors."""
    pass


class TransportError(RelayClientError):
    """Network communication error."""
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnexpectedResponseError(TransportError):
    """The server answered with a status or body the client does not understand."""
    pass
