"""Duplex Relay Python client library."""

from .client import RelayClient
from .exceptions import RelayClientError, TransportError, UnexpectedResponseError
from .transport import Transport

__all__ = [
    "RelayClient", "Transport",
    "RelayClientError", "TransportError", "UnexpectedResponseError",
]
