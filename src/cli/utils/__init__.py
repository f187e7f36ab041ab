"""CLI utilities."""

from .validation import validate_server_url, validate_session_id

__all__ = [
    "validate_server_url",
    "validate_session_id",
]
