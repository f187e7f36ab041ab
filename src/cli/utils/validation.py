"""Input validation utilities for CLI commands."""

import re

SESSION_ID_PATTERN = re.compile(r"^[A-Z0-9]{4,32}$")


def validate_session_id(session_id: str) -> str:
    """Validate and return a normalised session ID. Raises ValueError if invalid."""
    if not session_id or not session_id.strip():
        raise ValueError("Session ID cannot be empty")
    session_id = session_id.strip().upper()
    if not SESSION_ID_PATTERN.match(session_id):
        raise ValueError("Session ID can only contain letters and numbers")
    return session_id


def validate_server_url(url: str) -> str:
    """Validate and return the relay base URL. Raises ValueError if invalid."""
    if not url or not url.strip():
        raise ValueError("Server URL cannot be empty")
    url = url.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ValueError("Server URL must start with http:// or https://")
    if len(url) > 2048:
        raise ValueError("Server URL cannot exceed 2048 characters")
    return url
