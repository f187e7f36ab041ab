"""CLI commands."""

from . import (
    create,
    health,
    serve,
    status,
)

__all__ = [
    "create",
    "health",
    "serve",
    "status",
]
