"""Output formatting utilities."""

from .formatters import (
    format_credentials,
    format_error,
    format_key_value,
    format_presence,
    format_table,
    format_warning,
)
from .json_output import json_output

__all__ = [
    "format_credentials",
    "format_error",
    "format_key_value",
    "format_presence",
    "format_table",
    "format_warning",
    "json_output",
]
