"""Utility functions for postless."""

from .helpers import (
    format_json_pretty,
    format_compact_json,
    truncate_string,
    format_bytes,
    format_duration
)

__all__ = [
    "format_json_pretty",
    "format_compact_json",
    "truncate_string",
    "format_bytes",
    "format_duration"
]
