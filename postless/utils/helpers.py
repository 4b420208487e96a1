"""General helper utility functions."""

import json
from typing import Any


def format_json_pretty(data: Any, indent: int = 2) -> str:
    """
    Format data as pretty-printed JSON, keeping key order.

    Args:
        data: Data to format
        indent: Number of spaces for indentation

    Returns:
        Formatted JSON string
    """
    return json.dumps(data, indent=indent, ensure_ascii=False)


def format_compact_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def truncate_string(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate a string, appending ``suffix`` after the first ``max_length`` characters.

    Args:
        text: Text to truncate
        max_length: Number of characters kept
        suffix: Suffix to add if truncated

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    return text[:max_length] + suffix


def format_bytes(size: int) -> str:
    """Human readable byte size using 1024 based units, e.g. ``1.5 KB``."""
    unit = 1024
    if size < unit:
        return f"{size} B"
    div, exp = unit, 0
    n = size // unit
    while n >= unit:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {'KMGTPE'[exp]}B"


def format_duration(seconds: float) -> str:
    """Short duration string: milliseconds below one second, seconds above."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.2f}s"
