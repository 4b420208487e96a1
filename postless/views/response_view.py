"""Rendering of an execution result."""

from typing import List, Tuple

from rich.console import Group, RenderableType
from rich.json import JSON
from rich.padding import Padding
from rich.text import Text

from postless.execution.executor import HttpResult
from postless.utils.helpers import format_bytes, format_duration
from postless.views import styles


def status_style(status_code: int) -> Tuple[str, str]:
    """Colour and icon for a status code."""
    if 200 <= status_code < 300:
        return styles.SUCCESS, "✓"
    if 300 <= status_code < 400:
        return styles.REDIRECT, "↪"
    if 400 <= status_code < 500:
        return styles.CORAL, "⚠"
    if status_code >= 500:
        return styles.ERROR, "✗"
    return styles.MUTED, "?"


def duration_style(seconds: float) -> str:
    if seconds > 1:
        return styles.CORAL
    if seconds > 0.5:
        return styles.WARNING
    return styles.SUCCESS


def render_response(result: HttpResult, request_name: str) -> RenderableType:
    parts: List[RenderableType] = list(styles.header_rule(f"Response: {request_name}"))

    if not result.ok:
        parts.append(Text("  ❌ Error:", style=f"bold {styles.ERROR}"))
        parts.append(Text(f"    {result.error_message()}", style=styles.CORAL))
        parts.append(Text(f"  ⏱️  Duration: {format_duration(result.duration)}", style=styles.MUTED))
        return Group(*parts)

    color, icon = status_style(result.status_code)
    parts.append(Text(f"  {icon} Status:   {result.status_code} {result.reason}", style=f"bold {color}"))
    parts.append(Text(f"  ⏱️  Duration: {format_duration(result.duration)}", style=duration_style(result.duration)))
    parts.append(Text(f"  📦 Size:     {format_bytes(result.size)}", style=styles.MUTED))
    parts.append(Text(""))

    parts.append(Text("  📋 Response Headers:", style=f"bold {styles.TITLE}"))
    for key, value in result.headers:
        parts.append(Text(f"    {key}: {value}", style=styles.FOOTER))
    parts.append(Text(""))

    if not result.body:
        parts.append(Text("  📄 Body: (empty)", style=styles.MUTED))
    else:
        parts.append(Text("  📄 Body:", style=f"bold {styles.TITLE}"))
        if result.is_json:
            parts.append(Padding(JSON.from_data(result.json_body, indent=2), (0, 0, 0, 4)))
        else:
            parts.append(Text(f"    {result.display_text()}", style=styles.FOOTER))
    return Group(*parts)
