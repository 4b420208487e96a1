"""Request preview shown before execution."""

from enum import Enum
from typing import List, Optional

from rich.console import Group, RenderableType
from rich.json import JSON
from rich.padding import Padding
from rich.text import Text

from postless.execution.executor import build_headers
from postless.models import Config, RequestItem, Secret
from postless.views import keys, styles


class PreviewAction(str, Enum):
    """What the user chose on the preview screen."""
    EXECUTE = "execute"
    EDIT = "edit"
    CANCEL = "cancel"


def preview_action(key: str) -> Optional[PreviewAction]:
    if key in (keys.CTRL_C, keys.ESC, "q"):
        return PreviewAction.CANCEL
    if key in ("e", "E"):
        return PreviewAction.EDIT
    if key == keys.ENTER:
        return PreviewAction.EXECUTE
    return None


def render_preview(item: RequestItem, config: Config, secret: Secret) -> RenderableType:
    """Method, resolved URL, effective headers and body of ``item``."""
    request = item.request
    parts: List[RenderableType] = list(styles.header_rule(f"Request: {item.name}"))

    parts.append(Text(f"  Method:   {request.method}", style=styles.method_style(request.method, styles.FOOTER)))
    parts.append(Text(f"  URL:      {config.interpolate(request.url)}", style=styles.FOOTER))
    parts.append(Text(""))

    parts.append(Text("  Headers:", style=f"bold {styles.TITLE}"))
    for key, value in build_headers(request, config, secret).items():
        style = styles.SUCCESS if key.lower() == "authorization" else styles.FOOTER
        parts.append(Text(f"    {key}: {value}", style=style))
    parts.append(Text(""))

    if request.has_body:
        parts.append(Text("  Body:", style=f"bold {styles.TITLE}"))
        parts.append(Padding(JSON.from_data(request.body, indent=2), (0, 0, 0, 4)))
        parts.append(Text(""))

    parts.append(styles.footer("Press ENTER to execute • E to edit body • Q/ESC to cancel"))
    return Group(*parts)
