"""
Terminal key source and render sink.

Keys are read one at a time with ``click.getchar`` and normalised to the
tokens in :mod:`postless.views.keys`; every frame is drawn on a cleared
``rich`` console.
"""

from typing import Optional

import click
from rich.console import Console, RenderableType

from postless.views import keys


class Terminal:
    """Reads key presses and draws full frames."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def read_key(self) -> str:
        try:
            raw = click.getchar()
        except KeyboardInterrupt:
            return keys.CTRL_C
        except EOFError:
            return keys.ESC
        return keys.normalize_key(raw)

    def render(self, renderable: RenderableType) -> None:
        self.console.clear()
        self.console.print(renderable)

    def print(self, renderable: RenderableType) -> None:
        self.console.print(renderable)
