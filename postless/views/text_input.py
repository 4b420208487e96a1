"""Single-line text input driven by key tokens."""

from typing import Optional

from rich.console import Group, RenderableType
from rich.text import Text

from postless.config import settings
from postless.views import keys, styles


class TextInput:
    """
    Editable line of text.

    :meth:`handle_key` returns ``True`` once the input is finished; then
    :attr:`value` is the trimmed text, or ``None`` if the user cancelled.
    """

    def __init__(self, title: str, initial: str = "", char_limit: Optional[int] = None):
        self.title = title
        # the limit applies to typing; an initial value is never cut
        self.char_limit = char_limit or settings.input_char_limit
        self.buffer = initial
        self.value: Optional[str] = None
        self.done = False

    def handle_key(self, key: str) -> bool:
        if key in (keys.ESC, keys.CTRL_C):
            self.value = None
            self.done = True
        elif key == keys.ENTER:
            self.value = self.buffer.strip()
            self.done = True
        elif key == keys.BACKSPACE:
            self.buffer = self.buffer[:-1]
        elif keys.is_printable(key) and len(self.buffer) < self.char_limit:
            self.buffer += key
        return self.done


def render_text_input(text_input: TextInput) -> RenderableType:
    return Group(
        Text(text_input.title, style=f"bold {styles.TITLE}"),
        Text(""),
        Text.assemble(("> ", styles.SELECTED), text_input.buffer, ("█", styles.MUTED)),
        Text(""),
        styles.footer("press enter to confirm • esc to cancel"),
    )
