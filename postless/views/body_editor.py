"""
Request body editor.

A JSON object body is shown as a list of ``key: value`` rows. Values are
displayed as strings; only the rows the user actually changes are converted
back with :func:`infer_value`, every other field keeps its original JSON value
and type. Bodies that are not objects have nothing to edit.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from rich.console import Group, RenderableType
from rich.text import Text

from postless.config import settings
from postless.utils.helpers import format_compact_json
from postless.views import keys, styles
from postless.views.list_cursor import ListCursor
from postless.views.results import Cancelled, FieldEdits, ViewResult


def stringify_value(value: Any) -> str:
    """
    Display form of a JSON value.

    Strings pass through, booleans become ``true``/``false``, numbers are shown
    without a fractional part, anything else is compact JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:.0f}" if math.isfinite(value) else str(value)
    return format_compact_json(value)


def infer_value(text: str) -> Any:
    """
    Convert edited text back into a JSON value.

    Tried in order: a finite number (integral values become ``int``), then the
    literals ``true``/``false``, otherwise the text stays a string. A quoted
    number therefore cannot be entered as a string.
    """
    try:
        number = float(text)
    except ValueError:
        number = None
    if number is not None and math.isfinite(number):
        if number.is_integer():
            try:
                return int(text)
            except ValueError:
                return int(number)
        return number
    if text == "true":
        return True
    if text == "false":
        return False
    return text


def apply_field_edits(body: Dict[str, Any], edits: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Build a new body with ``edits`` applied.

    The original mapping is not modified. Keys keep their original order;
    edited keys that are not in the body are appended.
    """
    changes = {key: infer_value(value) for key, value in edits}
    new_body: Dict[str, Any] = {}
    for key, value in body.items():
        new_body[key] = changes.pop(key) if key in changes else value
    new_body.update(changes)
    return new_body


@dataclass
class BodyField:
    """One editable row."""
    key: str
    value: str
    original: Any
    edited: bool = False


@dataclass(frozen=True)
class FieldSelected:
    """The user asked to edit a field; the caller collects the new text."""
    key: str
    value: str


class BodyEditor:
    """Cursor, viewport and pending edits of the body editor."""

    def __init__(self, body: Any, max_visible: Optional[int] = None):
        self.fields: List[BodyField] = []
        if isinstance(body, dict):
            self.fields = [
                BodyField(key=str(key), value=stringify_value(value), original=value)
                for key, value in body.items()
            ]
        self.list_cursor = ListCursor(max_visible or settings.max_visible_rows)

    @property
    def has_fields(self) -> bool:
        return bool(self.fields)

    @property
    def cursor(self) -> int:
        return self.list_cursor.cursor

    @property
    def viewport_start(self) -> int:
        return self.list_cursor.viewport_start

    def handle_key(self, key: str) -> Optional[Union[ViewResult, FieldSelected]]:
        """
        Apply one key press.

        Returns:
            ``FieldSelected`` when a row should be edited, ``FieldEdits`` when
            the user saves, ``Cancelled`` when the user discards, else None
        """
        if key in (keys.CTRL_C, "q"):
            return Cancelled()
        if key == keys.ESC:
            return self.edits()
        if key in (keys.UP, "k"):
            self.list_cursor.move_up(len(self.fields))
        elif key in (keys.DOWN, "j"):
            self.list_cursor.move_down(len(self.fields))
        elif key in (keys.ENTER, "e") and self.fields:
            field = self.fields[self.cursor]
            return FieldSelected(key=field.key, value=field.value)
        return None

    def submit(self, key: str, new_value: Optional[str]) -> None:
        """Record new text for ``key``; ``None`` means the edit was cancelled."""
        if new_value is None:
            return
        for field in self.fields:
            if field.key == key:
                if new_value != field.value:
                    field.value = new_value
                    field.edited = new_value != stringify_value(field.original)
                return

    def edits(self) -> FieldEdits:
        return FieldEdits(pairs=[(field.key, field.value) for field in self.fields if field.edited])


def render_body_editor(editor: BodyEditor) -> RenderableType:
    parts: List[RenderableType] = list(styles.header_rule("Edit Request Body"))

    if not editor.has_fields:
        parts.append(Text("  No fields to edit", style=styles.ERROR))
    else:
        for index in editor.list_cursor.visible_range(len(editor.fields)):
            field = editor.fields[index]
            marker = "► " if index == editor.cursor else "  "
            value_style = styles.WARNING if field.edited else styles.FOOTER
            parts.append(Text.assemble(
                marker,
                (field.key, f"bold {styles.TITLE}"),
                ": ",
                (field.value, value_style),
            ))

    parts.extend([
        Text(""),
        styles.footer("↑↓ navigate • ENTER/E to edit • ESC to save & return • Q to cancel"),
    ])
    return Group(*parts)
