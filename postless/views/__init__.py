"""Interactive views: state machines for each screen plus their rich renderers."""

from .results import Cancelled, FieldEdits, RequestSelected, SettingsSelected, ViewResult
from .navigation import NavigationState, render_navigation
from .body_editor import BodyEditor, FieldSelected, apply_field_edits, infer_value, stringify_value
from .fuzzy import fuzzy_match, match_positions
from .terminal import Terminal

__all__ = [
    "Cancelled",
    "FieldEdits",
    "RequestSelected",
    "SettingsSelected",
    "ViewResult",
    "NavigationState",
    "render_navigation",
    "BodyEditor",
    "FieldSelected",
    "apply_field_edits",
    "infer_value",
    "stringify_value",
    "fuzzy_match",
    "match_positions",
    "Terminal",
]
