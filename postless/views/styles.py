"""Colours and small rich helpers shared by the views."""

from rich.rule import Rule
from rich.text import Text

TITLE = "medium_purple1"
SELECTED = "hot_pink"
MUTED = "grey50"
FOOTER = "grey70"
ERROR = "red1"
SETTINGS = "light_goldenrod2"
SETTINGS_SELECTED = "gold1"
SETTINGS_VALUE = "khaki3"
HIGHLIGHT = "bold black on yellow"
SEARCH_BOX = "cyan"
SUCCESS = "aquamarine1"
WARNING = "light_salmon1"
REDIRECT = "thistle1"
CORAL = "indian_red1"

METHOD_COLORS = {
    "GET": "aquamarine1",
    "POST": "light_salmon1",
    "PUT": "thistle1",
    "DELETE": "indian_red1",
    "PATCH": "orchid1",
}

PANEL_WIDTH = 70


def method_style(method: str, default: str = MUTED) -> str:
    return f"bold {METHOD_COLORS.get(method, default)}"


def header_rule(title: str) -> list:
    """Title block used at the top of full-screen views."""
    return [
        Text(""),
        Rule(style=TITLE),
        Text(f"  {title}", style=f"bold {SELECTED}"),
        Rule(style=TITLE),
        Text(""),
    ]


def footer(text: str) -> Text:
    return Text(text, style=FOOTER)
