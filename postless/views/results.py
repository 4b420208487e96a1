"""Values returned by the interactive views."""

from dataclasses import dataclass, field
from typing import List, Tuple, Union


@dataclass(frozen=True)
class RequestSelected:
    """A request was chosen on a collection page."""
    collection: str
    name: str


@dataclass(frozen=True)
class SettingsSelected:
    """A row of the settings page was chosen."""
    key: str


@dataclass(frozen=True)
class FieldEdits:
    """Body fields changed in the editor, in field order."""
    pairs: List[Tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class Cancelled:
    """The user backed out."""


ViewResult = Union[RequestSelected, SettingsSelected, FieldEdits, Cancelled]
