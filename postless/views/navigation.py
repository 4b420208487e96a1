"""
Collection browser.

:class:`NavigationState` is the state machine behind the main screen: one
page per collection followed by a settings page, a cursor with a scrolling
viewport, and an incremental fuzzy search scoped to the current page.
:func:`render_navigation` turns a state into a frame.
"""

from typing import List, Optional, Sequence, Union

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text
from rich import box

from postless.config import settings
from postless.constants import SETTINGS_PAGE_TITLE
from postless.models import Collection, Config, RequestItem, Secret, SettingsItem
from postless.views import keys, styles
from postless.views.fuzzy import fuzzy_match, match_positions
from postless.views.list_cursor import ListCursor
from postless.views.results import Cancelled, RequestSelected, SettingsSelected, ViewResult
from postless.views.settings_editor import settings_items

ListEntry = Union[RequestItem, SettingsItem]


class NavigationState:
    """Pages, cursor, viewport and search state of the collection browser."""

    def __init__(
        self,
        collections: List[Collection],
        config: Config,
        secret: Secret,
        max_visible: Optional[int] = None,
        start_page: int = 0
    ):
        """
        Initialize the browser state.

        Args:
            collections: Collections in display order
            config: Workspace config, used for URL display and the settings page
            secret: Workspace secret, shown on the settings page
            max_visible: Rows shown at once (defaults to settings.max_visible_rows)
            start_page: Page shown first; clamped to the valid range
        """
        self.collections = collections
        self.config = config
        self.secret = secret
        self.list_cursor = ListCursor(max_visible or settings.max_visible_rows)
        self.current_page = min(max(start_page, 0), self.page_count - 1)
        self.search_mode = False
        self.search_query = ""
        self.filtered: List[RequestItem] = []

    @property
    def page_count(self) -> int:
        return len(self.collections) + 1

    @property
    def settings_page_index(self) -> int:
        return len(self.collections)

    @property
    def is_settings_page(self) -> bool:
        return self.current_page == self.settings_page_index

    @property
    def cursor(self) -> int:
        return self.list_cursor.cursor

    @property
    def viewport_start(self) -> int:
        return self.list_cursor.viewport_start

    @property
    def max_visible(self) -> int:
        return self.list_cursor.max_visible

    def page_title(self, index: int) -> str:
        if index == self.settings_page_index:
            return SETTINGS_PAGE_TITLE
        return self.collections[index].name

    def settings_items(self) -> List[SettingsItem]:
        return settings_items(self.config, self.secret)

    def page_items(self) -> List[ListEntry]:
        """Every entry of the current page, ignoring search."""
        if self.is_settings_page:
            return list(self.settings_items())
        return list(self.collections[self.current_page].requests)

    def active_items(self) -> Sequence[ListEntry]:
        """The entries the cursor moves over: the search results while searching."""
        if self.search_mode:
            return self.filtered
        return self.page_items()

    def display_url(self, item: RequestItem) -> str:
        return self.config.interpolate(item.request.url)

    def handle_key(self, key: str) -> Optional[ViewResult]:
        """
        Apply one key press.

        Returns:
            Optional[ViewResult]: A result when the view should close, else None
        """
        if self.search_mode:
            return self._handle_search_key(key)
        return self._handle_browse_key(key)

    def _handle_browse_key(self, key: str) -> Optional[ViewResult]:
        if key in (keys.CTRL_C, keys.ESC, "q"):
            return Cancelled()
        if key in (keys.LEFT, "h"):
            self._change_page(-1)
        elif key in (keys.RIGHT, "l"):
            self._change_page(1)
        elif key in (keys.UP, "k"):
            self.list_cursor.move_up(len(self.active_items()))
        elif key in (keys.DOWN, "j"):
            self.list_cursor.move_down(len(self.active_items()))
        elif key == "/":
            self._enter_search()
        elif key == keys.ENTER:
            return self._select()
        return None

    def _handle_search_key(self, key: str) -> Optional[ViewResult]:
        if key in (keys.CTRL_C, keys.ESC):
            self._leave_search()
        elif key == keys.UP:
            self.list_cursor.move_up(len(self.filtered))
        elif key == keys.DOWN:
            self.list_cursor.move_down(len(self.filtered))
        elif key == keys.ENTER:
            return self._select()
        elif key == keys.BACKSPACE:
            if self.search_query:
                self.search_query = self.search_query[:-1]
                self._refilter()
        elif keys.is_printable(key):
            self.search_query += key
            self._refilter()
        return None

    def _change_page(self, step: int) -> None:
        self.current_page = (self.current_page + step) % self.page_count
        self.list_cursor.reset()

    def _enter_search(self) -> None:
        if self.is_settings_page:
            return
        self.search_mode = True
        self.search_query = ""
        self._refilter()

    def _leave_search(self) -> None:
        self.search_mode = False
        self.search_query = ""
        self.filtered = []
        self.list_cursor.reset()

    def _refilter(self) -> None:
        self.filtered = [
            item for item in self.collections[self.current_page].requests
            if fuzzy_match(item.name, self.search_query)
            or fuzzy_match(self.display_url(item), self.search_query)
        ]
        self.list_cursor.reset()

    def _select(self) -> Optional[ViewResult]:
        items = self.active_items()
        if not items or self.cursor >= len(items):
            return None
        entry = items[self.cursor]
        if isinstance(entry, SettingsItem):
            return SettingsSelected(key=entry.key)
        return RequestSelected(collection=self.collections[self.current_page].name, name=entry.name)


def highlight(text: str, query: str, base_style: str = "") -> Text:
    """Render ``text`` with the characters consumed by the fuzzy scan highlighted."""
    rendered = Text(text, style=base_style)
    if not query or not fuzzy_match(text, query):
        return rendered
    for position in match_positions(text, query):
        rendered.stylize(styles.HIGHLIGHT, position, position + 1)
    return rendered


def _render_tabs(state: NavigationState) -> Text:
    tabs = Text()
    for index in range(state.page_count):
        title = state.page_title(index)
        is_settings = index == state.settings_page_index
        if is_settings:
            title = f"{title} ⚙️"
        if index == state.current_page:
            color = styles.SETTINGS_SELECTED if is_settings else styles.SELECTED
            tabs.append(f"[ {title} ]", style=f"bold {color}")
        else:
            color = styles.SETTINGS if is_settings else styles.MUTED
            tabs.append(f"  {title}  ", style=color)
    return tabs


def _render_entry(state: NavigationState, entry: ListEntry, selected: bool) -> Panel:
    query = state.search_query if state.search_mode else ""
    if isinstance(entry, SettingsItem):
        title_color = styles.SETTINGS_SELECTED if selected else styles.SETTINGS
        border = styles.SETTINGS_SELECTED if selected else styles.SETTINGS
        body = Text.assemble(
            Text(entry.label, style=f"bold {title_color}"),
            "\n",
            Text(entry.value, style=f"italic {styles.SETTINGS_VALUE}"),
        )
    else:
        title_color = styles.SELECTED if selected else styles.MUTED
        border = styles.SELECTED if selected else styles.MUTED
        url_color = styles.FOOTER if selected else styles.MUTED
        body = Text.assemble(
            highlight(entry.name, query, f"bold {title_color}"),
            "\n",
            Text(entry.request.method, style=styles.method_style(entry.request.method)),
            " ",
            highlight(state.display_url(entry), query, f"italic {url_color}"),
        )
    return Panel(
        body,
        box=box.ROUNDED,
        border_style=border,
        width=styles.PANEL_WIDTH,
        padding=(0, 1),
    )


def render_navigation(state: NavigationState) -> RenderableType:
    """Build the full frame for the collection browser."""
    parts: List[RenderableType] = [Text(""), _render_tabs(state), Text("")]

    if state.search_mode:
        search_text = f"🔍 Search: {state.search_query}" if state.search_query else "🔍 Search: (type to search...)"
        parts.append(Panel(Text(search_text), box=box.ROUNDED, border_style=styles.SEARCH_BOX,
                           width=styles.PANEL_WIDTH, padding=(0, 1)))

    items = state.active_items()
    if not items:
        empty = "  No matches found" if state.search_mode else "  No requests in this collection"
        parts.append(styles.footer(empty))
    else:
        visible = state.list_cursor.visible_range(len(items))
        if state.viewport_start > 0:
            parts.append(styles.footer("  ⬆ More items above..."))
        for index in visible:
            parts.append(_render_entry(state, items[index], index == state.cursor))
        if visible.stop < len(items):
            parts.append(styles.footer("  ⬇ More items below..."))

    if state.search_mode:
        help_text = "  type to search • ↑↓ navigate • enter select • esc cancel"
    elif state.page_count > 1:
        help_text = "  / search • ←→/hl switch • ↑↓/jk navigate • enter select • q/esc quit"
    else:
        help_text = "  / search • ↑↓/jk navigate • enter select • q/esc quit"
    parts.extend([Text(""), styles.footer(help_text)])
    return Group(*parts)
