"""Cursor and viewport bookkeeping for scrollable lists."""

from postless.constants import SCROLL_MARGIN


class ListCursor:
    """
    A cursor over a list of ``count`` rows shown through a window of ``max_visible`` rows.

    After every move ``viewport_start <= cursor < viewport_start + max_visible``
    and ``0 <= viewport_start <= max(0, count - max_visible)``.
    """

    def __init__(self, max_visible: int = 10, margin: int = SCROLL_MARGIN):
        if max_visible < 1:
            raise ValueError("max_visible must be at least 1")
        self.max_visible = max_visible
        self.margin = margin
        self.cursor = 0
        self.viewport_start = 0

    def reset(self) -> None:
        self.cursor = 0
        self.viewport_start = 0

    def move_up(self, count: int) -> None:
        """Move up one row, wrapping from the first row to the last."""
        if count <= 0:
            self.reset()
            return
        if self.cursor > 0:
            self.cursor -= 1
            if self.cursor < self.viewport_start + self.margin and self.viewport_start > 0:
                self.viewport_start -= 1
        else:
            self.cursor = count - 1
            self.viewport_start = max(0, count - self.max_visible)
        self._clamp(count)

    def move_down(self, count: int) -> None:
        """Move down one row, wrapping from the last row to the first."""
        if count <= 0:
            self.reset()
            return
        if self.cursor < count - 1:
            self.cursor += 1
            if self.cursor >= self.viewport_start + self.max_visible - self.margin:
                self.viewport_start += 1
        else:
            self.cursor = 0
            self.viewport_start = 0
        self._clamp(count)

    def visible_range(self, count: int) -> range:
        return range(self.viewport_start, min(self.viewport_start + self.max_visible, count))

    def _clamp(self, count: int) -> None:
        self.cursor = min(max(self.cursor, 0), count - 1)
        if self.cursor < self.viewport_start:
            self.viewport_start = self.cursor
        elif self.cursor >= self.viewport_start + self.max_visible:
            self.viewport_start = self.cursor - self.max_visible + 1
        self.viewport_start = min(max(self.viewport_start, 0), max(0, count - self.max_visible))
