"""Picker view: turns PickerState into lines on a host surface."""

from __future__ import annotations

from dataclasses import dataclass

from .host import EditorHost, Surface
from .picker import PickerState
from .types import PickerConfig

HEADER_LINES = 3
SEPARATOR_WIDTH = 40
SEARCH_HINT = "(press '/' to search)"
EMPTY_PLACEHOLDER = "  No themes found"
SELECTED_PREFIX = "> "
UNSELECTED_PREFIX = "  "
SCREEN_MARGIN = 4


@dataclass(frozen=True)
class WindowGeometry:
    width: int
    height: int
    row: int
    col: int


def compute_geometry(config: PickerConfig, columns: int, lines: int, item_count: int) -> WindowGeometry:
    """Size the window to the config, the screen and the list, then center it."""
    width = max(1, min(config.width, columns - SCREEN_MARGIN))
    height = max(1, min(config.height, item_count + HEADER_LINES, lines - SCREEN_MARGIN))
    row = max(0, (lines - height) // 2)
    col = max(0, (columns - width) // 2)
    return WindowGeometry(width=width, height=height, row=row, col=col)


def render_lines(state: PickerState) -> list[str]:
    """Render header, separator, blank line and one row per visible theme."""
    if state.search_active:
        header = f"Search: {state.search_query}_"
    else:
        header = f"Search: {state.search_query} {SEARCH_HINT}"
    lines = [header, "─" * SEPARATOR_WIDTH, ""]

    if not state.visible_themes:
        lines.append(EMPTY_PLACEHOLDER)
        return lines

    for i, theme in enumerate(state.visible_themes, start=1):
        prefix = SELECTED_PREFIX if i == state.selected_index else UNSELECTED_PREFIX
        lines.append(prefix + theme)
    return lines


def cursor_line(state: PickerState) -> int:
    """1-based surface line of the highlighted row."""
    return state.selected_index + HEADER_LINES


class PickerView:
    """Owns the picker surface for one session."""

    def __init__(self, host: EditorHost, config: PickerConfig):
        self.host = host
        self.config = config
        self.surface: Surface | None = None

    @property
    def is_open(self) -> bool:
        return self.surface is not None and self.surface.is_valid()

    def open(self, state: PickerState) -> Surface:
        columns, lines = self.host.screen_size()
        geometry = compute_geometry(self.config, columns, lines, len(state.visible_themes))
        self.surface = self.host.open_surface(
            width=geometry.width,
            height=geometry.height,
            row=geometry.row,
            col=geometry.col,
            border=self.config.border,
            title=self.config.title,
        )
        return self.surface

    def render(self, state: PickerState) -> None:
        """Redraw the surface. A closed surface is left alone."""
        if not self.is_open:
            return
        self.surface.set_lines(render_lines(state))
        self.surface.set_cursor(cursor_line(state))

    def close(self) -> None:
        if self.surface is not None and self.surface.is_valid():
            self.surface.close()
        self.surface = None
