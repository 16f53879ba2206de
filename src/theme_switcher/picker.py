"""Picker state machine: list, filter, highlighted index and search mode.

The state is pure data plus transitions. It never talks to the host; the
switcher decides what to render and apply after each transition.

Indices are 1-based. While the visible list is non-empty the index stays in
``[1, len(visible_themes)]``; when it is empty the index is held at 1 and
``selected_theme()`` returns None.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field

from .types import PickerMode

# Keys captured as search text while searching
SEARCH_ALPHABET = string.ascii_letters + string.digits + "-_"


def filter_themes(themes: list[str], query: str) -> list[str]:
    """Case-insensitive substring filter, order preserved."""
    if not query:
        return list(themes)
    needle = query.lower()
    return [theme for theme in themes if needle in theme.lower()]


@dataclass
class PickerState:
    """Mutable record of one picker session."""

    all_themes: tuple[str, ...] = ()
    visible_themes: list[str] = field(default_factory=list)
    selected_index: int = 1
    search_query: str = ""
    mode: PickerMode = PickerMode.NORMAL

    @classmethod
    def open(cls, themes: list[str], current: str | None = None) -> "PickerState":
        """Start a session on the active theme, or the first row."""
        state = cls(all_themes=tuple(themes), visible_themes=list(themes))
        if current in state.visible_themes:
            state.selected_index = state.visible_themes.index(current) + 1
        return state

    @property
    def search_active(self) -> bool:
        return self.mode == PickerMode.SEARCHING

    def selected_theme(self) -> str | None:
        if 1 <= self.selected_index <= len(self.visible_themes):
            return self.visible_themes[self.selected_index - 1]
        return None

    # ── Search ──

    def _refilter(self) -> None:
        self.visible_themes = filter_themes(list(self.all_themes), self.search_query)
        self.selected_index = 1

    def enter_search(self) -> None:
        self.mode = PickerMode.SEARCHING

    def exit_search(self) -> None:
        """Leave search mode, keeping the query."""
        self.mode = PickerMode.NORMAL

    def append_char(self, char: str) -> bool:
        """Append a character to the query. Returns True if it was taken."""
        if not self.search_active or len(char) != 1 or char not in SEARCH_ALPHABET:
            return False
        self.search_query += char
        self._refilter()
        return True

    def backspace(self) -> bool:
        """Drop the last query character. Returns True if the query changed."""
        if not self.search_active or not self.search_query:
            return False
        self.search_query = self.search_query[:-1]
        self._refilter()
        return True

    def clear_search(self) -> None:
        """Reset the query from either mode."""
        self.search_query = ""
        self._refilter()

    # ── Navigation ──
    #
    # Each returns True when the index actually moved, which is the signal
    # for a preview. All are ignored while searching.

    def _move_to(self, index: int) -> bool:
        if self.search_active or not self.visible_themes:
            return False
        index = max(1, min(index, len(self.visible_themes)))
        if index == self.selected_index:
            return False
        self.selected_index = index
        return True

    def move_up(self) -> bool:
        return self._move_to(self.selected_index - 1)

    def move_down(self) -> bool:
        return self._move_to(self.selected_index + 1)

    def jump_top(self) -> bool:
        return self._move_to(1)

    def jump_bottom(self) -> bool:
        return self._move_to(len(self.visible_themes))
