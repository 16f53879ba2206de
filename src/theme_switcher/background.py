"""Background-mode overrides applied on top of the active theme.

Only editor chrome groups are rewritten. Foreground/syntax groups, float
borders and popup menus keep whatever the theme set.
"""

from __future__ import annotations

import logging

from .host import NO_COLOR, EditorHost, ThemeActivationError
from .types import BackgroundMode

logger = logging.getLogger(__name__)

TRANSPARENT_GROUPS: tuple[str, ...] = (
    "Normal",
    "NormalFloat",
    "NormalNC",
    "SignColumn",
    "EndOfBuffer",
    "LineNr",
    "LineNrAbove",
    "LineNrBelow",
    "Folded",
    "FoldColumn",
    "NonText",
    "VertSplit",
    "WinSeparator",
    "StatusLine",
    "StatusLineNC",
    "TabLine",
    "TabLineFill",
    "NormalSB",
    # Dashboard
    "SnacksDashboardNormal",
    "SnacksDashboardFooter",
)

BLACKOUT_GROUPS: tuple[str, ...] = TRANSPARENT_GROUPS + (
    "CursorLineNr",
    "TabLineSel",
)

BLACK = "#000000"
BLACK_CTERM = 0


class BackgroundController:
    """Applies one background mode to the host's style groups."""

    def __init__(self, host: EditorHost):
        self.host = host

    def apply(self, mode: BackgroundMode) -> None:
        if mode == BackgroundMode.NATURAL:
            self._apply_natural()
        elif mode == BackgroundMode.TRANSPARENT:
            for group in TRANSPARENT_GROUPS:
                self.host.set_group_background(group, NO_COLOR, NO_COLOR)
        else:
            for group in BLACKOUT_GROUPS:
                self.host.set_group_background(group, BLACK, BLACK_CTERM)

    def _apply_natural(self) -> None:
        """Re-activate the current theme so it restores its own backgrounds."""
        theme = self.host.current_theme()
        if not theme:
            return
        try:
            self.host.activate_theme(theme)
        except ThemeActivationError as e:
            logger.warning("Could not re-apply %s for natural background: %s", theme, e.reason)

    @staticmethod
    def next_toggle(mode: BackgroundMode) -> BackgroundMode:
        """Two-state toggle: terminal goes to blackout, anything else to terminal."""
        if mode == BackgroundMode.TRANSPARENT:
            return BackgroundMode.BLACKOUT
        return BackgroundMode.TRANSPARENT
