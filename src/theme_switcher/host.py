"""Abstract contract between theme-switcher and its host editor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Callable

from .types import BorderStyle, NotifyLevel

Command = Callable[[], None]

# Background value meaning "no colour, let the terminal show through"
NO_COLOR = "NONE"


class ThemeActivationError(RuntimeError):
    """Raised by a host that rejects a theme activation request."""

    def __init__(self, theme: str, reason: str):
        self.theme = theme
        self.reason = reason
        super().__init__(f"Failed to apply theme: {theme}\n{reason}")


class Surface(ABC):
    """A floating, borderless-capable, non-persistent text surface."""

    @abstractmethod
    def set_lines(self, lines: list[str]) -> None:
        """Replace the surface contents."""

    @abstractmethod
    def set_cursor(self, line: int) -> None:
        """Place the visual cursor on a 1-based line."""

    @abstractmethod
    def is_valid(self) -> bool:
        """Whether the surface is still open."""

    @abstractmethod
    def close(self) -> None:
        """Destroy the surface. Closing twice is harmless."""


class EditorHost(ABC):
    """Capabilities theme-switcher needs from the editor it runs in."""

    # ── Themes ──

    @abstractmethod
    def list_themes(self) -> Iterable[str]:
        """Enumerate available theme names (any order)."""

    @abstractmethod
    def activate_theme(self, name: str) -> None:
        """Activate a theme by exact name.

        Raises:
            ThemeActivationError: If the host rejects the theme.
        """

    @abstractmethod
    def current_theme(self) -> str | None:
        """Name of the currently active theme, if any."""

    # ── Style groups ──

    @abstractmethod
    def get_group_background(self, group: str) -> str | None:
        """Background colour of a style group (None when unset)."""

    @abstractmethod
    def set_group_background(self, group: str, bg: str, cterm_bg: int | str | None = None) -> None:
        """Overwrite a group's background, preserving its other attributes."""

    # ── Surfaces and input ──

    @abstractmethod
    def screen_size(self) -> tuple[int, int]:
        """Available display size as (columns, lines)."""

    @abstractmethod
    def open_surface(
        self,
        *,
        width: int,
        height: int,
        row: int,
        col: int,
        border: BorderStyle,
        title: str = "",
    ) -> Surface:
        """Create a read-only floating surface and give it focus."""

    @abstractmethod
    def bind_key(self, surface: Surface, key: str, command: Command) -> None:
        """Bind a key name to a command, scoped to one surface."""

    # ── Environment ──

    @abstractmethod
    def data_dir(self) -> Path:
        """Per-user directory for persisted data."""

    @abstractmethod
    def defer(self, delay_ms: int, callback: Command) -> None:
        """Run a callback once after a delay, on the host's loop."""

    @abstractmethod
    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        """Show a notification to the user."""
