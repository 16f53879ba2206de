"""Type definitions for theme-switcher.

Shared enums and dataclasses used across the codebase, so picker modes,
background modes and border styles are compared as constants rather than
magic strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BackgroundMode(str, Enum):
    """Background-rendering override composed with the active theme.

    The values are the strings written to the preference file.
    """

    NATURAL = "normal"
    TRANSPARENT = "terminal"
    BLACKOUT = "blackout"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Human-readable name used in notifications."""
        return {
            BackgroundMode.NATURAL: "Normal (Theme)",
            BackgroundMode.TRANSPARENT: "Terminal",
            BackgroundMode.BLACKOUT: "Blackout",
        }[self]

    @classmethod
    def parse(cls, value: "BackgroundMode | str") -> "BackgroundMode":
        """Coerce a mode or its persisted string value.

        Raises:
            ValueError: If the value names no known mode.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                "Invalid background mode. Use 'normal', 'terminal', or 'blackout'"
            ) from None


class BorderStyle(str, Enum):
    """Border drawn around the picker surface."""

    ROUNDED = "rounded"
    SOLID = "solid"
    DOUBLE = "double"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


class PickerMode(str, Enum):
    """Input-interpretation mode of the picker."""

    NORMAL = "normal"
    SEARCHING = "searching"


class NotifyLevel(str, Enum):
    """Severity of a user-facing notification."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class PreferenceRecord:
    """The single persisted {theme, background mode} pair."""

    theme: str | None = None
    bg_mode: BackgroundMode = BackgroundMode.NATURAL

    def to_dict(self) -> dict[str, str | None]:
        return {"theme": self.theme, "bg_mode": self.bg_mode.value}

    @classmethod
    def from_dict(cls, data: dict) -> "PreferenceRecord":
        """Build a record from decoded JSON, defaulting unknown fields."""
        theme = data.get("theme")
        if not isinstance(theme, str) or not theme:
            theme = None
        try:
            bg_mode = BackgroundMode.parse(data.get("bg_mode", BackgroundMode.NATURAL))
        except ValueError:
            bg_mode = BackgroundMode.NATURAL
        return cls(theme=theme, bg_mode=bg_mode)


@dataclass
class PickerConfig:
    """Picker window configuration, supplied once at initialization.

    Attributes:
        width: Preferred window width in columns.
        height: Preferred window height in rows.
        border: Border style of the floating surface.
        title: Title shown in the border.
        startup_delay_ms: Delay before restoring saved preferences.
    """

    width: int = 40
    height: int = 20
    border: BorderStyle = BorderStyle.ROUNDED
    title: str = " theme-switcher "
    startup_delay_ms: int = 100

    def __post_init__(self) -> None:
        self.border = BorderStyle(self.border)
        if self.width < 1 or self.height < 1:
            raise ValueError("Picker width and height must be positive")
