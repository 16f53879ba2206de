"""Pytest fixtures for theme-switcher tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from theme_switcher.host import EditorHost, Surface, ThemeActivationError
from theme_switcher.switcher import ThemeSwitcher
from theme_switcher.types import NotifyLevel, PickerConfig


class FakeSurface(Surface):
    """Surface that records what the view wrote into it."""

    def __init__(self, **geometry):
        self.geometry = geometry
        self.lines: list[str] = []
        self.cursor: int | None = None
        self.keymap: dict = {}
        self.valid = True

    def set_lines(self, lines):
        self.lines = list(lines)

    def set_cursor(self, line):
        self.cursor = line

    def is_valid(self):
        return self.valid

    def close(self):
        self.valid = False


class FakeHost(EditorHost):
    """In-memory host recording every call the switcher makes."""

    def __init__(self, themes, data_dir: Path, current: str | None = None, broken=()):
        self.themes = list(themes)
        self.broken = set(broken)
        self.current = current
        self._data_dir = data_dir
        self.activations: list[str] = []
        self.backgrounds: dict[str, tuple] = {}
        self.other_attrs: dict[str, dict] = {}
        self.surfaces: list[FakeSurface] = []
        self.deferred: list[tuple[int, object]] = []
        self.notifications: list[tuple[str, NotifyLevel]] = []
        self.size = (120, 40)

    def list_themes(self):
        return list(self.themes)

    def activate_theme(self, name):
        if name in self.broken or name not in self.themes:
            raise ThemeActivationError(name, "E185: Cannot find color scheme")
        self.activations.append(name)
        self.current = name
        self.backgrounds.clear()

    def current_theme(self):
        return self.current

    def get_group_background(self, group):
        bg = self.backgrounds.get(group)
        return bg[0] if bg else None

    def set_group_background(self, group, bg, cterm_bg=None):
        self.backgrounds[group] = (bg, cterm_bg)

    def screen_size(self):
        return self.size

    def open_surface(self, *, width, height, row, col, border, title=""):
        surface = FakeSurface(width=width, height=height, row=row, col=col, border=border, title=title)
        self.surfaces.append(surface)
        return surface

    def bind_key(self, surface, key, command):
        surface.keymap[key] = command

    def data_dir(self):
        return self._data_dir

    def defer(self, delay_ms, callback):
        self.deferred.append((delay_ms, callback))

    def run_deferred(self):
        pending, self.deferred = self.deferred, []
        for _, callback in pending:
            callback()

    def notify(self, message, level=NotifyLevel.INFO):
        self.notifications.append((message, level))

    # Helpers for tests

    @property
    def surface(self) -> FakeSurface:
        return self.surfaces[-1]

    def press(self, *keys):
        """Send key names to the most recently opened surface."""
        for key in keys:
            if self.surface.valid and key in self.surface.keymap:
                self.surface.keymap[key]()

    def type(self, text):
        self.press(*text)

    def errors(self):
        return [msg for msg, level in self.notifications if level == NotifyLevel.ERROR]


@pytest.fixture
def host(tmp_path):
    return FakeHost(["nord", "desert", "gruvbox"], data_dir=tmp_path / "data")


@pytest.fixture
def switcher(host):
    return ThemeSwitcher(host, PickerConfig())


@pytest.fixture
def open_switcher(switcher):
    assert switcher.open_picker()
    return switcher
