"""Theme switcher session owner and user-facing commands.

ThemeSwitcher ties the pieces together: it snapshots the catalog into a
PickerState when the picker opens, routes picker keys into state
transitions, re-renders the view, applies and persists themes, and runs the
background toggle/set commands.

Commands for external binding:
    - toggle_picker(): open the picker, or close it if open
    - toggle_background(): terminal <-> blackout
    - set_background(mode): normal | terminal | blackout
"""

from __future__ import annotations

import logging
from typing import Callable

from .background import BackgroundController
from .catalog import list_themes
from .host import Command, EditorHost, ThemeActivationError
from .picker import SEARCH_ALPHABET, PickerState
from .preferences import PreferenceSaveError, PreferenceStore
from .types import BackgroundMode, NotifyLevel, PickerConfig, PreferenceRecord
from .view import PickerView

logger = logging.getLogger(__name__)

DEFAULT_THEME_NAME = "default"


class ThemeSwitcher:
    """Owns the picker session, the background mode and the preference store."""

    def __init__(
        self,
        host: EditorHost,
        config: PickerConfig | None = None,
        store: PreferenceStore | None = None,
    ):
        self.host = host
        self.config = config or PickerConfig()
        self.store = store or PreferenceStore(host.data_dir())
        self.background = BackgroundController(host)
        self.view = PickerView(host, self.config)
        self.session: PickerState | None = None
        self.applied_theme: str | None = None
        self.bg_mode = BackgroundMode.NATURAL
        self._setup_done = False
        self._pending_g = False

    # ── Startup ──

    def setup(self) -> PreferenceRecord | None:
        """Load saved preferences and schedule their restoration.

        The background mode is restored into memory immediately; the theme
        and background overrides are applied after the startup delay so the
        host can finish its own initialization first. Safe to call twice.
        """
        if self._setup_done:
            return None
        self._setup_done = True

        prefs = self.store.load()
        if prefs is None:
            logger.debug("No saved preferences at %s", self.store.path)
            return None

        self.bg_mode = prefs.bg_mode
        self.host.defer(self.config.startup_delay_ms, lambda: self._restore(prefs))
        return prefs

    def _restore(self, prefs: PreferenceRecord) -> None:
        if not prefs.theme:
            return
        try:
            self.host.activate_theme(prefs.theme)
        except ThemeActivationError as e:
            logger.warning("Could not restore saved theme %s: %s", prefs.theme, e.reason)
        else:
            self.applied_theme = prefs.theme

        if self.bg_mode != BackgroundMode.NATURAL:
            self.background.apply(self.bg_mode)
        logger.debug("Restored theme=%s bg_mode=%s", prefs.theme, self.bg_mode)

    # ── Apply / persist ──

    def current_record(self) -> PreferenceRecord:
        theme = self.applied_theme or self.host.current_theme()
        return PreferenceRecord(theme=theme, bg_mode=self.bg_mode)

    def _persist(self) -> bool:
        try:
            self.store.save(self.current_record())
        except PreferenceSaveError as e:
            logger.warning("%s", e)
            self.host.notify(str(e), NotifyLevel.ERROR)
            return False
        return True

    def apply_theme(self, theme: str | None) -> bool:
        """Activate and persist a theme. Returns True on success.

        Previews and confirmations both go through here, so every cursor move
        is a real, persisted theme change.
        """
        if not theme:
            return False
        try:
            self.host.activate_theme(theme)
        except ThemeActivationError as e:
            self.host.notify(f"Failed to apply theme: {theme}\n{e.reason}", NotifyLevel.ERROR)
            return False

        self.applied_theme = theme
        if self._persist():
            self.host.notify(f"Applied theme: {theme}", NotifyLevel.INFO)
        return True

    # ── Background commands ──

    def toggle_background(self) -> BackgroundMode:
        """Cycle terminal <-> blackout. Never lands on normal."""
        mode = BackgroundController.next_toggle(self.bg_mode)
        self._set_mode(mode)
        return mode

    def set_background(self, mode: BackgroundMode | str) -> bool:
        """Set an explicit background mode. Invalid input leaves state unchanged."""
        try:
            parsed = BackgroundMode.parse(mode)
        except ValueError as e:
            self.host.notify(str(e), NotifyLevel.ERROR)
            return False
        self._set_mode(parsed)
        return True

    def _set_mode(self, mode: BackgroundMode) -> None:
        self.bg_mode = mode
        self.background.apply(mode)
        self.host.notify(f"Background: {mode.label}", NotifyLevel.INFO)
        self._persist()

    # ── Picker lifecycle ──

    @property
    def is_open(self) -> bool:
        return self.session is not None and self.view.is_open

    def toggle_picker(self) -> None:
        if self.is_open:
            self.close_picker()
        else:
            self.open_picker()

    def open_picker(self) -> bool:
        """Open the picker on a fresh catalog snapshot."""
        if self.is_open:
            return True

        themes = list_themes(self.host)
        if not themes:
            self.host.notify("No themes found", NotifyLevel.WARN)
            return False

        current = self.host.current_theme() or DEFAULT_THEME_NAME
        self.session = PickerState.open(themes, current)
        self._pending_g = False
        surface = self.view.open(self.session)
        for key, command in self._keymap().items():
            self.host.bind_key(surface, key, command)
        self.render()
        return True

    def close_picker(self) -> None:
        self.view.close()
        self.session = None
        self._pending_g = False

    def render(self) -> None:
        if self.session is not None:
            self.view.render(self.session)

    # ── Picker commands ──

    def _navigate(self, move: Callable[[], bool]) -> None:
        if self.session is None or not move():
            return
        self.render()
        self.preview()

    def move_up(self) -> None:
        if self.session is not None:
            self._navigate(self.session.move_up)

    def move_down(self) -> None:
        if self.session is not None:
            self._navigate(self.session.move_down)

    def jump_top(self) -> None:
        if self.session is not None:
            self._navigate(self.session.jump_top)

    def jump_bottom(self) -> None:
        if self.session is not None:
            self._navigate(self.session.jump_bottom)

    def preview(self) -> None:
        """Apply the highlighted theme without closing the picker."""
        if self.session is None or self.session.search_active:
            return
        self.apply_theme(self.session.selected_theme())

    def confirm(self) -> None:
        """Apply the highlighted theme and close the picker."""
        if self.session is None:
            return
        self.apply_theme(self.session.selected_theme())
        self.close_picker()

    def enter_search(self) -> None:
        if self.session is not None:
            self.session.enter_search()
            self.render()

    def exit_search(self) -> None:
        if self.session is not None:
            self.session.exit_search()
            self.render()

    def clear_search(self) -> None:
        if self.session is not None:
            self.session.clear_search()
            self.render()

    def type_char(self, char: str) -> None:
        if self.session is not None and self.session.append_char(char):
            self.render()

    def backspace(self) -> None:
        if self.session is not None and self.session.backspace():
            self.render()

    # ── Key routing ──

    def _searching(self) -> bool:
        return self.session is not None and self.session.search_active

    def on_enter(self) -> None:
        if self._searching():
            self.exit_search()
        else:
            self.confirm()

    def on_escape(self) -> None:
        if self._searching():
            self.exit_search()
        else:
            self.close_picker()

    def on_char(self, char: str) -> None:
        """Search text while searching, otherwise a normal-mode command."""
        if self.session is None:
            return
        if self.session.search_active:
            self.type_char(char)
            return

        if char == "g":
            if self._pending_g:
                self._pending_g = False
                self.jump_top()
            else:
                self._pending_g = True
            return
        self._pending_g = False

        command = self._normal_char_commands().get(char)
        if command is not None:
            command()

    def _normal_char_commands(self) -> dict[str, Command]:
        return {
            "j": self.move_down,
            "k": self.move_up,
            "G": self.jump_bottom,
            "p": self.preview,
            "q": self.close_picker,
        }

    def _normal_only(self, command: Command) -> Command:
        def run() -> None:
            self._pending_g = False
            if not self._searching():
                command()

        return run

    def _any_mode(self, command: Command) -> Command:
        def run() -> None:
            self._pending_g = False
            command()

        return run

    def _keymap(self) -> dict[str, Command]:
        """Key names bound on the picker surface."""
        keymap: dict[str, Command] = {
            "<Down>": self._normal_only(self.move_down),
            "<Up>": self._normal_only(self.move_up),
            "<Home>": self._normal_only(self.jump_top),
            "<End>": self._normal_only(self.jump_bottom),
            "<Space>": self._normal_only(self.confirm),
            "<CR>": self._any_mode(self.on_enter),
            "<Esc>": self._any_mode(self.on_escape),
            "/": self._any_mode(self.enter_search),
            "<BS>": self._any_mode(self.backspace),
            "<C-c>": self._any_mode(self.clear_search),
        }
        for char in SEARCH_ALPHABET:
            keymap[char] = lambda c=char: self.on_char(c)
        return keymap

