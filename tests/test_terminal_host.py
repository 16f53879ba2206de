"""Tests for the Rich/readchar terminal host."""

import io

import pytest
from rich.console import Console

from theme_switcher.host import ThemeActivationError
from theme_switcher.switcher import ThemeSwitcher
from theme_switcher.terminal import TerminalHost, builtin_palettes
from theme_switcher.types import BackgroundMode, NotifyLevel, PickerConfig


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=100, height=30, color_system=None)


@pytest.fixture
def term(console, tmp_path):
    return TerminalHost(console=console, palettes=builtin_palettes(), data_dir=tmp_path / "data")


def output(console):
    return console.file.getvalue()


class TestThemes:
    def test_starts_on_default(self, term):
        assert term.current_theme() == "default"

    def test_activate_known_theme(self, term):
        term.activate_theme("nord")
        assert term.current_theme() == "nord"
        assert term.get_group_background("Normal") == "#2e3440"

    def test_activate_unknown_theme(self, term):
        with pytest.raises(ThemeActivationError) as exc_info:
            term.activate_theme("nope")
        assert exc_info.value.theme == "nope"
        assert term.current_theme() == "default"

    def test_set_background_keeps_foreground(self, term):
        term.activate_theme("gruvbox")
        term.set_group_background("LineNr", "#000000", 0)
        assert term.groups["LineNr"].fg == "#7c6f64"
        assert term.groups["LineNr"].cterm_bg == 0

    def test_reactivation_restores_palette(self, term):
        term.activate_theme("nord")
        term.set_group_background("Normal", "NONE", "NONE")
        term.activate_theme("nord")
        assert term.get_group_background("Normal") == "#2e3440"


class TestDispatch:
    def test_global_keys_without_surface(self, term):
        calls = []
        term.bind_global("t", lambda: calls.append("t"))
        assert term.dispatch("t") is True
        assert term.dispatch("x") is False
        assert calls == ["t"]

    def test_surface_keys_take_focus(self, term):
        calls = []
        term.bind_global("j", lambda: calls.append("global"))
        surface = term.open_surface(width=20, height=5, row=0, col=0, border="rounded")
        term.bind_key(surface, "j", lambda: calls.append("surface"))

        term.dispatch("j")
        surface.close()
        term.dispatch("j")
        assert calls == ["surface", "global"]


class TestDeferred:
    def test_runs_in_due_order_once(self, term):
        calls = []
        term.defer(5, lambda: calls.append("later"))
        term.defer(0, lambda: calls.append("now"))

        assert term.run_deferred(wait=True) == 2
        assert calls == ["now", "later"]
        assert term.run_deferred(wait=True) == 0

    def test_no_wait_leaves_future_callbacks(self, term):
        calls = []
        term.defer(60_000, lambda: calls.append("x"))
        assert term.run_deferred(wait=False) == 0
        assert calls == []


class TestRendering:
    def test_editor_shows_sample_buffer_and_status(self, term, console):
        term.activate_theme("desert")
        console.print(term.render())
        text = output(console)
        assert "def greet(name):" in text
        assert "desert" in text

    def test_picker_panel_rendered_with_switcher(self, term, console):
        switcher = ThemeSwitcher(term, PickerConfig(border="double"))
        switcher.open_picker()
        term.dispatch("j")
        console.print(term.render())

        text = output(console)
        assert "Search:" in text
        assert "> desert" in text
        assert "╔" in text

    def test_borderless_surface(self, term, console):
        switcher = ThemeSwitcher(term, PickerConfig(border="none"))
        switcher.open_picker()
        console.print(term.render())
        text = output(console)
        assert "Search:" in text
        assert "╭" not in text

    def test_notification_first_line_shown(self, term, console):
        term.notify("Failed to apply theme: x\nreason", NotifyLevel.ERROR)
        console.print(term.render_message())
        assert "Failed to apply theme: x" in output(console)
        assert "reason" not in output(console)


class TestSwitcherIntegration:
    def test_full_session_persists_choice(self, term):
        switcher = ThemeSwitcher(term)
        switcher.open_picker()
        for key in ["/", "n", "o", "r", "<CR>", "<CR>"]:
            term.dispatch(key)

        assert term.current_theme() == "nord"
        assert not switcher.is_open
        assert switcher.store.load().theme == "nord"

    def test_restore_on_next_launch(self, term, console, tmp_path):
        first = ThemeSwitcher(term)
        first.apply_theme("gruvbox")
        first.set_background(BackgroundMode.BLACKOUT)

        relaunched = TerminalHost(console=console, palettes=builtin_palettes(), data_dir=tmp_path / "data")
        second = ThemeSwitcher(relaunched)
        second.setup()
        relaunched.run_deferred(wait=True)

        assert relaunched.current_theme() == "gruvbox"
        assert relaunched.get_group_background("Normal") == "#000000"
        assert second.bg_mode == BackgroundMode.BLACKOUT

    def test_save_failure_stays_on_message_line(self, console, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        term = TerminalHost(console=console, palettes=builtin_palettes(), data_dir=blocker / "data")
        switcher = ThemeSwitcher(term)
        switcher.open_picker()

        switcher.move_down()
        assert term.current_theme() == "desert"
        message, level = term.message
        assert level == NotifyLevel.ERROR
        assert message.startswith("Could not save preferences")


class TestRunLoop:
    def test_escape_then_key_read_together(self, term, monkeypatch):
        switcher = ThemeSwitcher(term)
        term.bind_global("t", switcher.toggle_picker)
        term.bind_global("q", term.quit)
        pending = iter(["t", "\x1bq"])
        monkeypatch.setattr("theme_switcher.terminal.host.readchar.readkey", lambda: next(pending))

        term.run()

        assert not switcher.is_open
        assert term.should_exit
