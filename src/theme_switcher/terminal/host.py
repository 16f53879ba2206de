"""Terminal editor host built on Rich.Live and readchar.

TerminalHost is a small single-window "editor": it paints a sample buffer
with the active palette's style groups, shows a status line and a message
line, and draws picker surfaces as a centred panel. Keys are read one at a
time with readchar and dispatched to the focused surface's bindings, or to
the global bindings when no surface is open.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from pathlib import Path

import readchar
from rich import box
from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from .. import config
from ..host import Command, EditorHost, Surface, ThemeActivationError
from ..keys import key_names
from ..types import BorderStyle, NotifyLevel
from .palettes import GroupStyle, Palette, builtin_palettes, load_user_palettes

SAMPLE_BUFFER: tuple[str, ...] = (
    "# theme-switcher preview",
    "def greet(name):",
    '    message = "hello, " + name',
    "    return message",
    "",
    "class Palette:",
    '    """Colours for the editor chrome."""',
    "    accent = \"cyan\"",
)

KEYWORDS = {"def", "class", "return", "import", "from", "if", "else", "for", "in"}

_BORDER_BOXES = {
    BorderStyle.ROUNDED: box.ROUNDED,
    BorderStyle.SOLID: box.SQUARE,
    BorderStyle.DOUBLE: box.DOUBLE,
}

_NOTIFY_GROUPS = {
    NotifyLevel.INFO: "Normal",
    NotifyLevel.WARN: "WarningMsg",
    NotifyLevel.ERROR: "ErrorMsg",
}


def _calculate_visible_range(cursor: int, total: int, max_visible: int) -> tuple[int, int]:
    """Return [start, end) line indices that keep the cursor in view."""
    if total <= max_visible:
        return 0, total
    start = max(0, min(cursor - max_visible // 2, total - max_visible))
    return start, start + max_visible


class TerminalSurface(Surface):
    """Floating picker surface drawn by TerminalHost."""

    def __init__(self, width: int, height: int, row: int, col: int, border: BorderStyle, title: str):
        self.width = width
        self.height = height
        self.row = row
        self.col = col
        self.border = border
        self.title = title
        self.lines: list[str] = []
        self.cursor = 1
        self.keymap: dict[str, Command] = {}
        self._valid = True

    def set_lines(self, lines: list[str]) -> None:
        self.lines = list(lines)

    def set_cursor(self, line: int) -> None:
        self.cursor = max(1, min(line, max(1, len(self.lines))))

    def is_valid(self) -> bool:
        return self._valid

    def close(self) -> None:
        self._valid = False
        self.keymap.clear()


class TerminalHost(EditorHost):
    """EditorHost implementation for a plain terminal."""

    def __init__(
        self,
        console: Console | None = None,
        palettes: dict[str, Palette] | None = None,
        data_dir: Path | None = None,
    ):
        self.console = console or Console(highlight=False)
        if palettes is None:
            palettes = builtin_palettes()
            palettes.update(load_user_palettes(config.get_themes_dir()))
        self.palettes = palettes
        self._data_dir = data_dir
        self._theme: str | None = None
        self.groups: dict[str, GroupStyle] = {}
        self.surface: TerminalSurface | None = None
        self.global_keys: dict[str, Command] = {}
        self.message: tuple[str, NotifyLevel] | None = None
        self._deferred: list[tuple[float, int, Command]] = []
        self._deferred_seq = 0
        self.should_exit = False

        if "default" in self.palettes:
            self._theme = "default"
            self.groups = self.palettes["default"].copy_groups()

    # ── Themes ──

    def list_themes(self) -> Iterable[str]:
        return list(self.palettes)

    def activate_theme(self, name: str) -> None:
        palette = self.palettes.get(name)
        if palette is None:
            raise ThemeActivationError(name, f"Cannot find color scheme '{name}'")
        self.groups = palette.copy_groups()
        self._theme = name

    def current_theme(self) -> str | None:
        return self._theme

    # ── Style groups ──

    def get_group_background(self, group: str) -> str | None:
        style = self.groups.get(group)
        return style.bg if style else None

    def set_group_background(self, group: str, bg: str, cterm_bg: int | str | None = None) -> None:
        style = self.groups.get(group, GroupStyle())
        self.groups[group] = style.with_background(bg, cterm_bg)

    def style(self, group: str) -> Style:
        return self.groups.get(group, GroupStyle()).to_rich()

    # ── Surfaces and input ──

    def screen_size(self) -> tuple[int, int]:
        size = self.console.size
        return size.width, size.height

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
        if self.surface is not None:
            self.surface.close()
        self.surface = TerminalSurface(width, height, row, col, BorderStyle(border), title)
        return self.surface

    def bind_key(self, surface: Surface, key: str, command: Command) -> None:
        if isinstance(surface, TerminalSurface) and surface.is_valid():
            surface.keymap[key] = command

    def bind_global(self, key: str, command: Command) -> None:
        """Bind a key that works when no surface has focus."""
        self.global_keys[key] = command

    def dispatch(self, key: str) -> bool:
        """Run the command bound to a key name. Returns True if one ran."""
        if self.surface is not None and self.surface.is_valid():
            command = self.surface.keymap.get(key)
        else:
            command = self.global_keys.get(key)
        if command is None:
            return False
        command()
        return True

    # ── Environment ──

    def data_dir(self) -> Path:
        return self._data_dir or config.get_data_dir()

    def defer(self, delay_ms: int, callback: Command) -> None:
        due = time.monotonic() + max(0, delay_ms) / 1000.0
        self._deferred_seq += 1
        self._deferred.append((due, self._deferred_seq, callback))

    def run_deferred(self, wait: bool = True) -> int:
        """Run pending deferred callbacks in due order.

        With wait=True this sleeps until each one is due, otherwise only
        callbacks already due are run. Returns how many ran.
        """
        ran = 0
        self._deferred.sort(key=lambda entry: (entry[0], entry[1]))
        while self._deferred:
            due, _, callback = self._deferred[0]
            remaining = due - time.monotonic()
            if remaining > 0:
                if not wait:
                    break
                time.sleep(remaining)
            self._deferred.pop(0)
            callback()
            ran += 1
        return ran

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        self.message = (message, level)

    # ── Rendering ──

    def _render_code_line(self, line: str) -> Text:
        text = Text(line, style=self.style("Normal"))
        stripped = line.lstrip()
        if stripped.startswith("#"):
            text.stylize(self.style("Comment"))
            return text
        text.highlight_regex(r"\"[^\"]*\"", self.style("String"))
        for word in KEYWORDS:
            text.highlight_regex(rf"\b{word}\b", self.style("Keyword"))
        return text

    def render_editor(self) -> RenderableType:
        columns, lines = self.screen_size()
        body_height = max(1, lines - 3)
        rows: list[Text] = []
        for number in range(1, body_height + 1):
            row = Text(style=self.style("Normal"))
            if number <= len(SAMPLE_BUFFER):
                gutter = "CursorLineNr" if number == 1 else "LineNr"
                row.append(f"{number:>3} ", style=self.style(gutter))
                row.append_text(self._render_code_line(SAMPLE_BUFFER[number - 1]))
            else:
                row.append("~", style=self.style("EndOfBuffer"))
            row.pad_right(max(0, columns - row.cell_len))
            rows.append(row)
        return Group(*rows)

    def render_surface(self, surface: TerminalSurface) -> RenderableType:
        inner_height = surface.height
        start, end = _calculate_visible_range(surface.cursor - 1, len(surface.lines), inner_height)
        body = Text(style=self.style("NormalFloat"))
        for index in range(start, end):
            line_style = self.style("PmenuSel") if index == surface.cursor - 1 else None
            body.append(surface.lines[index].ljust(surface.width)[: surface.width], style=line_style)
            if index < end - 1:
                body.append("\n")

        if surface.border == BorderStyle.NONE:
            return Align.center(body, width=surface.width)
        return Align.center(
            Panel(
                body,
                title=surface.title.strip() or None,
                box=_BORDER_BOXES[surface.border],
                border_style=self.style("FloatBorder"),
                style=self.style("NormalFloat"),
                width=surface.width + 4,
            )
        )

    def render_status(self) -> Text:
        columns, _ = self.screen_size()
        status = Text(f" {self._theme or 'none'}", style=self.style("StatusLine"))
        hint = "t themes · b background · q quit "
        status.append(" " * max(1, columns - status.cell_len - len(hint)))
        status.append(hint)
        return status

    def render_message(self) -> Text:
        if self.message is None:
            return Text("")
        message, level = self.message
        first_line = message.splitlines()[0] if message else ""
        return Text(first_line, style=self.style(_NOTIFY_GROUPS[level]))

    def render(self) -> RenderableType:
        if self.surface is not None and self.surface.is_valid():
            main = self.render_surface(self.surface)
        else:
            main = self.render_editor()
        return Group(main, self.render_status(), self.render_message())

    # ── Event loop ──

    def quit(self) -> None:
        self.should_exit = True

    def run(self) -> None:
        """Read keys and dispatch them until quit() is called."""
        with Live(self.render(), console=self.console, refresh_per_second=20, screen=True) as live:
            while not self.should_exit:
                self.run_deferred(wait=True)
                live.update(self.render())
                try:
                    keys = key_names(readchar.readkey())
                except KeyboardInterrupt:
                    keys = ["<C-c>"]
                for key in keys:
                    if not self.dispatch(key) and key == "<C-c>":
                        self.should_exit = True
                    if self.should_exit:
                        break
