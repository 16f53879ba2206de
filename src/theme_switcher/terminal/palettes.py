"""Named palettes the terminal host can activate as themes.

A palette is a mapping of style-group name to GroupStyle. Built-in palettes
are expanded from a handful of base colours; users can add more as YAML
files in ~/.config/theme-switcher/themes/.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml
from rich.color import ColorParseError
from rich.style import Style

logger = logging.getLogger(__name__)

TRANSPARENT = "NONE"


@dataclass(frozen=True)
class GroupStyle:
    """Visual attributes of one style group."""

    fg: str | None = None
    bg: str | None = None
    cterm_bg: int | str | None = None
    bold: bool = False
    italic: bool = False

    def with_background(self, bg: str | None, cterm_bg: int | str | None = None) -> "GroupStyle":
        """Copy with a new background, every other attribute preserved."""
        return replace(self, bg=bg, cterm_bg=cterm_bg)

    def to_rich(self) -> Style:
        bgcolor = None if self.bg in (None, TRANSPARENT) else self.bg
        return Style(color=self.fg, bgcolor=bgcolor, bold=self.bold, italic=self.italic)


@dataclass(frozen=True)
class BasePalette:
    """Base colours a full palette is expanded from."""

    background: str | None
    foreground: str
    accent: str
    muted: str
    comment: str
    keyword: str
    string: str
    surface: str | None = None


@dataclass
class Palette:
    name: str
    groups: dict[str, GroupStyle] = field(default_factory=dict)

    def copy_groups(self) -> dict[str, GroupStyle]:
        return dict(self.groups)


def expand_palette(name: str, base: BasePalette) -> Palette:
    """Build the full group table from base colours."""
    bg = base.background
    panel = base.surface or bg
    groups = {
        "Normal": GroupStyle(fg=base.foreground, bg=bg),
        "NormalNC": GroupStyle(fg=base.foreground, bg=bg),
        "NormalFloat": GroupStyle(fg=base.foreground, bg=panel),
        "NormalSB": GroupStyle(fg=base.foreground, bg=panel),
        "FloatBorder": GroupStyle(fg=base.accent, bg=panel),
        "SignColumn": GroupStyle(bg=bg),
        "EndOfBuffer": GroupStyle(fg=base.muted, bg=bg),
        "NonText": GroupStyle(fg=base.muted, bg=bg),
        "LineNr": GroupStyle(fg=base.muted, bg=bg),
        "LineNrAbove": GroupStyle(fg=base.muted, bg=bg),
        "LineNrBelow": GroupStyle(fg=base.muted, bg=bg),
        "CursorLineNr": GroupStyle(fg=base.accent, bg=bg, bold=True),
        "Folded": GroupStyle(fg=base.comment, bg=panel),
        "FoldColumn": GroupStyle(fg=base.muted, bg=bg),
        "VertSplit": GroupStyle(fg=base.muted, bg=bg),
        "WinSeparator": GroupStyle(fg=base.muted, bg=bg),
        "StatusLine": GroupStyle(fg=base.foreground, bg=panel, bold=True),
        "StatusLineNC": GroupStyle(fg=base.muted, bg=panel),
        "TabLine": GroupStyle(fg=base.muted, bg=panel),
        "TabLineFill": GroupStyle(bg=panel),
        "TabLineSel": GroupStyle(fg=base.accent, bg=bg, bold=True),
        "Pmenu": GroupStyle(fg=base.foreground, bg=panel),
        "PmenuSel": GroupStyle(fg=bg or "black", bg=base.accent),
        "Visual": GroupStyle(fg=bg or "black", bg=base.accent),
        "Comment": GroupStyle(fg=base.comment, italic=True),
        "Keyword": GroupStyle(fg=base.keyword, bold=True),
        "String": GroupStyle(fg=base.string),
        "ErrorMsg": GroupStyle(fg="red", bold=True),
        "WarningMsg": GroupStyle(fg="yellow"),
        "SnacksDashboardNormal": GroupStyle(fg=base.foreground, bg=bg),
        "SnacksDashboardFooter": GroupStyle(fg=base.comment, bg=bg),
    }
    return Palette(name=name, groups=groups)


_BUILTIN_BASES: dict[str, BasePalette] = {
    "default": BasePalette(
        background=None,
        foreground="default",
        accent="cyan",
        muted="grey50",
        comment="grey50",
        keyword="magenta",
        string="green",
    ),
    "desert": BasePalette(
        background="#333333",
        foreground="#ffffff",
        accent="#f0e68c",
        muted="#808080",
        comment="#87ceeb",
        keyword="#f0e68c",
        string="#ffa0a0",
        surface="#4d4d4d",
    ),
    "gruvbox": BasePalette(
        background="#282828",
        foreground="#ebdbb2",
        accent="#fabd2f",
        muted="#7c6f64",
        comment="#928374",
        keyword="#fb4934",
        string="#b8bb26",
        surface="#3c3836",
    ),
    "nord": BasePalette(
        background="#2e3440",
        foreground="#d8dee9",
        accent="#88c0d0",
        muted="#4c566a",
        comment="#616e88",
        keyword="#81a1c1",
        string="#a3be8c",
        surface="#3b4252",
    ),
    "tokyonight": BasePalette(
        background="#1a1b26",
        foreground="#c0caf5",
        accent="#7aa2f7",
        muted="#3b4261",
        comment="#565f89",
        keyword="#bb9af7",
        string="#9ece6a",
        surface="#16161e",
    ),
    "dracula": BasePalette(
        background="#282a36",
        foreground="#f8f8f2",
        accent="#bd93f9",
        muted="#6272a4",
        comment="#6272a4",
        keyword="#ff79c6",
        string="#f1fa8c",
        surface="#21222c",
    ),
    "solarized-dark": BasePalette(
        background="#002b36",
        foreground="#839496",
        accent="#268bd2",
        muted="#586e75",
        comment="#586e75",
        keyword="#859900",
        string="#2aa198",
        surface="#073642",
    ),
    "rose-pine": BasePalette(
        background="#191724",
        foreground="#e0def4",
        accent="#ebbcba",
        muted="#6e6a86",
        comment="#6e6a86",
        keyword="#31748f",
        string="#f6c177",
        surface="#1f1d2e",
    ),
    "everforest": BasePalette(
        background="#2d353b",
        foreground="#d3c6aa",
        accent="#a7c080",
        muted="#7a8478",
        comment="#859289",
        keyword="#e67e80",
        string="#dbbc7f",
        surface="#343f44",
    ),
}


def builtin_palettes() -> dict[str, Palette]:
    return {name: expand_palette(name, base) for name, base in _BUILTIN_BASES.items()}


def _parse_group(name: str, raw: Any) -> GroupStyle:
    if not isinstance(raw, dict):
        raise ValueError(f"group {name!r} must be a mapping")
    return GroupStyle(
        fg=raw.get("fg"),
        bg=raw.get("bg"),
        cterm_bg=raw.get("ctermbg"),
        bold=bool(raw.get("bold", False)),
        italic=bool(raw.get("italic", False)),
    )


def parse_palette(data: Any, default_name: str) -> Palette:
    """Build a palette from decoded YAML.

    Expected shape::

        name: my-theme
        base: {background: "#1e1e1e", foreground: "#d4d4d4", accent: "#569cd6"}
        groups:
          StatusLine: {fg: "#ffffff", bg: "#007acc", bold: true}

    Raises:
        ValueError: If the document is not a usable palette.
    """
    if not isinstance(data, dict):
        raise ValueError("palette file must contain a mapping")

    name = str(data.get("name") or default_name).strip()
    if not name:
        raise ValueError("palette has no name")

    base_raw = data.get("base") or {}
    if not isinstance(base_raw, dict):
        raise ValueError("'base' must be a mapping")
    foreground = base_raw.get("foreground", "default")
    base = BasePalette(
        background=base_raw.get("background"),
        foreground=foreground,
        accent=base_raw.get("accent", "cyan"),
        muted=base_raw.get("muted", "grey50"),
        comment=base_raw.get("comment", base_raw.get("muted", "grey50")),
        keyword=base_raw.get("keyword", base_raw.get("accent", "cyan")),
        string=base_raw.get("string", foreground),
        surface=base_raw.get("surface"),
    )
    palette = expand_palette(name, base)

    groups_raw = data.get("groups") or {}
    if not isinstance(groups_raw, dict):
        raise ValueError("'groups' must be a mapping")
    for group, raw in groups_raw.items():
        palette.groups[str(group)] = _parse_group(str(group), raw)

    for group, style in palette.groups.items():
        try:
            style.to_rich()
        except ColorParseError as e:
            raise ValueError(f"group {group!r}: {e}") from e
    return palette


def load_palette_file(path: Path) -> Palette:
    """Load one palette YAML file.

    Raises:
        ValueError: If the file cannot be read or parsed.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(str(e)) from e
    return parse_palette(data, default_name=path.stem)


def load_user_palettes(themes_dir: Path) -> dict[str, Palette]:
    """Load every *.yaml / *.yml palette in a directory, skipping bad files."""
    palettes: dict[str, Palette] = {}
    if not themes_dir.is_dir():
        return palettes

    for path in sorted(themes_dir.iterdir()):
        if path.suffix not in (".yaml", ".yml") or not path.is_file():
            continue
        try:
            palette = load_palette_file(path)
        except ValueError as e:
            logger.warning("Skipping palette %s: %s", path, e)
            continue
        palettes[palette.name] = palette
    return palettes
