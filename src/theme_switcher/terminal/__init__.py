"""Terminal host: Rich rendering, readchar input, YAML palettes."""

from .host import TerminalHost, TerminalSurface
from .palettes import GroupStyle, Palette, builtin_palettes, load_user_palettes

__all__ = [
    "TerminalHost",
    "TerminalSurface",
    "GroupStyle",
    "Palette",
    "builtin_palettes",
    "load_user_palettes",
]
