"""Keyboard input helpers.

Raw keys from ``readchar.readkey()`` are normalised to the key names used
in picker key maps (``"<CR>"``, ``"<Esc>"``, ``"<Up>"``, plain characters).
"""

from __future__ import annotations

import readchar


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_interrupt(key: str) -> bool:
    """Check if key is Ctrl+C."""
    return key in (readchar.key.CTRL_C, "\x03")


_NAMED_KEYS: dict[str, str] = {
    readchar.key.UP: "<Up>",
    readchar.key.DOWN: "<Down>",
    readchar.key.LEFT: "<Left>",
    readchar.key.RIGHT: "<Right>",
    readchar.key.HOME: "<Home>",
    readchar.key.END: "<End>",
    readchar.key.TAB: "<Tab>",
    " ": "<Space>",
}


def key_name(key: str) -> str:
    """Map a raw key to its key-map name.

    Unknown multi-byte sequences are returned unchanged, so they simply
    match no binding.
    """
    if is_enter(key):
        return "<CR>"
    if is_escape(key):
        return "<Esc>"
    if is_backspace(key):
        return "<BS>"
    if is_interrupt(key):
        return "<C-c>"
    return _NAMED_KEYS.get(key, key)


def key_names(key: str) -> list[str]:
    """Split one ``readkey()`` result into key-map names.

    On POSIX a lone Esc makes ``readkey()`` wait for the next byte, so Esc
    followed by a plain key arrives as one two-character string.
    """
    if len(key) == 2 and key[0] == "\x1b" and key[1] not in ("\x1b", "[", "O"):
        return ["<Esc>", key_name(key[1])]
    return [key_name(key)]
