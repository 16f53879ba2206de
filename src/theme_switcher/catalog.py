"""Theme catalog snapshot taken when the picker opens."""

from __future__ import annotations

from .host import EditorHost


def list_themes(host: EditorHost) -> list[str]:
    """Return the host's theme names, de-duplicated and sorted ascending."""
    return sorted({name for name in host.list_themes() if name})
