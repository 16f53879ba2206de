"""Persistence of the single {theme, bg_mode} preference record."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .types import PreferenceRecord

logger = logging.getLogger(__name__)

PREFS_FILENAME = "theme_switcher_prefs.json"


class PreferenceSaveError(RuntimeError):
    """Raised when the preference record could not be written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not save preferences to {path}: {reason}")


class PreferenceStore:
    """Load and save the preference record at a fixed path.

    The store always overwrites the whole file. Callers preserve fields by
    passing the complete current record.
    """

    def __init__(self, data_dir: Path):
        self.path = Path(data_dir) / PREFS_FILENAME

    def load(self) -> PreferenceRecord | None:
        """Read the record, or None when absent or unparseable."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.debug("Ignoring unreadable preferences %s: %s", self.path, e)
            return None

        if not isinstance(data, dict):
            logger.debug("Ignoring non-object preferences in %s", self.path)
            return None
        return PreferenceRecord.from_dict(data)

    def save(self, record: PreferenceRecord) -> None:
        """Write the full record atomically.

        Raises:
            PreferenceSaveError: If the directory or file cannot be written.
        """
        content = json.dumps(record.to_dict()) + "\n"
        fd = None
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            os.write(fd, content.encode("utf-8"))
            os.close(fd)
            fd = None
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise PreferenceSaveError(self.path, str(e)) from e
        finally:
            if fd is not None:
                os.close(fd)
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
        logger.debug("Saved preferences %s to %s", record.to_dict(), self.path)
