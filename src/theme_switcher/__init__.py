"""theme-switcher: searchable theme picker with persisted background modes.

Example:
    from theme_switcher import ThemeSwitcher
    from theme_switcher.terminal import TerminalHost

    host = TerminalHost()
    switcher = ThemeSwitcher(host)
    switcher.setup()
    host.bind_global("t", switcher.toggle_picker)
    host.run()
"""

__version__ = "0.3.0"

from .background import BLACKOUT_GROUPS, TRANSPARENT_GROUPS, BackgroundController
from .host import EditorHost, Surface, ThemeActivationError
from .picker import PickerState, filter_themes
from .preferences import PreferenceSaveError, PreferenceStore
from .switcher import ThemeSwitcher
from .types import BackgroundMode, BorderStyle, PickerConfig, PickerMode, PreferenceRecord

__all__ = [
    "__version__",
    "ThemeSwitcher",
    "PickerState",
    "filter_themes",
    "PreferenceStore",
    "PreferenceSaveError",
    "BackgroundController",
    "TRANSPARENT_GROUPS",
    "BLACKOUT_GROUPS",
    "EditorHost",
    "Surface",
    "ThemeActivationError",
    "BackgroundMode",
    "BorderStyle",
    "PickerConfig",
    "PickerMode",
    "PreferenceRecord",
]
