"""CLI interface for theme-switcher.

Runs the terminal host interactively, or changes the saved preferences
without opening the UI.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from . import __version__, config
from .catalog import list_themes
from .switcher import ThemeSwitcher
from .terminal import TerminalHost
from .types import BackgroundMode, BorderStyle, NotifyLevel

console = Console(highlight=False)


def _build_switcher(args) -> tuple[TerminalHost, ThemeSwitcher]:
    cfg = config.load_config()
    try:
        picker_config = config.picker_config_from(
            cfg,
            width=getattr(args, "width", None),
            height=getattr(args, "height", None),
            border=getattr(args, "border", None),
        )
    except ValueError as e:
        console.print(f"Error: {e}", style="red", markup=False)
        sys.exit(1)
    host = TerminalHost()
    switcher = ThemeSwitcher(host, picker_config)
    return host, switcher


def _restore(host: TerminalHost, switcher: ThemeSwitcher) -> None:
    """Load saved preferences and run the deferred restore right away."""
    switcher.setup()
    host.run_deferred(wait=True)


def _report(host: TerminalHost) -> int:
    """Print the host's last notification. Returns an exit code."""
    if host.message is None:
        return 0
    message, level = host.message
    if level == NotifyLevel.ERROR:
        console.print(message, style="red", markup=False)
        return 1
    if level == NotifyLevel.WARN:
        console.print(message, style="yellow", markup=False)
        return 0
    console.print(message, markup=False)
    return 0


def cmd_run(args):
    """Start the interactive terminal host."""
    host, switcher = _build_switcher(args)
    switcher.setup()

    host.bind_global("t", switcher.toggle_picker)
    host.bind_global("b", switcher.toggle_background)
    host.bind_global("1", lambda: switcher.set_background(BackgroundMode.NATURAL))
    host.bind_global("2", lambda: switcher.set_background(BackgroundMode.TRANSPARENT))
    host.bind_global("3", lambda: switcher.set_background(BackgroundMode.BLACKOUT))
    host.bind_global("q", host.quit)

    if getattr(args, "pick", False):
        host.run_deferred(wait=True)
        switcher.open_picker()
    host.run()
    return 0


def cmd_pick(args):
    """Start the terminal host with the picker open."""
    args.pick = True
    return cmd_run(args)


def cmd_list(args):
    """Print the sorted theme catalog."""
    host, switcher = _build_switcher(args)
    _restore(host, switcher)
    current = host.current_theme()
    for name in list_themes(host):
        marker = "[cyan]>[/cyan]" if name == current else " "
        console.print(f"{marker} {name}")
    return 0


def cmd_status(args):
    """Show the saved preference record."""
    host, switcher = _build_switcher(args)
    prefs = switcher.store.load()
    console.print(f"Preferences: {switcher.store.path}")
    if prefs is None:
        console.print("[dim]No saved preferences[/dim]")
        return 0
    console.print(f"Theme: {prefs.theme or '(none)'}")
    console.print(f"Background: {prefs.bg_mode.value} ({prefs.bg_mode.label})")
    return 0


def cmd_bg(args):
    """Toggle or set the saved background mode."""
    host, switcher = _build_switcher(args)
    _restore(host, switcher)
    if args.bg_action == "toggle":
        switcher.toggle_background()
    else:
        switcher.set_background(args.mode)
    return _report(host)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="theme-switcher",
        description="theme-switcher: searchable theme picker with background modes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"theme-switcher {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--width", type=int, help="Picker width in columns")
    parser.add_argument("--height", type=int, help="Picker height in rows")
    parser.add_argument("--border", choices=[b.value for b in BorderStyle], help="Picker border style")

    subparsers = parser.add_subparsers(dest="command")

    # run
    run_p = subparsers.add_parser("run", help="Start the terminal editor (default)")
    run_p.set_defaults(func=cmd_run)

    # pick
    pick_p = subparsers.add_parser("pick", help="Start with the theme picker open")
    pick_p.set_defaults(func=cmd_pick)

    # list
    list_p = subparsers.add_parser("list", help="List available themes")
    list_p.set_defaults(func=cmd_list)

    # status
    status_p = subparsers.add_parser("status", help="Show saved preferences")
    status_p.set_defaults(func=cmd_status)

    # bg
    bg_p = subparsers.add_parser("bg", help="Change the background mode")
    bg_sub = bg_p.add_subparsers(dest="bg_action", required=True)
    bg_toggle_p = bg_sub.add_parser("toggle", help="Toggle terminal <-> blackout")
    bg_toggle_p.set_defaults(func=cmd_bg)
    bg_set_p = bg_sub.add_parser("set", help="Set normal, terminal or blackout")
    bg_set_p.add_argument("mode", help="normal | terminal | blackout")
    bg_set_p.set_defaults(func=cmd_bg)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    debug = args.debug or bool(config.load_config().get("debug"))
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if args.command is None:
            return cmd_run(args)
        return args.func(args)
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    sys.exit(main())
