"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import http.server
import logging
import sys
from functools import partial

from garden_havens import __version__
from garden_havens.config import get_settings
from garden_havens.datasources.world_atlas import WORLD_TOPOLOGY_PATH
from garden_havens.flows.build import build_all
from garden_havens.flows.fetch import fetch_all
from garden_havens.preferences import PreferencesStore
from garden_havens.store import DataStore

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# (flag suffix, Preferences field) for the settings command's show/hide pairs
VISIBILITY_FLAGS: tuple[tuple[str, str], ...] = (
    ("image", "show_taxon_image"),
    ("range", "show_taxon_range"),
    ("status", "show_conservation_status"),
)


def setup_logging(debug: bool = False) -> None:
    """Configure root logging to the console."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="garden-havens",
        description="Species cards with orthographic globes and GBIF range maps",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'refresh' command - fetch data and build site
    subparsers.add_parser("refresh", help="Fetch data and build site")

    # 'serve' command - serve built site locally
    serve_parser = subparsers.add_parser("serve", help="Serve site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    # 'settings' command - show or change display preferences
    settings_parser = subparsers.add_parser("settings", help="Show or change card preferences")
    for flag, field in VISIBILITY_FLAGS:
        group = settings_parser.add_mutually_exclusive_group()
        group.add_argument(
            f"--show-{flag}",
            dest=field,
            action="store_const",
            const=True,
            default=None,
            help=f"Show the taxon {flag} section on cards",
        )
        group.add_argument(
            f"--hide-{flag}",
            dest=field,
            action="store_const",
            const=False,
            help=f"Hide the taxon {flag} section on cards",
        )
    settings_parser.add_argument(
        "--username",
        type=str,
        default=None,
        help="Wikimedia username (empty string clears it)",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Locale: {settings.locale}")
    print(f"Data directory: {settings.data_dir}")

    store = DataStore(settings.data_dir)
    fetched = store.fetched_at(WORLD_TOPOLOGY_PATH) or "never"
    state = "fresh" if store.is_fresh(WORLD_TOPOLOGY_PATH) else "stale"
    print(f"World topology: {fetched} ({state})")
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fetch data then build site."""
    settings = get_settings()
    print(f"Fetching data (up to {settings.occurrence_limit} occurrences per species)...")
    fetch_all(occurrence_limit=settings.occurrence_limit)

    print("Building site...")
    build_all()

    print("Done.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = settings.site_dir

    if not site_dir.exists():
        print("No site directory found. Run 'garden-havens refresh' first.", file=sys.stderr)
        return 1

    handler = partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def cmd_settings(args: argparse.Namespace) -> int:
    """Handle the 'settings' command: apply any changes, then print preferences."""
    store = PreferencesStore(get_settings().preferences_path)

    changes: dict[str, object] = {}
    for _flag, field in VISIBILITY_FLAGS:
        value = getattr(args, field, None)
        if value is not None:
            changes[field] = value
    if getattr(args, "username", None) is not None:
        changes["wikimedia_username"] = args.username

    preferences = store.update(**changes) if changes else store.load()
    if changes:
        print(f"Saved preferences to {store.path}")

    for key, value in preferences.to_storage().items():
        print(f"{key}: {value}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(debug=getattr(args, "debug", False) or get_settings().debug)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
        "settings": cmd_settings,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
