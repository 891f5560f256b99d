"""
Command-line interface for the appcast updater.

Usage:
    appcast-updater check                    # Check the configured appcast
    appcast-updater check --manual           # Bypass caches, ignore skipped version
    appcast-updater check --output-json      # JSON output for CI integration
    appcast-updater parse feed.xml           # Parse a local appcast file
    appcast-updater parse feed.xml --last-version 2.0
    appcast-updater compare 1.5 1.5b3        # Compare two version strings
    appcast-updater skip 2.0                 # Skip version 2.0 in automatic checks
"""

import argparse
import json
import sys
from pathlib import Path

from appcast_updater.config import get_config


def cmd_check(args):
    """Check the configured appcast for updates."""
    config = get_config()
    if not config.appcast_url:
        print("ERROR: No appcast URL configured.")
        print("Set APPCAST_UPDATER_APPCAST_URL or add appcast_url to updater.yaml")
        sys.exit(1)

    from appcast_updater.checker.notifiers import LoggingNotifier
    from appcast_updater.checker.update_checker import run_check

    # Keep stdout clean for machine-readable output
    notifier = LoggingNotifier() if args.output_json else None
    result = run_check(config=config, manual=args.manual, notifier=notifier)

    if args.output_json:
        print(result.to_json())

    if result.errors:
        sys.exit(1)


def cmd_parse(args):
    """Parse a local appcast file and print the resulting descriptor."""
    from appcast_updater.feed.appcast import parse_appcast
    from appcast_updater.feed.errors import AppcastError

    path = Path(args.file)
    if not path.exists():
        print(f"ERROR: File not found: {path}")
        sys.exit(1)

    try:
        result = parse_appcast(path.read_bytes(), last_version=args.last_version)
    except AppcastError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    appcast = result.appcast
    if args.output_json:
        data = appcast.to_dict()
        data["last_version"] = result.last_version
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    if not appcast.version:
        print("No acceptable enclosure found.")
        return

    print(f"Version:       {appcast.version}")
    if appcast.short_version_string:
        print(f"Short version: {appcast.short_version_string}")
    print(f"Download URL:  {appcast.download_url}")
    if appcast.title:
        print(f"Title:         {appcast.title.strip()}")
    if appcast.release_notes_url:
        print(f"Release notes: {appcast.release_notes_url.strip()}")


def cmd_compare(args):
    """Compare two version strings."""
    from appcast_updater.feed.version import compare_versions

    result = compare_versions(args.version_a, args.version_b)
    symbol = {-1: "<", 0: "=", 1: ">"}[result]
    print(f"{args.version_a} {symbol} {args.version_b}")


def cmd_skip(args):
    """Skip a version in automatic update checks."""
    from appcast_updater.checker.settings import SKIP_THIS_VERSION, SettingsStore

    config = get_config()
    store = SettingsStore(config.settings_path)
    store.write_config_value(SKIP_THIS_VERSION, args.version)
    print(f"Version {args.version} will be skipped in automatic checks.")


def main():
    parser = argparse.ArgumentParser(
        prog="appcast-updater",
        description="Appcast Updater -- check update feeds and compare versions",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check
    sub_check = subparsers.add_parser("check", help="Check the configured appcast for updates")
    sub_check.add_argument(
        "--manual",
        action="store_true",
        default=False,
        help="Bypass HTTP caches and offer skipped versions",
    )
    sub_check.add_argument(
        "--output-json",
        action="store_true",
        default=False,
        help="Output result as JSON (for CI/automation)",
    )
    sub_check.set_defaults(func=cmd_check)

    # parse
    sub_parse = subparsers.add_parser("parse", help="Parse a local appcast file")
    sub_parse.add_argument("file", help="Path to the appcast XML file")
    sub_parse.add_argument(
        "--last-version",
        default="",
        help="Only accept enclosures newer than this version",
    )
    sub_parse.add_argument(
        "--output-json",
        action="store_true",
        default=False,
        help="Output descriptor as JSON",
    )
    sub_parse.set_defaults(func=cmd_parse)

    # compare
    sub_compare = subparsers.add_parser("compare", help="Compare two version strings")
    sub_compare.add_argument("version_a", help="First version")
    sub_compare.add_argument("version_b", help="Second version")
    sub_compare.set_defaults(func=cmd_compare)

    # skip
    sub_skip = subparsers.add_parser("skip", help="Skip a version in automatic checks")
    sub_skip.add_argument("version", help="Version to skip")
    sub_skip.set_defaults(func=cmd_skip)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    args.func(args)


if __name__ == "__main__":
    main()
