"""
Shared test fixtures.

Provides pytest fixtures for common test resources including:
- Sample appcast documents
- Temporary settings store
- Recording notifier
- Mock configuration
"""

from pathlib import Path
from typing import List, Tuple
from unittest.mock import MagicMock

import pytest

from appcast_updater.checker.notifiers import UpdateNotifier
from appcast_updater.checker.settings import SettingsStore
from appcast_updater.feed.appcast import Appcast


SPARKLE_NS = "http://www.andymatuschak.org/xml-namespaces/sparkle"


def make_feed(*items: str) -> bytes:
    """Wrap item XML fragments in an RSS channel with the sparkle namespace."""
    body = "\n".join(items)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<rss version="2.0" xmlns:sparkle="{SPARKLE_NS}">\n'
        "<channel>\n"
        "<title>Example App Changelog</title>\n"
        f"{body}\n"
        "</channel>\n"
        "</rss>\n"
    ).encode("utf-8")


def make_item(
    version: str,
    url: str = "",
    title: str = "",
    short_version: str = "",
    description: str = "",
    release_notes: str = "",
) -> str:
    """Build one <item> element with a single enclosure."""
    url = url or f"https://example.com/downloads/app-{version}.exe"
    parts = ["<item>"]
    if title:
        parts.append(f"<title>{title}</title>")
    if release_notes:
        parts.append(f"<sparkle:releaseNotesLink>{release_notes}</sparkle:releaseNotesLink>")
    if description:
        parts.append(f"<description>{description}</description>")
    short_attr = f' sparkle:shortVersionString="{short_version}"' if short_version else ""
    parts.append(
        f'<enclosure url="{url}" sparkle:version="{version}"{short_attr}'
        ' length="1024" type="application/octet-stream"/>'
    )
    parts.append("</item>")
    return "".join(parts)


class RecordingNotifier(UpdateNotifier):
    """Notifier that records every call for assertions."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, object]] = []

    def notify_update_available(self, appcast: Appcast) -> None:
        self.calls.append(("update_available", appcast))

    def notify_no_updates(self) -> None:
        self.calls.append(("no_updates", None))

    def notify_update_error(self, message: str) -> None:
        self.calls.append(("error", message))

    @property
    def kinds(self) -> List[str]:
        return [kind for kind, _ in self.calls]


@pytest.fixture
def two_item_feed() -> bytes:
    """Feed with versions 1.0 and 2.0, in that document order."""
    return make_feed(
        make_item("1.0", url="https://example.com/app-1.0.exe", title="Version 1.0"),
        make_item(
            "2.0",
            url="https://example.com/app-2.0.exe",
            title="Version 2.0",
            short_version="2.0 (Build 200)",
            release_notes="https://example.com/notes/2.0.html",
        ),
    )


@pytest.fixture
def settings_store(tmp_path: Path) -> SettingsStore:
    """Settings store writing into a temporary directory."""
    return SettingsStore(tmp_path / "settings.json")


@pytest.fixture
def recording_notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def test_config(tmp_path: Path) -> MagicMock:
    """
    Configuration stand-in with a feed URL and installed version 1.0.

    Args:
        tmp_path: pytest temporary directory

    Returns:
        MagicMock with the attributes UpdateChecker reads
    """
    cfg = MagicMock()
    cfg.appcast_url = "https://example.com/appcast.xml"
    cfg.app_version = "1.0"
    cfg.settings_path = tmp_path / "settings.json"
    cfg.request_timeout = 5
    cfg.user_agent = "appcast-updater-tests"
    cfg.notifier = "log"
    return cfg
