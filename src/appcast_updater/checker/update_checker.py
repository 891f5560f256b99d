"""
Update checking against an appcast feed.

Downloads the configured appcast, parses it, and compares the offered
version with the installed build version. The outcome is reported to a
notifier and returned as a CheckResult.

Two flavours exist:

1. **Automatic** -- ``UpdateChecker`` honours the version the user chose to
   skip and allows cached responses.
2. **Manual** -- ``ManualUpdateChecker`` is used when the user explicitly
   asks for a check: it bypasses HTTP caches and always reports the latest
   version, even one the user skipped before.

Example:
    >>> from appcast_updater.checker.update_checker import run_check
    >>> result = run_check(manual=True)
    >>> if result.has_update:
    ...     print(result.appcast.download_url)
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from appcast_updater.checker.download import DownloadFlags, download_appcast
from appcast_updater.checker.notifiers import UpdateNotifier, get_notifier
from appcast_updater.checker.settings import (
    LAST_CHECK_TIME,
    SKIP_THIS_VERSION,
    SettingsStore,
)
from appcast_updater.config import get_config
from appcast_updater.feed.appcast import Appcast, AppcastLoader
from appcast_updater.feed.errors import AppcastError
from appcast_updater.feed.version import compare_versions

logger = logging.getLogger(__name__)

STATUS_UPDATE_AVAILABLE = "update_available"
STATUS_NO_UPDATES = "no_updates"
STATUS_ERROR = "error"


# ---------------------------------------------------------------------------
#  Data models
# ---------------------------------------------------------------------------

@dataclass
class CheckResult:
    """
    Result of an update check.

    Attributes:
        status: One of "update_available", "no_updates" or "error"
        current_version: Installed build version the feed was compared with
        appcast: Parsed descriptor, if the feed was loaded
        skipped: True if a newer version exists but the user skipped it
        checked_at: ISO-8601 timestamp of when the check was performed
        errors: List of error messages encountered during the check
    """

    status: str = STATUS_NO_UPDATES
    current_version: str = ""
    appcast: Optional[Appcast] = None
    skipped: bool = False
    checked_at: str = ""
    errors: List[str] = field(default_factory=list)

    @property
    def has_update(self) -> bool:
        return self.status == STATUS_UPDATE_AVAILABLE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status,
            "has_update": self.has_update,
            "current_version": self.current_version,
            "appcast": self.appcast.to_dict() if self.appcast else None,
            "skipped": self.skipped,
            "checked_at": self.checked_at,
            "errors": self.errors,
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
#  Checkers
# ---------------------------------------------------------------------------

class UpdateChecker:
    """
    Checks the appcast for updates.

    Attributes:
        config: Application Config
        settings: Store for last check time and skipped version
        notifier: Receives the outcome of each check
        loader: Appcast loader; remembers the highest accepted version
            across the checks run by this instance
    """

    def __init__(
        self,
        config: Optional[Any] = None,
        settings: Optional[SettingsStore] = None,
        notifier: Optional[UpdateNotifier] = None,
        loader: Optional[AppcastLoader] = None,
    ) -> None:
        self.config = config if config is not None else get_config()
        self.settings = settings if settings is not None else SettingsStore(
            self.config.settings_path
        )
        self.notifier = notifier if notifier is not None else get_notifier(
            self.config.notifier
        )
        self.loader = loader if loader is not None else AppcastLoader()

    @property
    def current_version(self) -> str:
        return self.config.app_version

    def get_download_flags(self) -> DownloadFlags:
        """Flags used when downloading the appcast."""
        return DownloadFlags.NONE

    def should_skip_update(self, appcast: Appcast) -> bool:
        """Return True if the user chose to skip this appcast's version."""
        to_skip = self.settings.read_config_value(SKIP_THIS_VERSION)
        if to_skip is None:
            return False
        return to_skip == appcast.version

    def skip_version(self, version: str) -> None:
        """Remember that the user does not want to be offered this version."""
        self.settings.write_config_value(SKIP_THIS_VERSION, version)
        logger.info("Skipping version %s in automatic checks", version)

    def last_check_time(self) -> Optional[datetime]:
        """Time of the last successful appcast load, if any."""
        return self.settings.read_timestamp(LAST_CHECK_TIME)

    def run(self) -> CheckResult:
        """
        Run one update check.

        Returns:
            CheckResult describing the outcome; failures are reported in
            ``errors`` and to the notifier rather than raised
        """
        result = CheckResult(
            current_version=self.current_version,
            checked_at=datetime.now(timezone.utc).isoformat(),
        )

        try:
            url = self.config.appcast_url
            if not url:
                raise AppcastError("Appcast URL not specified.")

            xml = download_appcast(
                url,
                flags=self.get_download_flags(),
                timeout=self.config.request_timeout,
                user_agent=self.config.user_agent,
            )

            appcast = self.loader.load(xml)
            result.appcast = appcast

            self.settings.write_timestamp(LAST_CHECK_TIME)

            # The same or newer version is already installed
            if compare_versions(self.current_version, appcast.version) >= 0:
                logger.debug(
                    "Installed version %s is current (feed offers %r)",
                    self.current_version,
                    appcast.version,
                )
                result.status = STATUS_NO_UPDATES
                self.notifier.notify_no_updates()
                return result

            if self.should_skip_update(appcast):
                logger.info("Version %s is available but skipped", appcast.version)
                result.status = STATUS_NO_UPDATES
                result.skipped = True
                self.notifier.notify_no_updates()
                return result

            logger.info(
                "Update available: %s -> %s", self.current_version, appcast.version
            )
            result.status = STATUS_UPDATE_AVAILABLE
            self.notifier.notify_update_available(appcast)

        except (AppcastError, OSError) as exc:
            logger.error("Update check failed: %s", exc)
            result.status = STATUS_ERROR
            result.errors.append(str(exc))
            self.notifier.notify_update_error(str(exc))

        return result


class ManualUpdateChecker(UpdateChecker):
    """Update checker used when the user asks for a check explicitly."""

    def get_download_flags(self) -> DownloadFlags:
        # Always fetch a fresh copy of the feed
        return DownloadFlags.NO_CACHED

    def should_skip_update(self, appcast: Appcast) -> bool:
        # A skipped version is still offered when the user asks
        return False


# ---------------------------------------------------------------------------
#  Main entry point
# ---------------------------------------------------------------------------

def run_check(
    config: Optional[Any] = None,
    manual: bool = False,
    notifier: Optional[UpdateNotifier] = None,
) -> CheckResult:
    """
    Run a single update check with the configured collaborators.

    Args:
        config: Application Config object (optional, uses default if None)
        manual: If True, run a ManualUpdateChecker
        notifier: Notifier override (default: the one named in config)

    Returns:
        CheckResult for the check
    """
    if config is None:
        config = get_config()

    checker_class = ManualUpdateChecker if manual else UpdateChecker
    checker = checker_class(config=config, notifier=notifier)
    return checker.run()
