"""
Update checking workflow built on the appcast parser.

Fetches the appcast, decides whether an update should be offered, records
the time of the check, and reports the outcome to a notifier.

Configuration via updater.yaml:
    updater:
      appcast_url: "https://example.com/appcast.xml"
      app_version: "1.4.2"
"""

from appcast_updater.checker.download import (
    AppcastDownloadError,
    DownloadFlags,
    download_appcast,
)
from appcast_updater.checker.notifiers import (
    ConsoleNotifier,
    LoggingNotifier,
    UpdateNotifier,
    get_notifier,
    list_notifiers,
)
from appcast_updater.checker.settings import SettingsStore
from appcast_updater.checker.update_checker import (
    CheckResult,
    ManualUpdateChecker,
    UpdateChecker,
    run_check,
)

__all__ = [
    "AppcastDownloadError",
    "DownloadFlags",
    "download_appcast",
    "ConsoleNotifier",
    "LoggingNotifier",
    "UpdateNotifier",
    "get_notifier",
    "list_notifiers",
    "SettingsStore",
    "CheckResult",
    "ManualUpdateChecker",
    "UpdateChecker",
    "run_check",
]
