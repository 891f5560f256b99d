"""
Notifiers that report the outcome of an update check.

A notifier has three entry points, one per outcome: an update is available,
no update was found, or the check failed. Notifiers are looked up by name
(as configured in ``Config.notifier``).

Supported notifiers:
- ``console`` -- prints a short message to stdout
- ``log`` -- writes to the ``appcast_updater`` logger

Example:
    >>> notifier = get_notifier("console")
    >>> notifier.notify_no_updates()
    You're up to date.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Type

from appcast_updater.feed.appcast import Appcast

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
#  Abstract notifier interface
# ---------------------------------------------------------------------------

class UpdateNotifier(ABC):
    """
    Abstract base class for update-check notifiers.

    Subclasses must implement:
        - ``notify_update_available()`` -- a newer version was found
        - ``notify_no_updates()`` -- the installed version is current
        - ``notify_update_error()`` -- the check failed
    """

    @abstractmethod
    def notify_update_available(self, appcast: Appcast) -> None:
        """
        Report that a newer version is available.

        Args:
            appcast: Descriptor of the available update
        """

    @abstractmethod
    def notify_no_updates(self) -> None:
        """Report that no update is available."""

    @abstractmethod
    def notify_update_error(self, message: str) -> None:
        """
        Report that the update check failed.

        Args:
            message: Human-readable error description
        """


def _display_version(appcast: Appcast) -> str:
    return appcast.short_version_string or appcast.version


# ---------------------------------------------------------------------------
#  Implementations
# ---------------------------------------------------------------------------

class LoggingNotifier(UpdateNotifier):
    """Reports check outcomes through the logging module."""

    def notify_update_available(self, appcast: Appcast) -> None:
        logger.info(
            "Update available: %s (%s)",
            _display_version(appcast),
            appcast.download_url,
        )

    def notify_no_updates(self) -> None:
        logger.info("No updates available")

    def notify_update_error(self, message: str) -> None:
        logger.error("Update check failed: %s", message)


class ConsoleNotifier(UpdateNotifier):
    """Prints check outcomes for interactive use."""

    def notify_update_available(self, appcast: Appcast) -> None:
        print(f"A new version is available: {_display_version(appcast)}")
        if appcast.title:
            print(f"  {appcast.title.strip()}")
        if appcast.download_url:
            print(f"  Download: {appcast.download_url}")
        if appcast.release_notes_url:
            print(f"  Release notes: {appcast.release_notes_url.strip()}")

    def notify_no_updates(self) -> None:
        print("You're up to date.")

    def notify_update_error(self, message: str) -> None:
        print(f"ERROR: Update check failed: {message}")


# ---------------------------------------------------------------------------
#  Notifier registry
# ---------------------------------------------------------------------------

_NOTIFIER_REGISTRY: Dict[str, Type[UpdateNotifier]] = {
    "console": ConsoleNotifier,
    "log": LoggingNotifier,
}


def get_notifier(name: str) -> UpdateNotifier:
    """
    Get an instantiated notifier by name.

    Args:
        name: Notifier name (e.g., "console")

    Returns:
        An UpdateNotifier instance

    Raises:
        ValueError: If the notifier name is not found in the registry
    """
    if name not in _NOTIFIER_REGISTRY:
        available = ", ".join(sorted(_NOTIFIER_REGISTRY.keys()))
        raise ValueError(
            f"Unknown notifier '{name}'. "
            f"Available notifiers: {available}"
        )
    return _NOTIFIER_REGISTRY[name]()


def list_notifiers() -> Dict[str, str]:
    """
    List all registered notifier names and their class names.

    Returns:
        Dictionary mapping notifier name to class name
    """
    return {name: cls.__name__ for name, cls in _NOTIFIER_REGISTRY.items()}
