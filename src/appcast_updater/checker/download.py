"""
Appcast downloading over HTTP.

Fetches the raw feed document with ``requests``. Manual checks pass
``DownloadFlags.NO_CACHED`` so that intermediate caches are bypassed and
freshly published releases are seen immediately.
"""

import logging
from enum import IntFlag

import requests

from appcast_updater.feed.errors import AppcastError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
#  Constants
# ---------------------------------------------------------------------------

REQUEST_TIMEOUT = 30  # seconds
DEFAULT_USER_AGENT = "appcast-updater"


class DownloadFlags(IntFlag):
    """Options for download_appcast()."""

    NONE = 0
    NO_CACHED = 1


class AppcastDownloadError(AppcastError):
    """The appcast could not be fetched."""


def download_appcast(
    url: str,
    flags: DownloadFlags = DownloadFlags.NONE,
    timeout: float = REQUEST_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> bytes:
    """
    Download the appcast document.

    Args:
        url: Appcast URL
        flags: Download options (e.g. DownloadFlags.NO_CACHED)
        timeout: Request timeout in seconds
        user_agent: User-Agent header value

    Returns:
        Raw response body

    Raises:
        AppcastDownloadError: On timeouts, connection failures and HTTP errors
    """
    headers = {"User-Agent": user_agent}
    if flags & DownloadFlags.NO_CACHED:
        headers["Cache-Control"] = "no-cache"
        headers["Pragma"] = "no-cache"

    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as exc:
        logger.error("Appcast request timed out: %s", url)
        raise AppcastDownloadError(f"Timed out downloading appcast from {url}") from exc
    except requests.exceptions.HTTPError as exc:
        logger.error("Appcast HTTP error for %s: %s", url, exc)
        raise AppcastDownloadError(f"HTTP error downloading appcast: {exc}") from exc
    except requests.exceptions.RequestException as exc:
        logger.error("Appcast request failed for %s: %s", url, exc)
        raise AppcastDownloadError(f"Failed to download appcast: {exc}") from exc

    logger.info("Downloaded appcast from %s (%d bytes)", url, len(response.content))
    return response.content
