"""
Appcast Updater

Update-feed parsing and version comparison for software auto-update clients.
Parses Sparkle-style appcast feeds, compares free-form version strings, and
runs update checks against a configured feed.
"""

__version__ = "0.1.0"

from appcast_updater.config import Config

__all__ = ["Config", "__version__"]
