"""
Appcast feed parsing and version comparison.

Modules:
- version: Sparkle-style version string comparator
- tokenizer: Push-based XML tokenizers (Expat by default)
- appcast: Event-driven appcast parser and update descriptor
- errors: Exceptions raised while loading feeds
"""

from appcast_updater.feed.appcast import (
    Appcast,
    AppcastLoader,
    AppcastParser,
    ParseResult,
    parse_appcast,
)
from appcast_updater.feed.errors import (
    AppcastError,
    MalformedAppcastError,
    TokenizerCreationError,
)
from appcast_updater.feed.version import compare_versions, is_newer

__all__ = [
    "Appcast",
    "AppcastLoader",
    "AppcastParser",
    "ParseResult",
    "parse_appcast",
    "AppcastError",
    "MalformedAppcastError",
    "TokenizerCreationError",
    "compare_versions",
    "is_newer",
]
