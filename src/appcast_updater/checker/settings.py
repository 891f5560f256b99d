"""
Persistent updater settings.

Stores string and timestamp values in a small JSON file. The update checker
uses two keys: ``LastCheckTime`` and ``SkipThisVersion``.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

LAST_CHECK_TIME = "LastCheckTime"
SKIP_THIS_VERSION = "SkipThisVersion"


class SettingsStore:
    """
    Key-value settings backed by a JSON file.

    Every write is saved immediately. A missing file reads as empty; a
    corrupt file is logged and also read as empty.

    Example:
        >>> store = SettingsStore(Path("data/settings.json"))
        >>> store.write_config_value("SkipThisVersion", "2.0")
        >>> store.read_config_value("SkipThisVersion")
        '2.0'
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not load settings from %s: %s", self.path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.path)
            return {}
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
        )

    def read_config_value(self, key: str) -> Optional[str]:
        """
        Read a string value.

        Args:
            key: Setting name

        Returns:
            The stored value, or None if the key is not set
        """
        value = self._load().get(key)
        return None if value is None else str(value)

    def write_config_value(self, key: str, value: str) -> None:
        """Store a string value."""
        data = self._load()
        data[key] = value
        self._save(data)

    def delete_config_value(self, key: str) -> None:
        """Remove a value; missing keys are ignored."""
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def read_timestamp(self, key: str) -> Optional[datetime]:
        """
        Read a timestamp value.

        Accepts ISO-8601 strings and integer epoch seconds. Naive values
        are taken as UTC.

        Args:
            key: Setting name

        Returns:
            Timezone-aware datetime, or None if unset or unparseable
        """
        raw = self._load().get(key)
        if raw is None or raw == "":
            return None

        try:
            if isinstance(raw, (int, float)):
                return datetime.fromtimestamp(raw, tz=timezone.utc)
            parsed = date_parser.isoparse(str(raw))
        except (ValueError, OverflowError, OSError) as exc:
            logger.warning("Invalid timestamp for %s: %r (%s)", key, raw, exc)
            return None

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def write_timestamp(self, key: str, when: Optional[datetime] = None) -> None:
        """
        Store a timestamp as ISO-8601.

        Args:
            key: Setting name
            when: Time to store (default: now, UTC)
        """
        if when is None:
            when = datetime.now(timezone.utc)
        self.write_config_value(key, when.isoformat())
