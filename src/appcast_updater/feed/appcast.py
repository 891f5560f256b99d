"""
Appcast feed parsing.

An appcast is an RSS document whose items describe releases of an
application. Each item may carry a release-notes link, a title, a
description and one or more ``enclosure`` elements whose attributes hold
the download URL and version:

    <rss xmlns:sparkle="http://www.andymatuschak.org/xml-namespaces/sparkle">
      <channel>
        <item>
          <title>Version 2.0</title>
          <sparkle:releaseNotesLink>https://example.com/notes/2.0</sparkle:releaseNotesLink>
          <enclosure url="https://example.com/app-2.0.exe"
                     sparkle:version="2.0"
                     sparkle:shortVersionString="2.0 (Build 200)"/>
        </item>
      </channel>
    </rss>

All items are visited. An enclosure is accepted only when its version is
strictly newer than the last accepted one, so the resulting descriptor
points at the highest-versioned enclosure seen.

Example:
    >>> result = parse_appcast(xml_bytes)
    >>> print(result.appcast.version, result.appcast.download_url)
"""

import json
import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional, Union

from appcast_updater.feed.tokenizer import NS_SEP, ExpatTokenizer, XmlTokenizer
from appcast_updater.feed.version import compare_versions

logger = logging.getLogger(__name__)

NS_SPARKLE = "http://www.andymatuschak.org/xml-namespaces/sparkle"


def _sparkle_name(local_name: str) -> str:
    return f"{NS_SPARKLE}{NS_SEP}{local_name}"


NODE_CHANNEL = "channel"
NODE_ITEM = "item"
NODE_RELNOTES = _sparkle_name("releaseNotesLink")
NODE_TITLE = "title"
NODE_DESCRIPTION = "description"
NODE_ENCLOSURE = "enclosure"
ATTR_URL = "url"
ATTR_VERSION = _sparkle_name("version")
ATTR_SHORTVERSION = _sparkle_name("shortVersionString")


# ---------------------------------------------------------------------------
#  Data models
# ---------------------------------------------------------------------------

@dataclass
class Appcast:
    """
    Update descriptor built from an appcast feed.

    Attributes:
        download_url: URL of the accepted enclosure
        version: Machine version of the accepted enclosure (sparkle:version)
        short_version_string: Human-readable version (sparkle:shortVersionString)
        title: Accumulated item title text
        description: Accumulated item description text
        release_notes_url: Accumulated sparkle:releaseNotesLink text
    """

    download_url: str = ""
    version: str = ""
    short_version_string: str = ""
    title: str = ""
    description: str = ""
    release_notes_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass
class ParseResult:
    """
    Result of parsing one appcast document.

    Attributes:
        appcast: The populated update descriptor
        last_version: Version of the last accepted enclosure; pass it to the
            next parse to keep filtering against it
    """

    appcast: Appcast
    last_version: str = ""


# ---------------------------------------------------------------------------
#  Parser state machine
# ---------------------------------------------------------------------------

class AppcastParser:
    """
    Event-driven appcast parser.

    Receives element start, element end and character data events and
    fills in an Appcast. Nesting is tracked with depth counters rather than
    element paths; counters never go below zero. The item counter is only
    ever raised: once the first item opens, everything up to the end of
    the channel is treated as item content.

    Attributes:
        appcast: Descriptor being populated
        last_version: Version of the last accepted enclosure
    """

    def __init__(
        self,
        appcast: Optional[Appcast] = None,
        last_version: str = "",
    ) -> None:
        self.appcast = appcast if appcast is not None else Appcast()
        self.last_version = last_version
        self.in_channel = 0
        self.in_item = 0
        self.in_relnotes = 0
        self.in_title = 0
        self.in_description = 0

    def start_element(self, name: str, attrs: Dict[str, str]) -> None:
        if name == NODE_CHANNEL:
            self.in_channel += 1
        elif self.in_channel and name == NODE_ITEM:
            self.in_item += 1
        elif self.in_item:
            if name == NODE_RELNOTES:
                self.in_relnotes += 1
            elif name == NODE_TITLE:
                self.in_title += 1
            elif name == NODE_DESCRIPTION:
                self.in_description += 1
            elif name == NODE_ENCLOSURE:
                self._on_enclosure(attrs)

    def end_element(self, name: str) -> None:
        if self.in_item and name == NODE_RELNOTES:
            self.in_relnotes = max(self.in_relnotes - 1, 0)
        elif self.in_item and name == NODE_TITLE:
            self.in_title = max(self.in_title - 1, 0)
        elif self.in_item and name == NODE_DESCRIPTION:
            self.in_description = max(self.in_description - 1, 0)
        elif name == NODE_CHANNEL:
            self.in_channel = max(self.in_channel - 1, 0)

    def character_data(self, text: str) -> None:
        if self.in_relnotes:
            self.appcast.release_notes_url += text
        elif self.in_title:
            self.appcast.title += text
        elif self.in_description:
            self.appcast.description += text

    def _on_enclosure(self, attrs: Dict[str, str]) -> None:
        version = attrs.get(ATTR_VERSION)

        if self.last_version:
            if version is None or compare_versions(self.last_version, version) >= 0:
                logger.debug(
                    "Ignoring enclosure %s (version %r, last accepted %r)",
                    attrs.get(ATTR_URL, ""),
                    version,
                    self.last_version,
                )
                return

        if ATTR_URL in attrs:
            self.appcast.download_url = attrs[ATTR_URL]
        if version is not None:
            self.appcast.version = version
            self.last_version = version
        if ATTR_SHORTVERSION in attrs:
            self.appcast.short_version_string = attrs[ATTR_SHORTVERSION]

        logger.debug("Accepted enclosure version %r", version)


# ---------------------------------------------------------------------------
#  Entry points
# ---------------------------------------------------------------------------

def parse_appcast(
    xml: Union[bytes, str],
    last_version: str = "",
    tokenizer_factory: Callable[[], XmlTokenizer] = ExpatTokenizer,
    appcast: Optional[Appcast] = None,
) -> ParseResult:
    """
    Parse an appcast document into an update descriptor.

    Args:
        xml: Raw feed document
        last_version: Version accepted by a previous parse, or "" if none.
            Enclosures must be strictly newer than this to be accepted.
        tokenizer_factory: Callable returning a fresh XmlTokenizer
        appcast: Descriptor to update in place (default: a new, empty one).
            Fields not touched by this document keep their values, so a
            descriptor filled by an earlier parse still describes that
            parse's enclosure when nothing newer is found.

    Returns:
        ParseResult with the descriptor and the updated last version

    Raises:
        TokenizerCreationError: If the XML engine cannot be created
        MalformedAppcastError: If the document is not well-formed; the
            descriptor may then be partially updated and should be discarded
    """
    parser = AppcastParser(appcast=appcast, last_version=last_version)

    tokenizer = tokenizer_factory()
    tokenizer.bind(parser)
    tokenizer.feed(xml, final=True)

    return ParseResult(appcast=parser.appcast, last_version=parser.last_version)


class AppcastLoader:
    """
    Loads successive appcast documents while remembering the last
    accepted version.

    Each load filters enclosures against the version accepted by all
    earlier loads through this instance. The enclosure fields (download
    URL, version, short version) carry over between loads, so the returned
    descriptor always points at the highest-versioned enclosure seen so
    far. Title, description and release-notes text start empty on every
    load. Loads are serialized, so one loader can be shared between threads.

    Example:
        >>> loader = AppcastLoader()
        >>> loader.load(first_feed).version
        '2.0'
        >>> loader.load(older_feed).version  # nothing newer than 2.0
        '2.0'
    """

    def __init__(
        self,
        last_version: str = "",
        tokenizer_factory: Callable[[], XmlTokenizer] = ExpatTokenizer,
    ) -> None:
        self._last_version = last_version
        self._appcast = Appcast()
        self._tokenizer_factory = tokenizer_factory
        self._lock = threading.Lock()

    @property
    def last_version(self) -> str:
        return self._last_version

    @property
    def appcast(self) -> Appcast:
        """Descriptor produced by the last successful load."""
        return self._appcast

    def load(self, xml: Union[bytes, str]) -> Appcast:
        """
        Parse a document, filtering against the remembered version.

        Args:
            xml: Raw feed document

        Returns:
            The populated Appcast

        Raises:
            AppcastError: If the document cannot be parsed; the remembered
                version and descriptor are left unchanged
        """
        with self._lock:
            previous = self._appcast
            appcast = Appcast(
                download_url=previous.download_url,
                version=previous.version,
                short_version_string=previous.short_version_string,
            )
            result = parse_appcast(
                xml,
                last_version=self._last_version,
                tokenizer_factory=self._tokenizer_factory,
                appcast=appcast,
            )
            self._last_version = result.last_version
            self._appcast = result.appcast
        return result.appcast

    def reset(self) -> None:
        """Forget the remembered version and descriptor."""
        with self._lock:
            self._last_version = ""
            self._appcast = Appcast()
