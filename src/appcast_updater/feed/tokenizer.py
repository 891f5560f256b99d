"""
Push-based XML tokenizers that drive the appcast parser.

A tokenizer turns raw feed bytes into three kinds of events (element start,
element end, character data) and delivers them to a bound event handler.
Element and attribute names in a namespace are reported as
``<namespace-uri>#<local-name>``.

The Expat engine from the standard library is the default implementation.
Tests can bypass XML entirely by feeding events to the handler directly.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Protocol, Union
from xml.parsers import expat

from appcast_updater.feed.errors import MalformedAppcastError, TokenizerCreationError

logger = logging.getLogger(__name__)

NS_SEP = "#"


class XmlEventHandler(Protocol):
    """Receiver of tokenizer events."""

    def start_element(self, name: str, attrs: Dict[str, str]) -> None: ...

    def end_element(self, name: str) -> None: ...

    def character_data(self, text: str) -> None: ...


class XmlTokenizer(ABC):
    """
    Abstract base class for XML tokenizers.

    A tokenizer instance is used for a single document: bind a handler,
    then feed the document (in one or several chunks, the last one with
    ``final=True``).
    """

    @abstractmethod
    def bind(self, handler: XmlEventHandler) -> None:
        """
        Register the handler that receives start, end and text events.

        Args:
            handler: Object implementing the XmlEventHandler callbacks
        """

    @abstractmethod
    def feed(self, data: Union[bytes, str], final: bool = True) -> None:
        """
        Push document data through the tokenizer.

        Args:
            data: Raw document bytes (or text)
            final: True if this is the last chunk of the document

        Raises:
            MalformedAppcastError: If the document is not well-formed
        """


class ExpatTokenizer(XmlTokenizer):
    """Namespace-aware tokenizer backed by the Expat engine."""

    def __init__(self) -> None:
        try:
            self._parser = expat.ParserCreate(namespace_separator=NS_SEP)
        except (ValueError, TypeError, MemoryError) as exc:
            raise TokenizerCreationError(
                f"Failed to create XML parser: {exc}"
            ) from exc

    def bind(self, handler: XmlEventHandler) -> None:
        self._parser.StartElementHandler = handler.start_element
        self._parser.EndElementHandler = handler.end_element
        self._parser.CharacterDataHandler = handler.character_data

    def feed(self, data: Union[bytes, str], final: bool = True) -> None:
        try:
            self._parser.Parse(data, final)
        except expat.ExpatError as exc:
            message = f"XML parser error: {expat.ErrorString(exc.code)}"
            logger.debug(
                "%s (line %s, column %s)", message, exc.lineno, exc.offset
            )
            raise MalformedAppcastError(
                message, line=exc.lineno, column=exc.offset
            ) from exc
