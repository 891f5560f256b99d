"""Exceptions raised while loading appcast feeds."""

from typing import Optional


class AppcastError(Exception):
    """Base class for all appcast loading failures."""


class TokenizerCreationError(AppcastError):
    """The XML engine could not be initialized."""


class MalformedAppcastError(AppcastError, ValueError):
    """
    The feed document is not well-formed XML.

    Attributes:
        line: Line number reported by the XML engine, if known
        column: Column offset reported by the XML engine, if known
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
