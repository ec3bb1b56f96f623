"""Exceptions raised while loading XDXF sources."""

from __future__ import annotations


class XdxfError(Exception):
    """Base class for every failure of a load/feed operation."""


class SourceReadError(XdxfError):
    """The source file could not be opened or decoded."""


class MalformedInputError(XdxfError):
    """The structural parser rejected the source text."""


class StructureError(XdxfError):
    """The document does not have the expected shape."""


class UndefinedAbbreviationError(XdxfError):
    """An article references an abbreviation missing from the table."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Undefined abbreviation: {key!r}")
        self.key = key
