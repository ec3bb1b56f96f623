"""Prefix-searchable index over XDXF dictionaries."""

from xdxf_index.errors import (
    MalformedInputError,
    SourceReadError,
    StructureError,
    UndefinedAbbreviationError,
    XdxfError,
)
from xdxf_index.services.dictionary import (
    Dictionary,
    FeedSummary,
    feed_from_path,
    feed_from_text,
    load_from_path,
    load_from_text,
    lookup,
)

__all__ = [
    "Dictionary",
    "FeedSummary",
    "MalformedInputError",
    "SourceReadError",
    "StructureError",
    "UndefinedAbbreviationError",
    "XdxfError",
    "feed_from_path",
    "feed_from_text",
    "load_from_path",
    "load_from_text",
    "lookup",
]
