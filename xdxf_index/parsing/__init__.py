"""XDXF parsing: preprocessing, structural parsing and article rendering."""

from .abbreviations import node_value, parse_abbreviation, parse_abbreviations
from .document import Node, parse_document
from .formatter import ArticleFormatter, FormatterContext, format_article
from .normalization import LINE_BREAK, normalize_whitespace, reorder_acronyms
from .pipeline import ParsedSource, ParsingPipeline, parse_content

__all__ = [
    "ArticleFormatter",
    "FormatterContext",
    "LINE_BREAK",
    "Node",
    "ParsedSource",
    "ParsingPipeline",
    "format_article",
    "node_value",
    "normalize_whitespace",
    "parse_abbreviation",
    "parse_abbreviations",
    "parse_content",
    "parse_document",
    "reorder_acronyms",
]
