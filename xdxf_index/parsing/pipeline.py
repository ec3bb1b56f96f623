"""Document-level parsing of XDXF sources."""

from __future__ import annotations

import logging
from collections import ChainMap
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from .abbreviations import parse_abbreviations
from .document import ELEMENT, Node, parse_document
from .formatter import ArticleFormatter
from .normalization import reorder_acronyms

LOGGER = logging.getLogger(__name__)

ROOT_TAG = "xdxf"


@dataclass
class ParsedSource:
    """Everything one source contributes, not yet merged into a dictionary."""

    abbreviations: Dict[str, str] = field(default_factory=dict)
    articles: List[Tuple[str, str]] = field(default_factory=list)


class ParsingPipeline:
    """Routes the children of an ``<xdxf>`` root to their parsers.

    ``known_abbreviations`` are definitions already committed elsewhere;
    articles of this source can reference them, and definitions from the
    source itself take precedence.
    """

    def __init__(self, known_abbreviations: Optional[Mapping[str, str]] = None) -> None:
        self.known_abbreviations = known_abbreviations or {}

    def parse_content(self, content: str) -> ParsedSource:
        root = parse_document(reorder_acronyms(content))
        parsed = ParsedSource()
        if root.tag != ROOT_TAG:
            LOGGER.debug("Ignoring document with root <%s>", root.tag)
            return parsed
        self.parse_root(root, parsed)
        return parsed

    def parse_root(self, root: Node, parsed: ParsedSource) -> None:
        abbreviations = ChainMap(parsed.abbreviations, self.known_abbreviations)
        formatter = ArticleFormatter(abbreviations)
        for child in root.children:
            if child.kind != ELEMENT:
                continue
            if child.tag == "abbreviations":
                parse_abbreviations(child, parsed.abbreviations)
            elif child.tag == "ar":
                title, content = formatter.format_article(child)
                LOGGER.debug("Formatted article %r", title)
                parsed.articles.append((title, content))


def parse_content(content: str, known_abbreviations: Optional[Mapping[str, str]] = None) -> ParsedSource:
    """Convenience helper that parses the provided raw content."""

    return ParsingPipeline(known_abbreviations).parse_content(content)
