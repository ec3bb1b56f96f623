"""Rendering of ``<ar>`` articles into display markup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from xdxf_index.errors import StructureError, UndefinedAbbreviationError

from .abbreviations import node_value
from .document import COMMENT, ELEMENT, PROCESSING_INSTRUCTION, TEXT, Node
from .normalization import LINE_BREAK, normalize_whitespace


@dataclass
class FormatterContext:
    """State shared by the whole recursive descent of one article."""

    title: Optional[str] = None
    line_break_phase: bool = True


class ArticleFormatter:
    """Turns an article node tree into ``(headword, content)``."""

    def __init__(self, abbreviations: Mapping[str, str]) -> None:
        self.abbreviations = abbreviations
        self._handlers: Dict[str, Callable[[Node, FormatterContext, List[str]], None]] = {
            "k": self._format_headword,
            "pos": self._format_part_of_speech,
            "abr": self._format_abbreviation,
            "br": self._format_break,
            "ar": self._format_children,
        }

    def format_article(self, article: Node) -> Tuple[str, str]:
        context = FormatterContext()
        parts: List[str] = []
        self.format_node(article, context, parts)
        if context.title is None:
            raise StructureError("Article without headword")
        return context.title, "".join(parts)

    def format_node(self, node: Node, context: FormatterContext, out: List[str]) -> None:
        if node.kind == TEXT:
            text, context.line_break_phase = normalize_whitespace(
                node.text or "", context.line_break_phase
            )
            out.append(text)
        elif node.kind == ELEMENT:
            handler = self._handlers.get(node.tag, self._format_passthrough)
            handler(node, context, out)
        elif node.kind in (COMMENT, PROCESSING_INSTRUCTION):
            return
        else:
            raise StructureError(f"Unexpected node in article: {node!r}")

    def _format_children(self, node: Node, context: FormatterContext, out: List[str]) -> None:
        for child in node.children:
            self.format_node(child, context, out)

    def _format_headword(self, node: Node, context: FormatterContext, out: List[str]) -> None:
        title = node_value(node.first_child())
        if context.title is None:
            context.title = title

    def _format_part_of_speech(self, node: Node, context: FormatterContext, out: List[str]) -> None:
        context.line_break_phase = False
        out.append("<span class='partofspeech'>")
        self._format_children(node, context, out)
        out.append("</span>")

    def _format_abbreviation(self, node: Node, context: FormatterContext, out: List[str]) -> None:
        context.line_break_phase = False
        first = node.first_child()
        if first is None or first.kind != TEXT:
            raise StructureError(f"Abbreviation reference without text: {node!r}")
        key = first.text or ""
        try:
            expansion = self.abbreviations[key]
        except KeyError:
            raise UndefinedAbbreviationError(key) from None
        out.append(f"<acronym title='{expansion}'>{key}</acronym>")

    def _format_break(self, node: Node, context: FormatterContext, out: List[str]) -> None:
        # Explicit breaks only count before the first soft wrap or annotation.
        if context.line_break_phase:
            out.append(LINE_BREAK)

    def _format_passthrough(self, node: Node, context: FormatterContext, out: List[str]) -> None:
        out.append(f"<{node.tag}>")
        self._format_children(node, context, out)
        out.append(f"</{node.tag}>")


def format_article(article: Node, abbreviations: Mapping[str, str]) -> Tuple[str, str]:
    return ArticleFormatter(abbreviations).format_article(article)
