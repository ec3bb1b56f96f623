"""Thin node model over lxml trees.

lxml keeps character data in ``element.text`` / ``element.tail``; the
formatter wants text as ordinary ordered children, so the tree is
re-expressed here as :class:`Node` objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from lxml import etree

from xdxf_index.errors import MalformedInputError


ELEMENT = "element"
TEXT = "text"
COMMENT = "comment"
PROCESSING_INSTRUCTION = "processing-instruction"
OTHER = "other"


@dataclass
class Node:
    kind: str
    tag: Optional[str] = None
    text: Optional[str] = None
    children: List["Node"] = field(default_factory=list)

    def first_child(self) -> Optional["Node"]:
        return self.children[0] if self.children else None

    def __repr__(self) -> str:
        if self.kind == ELEMENT:
            return f"<Node element {self.tag!r} ({len(self.children)} children)>"
        return f"<Node {self.kind} {self.text!r}>"


def text_node(value: str) -> Node:
    return Node(kind=TEXT, text=value)


def parse_document(text: str) -> Node:
    """Parse ``text`` and return the root element as a :class:`Node`."""

    parser = etree.XMLParser(
        encoding="utf-8",
        remove_blank_text=False,
        resolve_entities=False,
        no_network=True,
    )
    try:
        root = etree.fromstring(text.strip().encode("utf-8"), parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise MalformedInputError(f"Malformed XML: {exc}") from exc
    return _convert(root)


def _convert(item) -> Node:
    if item.tag is etree.Comment:
        return Node(kind=COMMENT, text=item.text)
    if item.tag is etree.PI:
        return Node(kind=PROCESSING_INSTRUCTION, text=item.text)
    # Entity references stay unresolved and surface as OTHER nodes.
    if not isinstance(item.tag, str):
        return Node(kind=OTHER, text=item.text)

    node = Node(kind=ELEMENT, tag=etree.QName(item).localname)
    if item.text:
        node.children.append(text_node(item.text))
    for child in item:
        node.children.append(_convert(child))
        if child.tail:
            node.children.append(text_node(child.tail))
    return node
