"""Abbreviation table construction for ``<abbreviations>`` blocks."""

from __future__ import annotations

from typing import MutableMapping, Optional, Tuple

from xdxf_index.errors import StructureError

from .document import ELEMENT, TEXT, Node


def node_value(node: Optional[Node]) -> str:
    """Return the scalar text held by ``node``.

    A text node yields its own text; an element yields the text of its
    first child.
    """

    if node is None:
        raise StructureError("Invalid node provided: None")
    if node.kind == TEXT:
        return node.text or ""
    if node.kind != ELEMENT:
        raise StructureError(f"Invalid node provided: {node!r}")
    first = node.first_child()
    if first is None or first.kind != TEXT:
        raise StructureError(f"Invalid node provided: {first!r}")
    return first.text or ""


def parse_abbreviations(
    block: Node, table: Optional[MutableMapping[str, str]] = None
) -> MutableMapping[str, str]:
    """Add every ``abr_def`` of ``block`` to ``table`` and return it."""

    if table is None:
        table = {}
    for child in block.children:
        if child.kind == TEXT:
            if child.text and child.text.strip():
                raise StructureError(
                    f"Unexpected text inside abbreviations: {child.text.strip()!r}"
                )
            continue
        if child.kind != ELEMENT or child.tag != "abr_def":
            raise StructureError(f"Unexpected abbreviations child: {child!r}")
        key, value = parse_abbreviation(child)
        table[key] = value
    return table


def parse_abbreviation(definition: Node) -> Tuple[str, str]:
    """Return the ``(key, value)`` pair of one ``abr_def`` element."""

    parts = []
    for child in definition.children:
        if child.kind == TEXT and not (child.text or "").strip():
            continue
        parts.append(child)
    if len(parts) != 2 or any(part.kind != ELEMENT for part in parts):
        raise StructureError(
            f"Unexpected abbreviation child length: {len(parts)}"
        )

    first, second = parts
    if (first.tag, second.tag) == ("k", "v"):
        key_node, value_node = first, second
    elif (first.tag, second.tag) == ("v", "k"):
        key_node, value_node = second, first
    else:
        raise StructureError(
            f"Unexpected abbreviation content: <{first.tag}>, <{second.tag}>"
        )
    return node_value(key_node), node_value(value_node)
