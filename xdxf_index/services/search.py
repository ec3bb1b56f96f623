from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Sequence

from xdxf_index.services.dictionary import Dictionary
from xdxf_index.services.prefix_index import MIN_PREFIX_LENGTH


def _suggest_limit() -> int:
    return int(os.getenv("XDXF_SUGGEST_LIMIT", "30"))


@dataclass
class SearchRow:
    headword: str
    content: str


class SearchService:
    def __init__(self, dictionary: Dictionary):
        self.dictionary = dictionary

    def search(self, query: str) -> dict:
        prepared = (query or "").strip()
        if len(prepared) < MIN_PREFIX_LENGTH:
            return {"count": 0, "entries": []}

        rows = [
            SearchRow(headword=headword, content=content)
            for headword, content in self.dictionary.lookup(prepared)
        ]
        return {"count": len(rows), "entries": self._render_rows(rows)}

    def suggest(self, term: str) -> List[dict]:
        prepared = (term or "").strip()
        if not prepared:
            return []

        variants = [prepared]
        for variant in (prepared.lower(), prepared.capitalize()):
            if variant not in variants:
                variants.append(variant)

        limit = _suggest_limit()
        seen = set()
        suggestions = []
        for variant in variants:
            for headword in self.dictionary.headwords(variant, limit=limit):
                if headword in seen:
                    continue
                seen.add(headword)
                suggestions.append({"label": headword, "value": headword})
        suggestions.sort(key=lambda item: item["value"])
        return suggestions[:limit]

    def _render_rows(self, rows: Sequence[SearchRow]) -> List[dict]:
        return [{"headword": row.headword, "content": row.content} for row in rows]
