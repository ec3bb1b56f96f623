from __future__ import annotations

import bisect
import heapq
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

MIN_PREFIX_LENGTH = 3


class PrefixIndex:
    """Headword -> content mapping kept in code-point order for prefix scans."""

    def __init__(self) -> None:
        self._keys: List[str] = []
        self._values: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, headword: object) -> bool:
        return headword in self._values

    def insert(self, headword: str, content: str) -> None:
        if headword not in self._values:
            bisect.insort(self._keys, headword)
        self._values[headword] = content

    def update(self, items: Iterable[Tuple[str, str]]) -> None:
        """Insert many entries with a single merge of the sorted key list."""

        fresh: List[str] = []
        for headword, content in items:
            if headword not in self._values:
                fresh.append(headword)
            self._values[headword] = content
        if fresh:
            fresh.sort()
            self._keys = list(heapq.merge(self._keys, fresh))

    def get(self, headword: str) -> Optional[str]:
        return self._values.get(headword)

    def items(self) -> Iterator[Tuple[str, str]]:
        for key in self._keys:
            yield key, self._values[key]

    def headwords(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        """Headwords starting with ``prefix`` in ascending order."""

        if len(prefix) < MIN_PREFIX_LENGTH:
            return []
        result: List[str] = []
        start = bisect.bisect_left(self._keys, prefix)
        for index in range(start, len(self._keys)):
            key = self._keys[index]
            if not key.startswith(prefix):
                break
            result.append(key)
            if limit is not None and len(result) >= limit:
                break
        return result

    def lookup(self, prefix: str) -> List[Tuple[str, str]]:
        return [(key, self._values[key]) for key in self.headwords(prefix)]
