from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from xdxf_index.errors import SourceReadError
from xdxf_index.parsing import ParsedSource, ParsingPipeline
from xdxf_index.services.prefix_index import PrefixIndex

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class FeedSummary:
    abbreviations: int
    articles: int
    parsed: Optional[ParsedSource] = field(default=None, repr=False, compare=False)


class Dictionary:
    """In-memory XDXF dictionary: abbreviation table plus prefix index.

    Feeds are applied atomically: a source is parsed completely before any
    of it becomes visible, so a failing source leaves the dictionary as it
    was. Feeds are serialized against each other; lookups only wait for
    the final merge of a feed, never for its parsing.
    """

    def __init__(self) -> None:
        self._abbreviations: Dict[str, str] = {}
        self._index = PrefixIndex()
        self._lock = threading.RLock()
        self._feed_lock = threading.Lock()

    @classmethod
    def load_file(cls, path: PathLike) -> "Dictionary":
        dictionary = cls()
        dictionary.feed_file(path)
        return dictionary

    @classmethod
    def load_text(cls, text: str) -> "Dictionary":
        dictionary = cls()
        dictionary.feed_text(text)
        return dictionary

    @property
    def abbreviations(self) -> Mapping[str, str]:
        return MappingProxyType(self._abbreviations)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, headword: object) -> bool:
        return headword in self._index

    def feed_file(self, path: PathLike) -> FeedSummary:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError(f"Cannot read {path}: {exc}") from exc
        LOGGER.info("Feeding %s", path)
        return self.feed_text(text)

    def feed_text(self, text: str) -> FeedSummary:
        with self._feed_lock:
            parsed = ParsingPipeline(self._abbreviations).parse_content(text)
            with self._lock:
                self._commit(parsed)
        LOGGER.info(
            "Merged %d abbreviations and %d articles",
            len(parsed.abbreviations),
            len(parsed.articles),
        )
        return FeedSummary(
            abbreviations=len(parsed.abbreviations),
            articles=len(parsed.articles),
            parsed=parsed,
        )

    def add_abbreviation(self, key: str, value: str) -> None:
        with self._lock:
            self._abbreviations[key] = value

    def add_abbreviations(self, items: Mapping[str, str]) -> None:
        with self._lock:
            self._abbreviations.update(items)

    def add_article(self, headword: str, content: str) -> None:
        with self._lock:
            self._index.insert(headword, content)

    def add_articles(self, items: Iterable[Tuple[str, str]]) -> None:
        with self._lock:
            self._index.update(items)

    def lookup(self, prefix: str) -> List[Tuple[str, str]]:
        with self._lock:
            return self._index.lookup(prefix)

    def headwords(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        with self._lock:
            return self._index.headwords(prefix, limit=limit)

    def get(self, headword: str) -> Optional[str]:
        with self._lock:
            return self._index.get(headword)

    def articles(self) -> Iterator[Tuple[str, str]]:
        with self._lock:
            snapshot = list(self._index.items())
        return iter(snapshot)

    def _commit(self, parsed: ParsedSource) -> None:
        self._abbreviations.update(parsed.abbreviations)
        self._index.update(parsed.articles)


def load_from_path(path: PathLike) -> Dictionary:
    return Dictionary.load_file(path)


def load_from_text(text: str) -> Dictionary:
    return Dictionary.load_text(text)


def feed_from_path(dictionary: Dictionary, path: PathLike) -> FeedSummary:
    return dictionary.feed_file(path)


def feed_from_text(dictionary: Dictionary, text: str) -> FeedSummary:
    return dictionary.feed_text(text)


def lookup(dictionary: Dictionary, prefix: str) -> List[Tuple[str, str]]:
    return dictionary.lookup(prefix)
