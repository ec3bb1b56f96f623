from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from xdxf_index.models import Abbreviation, Article
from xdxf_index.parsing import ParsedSource
from xdxf_index.services.dictionary import Dictionary

LOGGER = logging.getLogger(__name__)

# Keeps IN (...) lists below SQLite's bound-parameter limit.
LOOKUP_CHUNK = 500


def truncate_tables(session: Session) -> None:
    session.execute(delete(Article))
    session.execute(delete(Abbreviation))


def _existing(session: Session, model, column, keys: List[str]) -> Dict[str, object]:
    rows: Dict[str, object] = {}
    for start in range(0, len(keys), LOOKUP_CHUNK):
        chunk = keys[start : start + LOOKUP_CHUNK]
        for row in session.execute(select(model).where(column.in_(chunk))).scalars():
            rows[getattr(row, column.key)] = row
    return rows


def _store(
    session: Session,
    abbreviations: Mapping[str, str],
    articles: Iterable[Tuple[str, str]],
    source: Optional[str],
) -> Dict[str, int]:
    abbreviation_rows = _existing(session, Abbreviation, Abbreviation.key, list(abbreviations))
    for key, value in abbreviations.items():
        row = abbreviation_rows.get(key)
        if row is None:
            session.add(Abbreviation(key=key, value=value))
        else:
            row.value = value

    entries = dict(articles)
    article_rows = _existing(session, Article, Article.headword, list(entries))
    for headword, content in entries.items():
        row = article_rows.get(headword)
        if row is None:
            session.add(Article(headword=headword, content=content, source=source))
        else:
            row.content = content
            if source is not None:
                row.source = source

    session.flush()
    return {"abbreviations": len(abbreviations), "articles": len(entries)}


def save_feed(
    session: Session,
    parsed: ParsedSource,
    *,
    source: Optional[str] = None,
    truncate: bool = False,
) -> Dict[str, int]:
    """Write the rows contributed by a single feed, tagged with ``source``.

    Rows that other sources contributed are left alone.
    """

    if truncate:
        truncate_tables(session)
    stats = _store(session, parsed.abbreviations, parsed.articles, source)
    LOGGER.info(
        "Stored %d abbreviations and %d articles from %s",
        stats["abbreviations"],
        stats["articles"],
        source or "<text>",
    )
    return stats


def save_dictionary(
    session: Session,
    dictionary: Dictionary,
    *,
    source: Optional[str] = None,
    truncate: bool = False,
) -> Dict[str, int]:
    """Write abbreviations and articles of ``dictionary`` to the database.

    Existing rows with the same key or headword are updated in place; their
    ``source`` is only replaced when one is given. The caller owns the
    transaction.
    """

    if truncate:
        truncate_tables(session)
    stats = _store(session, dictionary.abbreviations, dictionary.articles(), source)
    LOGGER.info(
        "Stored %d abbreviations and %d articles",
        stats["abbreviations"],
        stats["articles"],
    )
    return stats


def restore_dictionary(session: Session, dictionary: Optional[Dictionary] = None) -> Dictionary:
    """Fill ``dictionary`` (or a new one) from the stored tables."""

    if dictionary is None:
        dictionary = Dictionary()
    dictionary.add_abbreviations(
        dict(session.execute(select(Abbreviation.key, Abbreviation.value)).tuples())
    )
    rows = list(session.execute(select(Article.headword, Article.content)).tuples())
    dictionary.add_articles(rows)
    LOGGER.info("Restored %d articles from the database", len(rows))
    return dictionary


def count_rows(session: Session) -> Dict[str, int]:
    return {
        "articles": session.execute(select(func.count()).select_from(Article)).scalar() or 0,
        "abbreviations": session.execute(select(func.count()).select_from(Abbreviation)).scalar() or 0,
    }
