from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from xdxf_index.database import SessionLocal, init_db
from xdxf_index.errors import XdxfError
from xdxf_index.parsing import ParsedSource
from xdxf_index.services.dictionary import Dictionary
from xdxf_index.services.storage import count_rows, save_feed, truncate_tables

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[Dict[str, Any]], None]


def _make_notifier(callback: Optional[ProgressCallback]) -> Callable[..., None]:
    def _notify(stage: str, **payload: Any) -> None:
        if callback:
            callback({"stage": stage, **payload})

    return _notify


def feed_sources(
    dictionary: Dictionary,
    sources: Iterable[Path],
    status_callback: Optional[ProgressCallback] = None,
) -> List[Tuple[Path, ParsedSource]]:
    """Feed every source, in order, into ``dictionary``.

    Abbreviations defined by earlier sources are available to later ones.
    Returns what each source contributed, so it can be stored per source.
    """

    notify = _make_notifier(status_callback)
    paths: List[Path] = list(sources)
    feeds: List[Tuple[Path, ParsedSource]] = []
    for index, path in enumerate(paths, start=1):
        summary = dictionary.feed_file(path)
        LOGGER.info(
            "%s: %d abbreviations, %d articles",
            path,
            summary.abbreviations,
            summary.articles,
        )
        notify(
            "processing_files",
            current=index,
            total=len(paths),
            filename=path.name,
            articles=summary.articles,
        )
        feeds.append((path, summary.parsed))
    return feeds


def build_dictionary(
    sources: Iterable[Path],
    status_callback: Optional[ProgressCallback] = None,
) -> Dictionary:
    dictionary = Dictionary()
    feed_sources(dictionary, sources, status_callback=status_callback)
    return dictionary


def run_import(
    sources: Iterable[Path],
    truncate: bool = False,
    status_callback: Optional[ProgressCallback] = None,
) -> Dict[str, int]:
    notify = _make_notifier(status_callback)
    notify("initializing", message="Parsing sources")
    dictionary = Dictionary()
    feeds = feed_sources(dictionary, sources, status_callback=status_callback)

    init_db()
    with SessionLocal() as session:
        notify("storing", articles=len(dictionary))
        if truncate:
            truncate_tables(session)
        for path, parsed in feeds:
            save_feed(session, parsed, source=str(path))
        session.commit()
        stats = count_rows(session)
    LOGGER.info(
        "Database now holds %d articles and %d abbreviations",
        stats["articles"],
        stats["abbreviations"],
    )
    notify("completed", stats=stats)
    return stats


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import XDXF dictionaries into the lookup database."
    )
    parser.add_argument(
        "sources",
        nargs="+",
        type=Path,
        help="XDXF files, fed in the given order",
    )
    parser.add_argument(
        "--truncate",
        action="store_true",
        help="Remove stored articles and abbreviations before importing.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if not args.verbose else logging.DEBUG,
        format="%(levelname)s %(message)s",
    )
    try:
        run_import(args.sources, truncate=args.truncate)
    except XdxfError as exc:
        LOGGER.error("Import aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
