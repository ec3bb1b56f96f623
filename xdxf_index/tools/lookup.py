from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from xdxf_index.errors import XdxfError
from xdxf_index.importer import build_dictionary

LOGGER = logging.getLogger(__name__)


def _export_results(path: Path, payload: List[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Look up headwords by prefix in XDXF dictionaries.",
    )
    parser.add_argument("prefix", help="Headword prefix (at least 3 characters)")
    parser.add_argument("sources", nargs="+", type=Path, help="XDXF files to load")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Display at most N entries in the console",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional path to save all matches as JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )

    try:
        dictionary = build_dictionary(args.sources)
    except XdxfError as exc:
        LOGGER.error("Cannot load dictionary: %s", exc)
        return 1

    matches = dictionary.lookup(args.prefix)
    print(f"Matches for {args.prefix!r}: {len(matches)}")
    shown = matches if args.limit is None else matches[: max(0, args.limit)]
    for headword, content in shown:
        print(f"- {headword}")
        print(f"    {content}")

    if args.output:
        payload = [{"headword": headword, "content": content} for headword, content in matches]
        _export_results(args.output, payload)
        print(f"\nSaved {len(payload)} entries to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
