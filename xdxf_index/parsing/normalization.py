"""Text-level rewrites applied to XDXF sources and article text."""

from __future__ import annotations

import re
from typing import Tuple

LINE_BREAK = "<br/>"

# Letters that may trail a <pos><abr>...</pos> marker in the Polish-Russian sources.
STEM_LETTERS = "a-zA-Zа-яА-ЯёЁłŁóÓńŃśŚćĆźŹżŻęĘąĄ"

ACRONYM_REGEX = re.compile(r"(<pos><abr>.*?</pos>)([" + STEM_LETTERS + r"]+)")
SOFT_WRAP_REGEX = re.compile(r"[\n ]\s+")
BLANK_LINE_REGEX = re.compile(r"^[ \t\n]+$", re.MULTILINE)


def reorder_acronyms(source: str) -> str:
    """Move word-stem letters trailing a part-of-speech marker in front of it.

    ``żó<pos><abr>rzecz.</abr></pos>łw`` becomes
    ``żółw<pos><abr>rzecz.</abr></pos>``.
    """

    return ACRONYM_REGEX.sub(r"\2\1", source)


def normalize_whitespace(text: str, line_break_phase: bool) -> Tuple[str, bool]:
    """Collapse pretty-printing whitespace in a text node.

    While ``line_break_phase`` is set the first soft-wrap run is dropped,
    which ends the phase. Every remaining run becomes a line break and
    whitespace-only lines are removed. Returns the text and the new phase.
    """

    if line_break_phase:
        stripped = SOFT_WRAP_REGEX.sub("", text, count=1)
        if stripped != text:
            line_break_phase = False
        text = stripped
    text = SOFT_WRAP_REGEX.sub(LINE_BREAK, text)
    text = BLANK_LINE_REGEX.sub("", text)
    return text, line_break_phase
