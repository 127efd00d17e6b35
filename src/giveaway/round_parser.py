"""Round extraction for Random.org giveaway verify pages.

Parses a verify page into numbered rounds, each holding the ordered list of
names drawn in that round.

2-strategy approach:
    1. Markup: find elements whose text carries "Result of Round #N" and
       collect the text of their following element siblings, up to the next
       heading.
    2. Text: if no element qualifies, scan the normalized body text for the
       same heading and slice between heading offsets.

Each chunk is then reduced to names by matching numbered lines
("1. 3. Name" or "3. Name").
"""
from __future__ import annotations

import re
from collections.abc import Callable

from bs4 import BeautifulSoup
from bs4.element import Tag

from giveaway.html_utils import body_text, element_text, load_markup, normalize_ws
from giveaway.round_types import (
    NoNamesParsed,
    NoRoundsFound,
    Round,
    RoundAnchor,
    RoundCollection,
)

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# Tags that can carry a round heading on the verify page family.
_HEADING_TAGS: list[str] = [
    "h1", "h2", "h3", "h4", "h5",
    "strong", "b", "p", "div", "span",
]

_ROUND_HEADING_RE = re.compile(r"Result of Round #(\d+)", re.IGNORECASE)

# Final round is rendered as "Result of Round #7 – FINAL".
_TEXT_HEADING_RE = re.compile(
    r"Result of Round #(\d+)(?:\s*[-\u2013\u2014]\s*FINAL)?",
    re.IGNORECASE,
)

# "1. 3. Alice" (ticket number, draw position, name)
_TWO_NUM_LINE_RE = re.compile(r"^\s*\d+\.\s*\d+\.\s*(.+?)\s*$")
# "3. Alice"
_ONE_NUM_LINE_RE = re.compile(r"^\s*\d+\.\s*(.+?)\s*$")

# One-number lines can be heading fragments ("1. Result of Round #2").
_STRAY_HEADING_RE = re.compile(r"Result of Round|Round #|Verification", re.IGNORECASE)

_ALL_DIGITS_RE = re.compile(r"^\d+$")
_INDEX_PREFIX_RE = re.compile(r"^\d+\s+(?=\S)")


# ---------------------------------------------------------------------------
# Name extraction
# ---------------------------------------------------------------------------


def clean_name(raw: str) -> str:
    """Normalize a captured name, dropping an accidental leading index.

    A purely numeric name ("56") is an entry slot used as a display name and
    is kept verbatim. Otherwise a leading digit run followed by a space and
    more text is removed ("5 Joe" -> "Joe").
    """
    value = normalize_ws(raw)
    if _ALL_DIGITS_RE.match(value):
        return value
    return _INDEX_PREFIX_RE.sub("", value).strip()


def extract_names(chunk: str) -> list[str]:
    """Convert one round's chunk into its ordered list of names.

    Lines that are not numbered are prose and skipped silently.
    """
    if not chunk:
        return []

    names: list[str] = []
    for raw_line in chunk.split("\n"):
        line = normalize_ws(raw_line)
        if not line:
            continue

        m = _TWO_NUM_LINE_RE.match(line)
        if m:
            name = clean_name(m.group(1))
            if name:
                names.append(name)
            continue

        m = _ONE_NUM_LINE_RE.match(line)
        if m:
            candidate = clean_name(m.group(1))
            if candidate and not _STRAY_HEADING_RE.search(candidate):
                names.append(candidate)

    return names


# ---------------------------------------------------------------------------
# Markup strategy
# ---------------------------------------------------------------------------


def _siblings_until_heading(el: Tag) -> tuple[str, ...]:
    """Normalized text of later element siblings, through the next heading.

    The walk ends at the first sibling that is itself a round heading; that
    sibling's text is the last entry so ``markup_chunk`` can see the boundary.
    """
    texts: list[str] = []
    for sib in el.next_siblings:
        if not isinstance(sib, Tag):
            continue
        text = element_text(sib)
        texts.append(text)
        if _ROUND_HEADING_RE.search(text):
            break
    return tuple(texts)


def locate_markup_anchors(
    soup: BeautifulSoup,
) -> list[tuple[RoundAnchor, tuple[str, ...]]]:
    """Find heading elements in document order.

    Returns one ``(anchor, following)`` pair per qualifying element, where
    ``following`` holds the normalized text of later element siblings up to
    and including the next heading. ``anchor.position`` is the element's index
    among all candidate tags.
    """
    found: list[tuple[RoundAnchor, tuple[str, ...]]] = []
    for pos, el in enumerate(soup.find_all(_HEADING_TAGS)):
        m = _ROUND_HEADING_RE.search(element_text(el))
        if not m:
            continue
        round_num = int(m.group(1)) if m.group(1) else len(found) + 1
        found.append((RoundAnchor(round=round_num, position=pos), _siblings_until_heading(el)))
    return found


def markup_chunk(following: tuple[str, ...]) -> str:
    """Join sibling texts up to (not including) the next round heading."""
    parts: list[str] = []
    for text in following:
        if _ROUND_HEADING_RE.search(text):
            break
        if text:
            parts.append(text)
    return normalize_ws("\n".join(parts))


def _rounds_from_markup(soup: BeautifulSoup) -> list[Round] | None:
    located = locate_markup_anchors(soup)
    if not located:
        return None
    rounds: list[Round] = []
    for anchor, following in located:
        names = extract_names(markup_chunk(following))
        if names:
            rounds.append(Round(round=anchor.round, names=tuple(names)))
    return rounds


# ---------------------------------------------------------------------------
# Text strategy
# ---------------------------------------------------------------------------


def locate_text_anchors(text: str) -> list[RoundAnchor]:
    """Find every round heading in normalized text, by character offset."""
    return [
        RoundAnchor(round=int(m.group(1)), position=m.start())
        for m in _TEXT_HEADING_RE.finditer(text)
    ]


def text_chunk(text: str, anchors: list[RoundAnchor], index: int) -> str:
    """Slice from one anchor's offset to the next (or to end of text)."""
    start = anchors[index].position
    end = anchors[index + 1].position if index + 1 < len(anchors) else len(text)
    return normalize_ws(text[start:end])


def _rounds_from_text(soup: BeautifulSoup) -> list[Round] | None:
    text = body_text(soup)
    anchors = locate_text_anchors(text)
    if not anchors:
        return None
    rounds: list[Round] = []
    for i, anchor in enumerate(anchors):
        names = extract_names(text_chunk(text, anchors, i))
        if names:
            rounds.append(Round(round=anchor.round, names=tuple(names)))
    return rounds


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

_STRATEGIES: tuple[Callable[[BeautifulSoup], list[Round] | None], ...] = (
    _rounds_from_markup,
    _rounds_from_text,
)


def extract_rounds(document: str) -> RoundCollection:
    """Parse a verify page (HTML or plain text) into sorted rounds.

    Strategies run in order; the first one that locates any heading wins,
    even if its chunks then yield no names.

    Raises:
        NoRoundsFound: No "Result of Round #N" heading in markup or text.
        NoNamesParsed: Headings found, but no chunk produced a name.
    """
    soup = load_markup(document)

    found: list[Round] | None = None
    for strategy in _STRATEGIES:
        found = strategy(soup)
        if found is not None:
            break

    if found is None:
        raise NoRoundsFound()
    if not found:
        raise NoNamesParsed()

    return RoundCollection.from_discovered(found)
