"""Reporting views derived from extracted rounds.

- ``build_two_lists`` — per-round winner (first name) and bottom-N names.
- ``build_spot_counts`` — how many spots each name holds in round 1.
- ``build_report`` — the JSON payload served by the API and the CLI.
"""
from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence
from typing import Any

from giveaway.html_utils import normalize_ws
from giveaway.round_types import InvalidBottomCount, Round, RoundCollection, TwoLists


def coerce_bottom_count(value: Any) -> int:
    """Turn request input (int, integral float, numeric string) into an int >= 1.

    Raises:
        InvalidBottomCount: Not a whole number, or below 1.
    """
    if isinstance(value, bool):
        raise InvalidBottomCount()
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise InvalidBottomCount() from None
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidBottomCount()
        value = int(value)
    if not isinstance(value, int) or value < 1:
        raise InvalidBottomCount()
    return value


def _round_label(r: Round, index: int) -> int:
    num = r.round
    if isinstance(num, float) and not math.isfinite(num):
        return index + 1
    return num


def build_two_lists(rounds: Sequence[Round], bottom_count: int) -> TwoLists:
    """Format the top and bottom-N lists, one entry per round, in sorted order.

    Bottom entries keep page order: with names ``[A, B, C]`` and
    ``bottom_count=2`` the entry is ``"<n>. B, C"``.

    Raises:
        InvalidBottomCount: ``bottom_count`` is not an int >= 1.
    """
    if isinstance(bottom_count, bool) or not isinstance(bottom_count, int) or bottom_count < 1:
        raise InvalidBottomCount(f"bottom_count must be an integer >= 1, got {bottom_count!r}")

    top: list[str] = []
    bottom: list[str] = []
    for i, r in enumerate(rounds):
        if not r.names:
            continue
        num = _round_label(r, i)
        top.append(f"{num}. {r.names[0]}")
        n = min(bottom_count, len(r.names))
        bottom.append(f"{num}. {', '.join(r.names[-n:])}")

    return TwoLists(top_list=tuple(top), bottom_list=tuple(bottom))


def _spot_round(rounds: RoundCollection | Sequence[Round]) -> Round | None:
    # Round numbered 1 if any, else the first round found on the page.
    discovered = rounds.discovered if isinstance(rounds, RoundCollection) else tuple(rounds)
    for r in discovered:
        if r.round == 1:
            return r
    return discovered[0] if discovered else None


def build_spot_counts(rounds: RoundCollection | Sequence[Round]) -> dict[str, int]:
    """Count each name's occurrences in the first round.

    A plain sequence is taken to be in discovery order. Names that normalize
    to empty are skipped; no rounds (or no names) gives an empty mapping.
    """
    r = _spot_round(rounds)
    if r is None:
        return {}

    counts: Counter[str] = Counter()
    for raw in r.names:
        name = normalize_ws(raw)
        if name:
            counts[name] += 1
    return dict(counts)


def build_report(rounds: RoundCollection, bottom_count: int) -> dict[str, Any]:
    """Assemble the success payload for one extraction run."""
    lists = build_two_lists(rounds, bottom_count)
    return {
        "ok": True,
        "roundsCount": len(rounds),
        "topList": list(lists.top_list),
        "bottomList": list(lists.bottom_list),
        "spotCounts": build_spot_counts(rounds),
    }
