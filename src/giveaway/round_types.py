"""Core types for round extraction and reporting.

Type hierarchy:
  Round            — One numbered draw with its ordered names
  RoundAnchor      — Detected start of a round's content (element or offset)
  RoundCollection  — Sorted rounds plus the discovery order they came in
  TwoLists         — Top/bottom projections of a RoundCollection

Error taxonomy:
  GiveawayError
    ExtractionError   — NoRoundsFound, NoNamesParsed, InvalidBottomCount
    InvalidUrl
    FetchError
    BotCheckDetected

All dataclasses are frozen; a run builds them once and drops them at the end.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class GiveawayError(Exception):
    """Base class for errors surfaced to callers with a readable message."""

    default_message = "Giveaway processing failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ExtractionError(GiveawayError, ValueError):
    """The page or request parameters could not produce a report."""


class NoRoundsFound(ExtractionError):
    default_message = "No rounds found. Make sure you pasted a Random.org VERIFY link."


class NoNamesParsed(ExtractionError):
    default_message = "Rounds detected but no participant lines parsed."


class InvalidBottomCount(ExtractionError):
    default_message = "bottomMode must be a whole number 1, 2, 3, ..."


class InvalidUrl(GiveawayError, ValueError):
    default_message = "Missing url"


class FetchError(GiveawayError):
    """The verify page could not be retrieved."""

    default_message = "Fetch failed. Check the verify link/code."

    def __init__(self, message: str | None = None, *, status: int | None = None) -> None:
        self.status = status
        if message is None and status is not None:
            message = f"Fetch failed ({status}). Check the verify link/code."
        super().__init__(message)


class BotCheckDetected(GiveawayError):
    default_message = (
        "Random.org is blocking automated requests from your server (bot check)."
    )


# ---------------------------------------------------------------------------
# Rounds
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Round:
    """One numbered draw. Names keep page order; duplicates are meaningful."""

    round: int
    names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RoundAnchor:
    """Where a round's content starts.

    ``position`` is an index into the markup block list in markup mode and a
    character offset into the normalized body text in text mode.
    """

    round: int
    position: int


@dataclass(frozen=True, slots=True)
class RoundCollection:
    """Rounds sorted ascending by number, plus the order they were found in.

    Iterating, indexing and ``len`` all use the sorted view. ``discovered``
    keeps page order for consumers that want the first-processed round.
    """

    rounds: tuple[Round, ...]
    discovered: tuple[Round, ...]

    @classmethod
    def from_discovered(cls, found: list[Round]) -> RoundCollection:
        # sorted() is stable: repeated round numbers keep discovery order
        ordered = sorted(found, key=lambda r: r.round)
        return cls(rounds=tuple(ordered), discovered=tuple(found))

    def __iter__(self) -> Iterator[Round]:
        return iter(self.rounds)

    def __len__(self) -> int:
        return len(self.rounds)

    def __getitem__(self, index: int) -> Round:
        return self.rounds[index]


@dataclass(frozen=True, slots=True)
class TwoLists:
    """Per-round winner and bottom-N strings, formatted ``"<round>. <value>"``."""

    top_list: tuple[str, ...]
    bottom_list: tuple[str, ...]
