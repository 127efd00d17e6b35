"""Random.org giveaway verify-page parsing: rounds, winner lists, spot counts."""

from giveaway.round_parser import extract_names, extract_rounds
from giveaway.round_types import (
    BotCheckDetected,
    ExtractionError,
    FetchError,
    GiveawayError,
    InvalidBottomCount,
    InvalidUrl,
    NoNamesParsed,
    NoRoundsFound,
    Round,
    RoundCollection,
    TwoLists,
)
from giveaway.views import build_report, build_spot_counts, build_two_lists

__all__ = [
    "BotCheckDetected",
    "ExtractionError",
    "FetchError",
    "GiveawayError",
    "InvalidBottomCount",
    "InvalidUrl",
    "NoNamesParsed",
    "NoRoundsFound",
    "Round",
    "RoundCollection",
    "TwoLists",
    "build_report",
    "build_spot_counts",
    "build_two_lists",
    "extract_names",
    "extract_rounds",
]
