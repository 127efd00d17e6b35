#!/usr/bin/env python3
"""Build the winner/bottom/spot-count report for a Random.org verify page.

Runs the same pipeline as ``POST /api/generate`` from the command line,
either against a live verify page or a saved copy.

Usage:
    # Live page by verify code (or full URL)
    python3 scripts/rounds_report.py --url abc123 --bottom 2

    # Saved page, report written to disk as well
    python3 scripts/rounds_report.py --html-file page.html --output report.json
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from giveaway.config import Settings
from giveaway.fetcher import load_verify_page
from giveaway.html_utils import read_file
from giveaway.io_utils import dumps_report, save_json
from giveaway.round_parser import extract_rounds
from giveaway.round_types import GiveawayError
from giveaway.views import build_report

log = logging.getLogger("rounds_report")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract giveaway rounds and print top/bottom lists and spot counts."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Verify URL or bare verify code")
    source.add_argument(
        "--html-file", type=Path, default=None, help="Saved verify page (HTML or text)"
    )
    parser.add_argument(
        "--bottom",
        type=int,
        default=1,
        help="How many trailing names per round in the bottom list (default: 1)",
    )
    parser.add_argument(
        "--output", type=Path, default=None, help="Also write the report JSON here"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def run(args: argparse.Namespace, settings: Settings) -> dict:
    """Load the page named by ``args`` and build its report."""
    if args.html_file is not None:
        log.info("Reading %s", args.html_file)
        document = read_file(args.html_file)
    else:
        log.info("Fetching %s", args.url)
        document = load_verify_page(args.url, settings)

    rounds = extract_rounds(document)
    log.info("Extracted %d rounds", len(rounds))
    return build_report(rounds, args.bottom)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        report = run(args, Settings.from_env())
    except GiveawayError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot read {args.html_file}: {e}", file=sys.stderr)
        return 1

    if args.output is not None:
        save_json(report, args.output)
        log.info("Wrote %s", args.output)

    sys.stdout.buffer.write(dumps_report(report))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
