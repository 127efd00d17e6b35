"""Whitespace normalization and markup loading for verify pages.

Random.org verify pages mix NBSP and friends into otherwise plain text, so
every string that crosses a parsing boundary goes through ``normalize_ws``.

Two read paths:
- ``load_markup`` / ``element_text`` — bs4 tree access for the markup locator.
- ``body_text`` — normalized full-document text for the text-mode fallback.

Encoding-safe file reading is used by the CLI for saved pages.
"""
from __future__ import annotations

import re
from pathlib import Path

from bs4 import BeautifulSoup
from bs4.element import Tag

# ---------------------------------------------------------------------------
# Whitespace normalization
# ---------------------------------------------------------------------------

# U+00A0 (NBSP), U+202F (narrow NBSP), U+2007 (figure space)
_WIDE_SPACE_RE = re.compile("[\u00a0\u202f\u2007]")
_HSPACE_RUN_RE = re.compile(r"[ \t]+")


def normalize_ws(text: str | None) -> str:
    """Canonicalize whitespace variants to ASCII spacing and trim the ends.

    Carriage returns are dropped, exotic spaces become plain spaces, and
    space/tab runs collapse to one space. Newlines are preserved.
    ``None`` and empty input yield ``""``.
    """
    if not text:
        return ""
    text = text.replace("\r", "")
    text = _WIDE_SPACE_RE.sub(" ", text)
    text = _HSPACE_RUN_RE.sub(" ", text)
    return text.strip()


# ---------------------------------------------------------------------------
# Markup access
# ---------------------------------------------------------------------------


def load_markup(raw_html: str) -> BeautifulSoup:
    """Parse raw HTML (or plain text) into a bs4 tree."""
    return BeautifulSoup(raw_html or "", "html.parser")


def element_text(el: Tag) -> str:
    """Normalized text content of an element and all its descendants."""
    return normalize_ws(el.get_text())


def body_text(soup: BeautifulSoup) -> str:
    """Normalized text of ``<body>``, or of the whole document if absent."""
    body = soup.body
    if body is not None:
        return element_text(body)
    return normalize_ws(soup.get_text())


# ---------------------------------------------------------------------------
# Encoding-safe file reading
# ---------------------------------------------------------------------------


def read_file(fpath: Path) -> str:
    """Read a saved page with encoding fallback: UTF-8 -> CP1252 -> replace.

    Raises:
        OSError: If the file cannot be opened.
    """
    try:
        return fpath.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        try:
            return fpath.read_text(encoding="cp1252")
        except UnicodeDecodeError:
            with open(fpath, errors="replace") as f:
                return f.read()
