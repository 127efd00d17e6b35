"""Verify-page retrieval: URL normalization, HTTP fetch, bot-check detection.

These sit in front of ``extract_rounds`` and never parse the page themselves.
"""
from __future__ import annotations

import http.client
import logging
import re
import urllib.error
import urllib.request

from giveaway.config import DEFAULT_USER_AGENT, DEFAULT_VERIFY_BASE_URL, Settings
from giveaway.round_types import BotCheckDetected, FetchError, InvalidUrl

log = logging.getLogger("giveaway.fetcher")

_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
_BOT_CHECK_RE = re.compile(
    r"enable javascript|checking your browser|are you a robot|cloudflare",
    re.IGNORECASE,
)


def normalize_url(raw: object, *, base_url: str = DEFAULT_VERIFY_BASE_URL) -> str:
    """Return an absolute verify URL for a full URL or a bare verify code.

    Raises:
        InvalidUrl: Input is not a string or is blank.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidUrl()
    url = raw.strip()
    if _ABSOLUTE_URL_RE.match(url):
        return url
    return f"{base_url}{url}"


def looks_like_bot_check(text: str) -> bool:
    """True if the page reads like an automated-access challenge."""
    return bool(_BOT_CHECK_RE.search(text or ""))


def fetch_page(
    url: str,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = 20.0,
) -> str:
    """GET ``url`` and return the decoded body. No retries.

    Raises:
        FetchError: Non-2xx status, malformed URL, or transport failure.
    """
    try:
        req = urllib.request.Request(url, headers={"User-Agent": user_agent}, method="GET")
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = resp.status
            if not 200 <= status < 300:
                raise FetchError(status=status)
            charset = resp.headers.get_content_charset() or "utf-8"
            raw = resp.read()
    except urllib.error.HTTPError as e:
        raise FetchError(status=e.code) from e
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
        # http.client.InvalidURL (e.g. a space in the path) is a ValueError
        reason = getattr(e, "reason", e)
        raise FetchError(f"Fetch failed ({reason}). Check the verify link/code.") from e

    log.debug("Fetched %s (%d bytes)", url, len(raw))
    try:
        return raw.decode(charset)
    except (LookupError, UnicodeDecodeError):
        return raw.decode("utf-8", errors="replace")


def load_verify_page(raw_url: object, settings: Settings) -> str:
    """Normalize, fetch, and reject challenge pages.

    Raises:
        InvalidUrl, FetchError, BotCheckDetected
    """
    url = normalize_url(raw_url, base_url=settings.verify_base_url)
    html = fetch_page(url, user_agent=settings.user_agent, timeout=settings.fetch_timeout)
    if looks_like_bot_check(html):
        log.warning("Bot check page returned for %s", url)
        raise BotCheckDetected()
    return html
