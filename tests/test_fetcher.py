"""Tests for giveaway.fetcher module (no network)."""
from __future__ import annotations

import http.client
import io
import urllib.error
import urllib.request
from email.message import Message
from typing import Any

import pytest

from giveaway import fetcher
from giveaway.config import Settings
from giveaway.fetcher import fetch_page, load_verify_page, looks_like_bot_check, normalize_url
from giveaway.round_types import BotCheckDetected, FetchError, InvalidUrl


class _FakeResponse:
    def __init__(self, body: bytes, *, status: int = 200, charset: str | None = "utf-8") -> None:
        self._body = body
        self.status = status
        self.headers = Message()
        if charset:
            self.headers["Content-Type"] = f"text/html; charset={charset}"
        else:
            self.headers["Content-Type"] = "text/html"

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc: Any) -> None:
        return None


def _patch_urlopen(monkeypatch: pytest.MonkeyPatch, outcome: Any, seen: list | None = None) -> None:
    def _urlopen(req: urllib.request.Request, timeout: float | None = None) -> Any:
        if seen is not None:
            seen.append((req, timeout))
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    monkeypatch.setattr(urllib.request, "urlopen", _urlopen)


class TestNormalizeUrl:
    def test_full_url_kept(self) -> None:
        url = "https://giveaways.random.org/verify/abc123"
        assert normalize_url(f"  {url} ") == url

    def test_http_case_insensitive(self) -> None:
        assert normalize_url("HTTP://example.org/x") == "HTTP://example.org/x"

    def test_code_expanded(self) -> None:
        assert normalize_url("abc123") == "https://giveaways.random.org/verify/abc123"

    def test_custom_base(self) -> None:
        assert normalize_url("z9", base_url="http://localhost/verify/") == "http://localhost/verify/z9"

    @pytest.mark.parametrize("raw", [None, "", "   ", 42])
    def test_missing(self, raw: object) -> None:
        with pytest.raises(InvalidUrl, match="Missing url"):
            normalize_url(raw)


class TestLooksLikeBotCheck:
    @pytest.mark.parametrize(
        "text",
        [
            "Please enable JavaScript to continue",
            "Checking your browser before accessing",
            "Are you a robot?",
            "Protected by Cloudflare",
        ],
    )
    def test_challenge_pages(self, text: str) -> None:
        assert looks_like_bot_check(text)

    def test_normal_page(self) -> None:
        assert not looks_like_bot_check("Result of Round #1\n1. 1. Alice")
        assert not looks_like_bot_check("")


class TestFetchPage:
    def test_returns_decoded_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list = []
        _patch_urlopen(monkeypatch, _FakeResponse("Zoë".encode("utf-8")), seen)
        assert fetch_page("https://x/verify/a", user_agent="UA/1", timeout=5) == "Zoë"
        req, timeout = seen[0]
        assert req.get_header("User-agent") == "UA/1"
        assert timeout == 5

    def test_charset_from_headers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_urlopen(monkeypatch, _FakeResponse("José".encode("latin-1"), charset="iso-8859-1"))
        assert fetch_page("https://x") == "José"

    def test_bad_bytes_replaced(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_urlopen(monkeypatch, _FakeResponse(b"ok \xff", charset=None))
        assert fetch_page("https://x") == "ok \ufffd"

    def test_http_error_status(self, monkeypatch: pytest.MonkeyPatch) -> None:
        err = urllib.error.HTTPError("https://x", 404, "Not Found", Message(), io.BytesIO(b""))
        _patch_urlopen(monkeypatch, err)
        with pytest.raises(FetchError, match=r"Fetch failed \(404\)") as info:
            fetch_page("https://x")
        assert info.value.status == 404

    def test_non_2xx_without_exception(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_urlopen(monkeypatch, _FakeResponse(b"", status=304))
        with pytest.raises(FetchError) as info:
            fetch_page("https://x")
        assert info.value.status == 304

    def test_transport_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_urlopen(monkeypatch, urllib.error.URLError("name resolution failed"))
        with pytest.raises(FetchError, match="name resolution failed"):
            fetch_page("https://x")

    def test_url_with_space_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        err = http.client.InvalidURL("URL can't contain control characters. '/verify/abc def'")
        _patch_urlopen(monkeypatch, err)
        with pytest.raises(FetchError, match="Check the verify link/code"):
            fetch_page("https://giveaways.random.org/verify/abc def")

    def test_unknown_scheme_wrapped(self) -> None:
        with pytest.raises(FetchError):
            fetch_page("giveaways.random.org/verify/abc")

    def test_protocol_error_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_urlopen(monkeypatch, http.client.RemoteDisconnected("closed"))
        with pytest.raises(FetchError, match="closed"):
            fetch_page("https://x")


class TestLoadVerifyPage:
    def test_uses_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[str, str, float]] = []

        def _fetch(url: str, *, user_agent: str, timeout: float) -> str:
            calls.append((url, user_agent, timeout))
            return "Result of Round #1\n1. 1. Alice"

        monkeypatch.setattr(fetcher, "fetch_page", _fetch)
        settings = Settings(verify_base_url="https://v/", user_agent="UA", fetch_timeout=3.0)
        assert load_verify_page("code", settings).startswith("Result of Round")
        assert calls == [("https://v/code", "UA", 3.0)]

    def test_bot_check_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(fetcher, "fetch_page", lambda url, **kw: "Checking your browser...")
        with pytest.raises(BotCheckDetected, match="bot check"):
            load_verify_page("code", Settings())

    def test_code_with_space_becomes_fetch_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_urlopen(monkeypatch, http.client.InvalidURL("URL can't contain control characters."))
        with pytest.raises(FetchError):
            load_verify_page("abc def", Settings())
