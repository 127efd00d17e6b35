"""Tests for giveaway.config.Settings."""
from pathlib import Path

import pytest

from giveaway.config import DEFAULT_USER_AGENT, DEFAULT_VERIFY_BASE_URL, Settings


class TestSettingsFromEnv:
    def test_defaults(self) -> None:
        s = Settings.from_env({})
        assert s.verify_base_url == DEFAULT_VERIFY_BASE_URL
        assert s.user_agent == DEFAULT_USER_AGENT
        assert s.fetch_timeout == 20.0
        assert s.static_dir is None
        assert s.cors_origins == ("*",)
        assert s.port == 3001

    def test_overrides(self) -> None:
        s = Settings.from_env({
            "GIVEAWAY_VERIFY_BASE_URL": "http://localhost:9000/verify/",
            "GIVEAWAY_USER_AGENT": "TestAgent/2",
            "GIVEAWAY_FETCH_TIMEOUT": "7.5",
            "GIVEAWAY_STATIC_DIR": "public",
            "GIVEAWAY_CORS_ORIGINS": "http://a.test, http://b.test,",
            "PORT": "8080",
        })
        assert s.verify_base_url == "http://localhost:9000/verify/"
        assert s.user_agent == "TestAgent/2"
        assert s.fetch_timeout == 7.5
        assert s.static_dir == Path("public")
        assert s.cors_origins == ("http://a.test", "http://b.test")
        assert s.port == 8080

    @pytest.mark.parametrize(
        "env",
        [
            {"GIVEAWAY_FETCH_TIMEOUT": "soon"},
            {"GIVEAWAY_FETCH_TIMEOUT": "0"},
            {"PORT": "http"},
            {"PORT": "-1"},
        ],
    )
    def test_invalid_numbers(self, env: dict[str, str]) -> None:
        with pytest.raises(ValueError):
            Settings.from_env(env)

    def test_frozen(self) -> None:
        s = Settings()
        with pytest.raises(AttributeError):
            s.port = 1  # type: ignore[misc]
