"""Runtime settings for the giveaway service and CLI, read from the environment."""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_VERIFY_BASE_URL = "https://giveaways.random.org/verify/"
DEFAULT_USER_AGENT = "Mozilla/5.0 (giveaway-site)"
DEFAULT_FETCH_TIMEOUT = 20.0
DEFAULT_PORT = 3001


@dataclass(frozen=True, slots=True)
class Settings:
    verify_base_url: str = DEFAULT_VERIFY_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    static_dir: Path | None = None
    cors_origins: tuple[str, ...] = ("*",)
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``GIVEAWAY_*`` variables (and ``PORT``).

        Raises:
            ValueError: A numeric variable does not parse or is not positive.
        """
        env = os.environ if env is None else env

        timeout = float(env.get("GIVEAWAY_FETCH_TIMEOUT") or DEFAULT_FETCH_TIMEOUT)
        if timeout <= 0:
            raise ValueError(f"GIVEAWAY_FETCH_TIMEOUT must be positive, got {timeout}")
        port = int(env.get("PORT") or DEFAULT_PORT)
        if port <= 0:
            raise ValueError(f"PORT must be positive, got {port}")

        static_raw = (env.get("GIVEAWAY_STATIC_DIR") or "").strip()
        origins_raw = env.get("GIVEAWAY_CORS_ORIGINS") or "*"
        origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip())

        return cls(
            verify_base_url=env.get("GIVEAWAY_VERIFY_BASE_URL") or DEFAULT_VERIFY_BASE_URL,
            user_agent=env.get("GIVEAWAY_USER_AGENT") or DEFAULT_USER_AGENT,
            fetch_timeout=timeout,
            static_dir=Path(static_raw) if static_raw else None,
            cors_origins=origins or ("*",),
            port=port,
        )
