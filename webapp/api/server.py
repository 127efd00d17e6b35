"""FastAPI server for the giveaway results page.

Fetches a Random.org verify page, extracts its rounds, and returns the
winner list, bottom-N list and round-1 spot counts as JSON.

Usage:
    cd /path/to/repo
    PYTHONPATH=src:. uvicorn webapp.api.server:app --reload --port 3001
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from giveaway.config import Settings
from giveaway.fetcher import load_verify_page
from giveaway.round_parser import extract_rounds
from giveaway.round_types import GiveawayError
from giveaway.views import build_report, coerce_bottom_count

log = logging.getLogger("giveaway.api")

# ---------------------------------------------------------------------------
# Globals
# ---------------------------------------------------------------------------
_settings = Settings.from_env()


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class GenerateRequest(BaseModel):
    # Checked by the pipeline, which reports bad values as 400s.
    url: Any = None
    bottomMode: Any = None


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Giveaway Results API",
    version="0.1.0",
    default_response_class=ORJSONResponse,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_settings.cors_origins),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _error_response(message: str) -> ORJSONResponse:
    return ORJSONResponse(status_code=400, content={"ok": False, "error": message})


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    log.warning("Rejected request body for %s: %s", request.url.path, exc.errors())
    return _error_response("Invalid request body")


def _generate_report(raw_url: Any, bottom_mode: Any) -> dict[str, Any]:
    """Blocking pipeline: fetch, extract, validate bottom count, build views."""
    html = load_verify_page(raw_url, _settings)
    rounds = extract_rounds(html)
    bottom_count = coerce_bottom_count(bottom_mode)
    return build_report(rounds, bottom_count)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@app.get("/api/health")
async def health():
    return {"ok": True}


@app.post("/api/generate")
async def generate(req: GenerateRequest):
    """Build the top/bottom lists and spot counts for one verify page."""
    try:
        report = await asyncio.to_thread(_generate_report, req.url, req.bottomMode)
    except GiveawayError as e:
        log.warning("Generate failed for %r: %s", req.url, e.message)
        return _error_response(e.message)
    log.info("Generated report for %r: %d rounds", req.url, report["roundsCount"])
    return report


# Mounted last so /api routes take precedence.
if _settings.static_dir is not None and _settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=_settings.static_dir, html=True), name="static")


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    log.info("Server running at http://localhost:%d", _settings.port)
    uvicorn.run(app, host="0.0.0.0", port=_settings.port)


if __name__ == "__main__":
    main()
