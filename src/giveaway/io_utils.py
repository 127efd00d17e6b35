"""orjson-backed JSON helpers for reports written by the CLI."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson


def dumps_report(obj: Any, *, pretty: bool = True) -> bytes:
    """Serialize a report; ``pretty`` indents by 2. Key order is preserved."""
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2 if pretty else 0)


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Write JSON to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_report(obj, pretty=pretty) + b"\n")
