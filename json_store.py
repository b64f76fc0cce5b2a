from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

logger = logging.getLogger(__name__)

Formatting = Literal["compact", "expanded"]


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for missing files, empty files, or invalid JSON.
    """
    try:
        if not path.exists():
            return None
        raw = path.read_text(encoding="utf-8")
        if not raw.strip():
            return None
        return json.loads(raw)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("JSON READ: ignoring unreadable %s: %r", path, e)
        return None


def dumps_json(payload: Any, *, formatting: Formatting = "compact") -> str:
    """
    Serialize with the store's formatting styles.

    compact: no whitespace at all. expanded: 2-space indent.
    Key order is kept as inserted.
    """
    if formatting == "compact":
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    if formatting == "expanded":
        return json.dumps(payload, indent=2, ensure_ascii=False)
    raise ValueError(f"unknown formatting: {formatting!r}")


def atomic_write_json(path: Path, payload: Any, *, formatting: Formatting = "compact") -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.
    """
    text = dumps_json(payload, formatting=formatting)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(text)
    tmp_path.replace(path)
