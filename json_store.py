from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for missing files and empty (whitespace-only) files.
    Invalid JSON raises ValueError (json.JSONDecodeError); read failures raise OSError.
    """
    if not path.exists():
        return None
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return None
    return json.loads(raw)


def atomic_write_json(
    path: Path,
    payload: Any,
    *,
    indent: int = 2,
    sort_keys: bool = True,
    mode: int = 0o644,
) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.

    The temp file is fsynced before the rename and removed if anything fails,
    so the target holds either the old or the new document.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=indent, sort_keys=sort_keys, allow_nan=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        tmp_path.chmod(mode)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
