# -*- coding: utf-8 -*-
"""Reading and writing the selection document (state.json)."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Union

from ..constant import STATE_FILE

PathLike = Union[str, Path]


def get_state_file_path(state_dir: PathLike) -> Path:
    """Return the state.json path inside *state_dir*."""
    return Path(state_dir) / STATE_FILE


def file_exists(path: PathLike) -> bool:
    """True if *path* is a regular file this process can read."""
    path = Path(path)
    return path.is_file() and os.access(path, os.R_OK)


def file_to_table(path: PathLike) -> Any:
    """Parse the JSON document at *path*.

    Decode and OS errors propagate to the caller.
    """
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def table_to_file(data: dict, path: PathLike) -> None:
    """Write *data* as JSON to *path*, replacing any previous content.

    The document is written to a temp file beside *path* and renamed over
    it, so a failed write leaves the previous file intact.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
