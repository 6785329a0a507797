from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from .errors import ParseError, WriteError


def read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except ValueError as exc:
        # json.JSONDecodeError and UnicodeDecodeError
        raise ParseError(f"Couldn't read JSON file {path}: {exc}") from exc


def write_text_file(path: Path, text: str) -> None:
    """
    Replace `path` with `text` via a temporary file in the same directory,
    so the target is untouched when encoding or writing fails.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(text)
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException as exc:
        os.unlink(tmp)
        if isinstance(exc, UnicodeEncodeError):
            raise WriteError(f"Couldn't write {path}: {exc}") from exc
        raise


def write_json(path: Path, data: Any) -> None:
    """Write `data` pretty-printed with four-space indent, nothing after the closing brace."""
    write_text_file(path, json.dumps(data, ensure_ascii=False, indent=4))
