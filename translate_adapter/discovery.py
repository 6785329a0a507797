from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple

from .languages import LANGUAGES
from .patterns import FilePattern


def find_language_files(
    root: Path,
    pattern: FilePattern,
    languages: Iterable[str] = LANGUAGES,
) -> List[Tuple[str, Path]]:
    """
    Find every JSON file below `root` that matches `pattern` with a known
    language segment. Sorted by path so runs are reproducible.
    """
    known = set(languages)
    found: List[Tuple[str, Path]] = []
    for path in sorted(Path(root).rglob("*.json")):
        if not path.is_file():
            continue
        lang = pattern.match(path)
        if lang is None or lang not in known:
            continue
        found.append((lang, path))
    return found
