"""
File name patterns derived from an English base file.

`admin/i18n/en/translations.json` yields a pattern that recognizes
`admin/i18n/de/translations.json` and can produce the path for any
other language code. The varying segment is the first `en` that has a
non-word character on both sides.
"""

from __future__ import annotations

import os
import re
from typing import Optional, Union

from .errors import FormatError

PathLike = Union[str, "os.PathLike[str]"]

BOUNDARY_EN_RE = re.compile(r"(?<=\W)en(?=\W)")


class FilePattern:
    def __init__(self, prefix: str, suffix: str) -> None:
        self.prefix = prefix
        self.suffix = suffix
        self.regex = re.compile(
            f"^({re.escape(prefix)})([a-z-]+)({re.escape(suffix)})$",
            re.IGNORECASE,
        )

    def match(self, path: PathLike) -> Optional[str]:
        """Return the lower-cased language segment of `path`, or None."""
        m = self.regex.match(os.fspath(path))
        if not m:
            return None
        return m.group(2).lower()

    def generate(self, language: str) -> str:
        return f"{self.prefix}{language}{self.suffix}"

    def __repr__(self) -> str:
        return f"FilePattern({self.generate('<lang>')!r})"


def derive_file_pattern(reference: PathLike) -> FilePattern:
    name = os.fspath(reference)
    m = BOUNDARY_EN_RE.search(name)
    if not m:
        raise FormatError(f"Base file must be an English JSON file: {name}")
    return FilePattern(name[: m.start()], name[m.end() :])
