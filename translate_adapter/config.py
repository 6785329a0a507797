from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .errors import ConfigurationError
from .languages import LANGUAGES


@dataclass(frozen=True)
class SyncConfig:
    """Resolved paths and the language set for one run."""

    io_package: Path
    admin: Path
    words: Path
    bases: Tuple[Path, ...]
    languages: Tuple[str, ...] = field(default=LANGUAGES)


def default_words_path(admin: Path) -> Path:
    candidate = admin / "js" / "words.js"
    if candidate.exists():
        return candidate
    return admin / "words.js"


def default_base_paths(admin: Path) -> Tuple[Path, ...]:
    default_path = admin / "i18n" / "en" / "translations.json"
    candidates = [default_path, admin / "src" / "i18n" / "en.json"]
    existing = tuple(p for p in candidates if p.exists())
    # Nothing on disk yet: fall back to the default location.
    return existing or (default_path,)


def resolve_config(
    io_package: Path,
    admin: Path,
    words: Optional[Path] = None,
    bases: Optional[Sequence[Path]] = None,
    languages: Sequence[str] = LANGUAGES,
) -> SyncConfig:
    io_package = Path(io_package).resolve()
    if not io_package.is_file():
        raise ConfigurationError(f"Couldn't find file {io_package}")

    admin = Path(admin).resolve()
    if not admin.is_dir():
        raise ConfigurationError(f"Couldn't find directory {admin}")

    words_path = Path(words).resolve() if words else default_words_path(admin)

    if bases:
        base_paths = tuple(Path(p).resolve() for p in bases)
    else:
        base_paths = default_base_paths(admin)

    return SyncConfig(
        io_package=io_package,
        admin=admin,
        words=words_path,
        bases=base_paths,
        languages=tuple(languages),
    )
