"""
sync.py

Moves translations between the adapter's representations:

  - translate_io_package: fills title, description and news of io-package.json
  - translate_i18n:       English base JSON → every language file, translating gaps
  - words_to_languages:   words.js → one JSON file per language
  - languages_to_words:   language files → words.js, reporting gaps

translate_i18n and translate_io_package call the translator. The two
words.js directions never do; languages_to_words only reports what is
missing so it can be filled later by translate_i18n. The two directions
are not inverses of each other.

All work is sequential: one translation is finished before the next is
requested and one file is written before the next is read.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .config import SyncConfig
from .discovery import find_language_files
from .errors import MissingTranslationWarning, ParseError
from .jsonfiles import read_json, write_json
from .languages import LANGUAGES, SOURCE_LANGUAGE, create_empty_lang_object
from .patterns import derive_file_pattern
from .translation import Translator
from .words import WordDictionary, read_words_file, write_words_file

logger = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    dictionary: WordDictionary = field(default_factory=dict)
    retained_keys: List[str] = field(default_factory=list)
    retained_translations: List[Tuple[str, str]] = field(default_factory=list)
    missing: List[MissingTranslationWarning] = field(default_factory=list)


def _display(path: Path) -> str:
    try:
        return str(Path(path).relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


# ── Filling gaps ───────────────────────────────────────────────────────────────

def translate_not_existing(
    entry: Dict[str, str],
    translator: Translator,
    languages: Sequence[str] = LANGUAGES,
    base_text: Optional[str] = None,
) -> int:
    """
    Translate the English text of `entry` (or `base_text` when it has no
    English value) into every language that has no value yet.
    Returns the number of translations added.
    """
    text = entry.get(SOURCE_LANGUAGE) or base_text
    if not text:
        return 0

    added = 0
    for lang in languages:
        if lang == SOURCE_LANGUAGE or entry.get(lang):
            continue
        start = time.monotonic()
        entry[lang] = translator.translate(text, lang)
        added += 1
        logger.debug("en -> %s %d ms", lang, _elapsed_ms(start))
    return added


def translate_i18n_json(
    content: Dict[str, str],
    lang: str,
    base_content: Dict[str, str],
    translator: Translator,
) -> None:
    if lang == SOURCE_LANGUAGE:
        return
    start = time.monotonic()
    for key, base in base_content.items():
        if content.get(key):
            continue
        # Empty base values are copied without a translation call.
        content[key] = translator.translate(base, lang) if base else base
    logger.debug("Translate Admin en -> %s %d ms", lang, _elapsed_ms(start))


# ── io-package.json ────────────────────────────────────────────────────────────

def translate_io_package(config: SyncConfig, translator: Translator) -> None:
    content = read_json(config.io_package)
    common = content.get("common", {})

    news = common.get("news")
    if news:
        logger.info("Translate News")
        for version, entry in news.items():
            logger.info("News: %s", version)
            translate_not_existing(entry, translator, config.languages)

    title_lang = common.get("titleLang")
    if isinstance(title_lang, dict):
        logger.info("Translate Title")
        translate_not_existing(title_lang, translator, config.languages, common.get("title"))

    desc = common.get("desc")
    if isinstance(desc, dict):
        logger.info("Translate Description")
        translate_not_existing(desc, translator, config.languages)

    write_json(config.io_package, content)
    logger.info("Successfully updated %s", _display(config.io_package))


# ── Base JSON → language files ─────────────────────────────────────────────────

def translate_i18n(base_file: Path, config: SyncConfig, translator: Translator) -> List[Path]:
    """
    Bring every language file of `base_file` up to date with it, creating
    the files of languages that have none. Returns the written paths.
    """
    pattern = derive_file_pattern(base_file)
    base_content = read_json(base_file)
    missing_languages = list(config.languages)
    written: List[Path] = []

    for lang, path in find_language_files(config.admin, pattern, config.languages):
        if lang in missing_languages:
            missing_languages.remove(lang)
        if lang == SOURCE_LANGUAGE:
            continue
        translation = read_json(path)
        translate_i18n_json(translation, lang, base_content, translator)
        write_json(path, translation)
        written.append(path)
        logger.info("Successfully updated %s", _display(path))

    for lang in missing_languages:
        if lang == SOURCE_LANGUAGE:
            continue
        translation = {}
        translate_i18n_json(translation, lang, base_content, translator)
        filename = Path(pattern.generate(lang))
        write_json(filename, translation)
        written.append(filename)
        logger.info("Successfully created %s", _display(filename))

    return written


# ── words.js → language files ──────────────────────────────────────────────────

def words_to_languages(words_file: Path, base_file: Path, config: SyncConfig) -> List[Path]:
    pattern = derive_file_pattern(base_file)
    data = read_words_file(words_file)

    langs = create_empty_lang_object(dict, config.languages)
    for word, translations in data.items():
        for lang in translations:
            if lang not in langs:
                logger.warning('Unknown language "%s" in %s: %s', lang, _display(words_file), word)
        for lang in config.languages:
            langs[lang][word] = translations.get(lang, "")

    written: List[Path] = []
    for lang, translations in langs.items():
        obj = {key: translations[key] for key in sorted(translations)}
        filename = Path(pattern.generate(lang))
        write_json(filename, obj)
        written.append(filename)
        logger.info("Successfully updated %s", _display(filename))
    return written


# ── Language files → words.js ──────────────────────────────────────────────────

def _read_existing_words(path: Path) -> WordDictionary:
    try:
        return read_words_file(path)
    except FileNotFoundError:
        logger.debug("No existing %s, using the language files only", _display(path))
    except ParseError as exc:
        logger.debug("Ignoring unreadable %s: %s", _display(path), exc)
    return {}


def languages_to_words(base_file: Path, config: SyncConfig) -> ReconcileReport:
    """
    Rebuild words.js from the language files next to `base_file`.

    Keys or translations that only exist in the current words.js are kept,
    with a warning. Translations that are still empty afterwards are
    reported as MissingTranslationWarning; nothing is translated here.
    """
    pattern = derive_file_pattern(base_file)
    new_words: WordDictionary = {}
    for lang, path in find_language_files(config.admin, pattern, config.languages):
        translations = read_json(path)
        for key, value in translations.items():
            entry = new_words.setdefault(key, create_empty_lang_object(str, config.languages))
            entry[lang] = value

    report = ReconcileReport()
    existing_words = _read_existing_words(config.words)
    for key, translations in existing_words.items():
        if key not in new_words:
            logger.warning("Take from current words.js: %s", key)
            entry = dict(translations)
            for lang in config.languages:
                entry.setdefault(lang, "")
            new_words[key] = entry
            report.retained_keys.append(key)
            continue
        entry = new_words[key]
        for lang in config.languages:
            if not entry.get(lang) and translations.get(lang):
                logger.warning('Take "%s" from current words.js: %s', lang, key)
                entry[lang] = translations[lang]
                report.retained_translations.append((key, lang))

    report.dictionary = {key: new_words[key] for key in sorted(new_words)}
    for key, entry in report.dictionary.items():
        for lang in config.languages:
            if not entry.get(lang):
                warning = MissingTranslationWarning(key, lang)
                logger.warning("%s", warning)
                report.missing.append(warning)

    write_words_file(config.words, report.dictionary)
    logger.info("Successfully updated %s", _display(config.words))
    return report
