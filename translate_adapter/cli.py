#!/usr/bin/env python3
"""
cli.py

Command line entry point.

Usage:
    translate-adapter translate            # io-package.json + i18n files
    translate-adapter to-json              # words.js → i18n files
    translate-adapter to-words             # i18n files → words.js
    translate-adapter all                  # translate, to-words, to-json
    translate-adapter --admin src/admin --base src/admin/i18n/en.json translate
    translate-adapter translate --cache .translation_cache.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import SyncConfig, resolve_config
from .errors import ConfigurationError, TranslateAdapterError
from .sync import (
    languages_to_words,
    translate_i18n,
    translate_io_package,
    words_to_languages,
)
from .translation import (
    DEFAULT_API_KEY,
    DEFAULT_API_URL,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    CachingTranslator,
    LibreTranslateClient,
    TranslationCache,
    Translator,
)

COMMANDS = ("translate", "to-json", "to-words", "all")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="translate-adapter",
        description="Translate an adapter's io-package.json and admin i18n files.",
    )
    parser.add_argument("command", choices=COMMANDS, help="What to do.")
    parser.add_argument(
        "--io-package",
        type=Path,
        default=Path("io-package.json"),
        help="Path to io-package.json (default: ./io-package.json).",
    )
    parser.add_argument(
        "--admin",
        type=Path,
        default=Path("admin"),
        help="Adapter admin directory (default: ./admin).",
    )
    parser.add_argument(
        "--words",
        type=Path,
        help="Path to words.js (default: admin/js/words.js or admin/words.js).",
    )
    parser.add_argument(
        "--base",
        type=Path,
        action="append",
        metavar="PATH",
        help="English i18n base file; repeat for several (default: admin/i18n/en/translations.json "
        "and/or admin/src/i18n/en.json).",
    )
    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help="LibreTranslate /translate endpoint (env LIBRETRANSLATE_URL).",
    )
    parser.add_argument(
        "--api-key",
        default=DEFAULT_API_KEY,
        help="LibreTranslate API key (env LIBRETRANSLATE_API_KEY).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for one translation request.",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=DEFAULT_RETRIES,
        help="Attempts per string before giving up.",
    )
    parser.add_argument(
        "--cache",
        type=Path,
        metavar="PATH",
        help="JSON file to cache translations in between runs.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show timings and retries.")
    return parser.parse_args(argv)


def handle_translate(config: SyncConfig, translator: Translator) -> None:
    translate_io_package(config, translator)
    for base in config.bases:
        translate_i18n(base, config, translator)


def handle_to_json(config: SyncConfig) -> None:
    if not config.words.exists():
        raise ConfigurationError(f"Couldn't find words file {config.words}")
    words_to_languages(config.words, config.bases[0], config)


def handle_to_words(config: SyncConfig) -> None:
    languages_to_words(config.bases[0], config)


def run(args: argparse.Namespace, translator: Optional[Translator] = None) -> None:
    config = resolve_config(args.io_package, args.admin, args.words, args.base)

    if args.command in ("to-json", "to-words"):
        if args.command == "to-json":
            handle_to_json(config)
        else:
            handle_to_words(config)
        return

    cache: Optional[TranslationCache] = None
    if translator is None:
        client = LibreTranslateClient(
            api_url=args.api_url,
            api_key=args.api_key,
            timeout=args.timeout,
            retries=args.retries,
        )
        cache = TranslationCache(args.cache)
        cache.load()
        translator = CachingTranslator(client, cache)
    try:
        handle_translate(config, translator)
    finally:
        # Saved even when a translation failed.
        if cache is not None:
            cache.save()

    if args.command == "all":
        handle_to_words(config)
        handle_to_json(config)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )
    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    try:
        run(args)
    except (TranslateAdapterError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
