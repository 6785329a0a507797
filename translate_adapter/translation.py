"""
translation.py

Fills gaps through a LibreTranslate REST server (POST /translate).

Every request has a timeout and is retried a bounded number of times with
a linear back-off. When all attempts fail a TranslationServiceError is
raised; the source text is never written back as a stand-in translation.

Placeholders such as `%s`, `{{name}}` or `{0}` are swapped for ASCII
markers before sending and restored afterwards so the service cannot
mangle them.

Translations can be cached in a JSON file (language → source → text) so
identical strings are not sent again on later runs.
"""

from __future__ import annotations

import json
import logging
import os
import re
import time
from pathlib import Path
from typing import Dict, Optional, Protocol

import requests

from .errors import TranslationServiceError
from .languages import SOURCE_LANGUAGE

logger = logging.getLogger(__name__)

DEFAULT_API_URL = os.environ.get("LIBRETRANSLATE_URL", "http://localhost:5000/translate")
DEFAULT_API_KEY = os.environ.get("LIBRETRANSLATE_API_KEY")
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRIES = 3

# Adapter language codes that LibreTranslate spells differently.
SERVICE_LANGUAGE_CODES = {
    "zh-cn": "zh",
}

PLACEHOLDER_RE = re.compile(r"%[sd]|\{\{[^{}]*\}\}|\{\d+\}")
LATIN_RE = re.compile(r"[A-Za-z]")


class Translator(Protocol):
    def translate(self, text: str, language: str) -> str: ...


# ── Placeholder protection ─────────────────────────────────────────────────────

def protect_placeholders(text: str) -> tuple[str, list[str]]:
    """
    Swap printf (`%s`, `%d`), mustache (`{{name}}`) and positional (`{0}`)
    placeholders for XPHX markers the service leaves alone.
    """
    tokens: list[str] = []

    def sub(m: re.Match) -> str:
        idx = len(tokens)
        tokens.append(m.group(0))
        return f"XPHX{idx}XPHX"

    return PLACEHOLDER_RE.sub(sub, text), tokens


def restore_placeholders(text: str, tokens: list[str]) -> str:
    """Put the placeholders recorded by protect_placeholders back in place of their markers."""
    for i, token in enumerate(tokens):
        text = text.replace(f"XPHX{i}XPHX", token)
    return text


# ── LibreTranslate API ─────────────────────────────────────────────────────────

class LibreTranslateClient:
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        api_key: Optional[str] = DEFAULT_API_KEY,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        backoff: float = 0.5,
        session: Optional[requests.Session] = None,
    ) -> None:
        if retries < 1:
            raise ValueError("retries must be at least 1")
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self.retries = retries
        self.backoff = backoff
        self.session = session or requests.Session()

    def translate(self, text: str, language: str) -> str:
        protected, tokens = protect_placeholders(text)
        payload = {
            "q": protected,
            "source": SOURCE_LANGUAGE,
            "target": SERVICE_LANGUAGE_CODES.get(language, language),
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key

        last_exc: Optional[Exception] = None
        for attempt in range(self.retries):
            try:
                resp = self.session.post(self.api_url, json=payload, timeout=self.timeout)
                resp.raise_for_status()
                translated = resp.json().get("translatedText")
                if not isinstance(translated, str):
                    raise ValueError(f"unexpected response: {resp.text[:200]}")
                return restore_placeholders(translated, tokens)
            except (requests.RequestException, ValueError) as exc:
                last_exc = exc
                logger.debug(
                    "Translation attempt %d/%d failed for %r (%s): %s",
                    attempt + 1, self.retries, text[:50], language, exc,
                )
                if attempt + 1 < self.retries:
                    time.sleep(self.backoff * (attempt + 1))

        raise TranslationServiceError(
            f"Translation en -> {language} failed for {text[:50]!r}: {last_exc}"
        ) from last_exc


# ── Translation cache ──────────────────────────────────────────────────────────

class TranslationCache:
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path
        self.entries: Dict[str, Dict[str, str]] = {}

    def load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        with open(self.path, encoding="utf-8") as f:
            self.entries = json.load(f)
        total = sum(len(v) for v in self.entries.values())
        logger.info("[cache] Loaded %d cached translations.", total)

    def save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.entries, f, ensure_ascii=False, indent=2, sort_keys=True)
        total = sum(len(v) for v in self.entries.values())
        logger.info("[cache] Saved %d translations.", total)

    def get(self, text: str, language: str) -> Optional[str]:
        return self.entries.get(language, {}).get(text)

    def put(self, text: str, language: str, translated: str) -> None:
        # Unchanged Latin-script results are not cached.
        if translated == text and LATIN_RE.search(text):
            return
        self.entries.setdefault(language, {})[text] = translated


class CachingTranslator:
    def __init__(self, inner: Translator, cache: TranslationCache) -> None:
        self.inner = inner
        self.cache = cache

    def translate(self, text: str, language: str) -> str:
        cached = self.cache.get(text, language)
        if cached is not None:
            return cached
        translated = self.inner.translate(text, language)
        self.cache.put(text, language, translated)
        return translated
