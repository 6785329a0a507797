"""
translate_adapter

Keeps an adapter's admin UI strings in sync between the legacy words.js
dictionary and the per-language i18n JSON files, and fills missing
translations through a LibreTranslate server.
"""

from .errors import (
    ConfigurationError,
    FormatError,
    MissingTranslationWarning,
    ParseError,
    TranslateAdapterError,
    TranslationServiceError,
    WriteError,
)
from .languages import LANGUAGES, SOURCE_LANGUAGE

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "FormatError",
    "LANGUAGES",
    "MissingTranslationWarning",
    "ParseError",
    "SOURCE_LANGUAGE",
    "TranslateAdapterError",
    "TranslationServiceError",
    "WriteError",
]
