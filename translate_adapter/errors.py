"""Exception types raised by translate_adapter."""

from __future__ import annotations


class TranslateAdapterError(Exception):
    """Base class for every failure the CLI maps to a non-zero exit."""


class ConfigurationError(TranslateAdapterError):
    """An input path is missing or of the wrong kind."""


class FormatError(TranslateAdapterError):
    """A base file name has no boundary-delimited `en` segment."""


class ParseError(TranslateAdapterError):
    """The words.js dictionary literal could not be read as data."""


class TranslationServiceError(TranslateAdapterError):
    """The translation service failed or timed out."""


class WriteError(TranslateAdapterError):
    """A generated file could not be encoded or written."""


class MissingTranslationWarning(UserWarning):
    """
    A key has no value for a language after merging the language files
    back into words.js. Collected and logged, never raised.
    """

    def __init__(self, key: str, language: str) -> None:
        super().__init__(f'Missing "{language}": {key}')
        self.key = key
        self.language = language
