from typing import Callable, Dict, Iterable, TypeVar

T = TypeVar("T")

SOURCE_LANGUAGE = "en"

LANGUAGES = ("en", "de", "ru", "pt", "nl", "fr", "it", "es", "pl", "zh-cn")


def create_empty_lang_object(
    create_default: Callable[[], T],
    languages: Iterable[str] = LANGUAGES,
) -> Dict[str, T]:
    return {lang: create_default() for lang in languages}
