"""
words.py

Reads and writes the legacy admin/words.js dictionary:

    /*global systemDictionary:true */
    ...banner...
    'use strict';

    systemDictionary = {
        "key": {"en": "Text", "de": "Text", ...},
        ...
    };

The object literal between the first `{` and the last `;` is read with a
small parser for the subset of JavaScript object-literal syntax such files
use (quoted or bare keys, string values, nested objects, comments,
trailing commas). The file is never executed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

from .errors import ParseError
from .jsonfiles import write_text_file

WordDictionary = Dict[str, Dict[str, str]]

COLUMN_WIDTH = 50
BOX_WIDTH = 56

BANNER = [
    "/*global systemDictionary:true */",
    "/*",
    "+===================== DO NOT MODIFY ======================+",
    f"| {'This file was generated by translate-adapter, please use':<{BOX_WIDTH}} |",
    f"| {'`translate-adapter to-words` to update it.':<{BOX_WIDTH}} |",
    "+===================== DO NOT MODIFY ======================+",
    "*/",
    "'use strict';\n",
]

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

Literal = Union[str, Dict[str, "Literal"]]


# ── Object-literal parser ──────────────────────────────────────────────────────

class LiteralParser:
    """Recursive-descent parser for a JavaScript object literal holding strings."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> Literal:
        value = self._value()
        self._skip()
        if self.pos != len(self.text):
            self._fail("unexpected content after object literal")
        return value

    # ── grammar ───────────────────────────────────────────────────────────────

    def _value(self) -> Literal:
        self._skip()
        ch = self._peek()
        if ch == "{":
            return self._object()
        if ch in ('"', "'"):
            return self._string()
        self._fail("expected an object or a string")

    def _object(self) -> Dict[str, Literal]:
        self._expect("{")
        result: Dict[str, Literal] = {}
        while True:
            self._skip()
            if self._peek() == "}":
                self.pos += 1
                return result
            key = self._key()
            self._skip()
            self._expect(":")
            result[key] = self._value()
            self._skip()
            ch = self._peek()
            if ch == ",":
                self.pos += 1
            elif ch != "}":
                self._fail("expected ',' or '}'")

    def _key(self) -> str:
        ch = self._peek()
        if ch in ('"', "'"):
            return self._string()
        start = self.pos
        if ch.isdigit():
            while self._peek().isdigit() or self._peek() == ".":
                self.pos += 1
        elif ch.isalpha() or ch in ("_", "$"):
            while self._peek().isalnum() or self._peek() in ("_", "$"):
                self.pos += 1
        else:
            self._fail("expected a property name")
        return self.text[start : self.pos]

    def _string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        chars: list[str] = []
        while True:
            if self.pos >= len(self.text):
                self._fail("unterminated string")
            ch = self.text[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(chars)
            if ch in ("\n", "\r"):
                self._fail("line break inside string")
            if ch == "\\":
                chars.append(self._escape())
                continue
            chars.append(ch)
            self.pos += 1

    def _escape(self) -> str:
        self.pos += 1  # backslash
        if self.pos >= len(self.text):
            self._fail("unterminated escape sequence")
        ch = self.text[self.pos]
        self.pos += 1
        if ch in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[ch]
        if ch == "u":
            return self._unicode_escape()
        if ch == "x":
            return self._hex(2)
        if ch == "\r" and self._peek() == "\n":
            self.pos += 1
            return ""
        if ch in ("\n", "\r"):
            return ""  # line continuation
        return ch

    def _unicode_escape(self) -> str:
        r"""Decode `\uXXXX`, joining a `\uD83D\uDE00` surrogate pair into one code point."""
        unit = self._hex(4)
        if not ("\ud800" <= unit <= "\udbff") or not self.text.startswith("\\u", self.pos):
            return unit
        start = self.pos
        self.pos += 2
        low = self._hex(4)
        if "\udc00" <= low <= "\udfff":
            return chr(0x10000 + ((ord(unit) - 0xD800) << 10) + (ord(low) - 0xDC00))
        self.pos = start
        return unit

    def _hex(self, length: int) -> str:
        digits = self.text[self.pos : self.pos + length]
        try:
            if len(digits) != length:
                raise ValueError(digits)
            code = int(digits, 16)
        except ValueError:
            self._fail("invalid hexadecimal escape")
        self.pos += length
        return chr(code)

    # ── helpers ───────────────────────────────────────────────────────────────

    def _skip(self) -> None:
        """Skip whitespace and comments."""
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end == -1:
                    self._fail("unterminated comment")
                self.pos = end + 2
            else:
                return

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            self._fail(f"expected {ch!r}")
        self.pos += 1

    def _fail(self, message: str):
        line = self.text.count("\n", 0, self.pos) + 1
        raise ParseError(f"{message} (line {line} of dictionary literal)")


# ── Decode / encode ────────────────────────────────────────────────────────────

def parse_words_js(text: str) -> WordDictionary:
    start = text.find("{")
    end = text.rfind(";")
    if start == -1 or end < start:
        raise ParseError("No systemDictionary object literal found")

    data = LiteralParser(text[start:end]).parse()
    if not isinstance(data, dict):
        raise ParseError("systemDictionary is not an object")

    for key, translations in data.items():
        if not isinstance(translations, dict):
            raise ParseError(f"Entry {key!r} is not an object of translations")
        for lang, value in translations.items():
            if not isinstance(value, str):
                raise ParseError(f"Entry {key!r} has a non-string value for {lang!r}")
    return data


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def create_words_js(data: WordDictionary) -> str:
    """
    Render `data` as words.js. Every value is padded to a fixed column so
    languages line up across the file; the output only depends on `data`
    (including its ordering), which keeps diffs of the file readable.
    """
    lines = list(BANNER)
    lines.append("systemDictionary = {")
    for word, translations in data.items():
        line = ""
        for lang, item in translations.items():
            text = (_escape(item) + '",').ljust(COLUMN_WIDTH)
            line += f'"{lang}": "{text} '
        if line:
            line = line.strip()
            line = line[:-1]
        preamble = f'"{_escape(word)}": {{'.ljust(COLUMN_WIDTH)
        lines.append(f"    {preamble}{line}}},")
    lines.append("};")
    return "\n".join(lines).rstrip()


def read_words_file(path: Path) -> WordDictionary:
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path} is not UTF-8: {exc}") from exc
    return parse_words_js(text)


def write_words_file(path: Path, data: WordDictionary) -> None:
    write_text_file(path, create_words_js(data))
