"""test_sync.py - moving translations between base file, language files and words.js"""

import unittest

from base_test import AdapterTestCase, FakeTranslator

from translate_adapter.errors import FormatError, ParseError, TranslationServiceError, WriteError
from translate_adapter.languages import LANGUAGES
from translate_adapter.sync import (
    languages_to_words,
    translate_i18n,
    translate_io_package,
    translate_not_existing,
    words_to_languages,
)
from translate_adapter.words import create_words_js, read_words_file


class FailingTranslator:
    def translate(self, text, language):
        raise TranslationServiceError("service down")


class TestTranslateNotExisting(unittest.TestCase):

    def setUp(self):
        self.translator = FakeTranslator()

    def test_fills_only_empty_languages(self):
        entry = {"en": "Hello", "de": "Hallo", "fr": ""}
        added = translate_not_existing(entry, self.translator, ("en", "de", "fr", "it"))
        self.assertEqual(added, 2)
        self.assertEqual(self.translator.calls, [("Hello", "fr"), ("Hello", "it")])
        self.assertEqual(entry["de"], "Hallo")
        self.assertEqual(entry["it"], "[it] Hello")

    def test_base_text_used_without_english(self):
        entry = {}
        translate_not_existing(entry, self.translator, ("en", "de"), base_text="Title")
        self.assertEqual(entry, {"de": "[de] Title"})

    def test_nothing_to_translate(self):
        entry = {"de": "Hallo"}
        self.assertEqual(translate_not_existing(entry, self.translator, ("en", "fr")), 0)
        self.assertEqual(self.translator.calls, [])


class TestTranslateI18n(AdapterTestCase):

    def test_creates_missing_language_file(self):
        self.write_json(self.base, {"hello": "Hello"})

        written = translate_i18n(self.base, self.make_config(), self.translator)

        self.assertEqual(written, [self.lang_file("de")])
        self.assertEqual(self.read_json(self.lang_file("de")), {"hello": "[de] Hello"})

    def test_translates_only_missing_keys(self):
        self.write_json(self.base, {"hello": "Hello", "bye": "Bye"})
        self.write_json(self.lang_file("de"), {"hello": "Hallo", "bye": ""})

        translate_i18n(self.base, self.make_config(), self.translator)

        self.assertEqual(self.translator.calls, [("Bye", "de")])
        self.assertEqual(self.read_json(self.lang_file("de")), {"hello": "Hallo", "bye": "[de] Bye"})

    def test_english_file_is_not_rewritten(self):
        self.base.parent.mkdir(parents=True)
        self.base.write_text('{"hello":"Hello"}', encoding="utf-8")

        translate_i18n(self.base, self.make_config(), self.translator)

        self.assertEqual(self.base.read_text(encoding="utf-8"), '{"hello":"Hello"}')
        self.assertNotIn("en", [lang for _, lang in self.translator.calls])

    def test_every_language_gets_every_key(self):
        base = {"hello": "Hello", "bye": "Bye", "blank": ""}
        self.write_json(self.base, base)
        self.write_json(self.lang_file("fr"), {"hello": "Bonjour", "extra": "Extra"})

        translate_i18n(self.base, self.make_config(LANGUAGES), self.translator)

        for lang in LANGUAGES:
            with self.subTest(lang=lang):
                content = self.read_json(self.lang_file(lang))
                self.assertTrue(set(base) <= set(content))
                if lang != "fr":
                    self.assertEqual(set(content), set(base))
        self.assertNotIn(("", "de"), self.translator.calls)

    def test_second_run_changes_nothing(self):
        self.write_json(self.base, {"hello": "Hello", "bye": "Bye"})
        self.write_json(self.lang_file("ru"), {"hello": "Привет"})
        config = self.make_config(LANGUAGES)

        translate_i18n(self.base, config, self.translator)
        first = {lang: self.lang_file(lang).read_bytes() for lang in LANGUAGES}
        calls = len(self.translator.calls)

        translate_i18n(self.base, config, self.translator)
        second = {lang: self.lang_file(lang).read_bytes() for lang in LANGUAGES}

        self.assertEqual(first, second)
        self.assertEqual(len(self.translator.calls), calls)

    def test_output_format(self):
        self.write_json(self.base, {"hello": "Hello"})
        translate_i18n(self.base, self.make_config(), self.translator)
        text = self.lang_file("de").read_text(encoding="utf-8")
        self.assertEqual(text, '{\n    "hello": "[de] Hello"\n}')

    def test_unknown_language_directory_ignored(self):
        self.write_json(self.base, {"hello": "Hello"})
        self.write_json(self.lang_file("xx"), {"hello": ""})
        translate_i18n(self.base, self.make_config(), self.translator)
        self.assertEqual(self.read_json(self.lang_file("xx")), {"hello": ""})

    def test_translation_failure_propagates(self):
        self.write_json(self.base, {"hello": "Hello"})
        with self.assertRaises(TranslationServiceError):
            translate_i18n(self.base, self.make_config(), FailingTranslator())
        self.assertFalse(self.lang_file("de").exists())

    def test_base_must_be_english(self):
        base = self.admin / "i18n" / "english.json"
        self.write_json(base, {"hello": "Hello"})
        with self.assertRaises(FormatError):
            translate_i18n(base, self.make_config(), self.translator)


class TestLanguagesToWords(AdapterTestCase):

    def write_words(self, data):
        self.words.write_text(create_words_js(data), encoding="utf-8")

    def test_builds_dictionary_from_files(self):
        self.write_json(self.lang_file("en"), {"hello": "Hello", "bye": "Bye"})
        self.write_json(self.lang_file("de"), {"hello": "Hallo", "bye": "Tschüss"})

        report = languages_to_words(self.base, self.make_config())

        expected = {"bye": {"en": "Bye", "de": "Tschüss"}, "hello": {"en": "Hello", "de": "Hallo"}}
        self.assertEqual(report.dictionary, expected)
        self.assertEqual(list(report.dictionary), ["bye", "hello"])
        self.assertEqual(read_words_file(self.words), expected)
        self.assertEqual(report.missing, [])

    def test_keeps_keys_only_in_existing_words(self):
        self.write_json(self.lang_file("en"), {"hello": "Hello"})
        self.write_json(self.lang_file("de"), {"hello": "Hallo"})
        self.write_words({"legacy": {"en": "Old", "de": "Alt"}})

        with self.assertLogs("translate_adapter.sync", "WARNING") as logs:
            report = languages_to_words(self.base, self.make_config())

        self.assertEqual(report.dictionary["legacy"], {"en": "Old", "de": "Alt"})
        self.assertEqual(report.retained_keys, ["legacy"])
        self.assertTrue(any("legacy" in line for line in logs.output))

    def test_keeps_translation_of_deleted_language_file(self):
        self.write_words({"hello": {"en": "Hello", "de": "Hallo"}})
        self.write_json(self.lang_file("en"), {"hello": "Hello"})

        report = languages_to_words(self.base, self.make_config())

        self.assertEqual(report.dictionary, {"hello": {"en": "Hello", "de": "Hallo"}})
        self.assertEqual(report.retained_translations, [("hello", "de")])
        self.assertEqual(report.missing, [])

    def test_reports_missing_translations(self):
        self.write_json(self.lang_file("en"), {"hello": "Hello"})
        self.write_json(self.lang_file("de"), {"hello": ""})

        with self.assertLogs("translate_adapter.sync", "WARNING") as logs:
            report = languages_to_words(self.base, self.make_config(("en", "de", "fr")))

        self.assertEqual(
            [(w.key, w.language) for w in report.missing],
            [("hello", "de"), ("hello", "fr")],
        )
        self.assertIn('Missing "fr": hello', "\n".join(logs.output))
        self.assertEqual(report.dictionary["hello"], {"en": "Hello", "de": "", "fr": ""})
        self.assertTrue(self.words.exists())

    def test_retained_entry_gets_every_language(self):
        self.write_json(self.lang_file("en"), {})
        self.write_words({"legacy": {"en": "Old"}})
        report = languages_to_words(self.base, self.make_config())
        self.assertEqual(report.dictionary["legacy"], {"en": "Old", "de": ""})

    def test_unreadable_words_file_is_ignored(self):
        self.words.write_text("this is not a dictionary", encoding="utf-8")
        self.write_json(self.lang_file("en"), {"hello": "Hello"})
        self.write_json(self.lang_file("de"), {"hello": "Hallo"})

        report = languages_to_words(self.base, self.make_config())

        self.assertEqual(report.dictionary, {"hello": {"en": "Hello", "de": "Hallo"}})
        self.assertEqual(read_words_file(self.words), report.dictionary)

    def test_keeps_emoji_written_as_surrogate_pair(self):
        self.words.write_text(
            'systemDictionary = {"smile": {"en": "\\ud83d\\ude00", "de": "\\ud83d\\ude00"}};',
            encoding="utf-8",
        )
        self.write_json(self.lang_file("en"), {"hello": "Hello"})

        report = languages_to_words(self.base, self.make_config())

        self.assertEqual(report.dictionary["smile"], {"en": "\U0001F600", "de": "\U0001F600"})
        self.assertEqual(read_words_file(self.words)["smile"]["en"], "\U0001F600")

    def test_write_failure_leaves_words_file_intact(self):
        original = 'systemDictionary = {"broken": {"en": "\\ud83d"}};'
        self.words.write_text(original, encoding="utf-8")
        self.write_json(self.lang_file("en"), {"hello": "Hello"})

        with self.assertRaises(WriteError):
            languages_to_words(self.base, self.make_config())

        self.assertEqual(self.words.read_text(encoding="utf-8"), original)

    def test_non_utf8_words_file_is_ignored(self):
        self.words.write_bytes(b'systemDictionary = {"old": {"en": "caf\xe9"}};')
        self.write_json(self.lang_file("en"), {"hello": "Hello"})
        self.write_json(self.lang_file("de"), {"hello": "Hallo"})

        report = languages_to_words(self.base, self.make_config())

        self.assertEqual(report.dictionary, {"hello": {"en": "Hello", "de": "Hallo"}})
        self.assertEqual(read_words_file(self.words), report.dictionary)

    def test_malformed_language_file_raises_parse_error(self):
        self.write_json(self.lang_file("en"), {"hello": "Hello"})
        self.lang_file("de").parent.mkdir(parents=True)
        self.lang_file("de").write_text('{"hello": ', encoding="utf-8")
        with self.assertRaises(ParseError):
            languages_to_words(self.base, self.make_config())
        self.assertFalse(self.words.exists())

    def test_does_not_translate(self):
        self.write_json(self.lang_file("en"), {"hello": "Hello"})
        languages_to_words(self.base, self.make_config())
        self.assertEqual(self.translator.calls, [])


class TestWordsToLanguages(AdapterTestCase):

    def test_writes_one_file_per_language(self):
        self.words.write_text(
            create_words_js({"hello": {"en": "Hello", "de": "Hallo"}, "bye": {"en": "Bye"}}),
            encoding="utf-8",
        )

        written = words_to_languages(self.words, self.base, self.make_config())

        self.assertEqual(written, [self.lang_file("en"), self.lang_file("de")])
        self.assertEqual(self.read_json(self.lang_file("en")), {"bye": "Bye", "hello": "Hello"})
        de = self.read_json(self.lang_file("de"))
        self.assertEqual(de, {"bye": "", "hello": "Hallo"})
        self.assertEqual(list(de), ["bye", "hello"])


class TestTranslateIoPackage(AdapterTestCase):

    def test_fills_manifest_fields(self):
        manifest = {
            "common": {
                "name": "test",
                "version": "1.0.0",
                "news": {
                    "1.0.0": {"en": "Initial release", "de": "Erste Version"},
                    "0.9.0": {"en": "Beta"},
                },
                "title": "Test Adapter",
                "titleLang": {"en": "Test Adapter"},
                "desc": {"en": "Does things"},
                "platform": "Javascript/Node.js",
            },
            "native": {"interval": 5},
        }
        self.write_json(self.io_package, manifest)

        translate_io_package(self.make_config(), self.translator)

        result = self.read_json(self.io_package)
        common = result["common"]
        self.assertEqual(list(result), ["common", "native"])
        self.assertEqual(list(common), list(manifest["common"]))
        self.assertEqual(common["news"]["1.0.0"]["de"], "Erste Version")
        self.assertEqual(common["news"]["0.9.0"]["de"], "[de] Beta")
        self.assertEqual(common["titleLang"]["de"], "[de] Test Adapter")
        self.assertEqual(common["desc"], {"en": "Does things", "de": "[de] Does things"})
        self.assertEqual(result["native"], {"interval": 5})

    def test_title_falls_back_to_common_title(self):
        self.write_json(self.io_package, {"common": {"title": "Fallback", "titleLang": {}}})
        translate_io_package(self.make_config(), self.translator)
        self.assertEqual(self.read_json(self.io_package)["common"]["titleLang"], {"de": "[de] Fallback"})

    def test_string_description_left_alone(self):
        self.write_json(self.io_package, {"common": {"desc": "Plain"}})
        translate_io_package(self.make_config(), self.translator)
        self.assertEqual(self.read_json(self.io_package), {"common": {"desc": "Plain"}})
        self.assertEqual(self.translator.calls, [])


if __name__ == "__main__":
    unittest.main()
