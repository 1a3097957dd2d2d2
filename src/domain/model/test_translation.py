"""Tests for translation domain models.

Tests cover immutability, emptiness rules, and the JSON shape produced by
to_dict() for both dictionary sources.
"""

import unittest
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

from domain.model.translation import (
    DictionaryResult,
    DictionarySource,
    Example,
    LingueeEntry,
    Meaning,
    MultiDictionaryResult,
    Translation,
    TranslationCandidate,
    UsageContext,
    WordInfo,
)

FIXED_TIME = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestImmutability(unittest.TestCase):

    def test_result_is_frozen(self):
        result = DictionaryResult(input_word="house", source=DictionarySource.WORDREFERENCE)

        with self.assertRaises(FrozenInstanceError):
            result.error = "changed"

    def test_nested_collections_are_tuples(self):
        translation = Translation(word=WordInfo(word="house"), meanings=(Meaning(word="casa"),))

        self.assertIsInstance(translation.meanings, tuple)
        self.assertIsInstance(translation.examples, tuple)


class TestEmptiness(unittest.TestCase):

    def test_translation_needs_meaning_or_example(self):
        self.assertTrue(Translation(word=WordInfo(word="house")).is_empty)
        self.assertFalse(Translation(
            word=WordInfo(word="house"), examples=(Example(phrase="a house"),)
        ).is_empty)

    def test_linguee_entry_needs_translation_or_context(self):
        self.assertTrue(LingueeEntry(from_word="house").is_empty)
        self.assertFalse(LingueeEntry(
            from_word="house", contexts=(UsageContext(source="a", target="b"),)
        ).is_empty)


class TestToDict(unittest.TestCase):

    def test_failed_result(self):
        result = DictionaryResult.failed(
            "house",
            DictionarySource.WORDREFERENCE,
            "Request failed with status code 404",
            attempted_language_pairs=("en-es", "en-spanish"),
            timestamp=FIXED_TIME,
        )

        self.assertEqual(result.to_dict(), {
            "inputWord": "house",
            "source": "wordreference",
            "sections": [],
            "audioLinks": [],
            "error": "Request failed with status code 404",
            "attemptedLanguagePairs": ["en-es", "en-spanish"],
            "timestamp": "2026-01-02T03:04:05Z",
        })

    def test_sense_only_when_set(self):
        self.assertEqual(Meaning(word="casa", pos="nf").to_dict(), {"word": "casa", "pos": "nf"})
        self.assertEqual(
            WordInfo(word="bank", pos="n", sense="money").to_dict(),
            {"word": "bank", "pos": "n", "sense": "money"},
        )

    def test_linguee_result(self):
        result = DictionaryResult(
            input_word="house",
            source=DictionarySource.LINGUEE,
            translations=(LingueeEntry(
                from_word="house",
                from_type="noun",
                translations=(TranslationCandidate(text="casa", type="f"),),
            ),),
            from_lang="en",
            to_lang="es",
            timestamp=FIXED_TIME,
        )

        data = result.to_dict()

        self.assertNotIn("sections", data)
        self.assertEqual(data["fromLang"], "en")
        self.assertEqual(data["translations"], [{
            "from": "house",
            "fromType": "noun",
            "audio": None,
            "translations": [
                {"text": "casa", "type": "f", "frequency": "unknown", "verified": False},
            ],
            "contexts": [],
        }])

    def test_multi_result(self):
        wr = DictionaryResult.failed("house", DictionarySource.WORDREFERENCE, "boom", timestamp=FIXED_TIME)
        multi = MultiDictionaryResult(
            input_word="house",
            from_lang="en",
            to_lang="es",
            results={"wordreference": wr},
            timestamp=FIXED_TIME,
        )

        data = multi.to_dict()

        self.assertEqual(data["inputWord"], "house")
        self.assertEqual(data["results"]["wordreference"]["error"], "boom")
        self.assertEqual(data["timestamp"], "2026-01-02T03:04:05Z")


if __name__ == '__main__':
    unittest.main()
