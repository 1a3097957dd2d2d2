"""Tests for the WordReference adapter.

Tests cover:
1. extract_word_reference: sections, translations, meanings, examples
2. TranslationRowState: flush rules for pending translations/examples
3. extract_audio_links: script literal, direct paths, malformed literal
4. build_wordreference_url and WordReferenceAdapter.lookup with FakeFetcher
"""

import unittest

from adapter.external.wordreference import (
    TranslationRowState,
    WordReferenceAdapter,
    _PendingTranslation,
    build_wordreference_url,
    extract_audio_links,
    extract_word_reference,
)
from adapter.fake.fetcher import FakeFetcher
from domain.model.errors import FetchError
from domain.model.translation import DictionarySource, Meaning, WordInfo

HOUSE_HTML = """
<html><head>
<script>var audioFiles = {0:'/audio/en/us/us/en042529.mp3', 1:'/audio/en/uk/general/en042529.mp3'};</script>
</head><body>
<table class="WRD">
  <tr class="wrtopsection"><td colspan="3"><span class="ph">Principal Translations</span></td></tr>
  <tr class="langHeader"><td>English</td><td></td><td>Spanish</td></tr>
  <tr class="even" id="enes:1">
    <td class="FrWrd"><strong>house&rArr;</strong> <em class="POS2">n<span><i>noun</i>: person, place</span></em></td>
    <td>(building: home) <span class="dsense">(dwelling)</span></td>
    <td class="ToWrd">casa <em class="POS2">nf<span>noun, feminine</span></em></td>
  </tr>
  <tr class="even"><td>&nbsp;</td><td class="FrEx" colspan="2">They live in a big house.</td></tr>
  <tr class="even"><td>&nbsp;</td><td class="ToEx" colspan="2">Viven en una casa grande.</td></tr>
</table>
</body></html>
"""


def _table(*rows: str, title: str | None = None) -> str:
    heading = (
        f'<tr class="wrtopsection"><td colspan="3"><span class="ph">{title}</span></td></tr>'
        if title else ""
    )
    return f'<table class="WRD">{heading}{"".join(rows)}</table>'


def _word_row(word: str, translation: str = "", middle: str = "", css: str = "odd") -> str:
    to_cell = f'<td class="ToWrd">{translation}</td>' if translation else ""
    return f'<tr class="{css}"><td class="FrWrd"><strong>{word}</strong></td><td>{middle}</td>{to_cell}</tr>'


def _example_rows(phrase: str, *renderings: str, css: str = "odd") -> str:
    rows = f'<tr class="{css}"><td></td><td class="FrEx">{phrase}</td></tr>'
    for text in renderings:
        rows += f'<tr class="{css}"><td></td><td class="ToEx">{text}</td></tr>'
    return rows


class TestExtractWordReference(unittest.TestCase):
    """Test extract_word_reference on WordReference-shaped markup."""

    def test_minimal_table(self):
        result = extract_word_reference(HOUSE_HTML, "house")

        self.assertEqual(result.source, DictionarySource.WORDREFERENCE)
        self.assertEqual(result.input_word, "house")
        self.assertIsNone(result.error)
        self.assertEqual(len(result.sections), 1)

        section = result.sections[0]
        self.assertEqual(section.title, "Principal Translations")
        self.assertEqual(len(section.translations), 1)

        translation = section.translations[0]
        self.assertEqual(translation.word.word, "house")
        self.assertEqual(translation.word.pos, "n")
        self.assertEqual(translation.definition, "building home")
        self.assertEqual(translation.meanings, (Meaning(word="casa", pos="nf", sense="dwelling"),))
        self.assertEqual(len(translation.examples), 1)
        self.assertEqual(translation.examples[0].phrase, "They live in a big house")
        self.assertEqual(translation.examples[0].translations, ("Viven en una casa grande",))

    def test_to_dict_shape(self):
        data = extract_word_reference(HOUSE_HTML, "house").to_dict()

        self.assertEqual(data["source"], "wordreference")
        self.assertEqual(data["inputWord"], "house")
        self.assertIn("sections", data)
        self.assertNotIn("translations", data)
        entry = data["sections"][0]["translations"][0]
        self.assertEqual(entry["word"], {"word": "house", "pos": "n"})
        self.assertEqual(entry["meanings"], [{"word": "casa", "pos": "nf", "sense": "dwelling"}])

    def test_no_tables_gives_empty_sections(self):
        result = extract_word_reference("<html><body><p>No results</p></body></html>", "zzz")

        self.assertEqual(result.sections, ())
        self.assertTrue(result.is_empty)
        self.assertIsNone(result.error)

    def test_none_html_raises_type_error(self):
        with self.assertRaises(TypeError):
            extract_word_reference(None, "house")

    def test_translation_without_meanings_or_examples_is_dropped(self):
        html = _table(_word_row("ghost"), title="Additional Translations")

        result = extract_word_reference(html, "ghost")

        self.assertEqual(len(result.sections), 1)
        self.assertEqual(result.sections[0].title, "Additional Translations")
        self.assertEqual(result.sections[0].translations, ())

    def test_untitled_empty_table_is_dropped(self):
        html = _table(_word_row("ghost")) + _table(_word_row("house", "casa"), title="Main")

        result = extract_word_reference(html, "house")

        self.assertEqual([s.title for s in result.sections], ["Main"])

    def test_examples_attach_to_preceding_translation(self):
        html = _table(
            _word_row("run", "correr"),
            _example_rows("I run every day.", "Corro todos los días.", "Corro cada día."),
            _word_row("run", "funcionar", css="even"),
            title="Principal Translations",
        )

        translations = extract_word_reference(html, "run").sections[0].translations

        self.assertEqual(len(translations), 2)
        self.assertEqual(translations[0].meanings[0].word, "correr")
        self.assertEqual(len(translations[0].examples), 1)
        self.assertEqual(
            translations[0].examples[0].translations,
            ("Corro todos los días", "Corro cada día"),
        )
        self.assertEqual(translations[1].meanings[0].word, "funcionar")
        self.assertEqual(translations[1].examples, ())

    def test_example_before_any_translation_is_dropped(self):
        html = _table(
            _example_rows("Orphan phrase.", "Frase huérfana."),
            _word_row("house", "casa"),
            title="Main",
        )

        translations = extract_word_reference(html, "house").sections[0].translations

        self.assertEqual(len(translations), 1)
        self.assertEqual(translations[0].examples, ())

    def test_more_rows_are_skipped(self):
        html = _table(
            _word_row("house", "casa"),
            _word_row("house", "hogar", css="even more"),
            title="Main",
        )

        translations = extract_word_reference(html, "house").sections[0].translations

        self.assertEqual([t.meanings[0].word for t in translations], ["casa"])

    def test_fr2_sets_word_sense(self):
        html = _table(
            _word_row("bank", "banco", middle='<i class="Fr2">financial institution</i>'),
            title="Main",
        )

        translation = extract_word_reference(html, "bank").sections[0].translations[0]

        self.assertEqual(translation.word.sense, "financial institution")
        self.assertEqual(translation.definition, "")

    def test_every_translation_has_meaning_or_example(self):
        html = _table(
            _word_row("a", "uno"),
            _word_row("b"),
            _word_row("c"),
            _example_rows("Phrase c."),
            _word_row("d"),
            title="Main",
        )

        translations = extract_word_reference(html, "x").sections[0].translations

        self.assertEqual([t.word.word for t in translations], ["a", "c"])
        for t in translations:
            self.assertTrue(t.meanings or t.examples)

    def test_deterministic(self):
        first = extract_word_reference(HOUSE_HTML, "house")
        second = extract_word_reference(HOUSE_HTML, "house")

        self.assertEqual(first.sections, second.sections)
        self.assertEqual(first.audio_links, second.audio_links)


class TestTranslationRowState(unittest.TestCase):
    """Test the pending translation/example slots."""

    def test_flush_drops_empty_translation(self):
        state = TranslationRowState()
        state.start_translation(_PendingTranslation(word=WordInfo(word="ghost")))
        state.flush()

        self.assertEqual(state.translations, [])
        self.assertIsNone(state.pending_translation)

    def test_starting_translation_flushes_previous(self):
        state = TranslationRowState()
        first = _PendingTranslation(word=WordInfo(word="run"))
        state.start_translation(first)
        state.start_example("I run")
        state.add_example_translation("Corro")
        state.start_translation(_PendingTranslation(word=WordInfo(word="walk")))

        self.assertEqual(len(state.translations), 1)
        self.assertEqual(state.translations[0].examples[0].phrase, "I run")
        self.assertEqual(state.pending_translation.word.word, "walk")
        self.assertIsNone(state.pending_example)

    def test_rendering_without_example_is_ignored(self):
        state = TranslationRowState()
        state.start_translation(_PendingTranslation(word=WordInfo(word="run")))
        state.add_example_translation("Corro")
        state.flush()

        self.assertEqual(state.translations, [])

    def test_empty_phrase_is_not_attached(self):
        state = TranslationRowState()
        state.start_translation(_PendingTranslation(word=WordInfo(word="run")))
        state.start_example("")
        state.add_example_translation("Corro")
        state.flush()

        self.assertEqual(state.translations, [])


class TestExtractAudioLinks(unittest.TestCase):

    def test_script_and_direct_paths_deduplicated(self):
        links = extract_audio_links(HOUSE_HTML)

        self.assertEqual(links, [
            "https://www.wordreference.com/audio/en/us/us/en042529.mp3",
            "https://www.wordreference.com/audio/en/uk/general/en042529.mp3",
        ])

    def test_links_are_absolute_and_unique(self):
        html = HOUSE_HTML + '<a href="/audio/en/us/us/en042529.mp3">play</a>'

        links = extract_audio_links(html)

        self.assertEqual(len(links), len(set(links)))
        for link in links:
            self.assertTrue(link.startswith("https://www.wordreference.com/audio/"))

    def test_list_literal(self):
        html = "<script>audioFiles = ['/audio/es/es/es001.mp3'];</script>"

        self.assertEqual(extract_audio_links(html), ["https://www.wordreference.com/audio/es/es/es001.mp3"])

    def test_malformed_literal_falls_back_to_path_scan(self):
        html = "<script>var audioFiles = {a: '/audio/fr/fr001.mp3'};</script>"

        self.assertEqual(extract_audio_links(html), ["https://www.wordreference.com/audio/fr/fr001.mp3"])

    def test_no_audio(self):
        self.assertEqual(extract_audio_links("<html></html>"), [])


class TestBuildWordReferenceUrl(unittest.TestCase):

    def test_english_to_spanish_uses_legacy_page(self):
        self.assertEqual(
            build_wordreference_url("house", "en", "es"),
            "https://www.wordreference.com/es/translation.asp?tranword=house",
        )

    def test_spanish_to_english_uses_legacy_page(self):
        self.assertEqual(
            build_wordreference_url("casa", "es", "en"),
            "https://www.wordreference.com/es/en/translation.asp?spen=casa",
        )

    def test_other_pairs_use_concatenated_codes(self):
        self.assertEqual(
            build_wordreference_url("fish", "en", "fr"),
            "https://www.wordreference.com/enfr/fish",
        )

    def test_word_is_quoted(self):
        self.assertEqual(
            build_wordreference_url("ice cream", "en", "fr"),
            "https://www.wordreference.com/enfr/ice%20cream",
        )


class TestWordReferenceAdapter(unittest.IsolatedAsyncioTestCase):
    """Test WordReferenceAdapter.lookup with a FakeFetcher."""

    async def test_lookup_success_annotates_result(self):
        url = "https://www.wordreference.com/es/translation.asp?tranword=house"
        fetcher = FakeFetcher(pages={url: HOUSE_HTML})
        adapter = WordReferenceAdapter(fetcher)

        result = await adapter.lookup("house", "english", "es")

        self.assertIsNone(result.error)
        self.assertEqual(result.url, url)
        self.assertEqual(result.language_pair, "en-es")
        self.assertEqual(result.from_lang, "en")
        self.assertEqual(result.to_lang, "es")
        self.assertEqual(len(result.sections), 1)
        self.assertEqual(fetcher.requested_urls, [url])

    async def test_lookup_tries_every_alternate_then_reports_last_error(self):
        fetcher = FakeFetcher()
        adapter = WordReferenceAdapter(fetcher)

        result = await adapter.lookup("house", "en", "es")

        self.assertEqual(result.error, "Request failed with status code 404")
        self.assertEqual(
            result.attempted_language_pairs,
            ("en-es", "en-spanish", "english-es", "english-spanish"),
        )
        self.assertEqual(fetcher.requested_urls, [
            "https://www.wordreference.com/es/translation.asp?tranword=house",
            "https://www.wordreference.com/enspanish/house",
            "https://www.wordreference.com/englishes/house",
            "https://www.wordreference.com/englishspanish/house",
        ])

    async def test_lookup_continues_after_fetch_error(self):
        first = "https://www.wordreference.com/enfr/fish"
        second = "https://www.wordreference.com/enfrench/fish"
        fetcher = FakeFetcher(
            pages={second: HOUSE_HTML},
            errors={first: FetchError("Request timed out", kind="timeout", url=first)},
        )

        result = await WordReferenceAdapter(fetcher).lookup("fish", "en", "fr")

        self.assertIsNone(result.error)
        self.assertEqual(result.url, second)
        self.assertEqual(result.language_pair, "en-french")

    async def test_lookup_empty_pages_reports_not_found(self):
        fetcher = FakeFetcher(default="<html><body></body></html>")

        result = await WordReferenceAdapter(fetcher).lookup("qwxz", "en", "fr")

        self.assertEqual(result.error, 'No translations found for "qwxz" from English to French')
        self.assertTrue(result.is_empty)

    async def test_unsupported_language_does_not_fetch(self):
        fetcher = FakeFetcher()

        result = await WordReferenceAdapter(fetcher).lookup("house", "xx", "es")

        self.assertEqual(
            result.error,
            "Unsupported source language: xx. Try using ISO codes like 'en', 'es', 'fr'",
        )
        self.assertEqual(fetcher.requested_urls, [])

    def test_supports(self):
        adapter = WordReferenceAdapter(FakeFetcher())

        self.assertTrue(adapter.supports("en", "es"))
        self.assertTrue(adapter.supports("English", "japanese"))
        self.assertFalse(adapter.supports("en", "fi"))
        self.assertFalse(adapter.supports("en", "xx"))


if __name__ == '__main__':
    unittest.main()
