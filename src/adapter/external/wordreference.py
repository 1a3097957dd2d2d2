"""WordReference adapter.

Implements DictionaryPort by fetching WordReference result pages and
extracting their translation tables. The extraction functions are pure:
they take already-fetched HTML and return a DictionaryResult.

Page structure relied on:
- ``table.WRD`` holds one section; ``tr.wrtopsection`` is its heading.
- ``td.FrWrd`` / ``td.ToWrd`` start a translation entry.
- ``td.FrEx`` / ``td.ToEx`` carry an example phrase and its rendering.
- ``.dsense`` annotates the meaning, ``.Fr2`` the source word.
- ``var audioFiles = ...`` lists pronunciation files.
"""

import ast
import copy
import logging
import re
from dataclasses import dataclass, field
from urllib.parse import quote

from bs4 import BeautifulSoup, Tag

from adapter.external.lookup import lookup_with_alternatives
from domain.model.language import get_language
from domain.model.translation import (
    DictionaryResult,
    DictionarySource,
    Example,
    Meaning,
    Translation,
    TranslationSection,
    WordInfo,
)
from port.fetcher import FetcherPort
from utils.text import clean_text

logger = logging.getLogger(__name__)

WORDREFERENCE_BASE_URL = "https://www.wordreference.com"

WORDREFERENCE_LANGUAGES: tuple[str, ...] = (
    "en", "es", "fr", "de", "it", "pt", "ru", "ar", "zh", "ja", "ko", "nl",
    "sv", "no", "da", "pl", "cs", "ro", "tr", "he", "hi", "th", "vi",
)

_AUDIO_MAP = re.compile(r"audioFiles\s*=\s*(\{[^}]*\}|\[[^\]]*\])")
_DIRECT_AUDIO = re.compile(r"/audio/[^\"'\s]+\.mp3")

_POS_SELECTOR = "em, .POS2"


# ── Row state machine ────────────────────────────────────────


@dataclass
class _PendingExample:
    phrase: str
    translations: list[str] = field(default_factory=list)

    def freeze(self) -> Example:
        return Example(phrase=self.phrase, translations=tuple(self.translations))


@dataclass
class _PendingTranslation:
    word: WordInfo
    definition: str = ""
    meanings: list[Meaning] = field(default_factory=list)
    examples: list[Example] = field(default_factory=list)

    def freeze(self) -> Translation:
        return Translation(
            word=self.word,
            definition=self.definition,
            meanings=tuple(self.meanings),
            examples=tuple(self.examples),
        )


class TranslationRowState:
    """Builds Translation entries from the rows of one table.

    Two slots are held between rows: ``pending_translation`` (the entry
    under construction) and ``pending_example`` (an example phrase still
    collecting its renderings). ``flush()`` moves both into
    ``translations``; entries with no meaning and no example are dropped.
    """

    def __init__(self) -> None:
        self.pending_translation: _PendingTranslation | None = None
        self.pending_example: _PendingExample | None = None
        self.translations: list[Translation] = []

    def start_example(self, phrase: str) -> None:
        self._flush_example()
        self.pending_example = _PendingExample(phrase=phrase)

    def add_example_translation(self, text: str) -> None:
        if self.pending_example is not None and text:
            self.pending_example.translations.append(text)

    def start_translation(self, translation: _PendingTranslation) -> None:
        self.flush()
        self.pending_translation = translation

    def flush(self) -> None:
        self._flush_example()
        if self.pending_translation is not None:
            translation = self.pending_translation.freeze()
            if not translation.is_empty:
                self.translations.append(translation)
        self.pending_translation = None
        self.pending_example = None

    def _flush_example(self) -> None:
        example, self.pending_example = self.pending_example, None
        # An example seen before any headword has nothing to attach to
        if example and example.phrase and self.pending_translation is not None:
            self.pending_translation.examples.append(example.freeze())


# ── Extraction ───────────────────────────────────────────────


def extract_word_reference(html: str, input_word: str) -> DictionaryResult:
    """Extract sections, translations and audio links from a result page.

    Args:
        html: Raw HTML of a WordReference result page.
        input_word: The word that was searched for.

    Returns:
        DictionaryResult with one section per non-empty ``table.WRD``.

    Raises:
        TypeError: If html is None.
    """
    if html is None:
        raise TypeError("html must be a string, not None")

    soup = BeautifulSoup(html, "html.parser")
    sections: list[TranslationSection] = []
    for table in soup.select("table.WRD"):
        section = _extract_section(table)
        if section.title or section.translations:
            sections.append(section)

    return DictionaryResult(
        input_word=input_word,
        source=DictionarySource.WORDREFERENCE,
        sections=tuple(sections),
        audio_links=tuple(extract_audio_links(html)),
    )


def _extract_section(table: Tag) -> TranslationSection:
    title = ""
    title_row = table.select_one("tr.wrtopsection")
    if title_row is not None:
        heading = title_row.select_one(".ph")
        title = clean_text(heading.get_text()) if heading else ""
        title = title or clean_text(title_row.get_text())

    state = TranslationRowState()
    for row in table.select("tr.wrtopsection, tr.odd, tr.even"):
        classes = row.get("class") or []
        if "more" in classes or "wrtopsection" in classes:
            continue
        _apply_row(state, row)
    state.flush()

    return TranslationSection(title=title, translations=tuple(state.translations))


def _apply_row(state: TranslationRowState, row: Tag) -> None:
    source_example = row.select_one("td.FrEx")
    if source_example is not None:
        state.start_example(clean_text(source_example.get_text()))
        return

    target_example = row.select_one("td.ToEx")
    if target_example is not None:
        state.add_example_translation(clean_text(target_example.get_text()))
        return

    from_cell = row.select_one("td.FrWrd")
    to_cell = row.select_one("td.ToWrd")
    if from_cell is None and to_cell is None:
        return

    word, meaning = WordInfo(), Meaning()
    if from_cell is not None:
        strong = from_cell.find("strong")
        text = clean_text(strong.get_text()) if strong else ""
        word = WordInfo(word=text or _text_without_pos(from_cell), pos=_pos_text(from_cell))
    if to_cell is not None:
        meaning = Meaning(word=_text_without_pos(to_cell), pos=_pos_text(to_cell))

    pending = _PendingTranslation(word=word)
    meaning_sense = word_sense = None

    for cell in row.find_all("td"):
        cell_classes = cell.get("class") or []
        if "FrWrd" in cell_classes or "ToWrd" in cell_classes:
            continue
        cell = copy.copy(cell)
        dsense, fr2 = _pop_text(cell, ".dsense"), _pop_text(cell, ".Fr2")
        meaning_sense = meaning_sense or dsense
        word_sense = word_sense or fr2
        if not pending.definition:
            pending.definition = _definition_text(cell.get_text())

    if word_sense:
        pending.word = WordInfo(word=word.word, pos=word.pos, sense=word_sense)
    if meaning_sense:
        meaning = Meaning(word=meaning.word, pos=meaning.pos, sense=meaning_sense)
    if meaning.word or meaning.pos:
        pending.meanings.append(meaning)

    state.start_translation(pending)


def _pos_text(cell: Tag) -> str:
    # Only the tag's own text; nested spans hold tooltip descriptions
    parts = [
        "".join(el.find_all(string=True, recursive=False))
        for el in cell.select(_POS_SELECTOR)
    ]
    return clean_text(" ".join(parts))


def _text_without_pos(cell: Tag) -> str:
    cell = copy.copy(cell)
    for el in cell.select(_POS_SELECTOR):
        el.decompose()
    return clean_text(cell.get_text())


def _pop_text(cell: Tag, selector: str) -> str | None:
    """Remove every element matching selector and return their joined text."""
    found = cell.select(selector)
    text = clean_text(" ".join(el.get_text() for el in found))
    for el in found:
        el.decompose()
    return text or None


def _definition_text(raw: str) -> str:
    text = raw.strip()
    if text.startswith("(") and text.endswith(")"):
        text = text[1:-1]
    return clean_text(text)


# ── Audio ────────────────────────────────────────────────────


def extract_audio_links(html: str) -> list[str]:
    """Collect absolute pronunciation URLs from the raw page text.

    Merges the ``audioFiles`` script literal with a direct ``/audio/*.mp3``
    scan, keeping first-seen order.
    """
    links = _audio_from_script(html) + _audio_from_paths(html)
    return list(dict.fromkeys(links))


def _audio_from_script(html: str) -> list[str]:
    match = _AUDIO_MAP.search(html)
    if not match:
        return []
    try:
        literal = ast.literal_eval(match.group(1))
    except (ValueError, SyntaxError, TypeError) as e:
        logger.debug("Ignoring malformed audioFiles literal", extra={"error": str(e)})
        return []
    values = literal.values() if isinstance(literal, dict) else literal
    return [
        f"{WORDREFERENCE_BASE_URL}{value}"
        for value in values
        if isinstance(value, str) and value.startswith("/")
    ]


def _audio_from_paths(html: str) -> list[str]:
    return [f"{WORDREFERENCE_BASE_URL}{m.group(0)}" for m in _DIRECT_AUDIO.finditer(html)]


# ── Adapter ──────────────────────────────────────────────────


def build_wordreference_url(word: str, from_code: str, to_code: str) -> str:
    """Build the search URL; en→es and es→en use the legacy .asp pages."""
    quoted = quote(word, safe="")
    if from_code == "en" and to_code == "es":
        return f"{WORDREFERENCE_BASE_URL}/es/translation.asp?tranword={quoted}"
    if from_code == "es" and to_code == "en":
        return f"{WORDREFERENCE_BASE_URL}/es/en/translation.asp?spen={quoted}"
    return f"{WORDREFERENCE_BASE_URL}/{from_code}{to_code}/{quoted}"


class WordReferenceAdapter:
    """Adapter that looks up translations on WordReference."""

    key = DictionarySource.WORDREFERENCE.value
    name = "WordReference"
    languages = WORDREFERENCE_LANGUAGES
    features: tuple[str, ...] = ("audio", "pronunciation", "examples", "grammatical-types")
    priority = 1

    def __init__(self, fetcher: FetcherPort):
        self.fetcher = fetcher

    def supports(self, from_lang: str, to_lang: str) -> bool:
        source, target = get_language(from_lang), get_language(to_lang)
        if source is None or target is None:
            return False
        return source.code in self.languages and target.code in self.languages

    async def lookup(self, word: str, from_lang: str, to_lang: str) -> DictionaryResult:
        """Look up a word, trying each spelling of the language codes."""
        return await lookup_with_alternatives(
            self.fetcher,
            DictionarySource.WORDREFERENCE,
            word,
            from_lang,
            to_lang,
            build_url=build_wordreference_url,
            extract=lambda html, _from, _to: extract_word_reference(html, word),
        )
