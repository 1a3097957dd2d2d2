"""Linguee adapter.

Implements DictionaryPort by fetching Linguee search pages. Extraction is
a two-stage pipeline: the primary pass reads ``.lemma`` blocks; only when
it retains nothing does the looser fallback pass salvage translations
from any ``.dictLink`` that mentions the searched word.
"""

import logging
import re
from urllib.parse import quote, urljoin

from bs4 import BeautifulSoup, Tag

from adapter.external.lookup import lookup_with_alternatives
from domain.model.language import get_language
from domain.model.translation import (
    DictionaryResult,
    DictionarySource,
    LingueeEntry,
    TranslationCandidate,
    UsageContext,
)
from port.fetcher import FetcherPort
from utils.text import clean_text

logger = logging.getLogger(__name__)

LINGUEE_BASE_URL = "https://www.linguee.com"

LINGUEE_LANGUAGES: tuple[str, ...] = (
    "en", "es", "fr", "de", "pt", "it", "nl", "pl", "sv", "da", "fi", "el",
    "hu", "sl", "lv", "lt", "et", "mt", "sk", "bg", "ro", "hr", "cs",
)

# Linguee URLs spell languages out in full
LINGUEE_LANGUAGE_NAMES: dict[str, str] = {
    "en": "english",
    "es": "spanish",
    "fr": "french",
    "de": "german",
    "pt": "portuguese",
    "it": "italian",
    "ru": "russian",
}

SUPPORTED_PAIRS: frozenset[str] = frozenset({
    "en-es", "es-en", "en-fr", "fr-en", "en-de", "de-en",
    "en-pt", "pt-en", "en-it", "it-en", "fr-es", "es-fr",
    "de-es", "es-de", "de-fr", "fr-de", "en-ru", "ru-en",
})

# Checked in order; "less common" must be tested before "common".
FREQUENCY_BUCKETS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("high", ("muy frecuente", "uso muy frecuente", "very common", "often used")),
    ("low", ("menos frecuente", "poco frecuente", "less common", "rarely used")),
    ("medium", ("frecuente", "common")),
)

_PLAY_SOUND = re.compile(r'playSound\([^,]+,\s*"([^"]+)"')
_FALLBACK_CONTAINERS = frozenset({"lemma", "translation_group", "meaninggroup"})


def is_language_pair_supported(from_lang: str, to_lang: str) -> bool:
    return f"{from_lang}-{to_lang}" in SUPPORTED_PAIRS


# ── Extraction ───────────────────────────────────────────────


def extract_linguee(html: str, input_word: str, from_lang: str, to_lang: str) -> DictionaryResult:
    """Extract translation entries from a Linguee search page.

    Args:
        html: Raw HTML of the search page.
        input_word: The word that was searched for.
        from_lang: Resolved source language code.
        to_lang: Resolved target language code.

    Returns:
        DictionaryResult whose ``translations`` hold one entry per lemma.

    Raises:
        TypeError: If html is None.
        ValueError: If either language is missing.
    """
    if html is None:
        raise TypeError("html must be a string, not None")
    if not from_lang or not to_lang:
        raise ValueError("from_lang and to_lang are required")

    soup = BeautifulSoup(html, "html.parser")
    entries = extract_primary_entries(soup)
    if not entries:
        logger.debug(
            "No lemma blocks retained, running fallback extraction",
            extra={"word": input_word},
        )
        entries = extract_fallback_entries(soup, input_word)

    return DictionaryResult(
        input_word=input_word,
        source=DictionarySource.LINGUEE,
        translations=tuple(entries),
        audio_links=tuple(dict.fromkeys(e.audio for e in entries if e.audio)),
        from_lang=from_lang,
        to_lang=to_lang,
    )


def extract_primary_entries(soup: BeautifulSoup) -> list[LingueeEntry]:
    """Read every top-level ``.lemma`` block inside ``#dictionary``."""
    root = soup.select_one("#dictionary") or soup
    entries = []
    for lemma in root.select(".lemma"):
        if lemma.find_parent(_is_lemma) is not None:
            continue
        entry = _extract_lemma(lemma)
        if entry is not None and not entry.is_empty:
            entries.append(entry)
    return entries


def _extract_lemma(lemma: Tag) -> LingueeEntry | None:
    source_link = lemma.select_one(".tag_lemma .dictLink")
    source_word = clean_text(source_link.get_text()) if source_link else ""
    if not source_word:
        return None

    word_type = lemma.select_one(".tag_wordtype")

    candidates = []
    for block in lemma.select(".translation"):
        link = block.select_one(".tag_trans .dictLink")
        text = clean_text(link.get_text()) if link else ""
        if not text or text == source_word:
            continue
        type_tag = block.select_one(".tag_type")
        candidates.append(TranslationCandidate(
            text=text,
            type=clean_text(type_tag.get_text()) if type_tag else "",
            frequency=_frequency(block),
            verified=block.select_one(".icon_verified") is not None,
        ))

    contexts = []
    for block in lemma.select(".example"):
        source_tag, target_tag = block.select_one(".tag_s"), block.select_one(".tag_t")
        source = clean_text(source_tag.get_text()) if source_tag else ""
        target = clean_text(target_tag.get_text()) if target_tag else ""
        if source and target:
            contexts.append(UsageContext(
                source=source,
                target=target,
                verified=block.select_one(".icon_verified") is not None,
                external=block.select_one(".icon_external") is not None,
            ))

    return LingueeEntry(
        from_word=source_word,
        from_type=clean_text(word_type.get_text()) if word_type else "",
        audio=_audio_url(lemma),
        translations=tuple(candidates),
        contexts=tuple(contexts),
    )


def _audio_url(lemma: Tag) -> str | None:
    """Audio from an <audio> source, else from a playSound() onclick."""
    path = None
    source = lemma.select_one('audio source[type="audio/mpeg"]')
    if source is not None and source.get("src"):
        path = source["src"]
    else:
        link = lemma.select_one(".audio[onclick]")
        match = _PLAY_SOUND.search(link["onclick"]) if link is not None else None
        if match:
            path = match.group(1)
    if not path:
        return None
    return path if path.startswith("http") else urljoin(f"{LINGUEE_BASE_URL}/", path)


def _frequency(block: Tag) -> str:
    tag = block.select_one(".tag_c")
    if tag is None:
        return "unknown"
    text = tag.get_text().lower()
    for bucket, phrases in FREQUENCY_BUCKETS:
        if any(phrase in text for phrase in phrases):
            return bucket
    return "unknown"


def _is_lemma(tag: Tag) -> bool:
    return "lemma" in (tag.get("class") or [])


def _is_fallback_container(tag: Tag) -> bool:
    return bool(_FALLBACK_CONTAINERS.intersection(tag.get("class") or []))


def extract_fallback_entries(soup: BeautifulSoup, input_word: str) -> list[LingueeEntry]:
    """Salvage translations when the lemma markup was not recognized.

    Every ``.dictLink`` whose text contains the input word is paired with
    the other links in its nearest lemma/translation-group container.
    Types, frequencies and verification are unknown at this level.
    """
    needle = clean_text(input_word).lower()
    if not needle:
        return []

    entries = []
    for link in soup.select(".dictLink"):
        text = clean_text(link.get_text())
        if not text or needle not in text.lower():
            continue
        container = link.find_parent(_is_fallback_container)
        if container is None:
            continue
        candidates = []
        for other in container.select(".dictLink"):
            other_text = clean_text(other.get_text())
            if other_text and other_text != text:
                candidates.append(TranslationCandidate(text=other_text, type="unknown"))
        if candidates:
            entries.append(LingueeEntry(
                from_word=text,
                from_type="unknown",
                translations=tuple(candidates),
            ))
    return entries


# ── Adapter ──────────────────────────────────────────────────


def build_linguee_url(word: str, from_code: str, to_code: str) -> str:
    """Build the search URL on the .com domain to avoid regional redirects."""
    from_name = LINGUEE_LANGUAGE_NAMES.get(from_code, from_code)
    to_name = LINGUEE_LANGUAGE_NAMES.get(to_code, to_code)
    return (
        f"{LINGUEE_BASE_URL}/{from_name}-{to_name}/search"
        f"?source={from_name}&query={quote(word, safe='')}"
    )


class LingueeAdapter:
    """Adapter that looks up translations and usage contexts on Linguee."""

    key = DictionarySource.LINGUEE.value
    name = "Linguee"
    languages = LINGUEE_LANGUAGES
    features: tuple[str, ...] = ("contexts", "frequency", "verified-translations")
    priority = 2

    def __init__(self, fetcher: FetcherPort):
        self.fetcher = fetcher

    def supports(self, from_lang: str, to_lang: str) -> bool:
        source, target = get_language(from_lang), get_language(to_lang)
        if source is None or target is None:
            return False
        if source.code not in self.languages or target.code not in self.languages:
            return False
        return is_language_pair_supported(source.code, target.code)

    async def lookup(self, word: str, from_lang: str, to_lang: str) -> DictionaryResult:
        """Look up a word, trying each spelling of the language codes."""
        source, target = get_language(from_lang), get_language(to_lang)
        from_code = source.code if source else from_lang
        to_code = target.code if target else to_lang
        return await lookup_with_alternatives(
            self.fetcher,
            DictionarySource.LINGUEE,
            word,
            from_lang,
            to_lang,
            build_url=build_linguee_url,
            extract=lambda html, _from, _to: extract_linguee(html, word, from_code, to_code),
        )
