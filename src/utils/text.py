"""Text normalization for fragments extracted from dictionary pages.

Provides whitespace/character cleanup and grammatical-type classification
so output is comparable across languages and sources.
"""

import re

# ASCII word characters plus Latin extended, Cyrillic, CJK, Hiragana,
# Katakana, Hebrew and Arabic letters. Everything else is dropped.
_DISALLOWED_CHARS = re.compile(
    r"[^\w \u00C0-\u017F\u0400-\u04FF\u4E00-\u9FFF"
    r"\u3040-\u309F\u30A0-\u30FF\u0590-\u05FF\u0600-\u06FF]",
    re.ASCII,
)
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"[.!?]+")

# Declaration order matters: the substring scan returns the first hit,
# so "plural noun" classifies as "n", not "pl".
GRAMMATICAL_TYPES: tuple[tuple[str, str], ...] = (
    ("noun", "n"),
    ("verb", "v"),
    ("adjective", "adj"),
    ("adverb", "adv"),
    ("preposition", "prep"),
    ("conjunction", "conj"),
    ("interjection", "interj"),
    ("pronoun", "pron"),
    ("article", "art"),
    ("masculine", "m"),
    ("feminine", "f"),
    ("neuter", "nt"),
    ("plural", "pl"),
    ("singular", "sg"),
    ("invariable", "inv"),
)
_GRAMMATICAL_CODES = dict(GRAMMATICAL_TYPES)


def clean_text(raw: str | None) -> str:
    """Normalize an extracted text fragment.

    Folds every whitespace run into a single space, removes characters
    outside the allowed letter ranges and trims the result.

    Args:
        raw: Text as extracted from the page. None is accepted.

    Returns:
        Cleaned text, or "" for None/empty input.
    """
    if not raw:
        return ""
    text = _WHITESPACE.sub(" ", raw)
    text = _DISALLOWED_CHARS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def classify_grammatical_type(raw: str | None) -> str:
    """Map a grammatical role name to its short code.

    Exact matches win; otherwise the first role name (in table order)
    contained in the input is used. Unknown input is returned lowercased
    and trimmed.
    """
    if not raw:
        return ""
    normalized = raw.lower().strip()
    if normalized in _GRAMMATICAL_CODES:
        return _GRAMMATICAL_CODES[normalized]
    for name, code in GRAMMATICAL_TYPES:
        if name in normalized:
            return code
    return normalized


def split_into_sentences(text: str | None) -> list[str]:
    """Split text on sentence-ending punctuation, dropping empty pieces."""
    if not text:
        return []
    return [s.strip() for s in _SENTENCE_BREAK.split(text) if s.strip()]
