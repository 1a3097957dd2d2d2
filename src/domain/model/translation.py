"""Translation domain models.

Immutable value objects produced by the dictionary extractors. Every
object renders to the JSON shape consumers receive via ``to_dict()``
(camelCase keys, optional keys omitted when unset).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class DictionarySource(str, Enum):
    WORDREFERENCE = "wordreference"
    LINGUEE = "linguee"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


# ── WordReference shapes ─────────────────────────────────────


@dataclass(frozen=True)
class WordInfo:
    """Source-language headword with its part-of-speech tag."""
    word: str = ""
    pos: str = ""
    sense: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"word": self.word, "pos": self.pos}
        if self.sense:
            data["sense"] = self.sense
        return data


@dataclass(frozen=True)
class Meaning:
    """Target-language rendering of a headword."""
    word: str = ""
    pos: str = ""
    sense: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"word": self.word, "pos": self.pos}
        if self.sense:
            data["sense"] = self.sense
        return data


@dataclass(frozen=True)
class Example:
    phrase: str
    translations: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"phrase": self.phrase, "translations": list(self.translations)}


@dataclass(frozen=True)
class Translation:
    """One WordReference translation entry (headword → meanings/examples)."""
    word: WordInfo
    definition: str = ""
    meanings: tuple[Meaning, ...] = ()
    examples: tuple[Example, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.meanings and not self.examples

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word.to_dict(),
            "definition": self.definition,
            "meanings": [m.to_dict() for m in self.meanings],
            "examples": [e.to_dict() for e in self.examples],
        }


@dataclass(frozen=True)
class TranslationSection:
    title: str = ""
    translations: tuple[Translation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "translations": [t.to_dict() for t in self.translations],
        }


# ── Linguee shapes ───────────────────────────────────────────


@dataclass(frozen=True)
class TranslationCandidate:
    text: str
    type: str = ""
    frequency: str = "unknown"
    verified: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "type": self.type,
            "frequency": self.frequency,
            "verified": self.verified,
        }


@dataclass(frozen=True)
class UsageContext:
    """Source/target sentence pair showing a word in real use."""
    source: str
    target: str
    verified: bool = False
    external: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "verified": self.verified,
            "external": self.external,
        }


@dataclass(frozen=True)
class LingueeEntry:
    """One Linguee lemma block (flat form, no section wrapper)."""
    from_word: str
    from_type: str = ""
    audio: str | None = None
    translations: tuple[TranslationCandidate, ...] = ()
    contexts: tuple[UsageContext, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.translations and not self.contexts

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_word,
            "fromType": self.from_type,
            "audio": self.audio,
            "translations": [t.to_dict() for t in self.translations],
            "contexts": [c.to_dict() for c in self.contexts],
        }


# ── Results ──────────────────────────────────────────────────


@dataclass(frozen=True)
class DictionaryResult:
    """Result of one lookup against one dictionary (Value Object).

    ``sections`` is populated by WordReference, ``translations`` by
    Linguee. ``error`` is only set when nothing was extracted.
    """
    input_word: str
    source: DictionarySource
    sections: tuple[TranslationSection, ...] = ()
    translations: tuple[LingueeEntry, ...] = ()
    audio_links: tuple[str, ...] = ()
    error: str | None = None
    from_lang: str | None = None
    to_lang: str | None = None
    language_pair: str | None = None
    url: str | None = None
    attempted_language_pairs: tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=_utc_now)

    @classmethod
    def failed(
        cls,
        input_word: str,
        source: DictionarySource,
        error: str,
        **kwargs: Any,
    ) -> "DictionaryResult":
        """Factory for a result that carries only an error message."""
        return cls(input_word=input_word, source=source, error=error, **kwargs)

    @property
    def is_empty(self) -> bool:
        return not self.sections and not self.translations

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "inputWord": self.input_word,
            "source": self.source.value,
        }
        if self.source is DictionarySource.LINGUEE:
            data["translations"] = [t.to_dict() for t in self.translations]
        else:
            data["sections"] = [s.to_dict() for s in self.sections]
        data["audioLinks"] = list(self.audio_links)
        optional = {
            "fromLang": self.from_lang,
            "toLang": self.to_lang,
            "languagePair": self.language_pair,
            "url": self.url,
            "error": self.error,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        if self.attempted_language_pairs:
            data["attemptedLanguagePairs"] = list(self.attempted_language_pairs)
        data["timestamp"] = _isoformat(self.timestamp)
        return data


@dataclass(frozen=True)
class MultiDictionaryResult:
    """Per-dictionary results for one word, merged by dictionary key."""
    input_word: str
    from_lang: str
    to_lang: str
    results: dict[str, DictionaryResult]
    timestamp: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "inputWord": self.input_word,
            "fromLang": self.from_lang,
            "toLang": self.to_lang,
            "results": {key: r.to_dict() for key, r in self.results.items()},
            "timestamp": _isoformat(self.timestamp),
        }
