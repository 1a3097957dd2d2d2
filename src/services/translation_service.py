"""Translation service — aggregates lookups across dictionary sites.

Dictionaries are independent: multiple lookups run concurrently and a
failure in one never affects the results of another.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from domain.model.errors import (
    DictionaryNotAvailableError,
    LanguagePairNotSupportedError,
    NoCompatibleDictionaryError,
    TranslationFailedError,
)
from domain.model.language import normalize_language_code
from domain.model.translation import (
    DictionaryResult,
    DictionarySource,
    MultiDictionaryResult,
)
from port.dictionary import DictionaryPort

logger = logging.getLogger(__name__)

DICTIONARY_ALIASES: dict[str, str] = {
    "wr": DictionarySource.WORDREFERENCE.value,
    "lg": DictionarySource.LINGUEE.value,
}


@dataclass(frozen=True)
class DictionaryInfo:
    name: str
    languages: tuple[str, ...]
    features: tuple[str, ...]
    priority: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "languages": list(self.languages),
            "features": list(self.features),
            "priority": self.priority,
        }


@dataclass(frozen=True)
class LanguageSupport:
    """Which dictionaries cover a language pair."""
    supported: bool
    supported_by: tuple[str, ...] = ()
    normalized_from: str | None = None
    normalized_to: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ServiceStats:
    total_dictionaries: int
    total_languages: int
    approximate_pairs: int
    dictionaries: dict[str, DictionaryInfo] = field(default_factory=dict)


class TranslationService:
    """Routes translation requests to one or more dictionary adapters."""

    def __init__(self, dictionaries: list[DictionaryPort]):
        self._dictionaries: dict[str, DictionaryPort] = {d.key: d for d in dictionaries}

    def resolve_key(self, key: str) -> str:
        """Resolve an alias ("wr", "lg") to a registered dictionary key.

        Raises:
            DictionaryNotAvailableError: If the key is unknown.
        """
        resolved = DICTIONARY_ALIASES.get(key.lower(), key.lower())
        if resolved not in self._dictionaries:
            raise DictionaryNotAvailableError(key, list(self._dictionaries))
        return resolved

    def get_available_dictionaries(self) -> dict[str, DictionaryInfo]:
        return {
            key: DictionaryInfo(
                name=d.name,
                languages=tuple(d.languages),
                features=tuple(d.features),
                priority=d.priority,
            )
            for key, d in self._dictionaries.items()
        }

    def get_compatible_dictionaries(self, from_lang: str, to_lang: str) -> list[str]:
        """Dictionary keys covering the pair, highest priority first."""
        compatible = [d for d in self._dictionaries.values() if d.supports(from_lang, to_lang)]
        return [d.key for d in sorted(compatible, key=lambda d: d.priority)]

    def is_language_pair_supported(self, from_lang: str, to_lang: str) -> bool:
        return bool(self.get_compatible_dictionaries(from_lang, to_lang))

    def check_language_support(self, from_lang: str, to_lang: str) -> LanguageSupport:
        normalized_from = normalize_language_code(from_lang)
        normalized_to = normalize_language_code(to_lang)
        if normalized_from is None or normalized_to is None:
            unknown = from_lang if normalized_from is None else to_lang
            return LanguageSupport(
                supported=False,
                normalized_from=normalized_from,
                normalized_to=normalized_to,
                error=f"Unsupported language: {unknown}. Try using ISO codes like 'en', 'es', 'fr'",
            )
        supported_by = tuple(self.get_compatible_dictionaries(normalized_from, normalized_to))
        return LanguageSupport(
            supported=bool(supported_by),
            supported_by=supported_by,
            normalized_from=normalized_from,
            normalized_to=normalized_to,
        )

    async def translate(
        self, dictionary: str, word: str, from_lang: str, to_lang: str,
    ) -> DictionaryResult:
        """Translate a word with one dictionary.

        Raises:
            DictionaryNotAvailableError: Unknown dictionary key.
            LanguagePairNotSupportedError: Dictionary does not cover the pair.
        """
        key = self.resolve_key(dictionary)
        adapter = self._dictionaries[key]
        if not adapter.supports(from_lang, to_lang):
            raise LanguagePairNotSupportedError(from_lang, to_lang, adapter.name)

        try:
            result = await adapter.lookup(word, from_lang, to_lang)
        except Exception as e:
            logger.error(
                "Dictionary lookup raised",
                extra={"dictionary": key, "word": word, "error": str(e)},
                exc_info=True,
            )
            return DictionaryResult.failed(
                word, DictionarySource(key), str(e) or type(e).__name__,
                from_lang=from_lang, to_lang=to_lang,
            )
        return result

    async def translate_multiple(
        self,
        word: str,
        from_lang: str,
        to_lang: str,
        dictionaries: list[str] | None = None,
    ) -> MultiDictionaryResult:
        """Translate with several dictionaries concurrently.

        Defaults to every compatible dictionary. Each dictionary's outcome
        (result or error) is stored under its key.
        """
        if dictionaries is None:
            dictionaries = self.get_compatible_dictionaries(from_lang, to_lang)
        keys = [self.resolve_key(key) for key in dictionaries]

        async def _one(key: str) -> tuple[str, DictionaryResult]:
            try:
                return key, await self.translate(key, word, from_lang, to_lang)
            except LanguagePairNotSupportedError as e:
                return key, DictionaryResult.failed(
                    word, DictionarySource(key), str(e),
                    from_lang=from_lang, to_lang=to_lang,
                )

        pairs = await asyncio.gather(*(_one(key) for key in keys))
        return MultiDictionaryResult(
            input_word=word,
            from_lang=from_lang,
            to_lang=to_lang,
            results=dict(pairs),
        )

    async def translate_auto(self, word: str, from_lang: str, to_lang: str) -> DictionaryResult:
        """Translate with the best dictionary that returns a result.

        Raises:
            NoCompatibleDictionaryError: No dictionary covers the pair.
            TranslationFailedError: Every compatible dictionary failed.
        """
        compatible = self.get_compatible_dictionaries(from_lang, to_lang)
        if not compatible:
            raise NoCompatibleDictionaryError(
                f"No compatible dictionaries found for {from_lang}-{to_lang}"
            )

        for key in compatible:
            result = await self.translate(key, word, from_lang, to_lang)
            if not result.error:
                return result
            logger.warning(
                "Dictionary returned no result, trying next",
                extra={"dictionary": key, "word": word, "error": result.error},
            )

        raise TranslationFailedError(
            f'All dictionaries failed to translate "{word}" from {from_lang} to {to_lang}'
        )

    def get_stats(self) -> ServiceStats:
        languages: set[str] = set()
        pairs = 0
        for d in self._dictionaries.values():
            languages.update(d.languages)
            pairs += len(d.languages) * (len(d.languages) - 1)
        return ServiceStats(
            total_dictionaries=len(self._dictionaries),
            total_languages=len(languages),
            approximate_pairs=pairs,
            dictionaries=self.get_available_dictionaries(),
        )

