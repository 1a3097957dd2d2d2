"""In-memory implementation of DictionaryPort for testing."""

from domain.model.language import get_language
from domain.model.translation import DictionaryResult, DictionarySource


class FakeDictionaryAdapter:
    """Fake dictionary adapter that returns a preconfigured result."""

    features: tuple[str, ...] = ()

    def __init__(
        self,
        key: str = DictionarySource.WORDREFERENCE.value,
        result: DictionaryResult | None = None,
        languages: tuple[str, ...] = ("en", "es", "fr", "de"),
        priority: int = 1,
        raises: Exception | None = None,
    ):
        self.key = key
        self.name = key.title()
        self.result = result
        self.languages = languages
        self.priority = priority
        self.raises = raises
        self.calls: list[tuple[str, str, str]] = []

    def supports(self, from_lang: str, to_lang: str) -> bool:
        source, target = get_language(from_lang), get_language(to_lang)
        return bool(source and target and source.code in self.languages and target.code in self.languages)

    async def lookup(self, word: str, from_lang: str, to_lang: str) -> DictionaryResult:
        self.calls.append((word, from_lang, to_lang))
        if self.raises is not None:
            raise self.raises
        if self.result is not None:
            return self.result
        return DictionaryResult.failed(
            word, DictionarySource(self.key), f'No translations found for "{word}"'
        )
