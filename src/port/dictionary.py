"""Dictionary port — outbound interface for dictionary sites."""

from typing import Protocol

from domain.model.translation import DictionaryResult


class DictionaryPort(Protocol):
    """Port for looking up word translations on one dictionary site.

    lookup() never raises for transport or extraction problems; those
    come back as a DictionaryResult whose ``error`` is set.
    """

    key: str
    name: str
    languages: tuple[str, ...]
    features: tuple[str, ...]
    priority: int

    def supports(self, from_lang: str, to_lang: str) -> bool:
        """True if the site covers this (normalized) language pair."""
        ...

    async def lookup(self, word: str, from_lang: str, to_lang: str) -> DictionaryResult: ...
