from functools import lru_cache

from fastapi import Depends

from adapter.external.http_fetcher import FetchConfig, HttpFetcher
from adapter.external.linguee import LingueeAdapter
from adapter.external.wordreference import WordReferenceAdapter
from port.fetcher import FetcherPort
from services.translation_service import TranslationService


@lru_cache(maxsize=1)
def get_fetcher() -> FetcherPort:
    """Process-wide fetcher so the rate limit spans all requests."""
    return HttpFetcher(FetchConfig.from_env())


def get_translation_service(fetcher: FetcherPort = Depends(get_fetcher)) -> TranslationService:
    return TranslationService([
        WordReferenceAdapter(fetcher),
        LingueeAdapter(fetcher),
    ])
