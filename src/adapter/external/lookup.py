"""Language-code alternates loop shared by the dictionary adapters.

Sites disagree on how a language is spelled in their URLs ("en" vs
"english"), so each adapter tries every source/target spelling until one
page yields a non-empty extraction.
"""

import dataclasses
import logging
from typing import Callable

from domain.model.errors import FetchError, UnsupportedLanguageError
from domain.model.language import get_alternatives, validate_pair
from domain.model.translation import DictionaryResult, DictionarySource
from port.fetcher import FetcherPort

logger = logging.getLogger(__name__)

# (word, from_code, to_code) -> URL
UrlBuilder = Callable[[str, str, str], str]
# (html, from_code, to_code) -> result
Extractor = Callable[[str, str, str], DictionaryResult]


async def lookup_with_alternatives(
    fetcher: FetcherPort,
    source: DictionarySource,
    word: str,
    from_lang: str,
    to_lang: str,
    build_url: UrlBuilder,
    extract: Extractor,
) -> DictionaryResult:
    """Fetch and extract until a language-code spelling yields results.

    Args:
        fetcher: Page fetcher.
        source: Dictionary the result is attributed to.
        word: Word to translate.
        from_lang: Source language, any accepted spelling.
        to_lang: Target language, any accepted spelling.
        build_url: Builds the search URL for (word, from_code, to_code).
        extract: Parses fetched HTML for (html, from_code, to_code).

    Returns:
        The first non-empty result, annotated with the successful URL and
        language pair, or a failed result carrying the last error.
    """
    try:
        pair = validate_pair(from_lang, to_lang)
    except UnsupportedLanguageError as e:
        return DictionaryResult.failed(word, source, str(e))

    from_alternatives = get_alternatives(from_lang)
    to_alternatives = get_alternatives(to_lang)
    attempted = tuple(f"{f}-{t}" for f in from_alternatives for t in to_alternatives)

    tried_urls: set[str] = set()
    last_error: Exception | None = None

    for from_code in from_alternatives:
        for to_code in to_alternatives:
            url = build_url(word, from_code, to_code)
            if url in tried_urls:
                continue
            tried_urls.add(url)

            logger.debug(
                "Trying dictionary URL",
                extra={"source": source.value, "url": url},
            )
            try:
                html = await fetcher.fetch(url)
                result = extract(html, from_code, to_code)
            except FetchError as e:
                last_error = e
                logger.warning(
                    "Dictionary fetch failed",
                    extra={
                        "source": source.value,
                        "language_pair": f"{from_code}-{to_code}",
                        "kind": e.kind,
                        "error": str(e),
                    },
                )
                continue
            except Exception as e:
                last_error = e
                logger.error(
                    "Unexpected error extracting dictionary page",
                    extra={"source": source.value, "url": url, "error": str(e)},
                    exc_info=True,
                )
                continue

            if not result.is_empty:
                logger.info(
                    "Dictionary lookup successful",
                    extra={"source": source.value, "word": word, "url": url},
                )
                return dataclasses.replace(
                    result,
                    from_lang=pair.source.code,
                    to_lang=pair.target.code,
                    language_pair=f"{from_code}-{to_code}",
                    url=url,
                )

    message = (
        str(last_error)
        if last_error
        else f'No translations found for "{word}" from {pair.source.name} to {pair.target.name}'
    )
    return DictionaryResult.failed(
        word,
        source,
        message,
        from_lang=pair.source.code,
        to_lang=pair.target.code,
        attempted_language_pairs=attempted,
    )
