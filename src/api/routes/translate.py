"""Translation routes.

Endpoints:
- GET /translate: Translate with every compatible dictionary (or a chosen subset)
- GET /translate/auto: Translate with the best dictionary that finds the word
- GET /translate/{dictionary}: Translate with one dictionary ("wr"/"lg" aliases accepted)

Results are returned in the dictionary JSON shape (camelCase keys).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_translation_service
from domain.model.errors import (
    DomainError,
    NoCompatibleDictionaryError,
    NotFoundError,
    TranslationFailedError,
    ValidationError,
)
from domain.model.language import validate_pair
from services.translation_service import TranslationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/translate", tags=["translate"])

WORD_QUERY = Query(..., min_length=1, max_length=100, description="Word to translate")
FROM_QUERY = Query("en", min_length=2, max_length=50, description="Source language code or name")
TO_QUERY = Query("es", min_length=2, max_length=50, description="Target language code or name")


def _http_error(error: DomainError) -> HTTPException:
    """Map a domain error to an HTTP status."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (ValidationError, NoCompatibleDictionaryError)):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, TranslationFailedError):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


@router.get("")
async def translate_multiple(
    word: str = WORD_QUERY,
    from_lang: str = FROM_QUERY,
    to_lang: str = TO_QUERY,
    dictionaries: list[str] | None = Query(None, description="Dictionary keys; default all compatible"),
    service: TranslationService = Depends(get_translation_service),
):
    try:
        validate_pair(from_lang, to_lang)
        result = await service.translate_multiple(word, from_lang, to_lang, dictionaries)
    except DomainError as e:
        raise _http_error(e)
    return result.to_dict()


@router.get("/auto")
async def translate_auto(
    word: str = WORD_QUERY,
    from_lang: str = FROM_QUERY,
    to_lang: str = TO_QUERY,
    service: TranslationService = Depends(get_translation_service),
):
    try:
        validate_pair(from_lang, to_lang)
        result = await service.translate_auto(word, from_lang, to_lang)
    except DomainError as e:
        logger.info(
            "Auto translation failed",
            extra={"word": word, "from_lang": from_lang, "to_lang": to_lang, "error": str(e)},
        )
        raise _http_error(e)
    return result.to_dict()


@router.get("/{dictionary}")
async def translate_with(
    dictionary: str,
    word: str = WORD_QUERY,
    from_lang: str = FROM_QUERY,
    to_lang: str = TO_QUERY,
    service: TranslationService = Depends(get_translation_service),
):
    try:
        validate_pair(from_lang, to_lang)
        result = await service.translate(dictionary, word, from_lang, to_lang)
    except DomainError as e:
        raise _http_error(e)
    return result.to_dict()
