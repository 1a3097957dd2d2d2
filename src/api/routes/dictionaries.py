"""Dictionary and language metadata routes.

Endpoints:
- GET /dictionaries: Available dictionaries and their capabilities
- GET /dictionaries/stats: Coverage statistics
- GET /dictionaries/support: Which dictionaries cover a language pair
- GET /languages: Supported languages
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_translation_service
from api.models import (
    DictionaryInfoResponse,
    LanguageResponse,
    LanguageSupportResponse,
    StatsResponse,
)
from domain.model.language import LANGUAGES
from services.translation_service import TranslationService

router = APIRouter(tags=["dictionaries"])


@router.get("/dictionaries", response_model=dict[str, DictionaryInfoResponse])
async def list_dictionaries(service: TranslationService = Depends(get_translation_service)):
    return {key: info.to_dict() for key, info in service.get_available_dictionaries().items()}


@router.get("/dictionaries/stats", response_model=StatsResponse)
async def dictionary_stats(service: TranslationService = Depends(get_translation_service)):
    stats = service.get_stats()
    return StatsResponse(
        total_dictionaries=stats.total_dictionaries,
        total_languages=stats.total_languages,
        approximate_pairs=stats.approximate_pairs,
        dictionaries={key: info.to_dict() for key, info in stats.dictionaries.items()},
    )


@router.get("/dictionaries/support", response_model=LanguageSupportResponse)
async def language_support(
    from_lang: str = Query(..., min_length=2, max_length=50),
    to_lang: str = Query(..., min_length=2, max_length=50),
    service: TranslationService = Depends(get_translation_service),
):
    """Check which dictionaries cover a language pair (codes or names)."""
    support = service.check_language_support(from_lang, to_lang)
    return LanguageSupportResponse(
        supported=support.supported,
        supported_by=list(support.supported_by),
        normalized_from=support.normalized_from,
        normalized_to=support.normalized_to,
        error=support.error,
    )


@router.get("/languages", response_model=list[LanguageResponse])
async def list_languages():
    return [
        LanguageResponse(code=lang.code, name=lang.name, native=lang.native, long=lang.long)
        for lang in LANGUAGES.values()
    ]
