"""Health check endpoint."""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from api.dependencies import get_translation_service
from services.translation_service import TranslationService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(service: TranslationService = Depends(get_translation_service)):
    """Liveness check listing the registered dictionaries."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "dictionaries": list(service.get_available_dictionaries()),
    }
