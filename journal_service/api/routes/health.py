from fastapi import APIRouter, Depends

from journal_service.api.dependencies import get_settings
from journal_service.core.config import Config

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(config: Config = Depends(get_settings)):
    """Simple health endpoint for monitoring."""
    return {"status": "healthy", "backend": config.JOURNAL_BACKEND}
