from fastapi import APIRouter

from journal_service.api.routes import entries, insights, pulse


router = APIRouter()

router.include_router(entries.router)
router.include_router(insights.router)
router.include_router(pulse.router)
