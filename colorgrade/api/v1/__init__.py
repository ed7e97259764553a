from fastapi import APIRouter

from colorgrade.core.config import settings

from . import health, looks, presets

router = APIRouter(prefix=settings.API_PREFIX)

router.include_router(presets.router, prefix="/presets", tags=["presets"])
router.include_router(looks.router, tags=["looks"])
router.include_router(health.router, tags=["health"])

__all__ = ["router"]
