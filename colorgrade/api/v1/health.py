from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from colorgrade.api.dependencies import get_catalog
from colorgrade.core.config import settings
from colorgrade.presets.catalog import PresetCatalog

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "ok",
        "version": settings.API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready", status_code=status.HTTP_200_OK)
async def readiness_check(catalog: PresetCatalog = Depends(get_catalog)):
    """Readiness check - verify the catalog directory is usable."""
    root = catalog.repository.root
    checks = {
        "catalog": "ok" if root.is_dir() else f"error: missing directory {root}",
    }
    return {
        "status": "ok" if all(v == "ok" for v in checks.values()) else "degraded",
        "checks": checks,
        "presets": len(catalog),
    }
