import asyncio

from fastapi import HTTPException, Request, status

from colorgrade.inference.apply_filter import LUTCompositor
from colorgrade.presets.catalog import PresetCatalog
from colorgrade.presets.models import CustomPreset


def get_catalog(request: Request) -> PresetCatalog:
    """Catalog service created once per application."""
    return request.app.state.catalog


def get_compositor(request: Request) -> LUTCompositor:
    return request.app.state.compositor


def get_catalog_lock(request: Request) -> asyncio.Lock:
    """Lock serializing catalog mutations."""
    return request.app.state.catalog_lock


def get_preset_or_404(catalog: PresetCatalog, preset_id: str) -> CustomPreset:
    preset = catalog.get(preset_id)
    if preset is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Preset not found"
        )
    return preset
