import asyncio
import logging

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)
from PIL import UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from colorgrade.api.dependencies import (
    get_catalog,
    get_catalog_lock,
    get_compositor,
    get_preset_or_404,
)
from colorgrade.api.schemas import (
    PresetListResponse,
    PresetRenameRequest,
    PresetResponse,
)
from colorgrade.core.config import settings
from colorgrade.core.errors import PresetUnavailable
from colorgrade.inference.apply_filter import LUTCompositor
from colorgrade.presets.catalog import PresetCatalog
from colorgrade.presets.models import CustomPreset
from colorgrade.utils.io import decode_image, encode_png, encode_thumbnail

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(preset: CustomPreset) -> PresetResponse:
    return PresetResponse(
        id=preset.id,
        name=preset.name,
        created_at=preset.created_at,
        has_thumbnail=preset.thumbnail_data is not None,
    )


async def _read_upload(upload: UploadFile) -> bytes:
    data = await upload.read()
    if len(data) > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File too large",
        )
    return data


async def _encode_thumbnail(data: bytes) -> bytes:
    """Decode an uploaded thumbnail and re-encode it as a bounded JPEG."""
    try:
        pixels = await run_in_threadpool(decode_image, data)
    except UnidentifiedImageError:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Unsupported thumbnail format",
        )
    return await run_in_threadpool(
        encode_thumbnail,
        pixels,
        max_side=settings.THUMBNAIL_MAX_SIDE,
        quality=settings.THUMBNAIL_JPEG_QUALITY,
    )


@router.get("", response_model=PresetListResponse)
async def list_presets(catalog: PresetCatalog = Depends(get_catalog)):
    """List imported presets in catalog order."""
    items = [_to_response(p) for p in catalog.list_all()]
    return PresetListResponse(items=items, total=len(items))


@router.post("", response_model=PresetResponse, status_code=status.HTTP_201_CREATED)
async def import_preset(
    file: UploadFile = File(...),
    name: str | None = Form(None),
    thumbnail: UploadFile | None = File(None),
    catalog: PresetCatalog = Depends(get_catalog),
    lock: asyncio.Lock = Depends(get_catalog_lock),
):
    """Import a .cube file into the catalog.

    Validation errors surface as 422 through the application's exception handlers.
    """
    payload = await _read_upload(file)

    thumbnail_data = None
    if thumbnail is not None:
        thumbnail_data = await _encode_thumbnail(await _read_upload(thumbnail))

    if not name and file.filename:
        name = file.filename.rsplit(".", 1)[0]

    async with lock:
        preset = await run_in_threadpool(
            catalog.import_from_source, payload, name, thumbnail_data
        )
    return _to_response(preset)


@router.patch("/{preset_id}", response_model=PresetResponse)
async def rename_preset(
    preset_id: str,
    request: PresetRenameRequest,
    catalog: PresetCatalog = Depends(get_catalog),
    lock: asyncio.Lock = Depends(get_catalog_lock),
):
    """Rename a preset; the backing file is untouched."""
    async with lock:
        preset = get_preset_or_404(catalog, preset_id)
        try:
            renamed = await run_in_threadpool(catalog.rename, preset, request.name)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
            )
    return _to_response(renamed)


@router.delete("/{preset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_preset(
    preset_id: str,
    catalog: PresetCatalog = Depends(get_catalog),
    lock: asyncio.Lock = Depends(get_catalog_lock),
):
    """Delete a preset and its backing file."""
    async with lock:
        preset = get_preset_or_404(catalog, preset_id)
        await run_in_threadpool(catalog.delete, preset)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{preset_id}/thumbnail")
async def get_thumbnail(
    preset_id: str,
    catalog: PresetCatalog = Depends(get_catalog),
):
    preset = get_preset_or_404(catalog, preset_id)
    if preset.thumbnail_data is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Thumbnail not found"
        )
    return Response(content=preset.thumbnail_data, media_type="image/jpeg")


@router.post("/{preset_id}/apply")
async def apply_preset(
    preset_id: str,
    image: UploadFile = File(...),
    intensity: float = Query(1.0, ge=0.0, le=1.0),
    catalog: PresetCatalog = Depends(get_catalog),
    compositor: LUTCompositor = Depends(get_compositor),
):
    """Apply a preset to an uploaded image and return the result as PNG."""
    preset = get_preset_or_404(catalog, preset_id)

    if image.content_type and image.content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Unsupported image format",
        )

    data = await _read_upload(image)
    try:
        pixels = await run_in_threadpool(decode_image, data)
    except UnidentifiedImageError:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Unsupported image format",
        )

    result = await run_in_threadpool(compositor.render, preset, pixels, intensity)
    if not result.ok:
        logger.info(f"Preset {preset_id} unavailable: {result.error}")
        code = (
            "PRESET_UNAVAILABLE"
            if isinstance(result.error, PresetUnavailable)
            else "PRESET_INVALID"
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": code, "message": str(result.error)},
        )

    png = await run_in_threadpool(encode_png, result.image)
    return Response(content=png, media_type="image/png")
