import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from colorgrade.api.v1 import router as v1_router
from colorgrade.core.config import settings
from colorgrade.core.errors import (
    FormatError,
    InvalidCUBEFile,
    PresetError,
    PresetIOError,
    PresetNotFound,
    PresetUnavailable,
)
from colorgrade.inference.apply_filter import LUTCompositor
from colorgrade.presets.catalog import PresetCatalog

logger = logging.getLogger(__name__)

_ERROR_STATUS = (
    (FormatError, status.HTTP_422_UNPROCESSABLE_ENTITY, "INVALID_FORMAT"),
    (InvalidCUBEFile, status.HTTP_422_UNPROCESSABLE_ENTITY, "INVALID_CUBE_FILE"),
    (PresetNotFound, status.HTTP_404_NOT_FOUND, "PRESET_NOT_FOUND"),
    (PresetUnavailable, status.HTTP_409_CONFLICT, "PRESET_UNAVAILABLE"),
    (PresetIOError, status.HTTP_500_INTERNAL_SERVER_ERROR, "STORAGE_ERROR"),
)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def create_app(catalog_dir: str | Path | None = None) -> FastAPI:
    """Build the API with its own catalog service.

    Args:
        catalog_dir: catalog directory; defaults to ``settings.CATALOG_DIR``
    """
    catalog = PresetCatalog.from_directory(
        catalog_dir or settings.CATALOG_DIR,
        max_lut_dimension=settings.MAX_LUT_DIMENSION,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        catalog.repository.ensure_root()
        await run_in_threadpool(catalog.load_catalog)
        yield

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        lifespan=lifespan,
    )
    app.state.catalog = catalog
    app.state.compositor = LUTCompositor(
        catalog, max_lut_dimension=settings.MAX_LUT_DIMENSION
    )
    app.state.catalog_lock = asyncio.Lock()

    app.include_router(v1_router)

    @app.exception_handler(PresetError)
    async def preset_exception_handler(request: Request, exc: PresetError):
        for exc_type, status_code, code in _ERROR_STATUS:
            if isinstance(exc, exc_type):
                return _error_response(status_code, code, str(exc))
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "PRESET_ERROR", str(exc)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "Internal server error",
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    uvicorn.run(
        "colorgrade.api.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.DEBUG,
    )
