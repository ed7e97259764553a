from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    # API
    DEBUG: bool = False
    API_TITLE: str = "colorgrade API"
    API_VERSION: str = "0.1.0"
    API_PREFIX: str = "/v1"

    # Catalog storage
    CATALOG_DIR: Path = Path.home() / ".colorgrade" / "CustomPresets"
    INDEX_FILE_NAME: str = "presets_metadata.json"

    # LUT validation
    MAX_LUT_DIMENSION: int = 256

    # Uploads
    MAX_UPLOAD_SIZE_MB: int = 50
    ALLOWED_IMAGE_TYPES: list[str] = [
        "image/jpeg",
        "image/png",
        "image/tiff",
        "image/webp",
    ]

    # Thumbnails
    THUMBNAIL_MAX_SIDE: int = 256
    THUMBNAIL_JPEG_QUALITY: int = 80

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "COLORGRADE_"
        case_sensitive = True


settings = Settings()
