from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CustomPreset(BaseModel):
    """Catalog record for an imported .cube profile."""

    id: str = Field(default_factory=_new_id)
    name: str
    file_name: str
    created_at: datetime = Field(default_factory=_utcnow)
    thumbnail_data: bytes | None = None

    class Config:
        frozen = True
        ser_json_bytes = "base64"
        val_json_bytes = "base64"


class CatalogIndex(BaseModel):
    """Persisted catalog document."""

    version: int = 1
    presets: list[CustomPreset] = []
