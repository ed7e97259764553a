from datetime import datetime

from pydantic import BaseModel, Field

from colorgrade.presets.builtin import FilterSettings, PresetCategory, PresetType


class PresetResponse(BaseModel):
    preset_id: str = Field(alias="id")
    name: str
    created_at: datetime
    has_thumbnail: bool = False

    class Config:
        from_attributes = True
        populate_by_name = True


class PresetListResponse(BaseModel):
    items: list[PresetResponse]
    total: int


class PresetRenameRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)

    class Config:
        json_schema_extra = {"example": {"name": "Warm Sunset"}}


class LookResponse(BaseModel):
    look: PresetType
    category: PresetCategory
    swatch: tuple[float, float, float] | None = None
    settings: FilterSettings


class ToneCurveEvaluateRequest(BaseModel):
    points: list[tuple[float, float]] | None = None
    x: float

    class Config:
        json_schema_extra = {
            "example": {"points": [[0.0, 0.1], [0.5, 0.6], [1.0, 0.9]], "x": 0.25}
        }


class ToneCurveEvaluateResponse(BaseModel):
    x: float
    y: float
