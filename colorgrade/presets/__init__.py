"""프리셋 카탈로그, 내장 룩, 톤 커브."""

from colorgrade.presets.builtin import (
    FilterSettings,
    PresetCategory,
    PresetType,
    get_category,
    get_filter_settings,
    get_swatch,
    presets_in_category,
)
from colorgrade.presets.catalog import PresetCatalog
from colorgrade.presets.models import CatalogIndex, CustomPreset
from colorgrade.presets.repository import CatalogRepository
from colorgrade.presets.tone_curve import ToneCurve, ToneCurvePoint

__all__ = [
    "CatalogIndex",
    "CatalogRepository",
    "CustomPreset",
    "FilterSettings",
    "PresetCatalog",
    "PresetCategory",
    "PresetType",
    "ToneCurve",
    "ToneCurvePoint",
    "get_category",
    "get_filter_settings",
    "get_swatch",
    "presets_in_category",
]
