"""내장 프리셋 레지스트리.

닫힌 집합의 룩(PresetType)을 고정 FilterSettings 묶음에 매핑한다.
모든 조회는 모듈 로드 시 한 번 만들어지는 정적 테이블에서 수행되며
I/O나 실패 경로가 없다.
"""

from enum import Enum
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PresetCategory(str, Enum):
    LIGHT = "LIGHT"
    COLOR = "COLOR"
    CUSTOM = "CUSTOM"


class PresetType(str, Enum):
    NONE = "-"
    # 기본 프리셋 - 노출/대비 조정
    NATURAL = "Natural"
    BRIGHT = "Bright"
    DARK = "Dark"
    HIGH_CONTRAST = "High Contrast"
    # 컬러 프리셋 - 색조/분위기 조정
    WARM = "Warm"
    COOL = "Cool"
    VINTAGE = "Vintage"
    DRAMATIC = "Dramatic"
    # 커스텀 .cube 프리셋 (카탈로그/합성기로 위임)
    CUSTOM = "Custom"


# 슬라이더 눈금
NEUTRAL = 50.0
SLIDER_MAX = 100.0
# 엔진 색온도 범위 (K)
KELVIN_MIN = 2000.0
KELVIN_MAX = 10000.0


class FilterSettings(BaseModel):
    """파라메트릭 보정 값 묶음.

    각 필드는 두 가지 눈금 중 하나로 채워진다.

    - 슬라이더 눈금: 0-100, 중앙값 50이 중립 (기본값, NONE/CUSTOM)
    - 엔진 눈금: 룩 테이블이 편집기 엔진에 넘기는 값.
      밝기 오프셋 -1..1, 대비/채도 배율 0..2, 색온도 K 2000..10000,
      틴트/하이라이트/섀도/화이트/블랙/명료도 부호 있는 오프셋 -100..100

    경계는 두 눈금의 합집합이다.
    """

    brightness: float = Field(
        NEUTRAL, ge=-1.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine exposure offset -1..1",
    )
    contrast: float = Field(
        NEUTRAL, ge=0.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine multiplier 0..2 (1 = unchanged)",
    )
    saturation: float = Field(
        NEUTRAL, ge=0.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine multiplier 0..2 (1 = unchanged)",
    )
    temperature: float = Field(
        NEUTRAL, ge=0.0, le=KELVIN_MAX,
        description="slider 0-100 (neutral 50) or white balance in Kelvin 2000..10000",
    )
    tint: float = Field(
        NEUTRAL, ge=-100.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine green/magenta offset -100..100",
    )
    highlights: float = Field(
        NEUTRAL, ge=-100.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine offset -100..100",
    )
    shadows: float = Field(
        NEUTRAL, ge=-100.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine offset -100..100",
    )
    whites: float = Field(
        NEUTRAL, ge=-100.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine offset -100..100",
    )
    blacks: float = Field(
        NEUTRAL, ge=-100.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine offset -100..100",
    )
    clarity: float = Field(
        NEUTRAL, ge=-100.0, le=SLIDER_MAX,
        description="slider 0-100 (neutral 50) or engine offset -100..100",
    )

    @field_validator("temperature")
    @classmethod
    def _temperature_scale(cls, v: float) -> float:
        # 슬라이더 값(<=100)과 켈빈 값(>=2000) 사이는 어느 눈금에도 속하지 않음
        if SLIDER_MAX < v < KELVIN_MIN:
            raise ValueError(
                f"temperature {v}: 슬라이더 0-100 또는 {KELVIN_MIN:.0f}-{KELVIN_MAX:.0f}K 이어야 함"
            )
        return v

    class Config:
        frozen = True


_SETTINGS = MappingProxyType({
    PresetType.NONE: FilterSettings(),
    PresetType.NATURAL: FilterSettings(
        brightness=0.0, contrast=1.0, saturation=1.0, temperature=6500, tint=0,
    ),
    PresetType.BRIGHT: FilterSettings(
        brightness=0.2, contrast=1.1, saturation=1.05, temperature=6500, tint=0,
        highlights=-10, shadows=15,
    ),
    PresetType.DARK: FilterSettings(
        brightness=-0.15, contrast=1.2, saturation=0.95, temperature=6500, tint=0,
        highlights=10, shadows=-20,
    ),
    PresetType.HIGH_CONTRAST: FilterSettings(
        brightness=0.0, contrast=1.4, saturation=1.1, temperature=6500, tint=0,
        whites=20, blacks=-15,
    ),
    PresetType.WARM: FilterSettings(
        brightness=0.05, contrast=1.1, saturation=1.15, temperature=4800, tint=10,
    ),
    PresetType.COOL: FilterSettings(
        brightness=0.0, contrast=1.05, saturation=1.1, temperature=7500, tint=-8,
    ),
    PresetType.VINTAGE: FilterSettings(
        brightness=-0.05, contrast=1.15, saturation=0.85, temperature=4200, tint=15,
        highlights=-20, shadows=10,
    ),
    PresetType.DRAMATIC: FilterSettings(
        brightness=-0.1, contrast=1.3, saturation=1.2, temperature=5800, tint=-5,
        highlights=-25, shadows=20, clarity=15,
    ),
    PresetType.CUSTOM: FilterSettings(),
})

_CATEGORIES = MappingProxyType({
    PresetType.NONE: PresetCategory.LIGHT,
    PresetType.NATURAL: PresetCategory.LIGHT,
    PresetType.BRIGHT: PresetCategory.LIGHT,
    PresetType.DARK: PresetCategory.LIGHT,
    PresetType.HIGH_CONTRAST: PresetCategory.LIGHT,
    PresetType.WARM: PresetCategory.COLOR,
    PresetType.COOL: PresetCategory.COLOR,
    PresetType.VINTAGE: PresetCategory.COLOR,
    PresetType.DRAMATIC: PresetCategory.COLOR,
    PresetType.CUSTOM: PresetCategory.CUSTOM,
})

# 대표 색상 (RGB, 0-1). 표시용 메타데이터
_GREY = (0.7, 0.7, 0.7)
_SWATCHES = MappingProxyType({
    PresetType.NONE: None,
    PresetType.NATURAL: _GREY,
    PresetType.BRIGHT: _GREY,
    PresetType.DARK: _GREY,
    PresetType.HIGH_CONTRAST: _GREY,
    PresetType.WARM: (255 / 255, 180 / 255, 120 / 255),  # 오렌지
    PresetType.COOL: (120 / 255, 180 / 255, 255 / 255),  # 블루
    PresetType.VINTAGE: (210 / 255, 180 / 255, 140 / 255),  # 세피아
    PresetType.DRAMATIC: (180 / 255, 120 / 255, 180 / 255),  # 퍼플
    PresetType.CUSTOM: (255 / 255, 215 / 255, 0 / 255),  # 골드
})


def get_filter_settings(preset_type: PresetType) -> FilterSettings:
    """룩에 해당하는 FilterSettings 반환."""
    return _SETTINGS[PresetType(preset_type)]


def get_category(preset_type: PresetType) -> PresetCategory:
    return _CATEGORIES[PresetType(preset_type)]


def get_swatch(preset_type: PresetType) -> Optional[tuple[float, float, float]]:
    return _SWATCHES[PresetType(preset_type)]


def presets_in_category(category: PresetCategory) -> list[PresetType]:
    """카테고리에 속한 룩 목록 (정의 순서)."""
    return [t for t in PresetType if _CATEGORIES[t] is PresetCategory(category)]
