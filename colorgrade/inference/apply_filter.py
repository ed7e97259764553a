"""이미지에 LUT 프리셋 적용.

카탈로그의 .cube 페이로드를 다시 파싱하여 3D LUT 변환을 만들고,
요청된 강도(intensity)로 원본과 선형 블렌딩한다.

파이프라인 단계(페이로드 조회 -> 파싱 -> 변환 -> 블렌딩)는 각각 명시적으로
실패를 반환하며, 프리셋을 사용할 수 없는 상태는 예외가 아닌 실패 결과로 취급한다.
"""

import logging
from typing import NamedTuple, Optional

import numpy as np

from colorgrade.core.config import settings
from colorgrade.core.errors import PresetError
from colorgrade.data.cube_parser import ParsedLUT, parse_cube
from colorgrade.presets.catalog import PresetCatalog
from colorgrade.presets.models import CustomPreset
from colorgrade.utils.lut import apply_lut, blend_images

logger = logging.getLogger(__name__)


def _to_float(image: np.ndarray) -> np.ndarray:
    """입력 dtype을 float32 [0, 1]로 정규화."""
    if np.issubdtype(image.dtype, np.integer):
        return image.astype(np.float32) / float(np.iinfo(image.dtype).max)
    return np.clip(image.astype(np.float32), 0.0, 1.0)


def _restore_dtype(image_f: np.ndarray, dtype: np.dtype) -> np.ndarray:
    image_f = np.clip(image_f, 0.0, 1.0)
    if np.issubdtype(dtype, np.integer):
        return (image_f * float(np.iinfo(dtype).max)).round().astype(dtype)
    return image_f.astype(np.float32)


def apply_filter(
    image: np.ndarray,
    lut: ParsedLUT,
    intensity: float = 1.0,
) -> np.ndarray:
    """이미지에 파싱된 LUT 적용.

    Args:
        image: 입력 이미지 [H, W, 3] 또는 [H, W, 4], uint8/uint16 또는 float32
        lut: 파싱된 3D LUT
        intensity: 필터 강도 [0.0, 1.0]. 1.0이면 완전 변환, 0.0이면 입력 이미지

    Returns:
        필터 적용된 이미지, 입력과 동일한 shape/dtype. 알파 채널은 보존된다

    Raises:
        ValueError: 지원하지 않는 이미지 shape
    """
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[-1] not in (3, 4):
        raise ValueError(
            f"이미지 shape 오류: {image.shape} — [H, W, 3] 또는 [H, W, 4]이어야 함"
        )

    original_dtype = image.dtype
    image_f = _to_float(image)
    rgb = image_f[..., :3]

    transformed = apply_lut(rgb, lut.table, lut.domain_min, lut.domain_max)

    # intensity 블렌딩: result = input * (1 - intensity) + output * intensity
    result_f = blend_images(rgb, transformed, intensity)

    if image.shape[-1] == 4:
        result_f = np.concatenate([result_f, image_f[..., 3:]], axis=-1)

    return _restore_dtype(result_f, original_dtype)


class ApplyResult(NamedTuple):
    """합성 결과. 실패 시 image는 None이고 error에 원인이 담긴다."""

    image: Optional[np.ndarray]
    error: Optional[PresetError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LUTCompositor:
    """카탈로그 프리셋을 이미지에 적용하는 합성기.

    파싱된 LUT를 호출 간에 캐시하지 않는다 (매 호출마다 다시 파싱).
    상태가 없으므로 서로 다른 입력에 대해 동시에 사용해도 안전하다.
    """

    def __init__(
        self,
        catalog: PresetCatalog,
        max_lut_dimension: int = settings.MAX_LUT_DIMENSION,
    ) -> None:
        self.catalog = catalog
        self.max_lut_dimension = max_lut_dimension

    def render(
        self,
        preset: CustomPreset,
        image: np.ndarray,
        intensity: float = 1.0,
    ) -> ApplyResult:
        """단계별 파이프라인 실행 후 결과 반환."""
        try:
            payload = self.catalog.read_payload(preset)
        except PresetError as e:
            logger.warning(f"프리셋 사용 불가 ({preset.name}): {e}")
            return ApplyResult(None, e)

        try:
            lut = parse_cube(payload, max_dimension=self.max_lut_dimension)
        except PresetError as e:
            logger.warning(f"프리셋 파싱 실패 ({preset.name}): {e}")
            return ApplyResult(None, e)

        return ApplyResult(apply_filter(image, lut, intensity))

    def apply(
        self,
        preset: CustomPreset,
        image: np.ndarray,
        intensity: float = 1.0,
    ) -> Optional[np.ndarray]:
        """프리셋 적용 결과 이미지. 프리셋을 사용할 수 없으면 None."""
        return self.render(preset, image, intensity).image
