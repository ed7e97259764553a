"""3D LUT 연산 유틸리티.

Trilinear interpolation 및 강도(intensity) 블렌딩 함수.
"""

from typing import Optional

import numpy as np


def apply_lut(
    image: np.ndarray,
    lut: np.ndarray,
    domain_min: Optional[np.ndarray] = None,
    domain_max: Optional[np.ndarray] = None,
) -> np.ndarray:
    """3D LUT를 이미지에 적용 (trilinear interpolation, NumPy).

    Args:
        image: 입력 이미지 [H, W, 3], float32, 범위 [0, 1]
        lut: 3D LUT [size, size, size, C] (C >= 3), 인덱스 [b, g, r]
        domain_min: 입력 도메인 하한 [3]. None이면 0
        domain_max: 입력 도메인 상한 [3]. None이면 1

    Returns:
        변환된 이미지 [H, W, 3], float32
    """
    image = np.asarray(image, dtype=np.float32)
    lut = np.asarray(lut, dtype=np.float32)[..., :3]

    if image.ndim != 3 or image.shape[-1] != 3:
        raise ValueError(f"이미지 shape 오류: {image.shape} — [H, W, 3]이어야 함")

    size = lut.shape[0]

    # N=1이면 상수 색상 (그리드 간격 없음)
    if size == 1:
        return np.broadcast_to(lut[0, 0, 0], image.shape).clip(0.0, 1.0).copy()

    # 도메인 정규화 후 그리드 좌표로 변환
    if domain_min is not None or domain_max is not None:
        lo_dom = np.zeros(3, np.float32) if domain_min is None else domain_min
        hi_dom = np.ones(3, np.float32) if domain_max is None else domain_max
        span = np.where(hi_dom > lo_dom, hi_dom - lo_dom, 1.0).astype(np.float32)
        image = (image - lo_dom) / span

    scale = size - 1  # 그리드 간격 = 1 / (N - 1)
    coords = image.clip(0.0, 1.0) * scale  # [H, W, 3]
    lo = np.floor(coords).astype(np.int32).clip(0, size - 2)  # 하한 인덱스
    hi = lo + 1  # 상한 인덱스

    # 보간 가중치
    d = coords - lo
    d_r = d[..., 0:1]
    d_g = d[..., 1:2]
    d_b = d[..., 2:3]
    lo_r, lo_g, lo_b = lo[..., 0], lo[..., 1], lo[..., 2]
    hi_r, hi_g, hi_b = hi[..., 0], hi[..., 1], hi[..., 2]

    # 8개 꼭짓점의 LUT 값 조회 ([b, g, r] 순서)
    c000 = lut[lo_b, lo_g, lo_r]
    c001 = lut[lo_b, lo_g, hi_r]
    c010 = lut[lo_b, hi_g, lo_r]
    c011 = lut[lo_b, hi_g, hi_r]
    c100 = lut[hi_b, lo_g, lo_r]
    c101 = lut[hi_b, lo_g, hi_r]
    c110 = lut[hi_b, hi_g, lo_r]
    c111 = lut[hi_b, hi_g, hi_r]

    # Trilinear interpolation: R -> G -> B 순으로 축소
    c00 = c000 * (1 - d_r) + c001 * d_r
    c01 = c010 * (1 - d_r) + c011 * d_r
    c10 = c100 * (1 - d_r) + c101 * d_r
    c11 = c110 * (1 - d_r) + c111 * d_r

    c0 = c00 * (1 - d_g) + c01 * d_g
    c1 = c10 * (1 - d_g) + c11 * d_g

    result = c0 * (1 - d_b) + c1 * d_b
    return result.clip(0.0, 1.0).astype(np.float32)


def blend_images(
    original: np.ndarray,
    filtered: np.ndarray,
    intensity: float,
) -> np.ndarray:
    """원본 위에 필터 결과를 선형 알파 블렌딩.

    result = original * (1 - intensity) + filtered * intensity

    Args:
        original: 원본 이미지 [H, W, C], float32
        filtered: 변환된 이미지 [H, W, C], float32
        intensity: 알파 [0, 1]. 범위를 벗어나면 잘라낸다

    Returns:
        블렌딩된 이미지 [H, W, C], float32
    """
    alpha = float(np.clip(intensity, 0.0, 1.0))
    if alpha >= 1.0:
        return np.asarray(filtered, dtype=np.float32)
    original = np.asarray(original, dtype=np.float32)
    filtered = np.asarray(filtered, dtype=np.float32)
    return original * (1.0 - alpha) + filtered * alpha
