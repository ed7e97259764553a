"""이미지 I/O 헬퍼."""

import io
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image as PILImage


def load_image(
    path: str | Path,
    size: Optional[tuple[int, int]] = None,
    as_float: bool = True,
) -> np.ndarray:
    """이미지 파일 로드.

    Args:
        path: 이미지 파일 경로
        size: 리사이즈 크기 (H, W). None이면 원본 크기 유지
        as_float: True이면 [0, 1] float32, False이면 [0, 255] uint8

    Returns:
        이미지 배열 [H, W, 3] RGB

    Raises:
        FileNotFoundError: 파일이 존재하지 않을 때
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"이미지 파일을 찾을 수 없음: {path}")

    with PILImage.open(path) as img:
        return _to_array(img, size, as_float)


def decode_image(data: bytes, as_float: bool = False) -> np.ndarray:
    """메모리의 인코딩된 이미지(PNG/JPEG 등)를 RGB 배열로 디코딩.

    Raises:
        PIL.UnidentifiedImageError: 지원하지 않는 이미지 데이터
    """
    with PILImage.open(io.BytesIO(data)) as img:
        return _to_array(img, None, as_float)


def _to_array(
    img: PILImage.Image,
    size: Optional[tuple[int, int]],
    as_float: bool,
) -> np.ndarray:
    img = img.convert("RGB")  # 항상 RGB로 변환

    if size is not None:
        h, w = size
        img = img.resize((w, h), PILImage.BICUBIC)

    arr = np.asarray(img)  # [H, W, 3], uint8

    if as_float:
        return arr.astype(np.float32) / 255.0
    return arr.astype(np.uint8)


def _to_uint8(image: np.ndarray) -> np.ndarray:
    if image.dtype == np.uint8:
        return image
    # float32 -> uint8
    arr = np.clip(image, 0.0, 1.0)
    return (arr * 255.0).round().astype(np.uint8)


def save_image(image: np.ndarray, path: str | Path) -> None:
    """이미지 파일 저장.

    Args:
        image: 이미지 배열 [H, W, 3], float32 [0, 1] 또는 uint8 [0, 255]
        path: 출력 파일 경로
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    PILImage.fromarray(_to_uint8(image)[..., :3]).save(path)


def encode_png(image: np.ndarray) -> bytes:
    """이미지 배열을 PNG 바이트로 인코딩."""
    buf = io.BytesIO()
    PILImage.fromarray(_to_uint8(image)[..., :3]).save(buf, format="PNG")
    return buf.getvalue()


def encode_thumbnail(
    image: np.ndarray,
    max_side: int = 256,
    quality: int = 80,
) -> bytes:
    """프리셋 썸네일용 JPEG 바이트 생성.

    긴 변이 max_side를 넘으면 비율을 유지하며 축소한다.
    """
    img = PILImage.fromarray(_to_uint8(image)[..., :3])
    img.thumbnail((max_side, max_side), PILImage.BICUBIC)
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()
