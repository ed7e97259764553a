"""공용 테스트 픽스처."""

import numpy as np
import pytest

from colorgrade.presets.catalog import PresetCatalog


def make_cube_text(size: int, entries=None, header: str = "") -> str:
    """R이 가장 빠르게 변하는 순서의 .cube 텍스트 생성. entries가 None이면 항등 LUT."""
    lines = ["# test LUT", header, f"LUT_3D_SIZE {size}"]
    if entries is None:
        step = 1.0 / (size - 1) if size > 1 else 0.0
        entries = [
            (r * step, g * step, b * step)
            for b in range(size)
            for g in range(size)
            for r in range(size)
        ]
    lines += [f"{r:.6f} {g:.6f} {b:.6f}" for r, g, b in entries]
    return "\n".join(lines) + "\n"


@pytest.fixture
def identity_cube() -> bytes:
    """2x2x2 항등 LUT."""
    return make_cube_text(2).encode("utf-8")


@pytest.fixture
def catalog(tmp_path) -> PresetCatalog:
    catalog = PresetCatalog.from_directory(tmp_path / "CustomPresets")
    catalog.load_catalog()
    return catalog


@pytest.fixture
def random_image() -> np.ndarray:
    rng = np.random.default_rng(0)
    return rng.random((8, 12, 3), dtype=np.float32)
