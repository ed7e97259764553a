"""LUT 합성 및 필터 적용 모듈."""

from colorgrade.inference.apply_filter import ApplyResult, LUTCompositor, apply_filter

__all__ = ["ApplyResult", "LUTCompositor", "apply_filter"]
