""".cube 데이터 파싱 모듈."""

from colorgrade.data.cube_parser import (
    CubeParser,
    ParsedLUT,
    decode_payload,
    parse_cube,
    sniff_cube,
    validate_cube,
)

__all__ = [
    "CubeParser",
    "ParsedLUT",
    "decode_payload",
    "parse_cube",
    "sniff_cube",
    "validate_cube",
]
