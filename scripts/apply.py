"""LUT 프리셋 적용 CLI 스크립트.

Usage:
    python scripts/apply.py --cube filter.cube --input photo.jpg --output result.jpg
    python scripts/apply.py --preset-id <id> --input photo.jpg --output result.jpg --intensity 0.6
"""

import argparse
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="이미지에 LUT 프리셋 적용")
    parser.add_argument("--cube", type=str, default=None,
                        help=".cube 파일 경로")
    parser.add_argument("--preset-id", type=str, default=None,
                        help="카탈로그 프리셋 ID")
    parser.add_argument("--catalog-dir", type=str, default=None,
                        help="카탈로그 디렉터리 (기본값: 설정의 CATALOG_DIR)")
    parser.add_argument("--input", type=str, required=True,
                        help="입력 이미지 경로")
    parser.add_argument("--output", type=str, required=True,
                        help="출력 이미지 경로")
    parser.add_argument("--intensity", type=float, default=1.0,
                        help="필터 강도 [0, 1] (기본값: 1.0)")
    return parser.parse_args()


def main() -> None:
    """필터 적용 메인 함수."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    args = parse_args()

    if (args.cube is None) == (args.preset_id is None):
        print("오류: --cube 또는 --preset-id 중 하나만 지정해야 합니다.")
        sys.exit(1)

    from colorgrade.core.config import settings
    from colorgrade.core.errors import PresetError
    from colorgrade.data.cube_parser import CubeParser
    from colorgrade.inference.apply_filter import LUTCompositor, apply_filter
    from colorgrade.presets.catalog import PresetCatalog
    from colorgrade.utils.io import load_image, save_image

    logger.info(f"이미지 로드: {args.input}")
    image = load_image(args.input, as_float=False)  # uint8로 로드
    logger.info(f"이미지 크기: {image.shape}")

    if args.cube is not None:
        try:
            lut = CubeParser(settings.MAX_LUT_DIMENSION).read(args.cube)
        except PresetError as e:
            print(f"오류: .cube 파일을 읽을 수 없습니다: {e}")
            sys.exit(1)
        result = apply_filter(image, lut, intensity=args.intensity)
    else:
        catalog = PresetCatalog.from_directory(args.catalog_dir or settings.CATALOG_DIR)
        catalog.load_catalog()
        preset = catalog.get(args.preset_id)
        if preset is None:
            print(f"오류: 프리셋을 찾을 수 없습니다: {args.preset_id}")
            sys.exit(1)
        outcome = LUTCompositor(catalog).render(preset, image, args.intensity)
        if not outcome.ok:
            print(f"오류: 프리셋을 사용할 수 없습니다: {outcome.error}")
            sys.exit(1)
        result = outcome.image

    save_image(result, args.output)
    logger.info(f"결과 저장 완료: {args.output}")


if __name__ == "__main__":
    main()
