""".cube 파일을 프리셋 카탈로그로 가져오기.

Usage:
    python scripts/import_preset.py --cube film.cube --name "Film Look"
    python scripts/import_preset.py --cube film.cube --thumbnail sample.jpg
    python scripts/import_preset.py --list
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=".cube 프리셋 가져오기")
    parser.add_argument("--cube", type=str, default=None, help=".cube 파일 경로")
    parser.add_argument("--name", type=str, default=None, help="표시 이름")
    parser.add_argument("--thumbnail", type=str, default=None,
                        help="썸네일을 만들 이미지 경로 (LUT 적용 후 JPEG로 저장)")
    parser.add_argument("--catalog-dir", type=str, default=None, help="카탈로그 디렉터리")
    parser.add_argument("--list", action="store_true", help="카탈로그 목록 출력")
    return parser.parse_args()


def main() -> None:
    """가져오기 메인 함수."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    args = parse_args()

    from colorgrade.core.config import settings
    from colorgrade.core.errors import PresetError
    from colorgrade.data.cube_parser import CubeParser
    from colorgrade.inference.apply_filter import apply_filter
    from colorgrade.presets.catalog import PresetCatalog
    from colorgrade.utils.io import encode_thumbnail, load_image

    catalog = PresetCatalog.from_directory(args.catalog_dir or settings.CATALOG_DIR)
    catalog.load_catalog()

    if args.list:
        for preset in catalog.list_all():
            print(f"{preset.id}  {preset.name}  {preset.created_at:%Y-%m-%d %H:%M}")
        return

    if args.cube is None:
        print("오류: --cube 또는 --list 중 하나를 지정해야 합니다.")
        sys.exit(1)

    thumbnail = None
    try:
        if args.thumbnail is not None:
            lut = CubeParser(settings.MAX_LUT_DIMENSION).read(args.cube)
            preview = apply_filter(load_image(args.thumbnail, as_float=False), lut)
            thumbnail = encode_thumbnail(
                preview,
                max_side=settings.THUMBNAIL_MAX_SIDE,
                quality=settings.THUMBNAIL_JPEG_QUALITY,
            )
        preset = catalog.import_from_source(args.cube, name=args.name, thumbnail=thumbnail)
    except PresetError as e:
        print(f"오류: 가져오기 실패: {e}")
        sys.exit(1)

    logger.info(f"가져오기 완료: {preset.name} (id={preset.id})")


if __name__ == "__main__":
    main()
