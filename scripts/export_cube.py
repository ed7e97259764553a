"""항등 3D LUT를 .cube 파일로 내보내기.

다른 편집 도구에서 보정을 입힐 기준 LUT를 만드는 데 사용한다.

Usage:
    python scripts/export_cube.py --output identity.cube --size 33
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="항등 LUT를 .cube 파일로 내보내기")
    parser.add_argument("--output", type=str, required=True, help="출력 .cube 파일 경로")
    parser.add_argument("--size", type=int, default=33,
                        help="LUT 그리드 크기 (17/33/65). 클수록 정밀하지만 파일이 커짐")
    parser.add_argument("--title", type=str, default="Identity", help="LUT 제목")
    return parser.parse_args()


def main() -> None:
    """Export 메인 함수."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    args = parse_args()

    from colorgrade.data.cube_parser import CubeParser

    logger.info(f"출력: {args.output} (LUT 크기: {args.size}x{args.size}x{args.size})")

    parser = CubeParser()
    parser.write(parser.create_identity_lut(args.size), args.output, title=args.title)

    logger.info("Export 완료")


if __name__ == "__main__":
    main()
