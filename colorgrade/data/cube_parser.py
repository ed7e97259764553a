""".cube 파일 파서.

3D LUT 파일(.cube)을 읽고 쓰는 유틸리티.
Adobe/DaVinci Resolve 호환 포맷을 지원한다.

데이터 행은 R이 가장 빠르게 변하는 순서로 나열된다:
    flat_index = r + g * N + b * N^2
"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np

from colorgrade.core.errors import FormatError, InvalidCUBEFile

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIMENSION = 256

# 색상 항목이 아닌 메타데이터 키워드
_KNOWN_KEYWORDS = (
    "TITLE",
    "DOMAIN_MIN",
    "DOMAIN_MAX",
    "LUT_1D_SIZE",
    "LUT_1D_INPUT_RANGE",
    "LUT_3D_INPUT_RANGE",
)


class ParsedLUT:
    """파싱된 3D LUT.

    Attributes:
        dimension: 큐브 한 변의 길이 N
        data: RGBA 평탄 버퍼 [N^3 * 4], float32, 파일 순서
        title: TITLE 메타데이터 (없으면 빈 문자열)
        domain_min: DOMAIN_MIN [3]
        domain_max: DOMAIN_MAX [3]
    """

    def __init__(
        self,
        dimension: int,
        data: np.ndarray,
        title: str = "",
        domain_min: Optional[np.ndarray] = None,
        domain_max: Optional[np.ndarray] = None,
    ) -> None:
        self.dimension = dimension
        self.data = np.asarray(data, dtype=np.float32)
        self.title = title
        self.domain_min = (
            np.zeros(3, dtype=np.float32)
            if domain_min is None
            else np.asarray(domain_min, dtype=np.float32)
        )
        self.domain_max = (
            np.ones(3, dtype=np.float32)
            if domain_max is None
            else np.asarray(domain_max, dtype=np.float32)
        )

    @property
    def table(self) -> np.ndarray:
        """[N, N, N, 4] 뷰. 인덱스 순서는 [b, g, r]."""
        n = self.dimension
        return self.data.reshape(n, n, n, 4)

    def __repr__(self) -> str:
        return f"ParsedLUT(dimension={self.dimension}, title={self.title!r})"


def decode_payload(payload: bytes) -> str:
    """바이트 페이로드를 UTF-8 텍스트로 디코딩.

    Raises:
        FormatError: 유효한 UTF-8 텍스트가 아닐 때
    """
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FormatError(f"텍스트로 디코딩할 수 없는 페이로드: {e}") from e


def sniff_cube(text: str) -> bool:
    """LUT 파일 여부를 빠르게 확인 (전체 파싱 전 사전 검사)."""
    return "LUT_3D_SIZE" in text or "LUT_1D_SIZE" in text


def _parse_floats(tokens: list[str], line_no: int) -> list[float]:
    try:
        return [float(t) for t in tokens]
    except ValueError as e:
        raise InvalidCUBEFile(f"{line_no}행: 숫자가 아닌 값 {tokens}") from e


def _is_number(token: str) -> bool:
    """float()로 읽히는 토큰인지 (nan, inf 포함)."""
    try:
        float(token)
    except ValueError:
        return False
    return True


def parse_cube(
    payload: bytes | str,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
) -> ParsedLUT:
    """.cube 텍스트를 파싱하여 차원과 RGBA 평탄 버퍼를 반환.

    빈 줄과 '#' 주석은 무시한다. LUT_3D_SIZE 행이 N을 선언하며,
    키워드 행(TITLE, DOMAIN_MIN 등)을 제외한 모든 행은 3개 이상의
    실수 토큰을 가져야 한다. 각 항목에 알파 1.0을 덧붙인다.

    Args:
        payload: .cube 파일 내용 (bytes 또는 디코딩된 str)
        max_dimension: 허용하는 최대 N (신뢰할 수 없는 입력의 메모리 상한)

    Returns:
        ParsedLUT

    Raises:
        FormatError: 텍스트로 디코딩할 수 없을 때
        InvalidCUBEFile: N 미선언, 범위 초과, 항목 수 불일치, 잘못된 데이터 행
    """
    text = decode_payload(payload) if isinstance(payload, bytes) else payload

    size = 0
    title = ""
    domain_min: Optional[list[float]] = None
    domain_max: Optional[list[float]] = None
    values: list[float] = []

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()

        # 빈 줄 및 주석 건너뜀
        if not line or line.startswith("#"):
            continue

        parts = line.split()
        keyword = parts[0].upper()

        if keyword == "LUT_3D_SIZE":
            if len(parts) < 2:
                raise InvalidCUBEFile(f"{line_no}행: LUT_3D_SIZE 값 없음")
            try:
                size = int(parts[1])
            except ValueError as e:
                raise InvalidCUBEFile(
                    f"{line_no}행: LUT_3D_SIZE가 정수가 아님: {parts[1]}"
                ) from e
            if size < 1 or size > max_dimension:
                raise InvalidCUBEFile(
                    f"LUT_3D_SIZE 범위 오류: {size} (허용 1..{max_dimension})"
                )

        elif keyword == "TITLE":
            title = line[5:].strip().strip('"')

        elif keyword in ("DOMAIN_MIN", "DOMAIN_MAX"):
            if len(parts) != 4:
                raise InvalidCUBEFile(
                    f"{line_no}행: {keyword}에는 3개의 값이 필요함: {line!r}"
                )
            if keyword == "DOMAIN_MIN":
                domain_min = _parse_floats(parts[1:], line_no)
            else:
                domain_max = _parse_floats(parts[1:], line_no)

        elif keyword in _KNOWN_KEYWORDS or not _is_number(parts[0]):
            # 숫자가 아닌 토큰으로 시작하는 행은 메타데이터로 취급
            logger.debug(f"{line_no}행 키워드 무시: {parts[0]}")

        else:
            # 데이터 행: "R G B"
            if len(parts) < 3:
                raise InvalidCUBEFile(
                    f"{line_no}행: 데이터 행은 3개 이상의 값이 필요함: {line!r}"
                )
            r, g, b = _parse_floats(parts[:3], line_no)
            values.extend((r, g, b, 1.0))

    if size == 0:
        raise InvalidCUBEFile("LUT_3D_SIZE 헤더를 찾을 수 없음")

    expected = size**3
    actual = len(values) // 4
    if actual != expected:
        raise InvalidCUBEFile(f"데이터 행 수 불일치: 예상 {expected}, 실제 {actual}")

    return ParsedLUT(
        dimension=size,
        data=np.array(values, dtype=np.float32),
        title=title,
        domain_min=None if domain_min is None else np.array(domain_min),
        domain_max=None if domain_max is None else np.array(domain_max),
    )


def validate_cube(
    payload: bytes,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
) -> ParsedLUT:
    """디코딩 -> 사전 검사 -> 전체 파싱 순으로 .cube 페이로드를 검증.

    Raises:
        FormatError: 텍스트로 디코딩할 수 없을 때
        InvalidCUBEFile: LUT 파일이 아니거나 구조가 올바르지 않을 때
    """
    text = decode_payload(payload)
    if not sniff_cube(text):
        raise InvalidCUBEFile("LUT_3D_SIZE/LUT_1D_SIZE 선언이 없는 파일")
    return parse_cube(text, max_dimension=max_dimension)


class CubeParser:
    """.cube 파일 파서.

    .cube 파일의 읽기(read)와 쓰기(write)를 담당한다.
    마지막으로 읽은 LUT의 메타데이터(title, size, domain)를 보관한다.
    """

    def __init__(self, max_dimension: int = DEFAULT_MAX_DIMENSION) -> None:
        self.max_dimension = max_dimension
        self.title: str = ""
        self.size: int = 0
        self.domain_min: np.ndarray = np.array([0.0, 0.0, 0.0], dtype=np.float32)
        self.domain_max: np.ndarray = np.array([1.0, 1.0, 1.0], dtype=np.float32)
        self.lut: ParsedLUT | None = None

    def parse(self, payload: bytes) -> ParsedLUT:
        """바이트 페이로드를 검증/파싱하고 메타데이터를 갱신."""
        lut = validate_cube(payload, max_dimension=self.max_dimension)
        self.title = lut.title
        self.size = lut.dimension
        self.domain_min = lut.domain_min
        self.domain_max = lut.domain_max
        self.lut = lut
        return lut

    def read(self, path: str | Path) -> ParsedLUT:
        """Read a .cube file and return the parsed LUT.

        Args:
            path: .cube 파일 경로

        Returns:
            ParsedLUT

        Raises:
            FileNotFoundError: 파일이 존재하지 않을 때
            FormatError, InvalidCUBEFile: 파일 형식이 올바르지 않을 때
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"파일을 찾을 수 없음: {path}")
        return self.parse(path.read_bytes())

    def write(
        self,
        lut: np.ndarray,
        path: str | Path,
        title: str = "colorgrade LUT",
    ) -> None:
        """Write a 3D LUT to a .cube file.

        Args:
            lut: 3D LUT 배열 [size, size, size, 3 또는 4], 인덱스 [b, g, r], 범위 [0, 1]
            path: 출력 .cube 파일 경로
            title: LUT 제목 (메타데이터)
        """
        lut = np.asarray(lut, dtype=np.float32)
        if (
            lut.ndim != 4
            or lut.shape[3] not in (3, 4)
            or not (lut.shape[0] == lut.shape[1] == lut.shape[2])
        ):
            raise ValueError(
                f"LUT shape 오류: {lut.shape} — [size, size, size, 3]이어야 함"
            )

        size = lut.shape[0]
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(f'TITLE "{title}"\n')
            f.write("\n")
            f.write(f"LUT_3D_SIZE {size}\n")
            f.write("\n")
            f.write("DOMAIN_MIN 0.0 0.0 0.0\n")
            f.write("DOMAIN_MAX 1.0 1.0 1.0\n")
            f.write("\n")

            # R이 가장 빠르게 변하도록 출력: B 루프 -> G 루프 -> R 루프
            for b in range(size):
                for g in range(size):
                    for r in range(size):
                        rv, gv, bv = lut[b, g, r, :3]
                        f.write(f"{rv:.6f} {gv:.6f} {bv:.6f}\n")

    @staticmethod
    def create_identity_lut(size: int = 33) -> np.ndarray:
        """항등 LUT 생성 (입력 = 출력).

        Args:
            size: LUT 그리드 크기 (일반적으로 17, 33, 65)

        Returns:
            항등 3D LUT [size, size, size, 3], 인덱스 [b, g, r], float32
        """
        coords = np.linspace(0.0, 1.0, size, dtype=np.float32)
        b, g, r = np.meshgrid(coords, coords, coords, indexing="ij")
        return np.stack([r, g, b], axis=-1)
