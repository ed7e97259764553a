"""카탈로그 저장소.

메타데이터 인덱스(JSON 문서 하나)와 LUT 페이로드 파일을 관리한다.
load / save / reconcile 계약을 명시적으로 분리하여
실제 디스크 상태 없이도 정합성 로직을 검증할 수 있게 한다.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from colorgrade.core.config import settings
from colorgrade.core.errors import PresetIOError, PresetUnavailable
from colorgrade.presets.models import CatalogIndex, CustomPreset

logger = logging.getLogger(__name__)


class CatalogRepository:
    """디렉터리 기반 프리셋 저장소.

    Args:
        root: 카탈로그 디렉터리 (인덱스와 .cube 파일이 함께 저장됨)
        index_file_name: 인덱스 파일 이름
    """

    def __init__(
        self,
        root: str | Path,
        index_file_name: str = settings.INDEX_FILE_NAME,
    ) -> None:
        self.root = Path(root)
        self.index_file_name = index_file_name

    @property
    def index_path(self) -> Path:
        return self.root / self.index_file_name

    def ensure_root(self) -> None:
        """카탈로그 디렉터리 생성."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PresetIOError(f"카탈로그 디렉터리 생성 실패: {self.root}: {e}") from e

    # ------------------------------------------------------------------
    # 인덱스
    # ------------------------------------------------------------------

    def load(self) -> list[CustomPreset]:
        """인덱스를 읽어 레코드 목록 반환.

        인덱스가 없거나 손상된 경우 빈 목록을 반환하며 예외를 던지지 않는다.
        """
        try:
            raw = self.index_path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"인덱스 읽기 실패, 빈 카탈로그로 시작: {e}")
            return []

        try:
            index = CatalogIndex.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"손상된 인덱스 무시 ({self.index_path}): {e.error_count()}개 오류"
            )
            return []
        except ValueError as e:
            logger.warning(f"손상된 인덱스 무시 ({self.index_path}): {e}")
            return []
        return list(index.presets)

    def save(self, presets: list[CustomPreset]) -> None:
        """인덱스를 원자적으로 기록 (임시 파일 작성 후 교체).

        Raises:
            PresetIOError: 파일 시스템 오류
        """
        payload = CatalogIndex(presets=list(presets)).model_dump_json(indent=2)
        tmp_path = self.index_path.with_suffix(self.index_path.suffix + ".tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            tmp_path.replace(self.index_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise PresetIOError(f"인덱스 저장 실패: {self.index_path}: {e}") from e

    def reconcile(
        self,
        presets: list[CustomPreset],
        exists: Optional[Callable[[CustomPreset], bool]] = None,
    ) -> tuple[list[CustomPreset], list[CustomPreset]]:
        """백업 파일 존재 여부로 레코드를 (유지, 제거) 목록으로 분할.

        Args:
            presets: 인덱스 레코드 (순서 유지)
            exists: 레코드별 존재 판정 함수. None이면 페이로드 파일을 확인

        Returns:
            (kept, dropped)
        """
        if exists is None:
            exists = self.payload_exists

        kept: list[CustomPreset] = []
        dropped: list[CustomPreset] = []
        for preset in presets:
            (kept if exists(preset) else dropped).append(preset)
        return kept, dropped

    # ------------------------------------------------------------------
    # 페이로드 파일
    # ------------------------------------------------------------------

    def payload_path(self, file_name: str) -> Path:
        """페이로드 파일 경로. 경로 구분자가 포함된 이름은 거부한다."""
        if (
            not file_name
            or file_name in (".", "..")
            or "/" in file_name
            or "\\" in file_name
        ):
            raise PresetIOError(f"허용되지 않는 파일 이름: {file_name!r}")
        return self.root / file_name

    def payload_exists(self, preset: CustomPreset) -> bool:
        try:
            return self.payload_path(preset.file_name).is_file()
        except PresetIOError:
            return False

    def write_payload(self, file_name: str, data: bytes) -> Path:
        """페이로드 기록. 같은 이름의 파일이 있으면 실패한다."""
        path = self.payload_path(file_name)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with path.open("xb") as handle:
                handle.write(data)
        except OSError as e:
            raise PresetIOError(f"페이로드 저장 실패: {path}: {e}") from e
        return path

    def read_payload(self, file_name: str) -> bytes:
        """페이로드 읽기.

        Raises:
            PresetUnavailable: 파일이 없을 때
            PresetIOError: 그 외 파일 시스템 오류
        """
        path = self.payload_path(file_name)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise PresetUnavailable(f"프리셋 파일 없음: {path}") from e
        except OSError as e:
            raise PresetIOError(f"페이로드 읽기 실패: {path}: {e}") from e

    def delete_payload(self, file_name: str) -> None:
        """페이로드 삭제. 이미 없으면 무시한다.

        Raises:
            PresetIOError: 삭제 실패
        """
        path = self.payload_path(file_name)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PresetIOError(f"페이로드 삭제 실패: {path}: {e}") from e
