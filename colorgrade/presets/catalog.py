"""커스텀 .cube 프리셋 카탈로그.

가져오기/이름 변경/삭제와 시작 시 정합성 복구를 담당하는 서비스 객체.
전역 싱글턴 대신 한 번 생성하여 사용처에 주입한다.

변경 작업(import/delete/rename)은 단일 작성자를 가정하며 내부 잠금이 없다.
동시 호출자는 외부에서 직렬화해야 한다.
"""

import logging
from pathlib import Path
from typing import Optional
from uuid import uuid4

from colorgrade.core.config import settings
from colorgrade.core.errors import PresetIOError, PresetNotFound
from colorgrade.data.cube_parser import validate_cube
from colorgrade.presets.models import CustomPreset
from colorgrade.presets.repository import CatalogRepository

logger = logging.getLogger(__name__)

DEFAULT_PRESET_NAME = "Custom Preset"


class PresetCatalog:
    """커스텀 프리셋 레코드와 백업 파일의 수명 주기 관리.

    Args:
        repository: 인덱스/페이로드 저장소
        max_lut_dimension: 가져오기 시 허용하는 최대 LUT 크기
    """

    def __init__(
        self,
        repository: CatalogRepository,
        max_lut_dimension: int = settings.MAX_LUT_DIMENSION,
    ) -> None:
        self.repository = repository
        self.max_lut_dimension = max_lut_dimension
        self._presets: list[CustomPreset] = []

    @classmethod
    def from_directory(
        cls,
        root: str | Path,
        max_lut_dimension: int = settings.MAX_LUT_DIMENSION,
    ) -> "PresetCatalog":
        return cls(CatalogRepository(root), max_lut_dimension=max_lut_dimension)

    def __len__(self) -> int:
        return len(self._presets)

    # ------------------------------------------------------------------
    # 로드
    # ------------------------------------------------------------------

    def load_catalog(self) -> list[CustomPreset]:
        """인덱스를 읽고 백업 파일이 없는 레코드를 제거.

        제거된 레코드가 있으면 인덱스를 다시 저장한다. 예외를 던지지 않는다.
        """
        records = self.repository.load()
        kept, dropped = self.repository.reconcile(records)
        self._presets = kept

        if dropped:
            logger.info(
                f"백업 파일이 없는 프리셋 {len(dropped)}개 제거: "
                f"{[p.file_name for p in dropped]}"
            )
            try:
                self.repository.save(kept)
            except PresetIOError as e:
                logger.warning(f"정리된 인덱스 저장 실패: {e}")

        logger.info(f"카탈로그 로드 완료: {len(kept)}개 프리셋")
        return list(kept)

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    def list_all(self) -> list[CustomPreset]:
        return list(self._presets)

    def get(self, preset_id: str) -> Optional[CustomPreset]:
        for preset in self._presets:
            if preset.id == preset_id:
                return preset
        return None

    def read_payload(self, preset: CustomPreset) -> bytes:
        """프리셋의 .cube 페이로드 읽기.

        Raises:
            PresetUnavailable: 백업 파일이 없을 때
            PresetIOError: 읽기 실패
        """
        return self.repository.read_payload(preset.file_name)

    # ------------------------------------------------------------------
    # 변경
    # ------------------------------------------------------------------

    def import_from_source(
        self,
        source: bytes | str | Path,
        name: Optional[str] = None,
        thumbnail: Optional[bytes] = None,
    ) -> CustomPreset:
        """.cube 파일(경로) 또는 원시 바이트를 검증 후 카탈로그에 추가.

        실패 시 카탈로그는 변경되지 않는다.

        Args:
            source: .cube 파일 경로 또는 내용 바이트
            name: 표시 이름. None이면 파일 이름(확장자 제외) 또는 기본 이름
            thumbnail: 썸네일 이미지 바이트 (선택)

        Returns:
            새 CustomPreset

        Raises:
            FormatError: 텍스트로 디코딩할 수 없을 때
            InvalidCUBEFile: LUT 구조 검증 실패
            PresetIOError: 파일 읽기/쓰기 실패
        """
        if isinstance(source, bytes):
            payload = source
            default_name = DEFAULT_PRESET_NAME
        else:
            path = Path(source)
            try:
                payload = path.read_bytes()
            except OSError as e:
                raise PresetIOError(f"원본 파일 읽기 실패: {path}: {e}") from e
            default_name = path.stem or DEFAULT_PRESET_NAME

        lut = validate_cube(payload, max_dimension=self.max_lut_dimension)

        preset = CustomPreset(
            name=(name or "").strip() or default_name,
            file_name=f"{uuid4()}.cube",
            thumbnail_data=thumbnail,
        )

        self.repository.write_payload(preset.file_name, payload)
        updated = self._presets + [preset]
        try:
            self.repository.save(updated)
        except PresetIOError:
            self._discard_payload(preset.file_name)
            raise

        self._presets = updated
        logger.info(
            f"프리셋 가져오기 완료: {preset.name} "
            f"(LUT {lut.dimension}^3, file={preset.file_name})"
        )
        return preset

    def rename(self, preset: CustomPreset, new_name: str) -> CustomPreset:
        """표시 이름만 변경. 백업 파일 참조는 유지된다.

        Raises:
            PresetNotFound: 카탈로그에 없는 프리셋
            ValueError: 빈 이름
        """
        new_name = new_name.strip()
        if not new_name:
            raise ValueError("프리셋 이름이 비어 있음")

        index = self._index_of(preset.id)
        if index is None:
            raise PresetNotFound(f"프리셋을 찾을 수 없음: {preset.id}")

        renamed = self._presets[index].model_copy(update={"name": new_name})
        updated = list(self._presets)
        updated[index] = renamed
        self.repository.save(updated)
        self._presets = updated
        return renamed

    def delete(self, preset: CustomPreset) -> None:
        """프리셋 레코드 제거 및 백업 파일 삭제.

        파일 삭제 실패는 로그만 남기고 레코드 제거를 막지 않는다.
        """
        self._discard_payload(preset.file_name)

        updated = [p for p in self._presets if p.id != preset.id]
        self._presets = updated
        self.repository.save(updated)
        logger.info(f"프리셋 삭제: {preset.name} ({preset.id})")

    def _discard_payload(self, file_name: str) -> None:
        try:
            self.repository.delete_payload(file_name)
        except PresetIOError as e:
            logger.warning(f"프리셋 파일 삭제 실패 (무시): {e}")

    def _index_of(self, preset_id: str) -> Optional[int]:
        for i, p in enumerate(self._presets):
            if p.id == preset_id:
                return i
        return None
