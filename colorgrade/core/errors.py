"""프리셋 엔진 예외 계층.

가져오기/검증 오류는 호출자에게 그대로 전파되고,
적용 시점의 오류(PresetUnavailable 등)는 합성기에서 실패 결과로 변환된다.
"""


class PresetError(Exception):
    """프리셋 엔진 공통 기반 예외."""


class FormatError(PresetError):
    """페이로드를 텍스트로 디코딩할 수 없음."""


class InvalidCUBEFile(PresetError, ValueError):
    """LUT_3D_SIZE 누락, 항목 수 불일치 등 .cube 구조 오류."""


class PresetIOError(PresetError, OSError):
    """복사/쓰기/삭제/읽기 중 파일 시스템 오류."""


class PresetUnavailable(PresetError):
    """적용 시점에 백업 파일이 존재하지 않음."""


class PresetNotFound(PresetError, KeyError):
    """카탈로그에 없는 프리셋."""

    def __str__(self) -> str:
        # KeyError는 메시지를 repr()로 감싸므로 일반 예외처럼 출력
        return Exception.__str__(self)
