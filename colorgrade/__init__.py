"""colorgrade: .cube LUT 프리셋 엔진.

커스텀 3D LUT 가져오기/검증, 프리셋 카탈로그, LUT 합성,
내장 룩 레지스트리, 톤 커브 평가를 제공한다.
"""

__version__ = "0.1.0"
