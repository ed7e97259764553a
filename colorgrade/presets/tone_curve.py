"""톤 커브 모델.

[0, 1]^2 위의 제어점을 구간 선형으로 잇는 커브.
제어점은 생성 시 좌표별로 [0, 1]에 클램프되고 입력값 기준으로 정렬된다.
"""

from typing import Iterable, NamedTuple

import numpy as np


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, float(v)))


class ToneCurvePoint(NamedTuple):
    input: float
    output: float

    @classmethod
    def clamped(cls, input: float, output: float) -> "ToneCurvePoint":
        return cls(_clamp01(input), _clamp01(output))


IDENTITY_POINTS = (
    (0.0, 0.0),
    (0.25, 0.25),
    (0.5, 0.5),
    (0.75, 0.75),
    (1.0, 1.0),
)


class ToneCurve:
    """구간 선형 톤 커브.

    Args:
        points: (input, output) 쌍. None이면 5점 항등 커브

    Raises:
        ValueError: 제어점이 없거나 클램프 후 입력값이 중복될 때
    """

    def __init__(self, points: Iterable[tuple[float, float]] | None = None) -> None:
        if points is None:
            points = IDENTITY_POINTS

        clamped = sorted(ToneCurvePoint.clamped(i, o) for i, o in points)
        if not clamped:
            raise ValueError("톤 커브에는 최소 1개의 제어점이 필요함")

        inputs = [p.input for p in clamped]
        if len(set(inputs)) != len(inputs):
            raise ValueError(f"중복된 입력값을 가진 제어점: {inputs}")

        self._points = tuple(clamped)

    @property
    def points(self) -> tuple[ToneCurvePoint, ...]:
        return self._points

    def evaluate(self, x: float) -> float:
        """입력 톤 x에 대한 출력값."""
        x = _clamp01(x)
        first, last = self._points[0], self._points[-1]

        if x <= first.input:
            return first.output
        if x >= last.input:
            return last.output

        for p1, p2 in zip(self._points, self._points[1:]):
            if p1.input <= x <= p2.input:
                t = (x - p1.input) / (p2.input - p1.input)
                return p1.output + t * (p2.output - p1.output)

        return x

    def apply(self, image: np.ndarray) -> np.ndarray:
        """이미지 전체에 커브 적용 (float32 [0, 1], 채널 공통).

        정렬/중복 없는 제어점에서 evaluate와 동일한 결과를 낸다.
        """
        xs = np.array([p.input for p in self._points], dtype=np.float32)
        ys = np.array([p.output for p in self._points], dtype=np.float32)
        image = np.clip(np.asarray(image, dtype=np.float32), 0.0, 1.0)
        return np.interp(image, xs, ys).astype(np.float32)

    def with_point(self, input: float, output: float) -> "ToneCurve":
        """제어점 추가 (같은 입력값의 기존 점은 교체)."""
        new = ToneCurvePoint.clamped(input, output)
        kept = [p for p in self._points if p.input != new.input]
        return ToneCurve(kept + [new])

    def without_point(self, input: float) -> "ToneCurve":
        """입력값이 일치하는 제어점 제거."""
        input = _clamp01(input)
        return ToneCurve(p for p in self._points if p.input != input)

    def to_dict(self) -> dict:
        return {"points": [[p.input, p.output] for p in self._points]}

    @classmethod
    def from_dict(cls, data: dict) -> "ToneCurve":
        return cls((float(i), float(o)) for i, o in data["points"])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToneCurve):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"ToneCurve({[tuple(p) for p in self._points]})"
