from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple, Union

import numpy as np

from .filters import CustomFilter, Filter, FilterSet, ParametricFilter
from .response import gain_curve, total_gain_curve
from .scales import LogScale

SAMPLE_STEP_PX = 2

CurveSource = Union[Filter, FilterSet, Iterable[Filter]]


class SamplePoint(NamedTuple):
    frequency_hz: float
    gain_db: float


class CurveSamples:
    """Lazy sample sequence over the pixel columns of a frequency scale.

    Every iteration re-evaluates the source, so edits made to a filter set
    between redraws are always picked up.
    """

    def __init__(self, source: CurveSource, x_scale: LogScale, step_px: float = SAMPLE_STEP_PX) -> None:
        if step_px <= 0:
            raise ValueError("Sample step must be a positive number of pixels")
        if isinstance(source, Iterator):
            # One-shot iterators cannot be replayed on the next redraw.
            source = tuple(source)
        self.source = source
        self.x_scale = x_scale
        self.step_px = step_px

    def columns(self) -> np.ndarray:
        start = min(self.x_scale.range)
        offsets = np.arange(0.0, self.x_scale.width + self.step_px * 1e-9, self.step_px)
        return start + offsets

    def frequencies(self) -> np.ndarray:
        return np.array([self.x_scale.invert(x) for x in self.columns()], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.columns())

    def __iter__(self) -> Iterator[SamplePoint]:
        freqs, gains = self.to_arrays()
        for frequency, gain in zip(freqs, gains):
            yield SamplePoint(float(frequency), float(gain))

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        freqs = self.frequencies()
        if _is_single_filter(self.source):
            return freqs, gain_curve(self.source, freqs)  # type: ignore[arg-type]
        return freqs, total_gain_curve(self.source, freqs)  # type: ignore[arg-type]


def sample_curve(source: CurveSource, x_scale: LogScale, step_px: float = SAMPLE_STEP_PX) -> CurveSamples:
    return CurveSamples(source, x_scale, step_px)


def _is_single_filter(source: object) -> bool:
    return isinstance(source, (ParametricFilter, CustomFilter))
