"""Pixel-space transform pairs shared by the sampler, the handle mapping and the GUI."""

from __future__ import annotations

import math
from dataclasses import dataclass

FREQUENCY_DOMAIN = (10.0, 20_000.0)
GAIN_DOMAIN = (-30.0, 30.0)


@dataclass(frozen=True, slots=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __post_init__(self) -> None:
        if self.domain[0] == self.domain[1]:
            raise ValueError("Linear scale needs two distinct domain values")

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            return d0
        return d0 + (pixel - r0) / (r1 - r0) * (d1 - d0)


@dataclass(frozen=True, slots=True)
class LogScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __post_init__(self) -> None:
        d0, d1 = self.domain
        if d0 <= 0 or d1 <= 0:
            raise ValueError("Log scale domain must be strictly positive")
        if d0 == d1:
            raise ValueError("Log scale needs two distinct domain values")

    @property
    def width(self) -> float:
        return abs(self.range[1] - self.range[0])

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (math.log(value) - math.log(d0)) / (math.log(d1) - math.log(d0))
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            return d0
        t = (pixel - r0) / (r1 - r0)
        return math.exp(math.log(d0) + t * (math.log(d1) - math.log(d0)))


def frequency_scale(width: float, x0: float = 0.0) -> LogScale:
    return LogScale(domain=FREQUENCY_DOMAIN, range=(x0, x0 + width))


def gain_scale(height: float, y0: float = 0.0) -> LinearScale:
    """Screen y grows downwards, so the top of the plot maps to the highest gain."""
    return LinearScale(domain=GAIN_DOMAIN, range=(y0 + height, y0))
