"""Mapping between filter parameters and draggable handle positions.

The forward direction places a main handle (frequency/gain) and two Q handles
for a parametric filter. The Q handles sit at ``hz / s`` and ``hz * s`` with
``s = 1 + 1/q``, so the spread shrinks as Q grows and a dragged handle maps
back to a unique Q. The inverse direction turns a dragged screen position into
an updated filter, clamping every parameter into its valid range.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from .filters import (
    DB_RANGE,
    HZ_RANGE,
    Q_RANGE,
    CustomFilter,
    Filter,
    ParametricFilter,
    clamp,
    is_shelf,
)
from .scales import LinearScale, LogScale

log = logging.getLogger("eq_editor.interaction")

MIN_SYMMETRY_FACTOR = 1.001
HANDLE_RADIUS_PX = 8.0

Point = tuple[float, float]


class HandleKind(enum.Enum):
    MAIN = "main"
    Q_LEFT = "q_left"
    Q_RIGHT = "q_right"


@dataclass(frozen=True, slots=True)
class HandlePositions:
    main: Point
    q_left: Point
    q_right: Point

    def items(self) -> list[tuple[HandleKind, Point]]:
        return [
            (HandleKind.Q_LEFT, self.q_left),
            (HandleKind.Q_RIGHT, self.q_right),
            (HandleKind.MAIN, self.main),
        ]


def display_gain(filt: ParametricFilter) -> float:
    # A sigmoid shelf only reaches half of its gain at the corner frequency.
    if is_shelf(filt):
        return filt.db / 2.0
    return filt.db


def symmetry_factor(q: float) -> float:
    return 1.0 + 1.0 / q


def q_handle_frequencies(filt: ParametricFilter) -> tuple[float, float]:
    factor = symmetry_factor(filt.q)
    return filt.hz / factor, filt.hz * factor


def compute_handle_positions(
    filt: Filter,
    x_scale: LogScale,
    y_scale: LinearScale,
) -> Optional[HandlePositions]:
    if isinstance(filt, CustomFilter):
        return None
    y = y_scale(display_gain(filt))
    left_hz, right_hz = q_handle_frequencies(filt)
    return HandlePositions(
        main=(x_scale(filt.hz), y),
        q_left=(x_scale(left_hz), y),
        q_right=(x_scale(right_hz), y),
    )


def apply_drag(
    filt: Filter,
    handle: HandleKind,
    position: Point,
    x_scale: LogScale,
    y_scale: LinearScale,
) -> Filter:
    """Return ``filt`` updated for ``handle`` dropped at ``position``."""
    if isinstance(filt, CustomFilter):
        log.debug("Ignoring %s drag on custom filter %s", handle.value, filt.id)
        return filt
    x, y = position
    if handle is HandleKind.MAIN:
        return _apply_main_drag(filt, x_scale.invert(x), y_scale.invert(y))
    return _apply_q_drag(filt, handle, x_scale.invert(x))


def _apply_main_drag(filt: ParametricFilter, raw_hz: float, raw_db: float) -> ParametricFilter:
    hz = clamp(raw_hz, *HZ_RANGE)
    db = raw_db * 2.0 if is_shelf(filt) else raw_db
    return replace(filt, hz=hz, db=clamp(db, *DB_RANGE))


def _apply_q_drag(filt: ParametricFilter, handle: HandleKind, handle_hz: float) -> ParametricFilter:
    if handle is HandleKind.Q_RIGHT:
        ratio = handle_hz / filt.hz
    else:
        ratio = filt.hz / handle_hz
    # Dragging a handle across the center would otherwise give an infinite or negative Q.
    factor = max(MIN_SYMMETRY_FACTOR, ratio)
    q = clamp(1.0 / (factor - 1.0), *Q_RANGE)
    return replace(filt, q=q)


def hit_test(
    positions: Optional[HandlePositions],
    point: Point,
    radius: float = HANDLE_RADIUS_PX,
    include_q: bool = True,
) -> Optional[HandleKind]:
    """Nearest handle within ``radius`` pixels of ``point``.

    Q handles are checked first so that they stay reachable when a high Q
    squeezes them onto the main handle.
    """
    if positions is None:
        return None
    best: Optional[HandleKind] = None
    best_distance = radius
    for kind, (hx, hy) in positions.items():
        if not include_q and kind is not HandleKind.MAIN:
            continue
        distance = math.hypot(point[0] - hx, point[1] - hy)
        if distance <= best_distance and (best is None or distance < best_distance):
            best = kind
            best_distance = distance
    return best
