"""Rate limiting of parameter writes while a handle is being dragged.

During a drag the editor keeps two copies of the filter set: the working copy,
updated on every pointer event and used for drawing, and the committed copy,
which is the shared source of truth for everything outside the graph. Writes
to the committed copy go through a leading-edge :class:`Throttle`, and the
working filter is reconciled into it once more when the drag ends.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from .filters import Filter, FilterSet
from .interaction import HandleKind, Point, apply_drag
from .scales import LinearScale, LogScale

log = logging.getLogger("eq_editor.propagation")

THROTTLE_INTERVAL_S = 0.05


class Throttle:
    """Run ``func`` at most once per ``interval`` seconds.

    The first call of a burst runs immediately; further calls inside the open
    window are dropped, not queued.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        interval: float = THROTTLE_INTERVAL_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval < 0:
            raise ValueError("Throttle interval cannot be negative")
        self.func = func
        self.interval = interval
        self.clock = clock
        self._window_end: Optional[float] = None

    @property
    def in_window(self) -> bool:
        return self._window_end is not None and self.clock() < self._window_end

    def __call__(self, *args: Any) -> bool:
        now = self.clock()
        if self._window_end is not None and now < self._window_end:
            log.debug("Dropped call inside the %.0f ms throttle window", self.interval * 1000.0)
            return False
        self._window_end = now + self.interval
        self.func(*args)
        return True

    def flush(self, *args: Any) -> Any:
        """Call ``func`` unconditionally, ignoring any open window."""
        return self.func(*args)

    def reset(self) -> None:
        self._window_end = None


def reconcile(committed: FilterSet, working: FilterSet, filter_id: int) -> Filter:
    """Copy the working version of ``filter_id`` into the committed set."""
    filt = working.get(filter_id)
    committed.replace(filt)
    return filt


class DragSession:
    def __init__(
        self,
        committed: FilterSet,
        filter_id: int,
        commit: Optional[Callable[[Filter], None]] = None,
        interval: float = THROTTLE_INTERVAL_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.committed = committed
        self.filter_id = filter_id
        self.commit = commit
        self.working = committed.copy()
        self.active = True
        self._throttle = Throttle(self._write, interval=interval, clock=clock)
        # Fail early on an unknown id rather than on the first pointer event.
        self.working.get(filter_id)

    @property
    def filter(self) -> Filter:
        return self.working.get(self.filter_id)

    def update(
        self,
        handle: HandleKind,
        position: Point,
        x_scale: LogScale,
        y_scale: LinearScale,
    ) -> Filter:
        if not self.active:
            raise RuntimeError("Drag session already ended")
        updated = apply_drag(self.filter, handle, position, x_scale, y_scale)
        self.working.replace(updated)
        log.debug("Drag %s on filter %s -> %s", handle.value, self.filter_id, updated)
        self._throttle()
        return updated

    def end(self) -> Filter:
        if not self.active:
            raise RuntimeError("Drag session already ended")
        self.active = False
        self._throttle.reset()
        final = self._throttle.flush()
        log.info("Committed filter %s at drag end: %s", self.filter_id, final)
        return final

    def _write(self) -> Filter:
        filt = reconcile(self.committed, self.working, self.filter_id)
        if self.commit is not None:
            self.commit(filt)
        return filt
