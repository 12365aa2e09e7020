from __future__ import annotations

import logging
from typing import Callable, Optional

from matplotlib.backend_bases import MouseEvent
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from eq_editor.filters import Filter, FilterSet
from eq_editor.interaction import HandleKind, compute_handle_positions, hit_test
from eq_editor.plotting import draw_filter_set, style_axes
from eq_editor.propagation import DragSession
from eq_editor.scales import FREQUENCY_DOMAIN, GAIN_DOMAIN, LinearScale, LogScale

log = logging.getLogger("eq_editor.gui")


class EditorCanvas(FigureCanvas):
    """Frequency/gain graph whose handles can be dragged with the left mouse button.

    Scales are rebuilt from the axes bounding box on every event, so they are
    expressed in the same display pixels matplotlib reports for mouse events.
    """

    def __init__(
        self,
        committed: FilterSet,
        on_commit: Callable[[Filter], None] | None = None,
        on_select: Callable[[int], None] | None = None,
    ) -> None:
        fig = Figure(figsize=(8, 4), tight_layout=True)
        super().__init__(fig)
        self.axes = fig.add_subplot(111)
        self.setMinimumHeight(300)
        self.committed = committed
        self.on_commit = on_commit
        self.on_select = on_select
        self._session: Optional[DragSession] = None
        self._handle: Optional[HandleKind] = None

        self.mpl_connect("button_press_event", self._on_press)
        self.mpl_connect("motion_notify_event", self._on_motion)
        self.mpl_connect("button_release_event", self._on_release)
        self.mpl_connect("resize_event", lambda _: self.redraw())
        self.redraw()

    def scales(self) -> tuple[LogScale, LinearScale]:
        bbox = self.axes.bbox
        x_scale = LogScale(domain=FREQUENCY_DOMAIN, range=(bbox.x0, bbox.x1))
        y_scale = LinearScale(domain=GAIN_DOMAIN, range=(bbox.y0, bbox.y1))
        return x_scale, y_scale

    @property
    def visible_set(self) -> FilterSet:
        # The working copy is authoritative for drawing while a drag runs.
        return self._session.working if self._session is not None else self.committed

    def redraw(self) -> None:
        self.axes.clear()
        style_axes(self.axes)
        x_scale, y_scale = self.scales()
        draw_filter_set(self.axes, self.visible_set, x_scale, y_scale)
        self.draw_idle()

    def _on_press(self, event: MouseEvent) -> None:
        if event.inaxes is not self.axes or event.button != 1 or event.x is None:
            return
        target = self._find_handle((event.x, event.y))
        if target is None:
            return
        filter_id, handle = target
        self.committed.select(filter_id)
        if self.on_select is not None:
            self.on_select(filter_id)
        self._session = DragSession(self.committed, filter_id, commit=self.on_commit)
        self._handle = handle
        log.debug("Started %s drag on filter %s", handle.value, filter_id)
        self.redraw()

    def _on_motion(self, event: MouseEvent) -> None:
        if self._session is None or self._handle is None or event.x is None:
            return
        x_scale, y_scale = self.scales()
        self._session.update(self._handle, (event.x, event.y), x_scale, y_scale)
        self.redraw()

    def _on_release(self, event: MouseEvent) -> None:
        if self._session is None:
            return
        self._session.end()
        self._session = None
        self._handle = None
        self.redraw()

    def _find_handle(self, point: tuple[float, float]) -> Optional[tuple[int, HandleKind]]:
        x_scale, y_scale = self.scales()
        selected = self.committed.selected
        if selected is not None:
            kind = hit_test(compute_handle_positions(selected, x_scale, y_scale), point)
            if kind is not None:
                return selected.id, kind
        for filt in self.committed:
            # Q handles are only drawn, and grabbable, on the selected filter.
            kind = hit_test(compute_handle_positions(filt, x_scale, y_scale), point, include_q=False)
            if kind is not None:
                return filt.id, kind
        return None
