from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.ticker import FixedLocator, FuncFormatter, MultipleLocator

from .filters import CustomFilter, Filter, FilterSet
from .interaction import HandlePositions, compute_handle_positions
from .sampling import SAMPLE_STEP_PX, sample_curve
from .scales import FREQUENCY_DOMAIN, GAIN_DOMAIN, LinearScale, LogScale, frequency_scale, gain_scale

TOTAL_COLOR = "#111111"
SELECTED_COLOR = "#0060df"
HANDLE_COLOR = "#ff7f0e"
DISPLAY_TICKS = np.array([20.0, 100.0, 1_000.0, 10_000.0, 20_000.0])


def style_axes(ax: Axes) -> None:
    ax.set_xscale("log")
    ax.set_xlim(*FREQUENCY_DOMAIN)
    ax.set_ylim(*GAIN_DOMAIN)
    ax.set_xlabel("Frequency [Hz]")
    ax.set_ylabel("Gain [dB]")
    ax.grid(which="major", linestyle=":", linewidth=0.8, color="#666666")
    ax.grid(which="minor", linestyle=":", linewidth=0.35, alpha=0.7, color="#999999")
    ax.axhline(0.0, color="#666666", linewidth=0.8)
    ax.xaxis.set_major_locator(FixedLocator(DISPLAY_TICKS))
    ax.xaxis.set_major_formatter(FuncFormatter(lambda value, _: f"{int(value):d}"))
    ax.yaxis.set_major_locator(MultipleLocator(5))
    ax.yaxis.set_minor_locator(MultipleLocator(1))


def draw_filter_set(
    ax: Axes,
    filter_set: FilterSet,
    x_scale: LogScale,
    y_scale: LinearScale,
    step_px: float = SAMPLE_STEP_PX,
) -> None:
    """Draw the total curve, the selected filter curve and every filter's handles.

    Curves are sampled on the pixel columns of ``x_scale``; handle positions are
    mapped back to data coordinates through the same scales.
    """
    freqs, total = sample_curve(filter_set, x_scale, step_px).to_arrays()
    ax.semilogx(freqs, total, color=TOTAL_COLOR, linewidth=2.0, label="Total")

    selected = filter_set.selected
    if selected is not None:
        sel_freqs, sel_gain = sample_curve(selected, x_scale, step_px).to_arrays()
        ax.semilogx(sel_freqs, sel_gain, color=SELECTED_COLOR, linewidth=1.4, label=_label(selected))

    for filt in filter_set:
        positions = compute_handle_positions(filt, x_scale, y_scale)
        if positions is None:
            continue
        _draw_handles(ax, positions, x_scale, y_scale, highlight=filt.id == filter_set.selected_id)


def _draw_handles(
    ax: Axes,
    positions: HandlePositions,
    x_scale: LogScale,
    y_scale: LinearScale,
    highlight: bool,
) -> None:
    main_x, main_y = positions.main
    ax.plot(
        [x_scale.invert(main_x)],
        [y_scale.invert(main_y)],
        marker="o",
        markersize=9 if highlight else 7,
        color=SELECTED_COLOR if highlight else HANDLE_COLOR,
        linestyle="none",
    )
    if not highlight:
        return
    q_x = [x_scale.invert(positions.q_left[0]), x_scale.invert(positions.q_right[0])]
    q_y = [y_scale.invert(positions.q_left[1]), y_scale.invert(positions.q_right[1])]
    ax.plot(q_x, q_y, marker="o", markersize=5, color=SELECTED_COLOR, linestyle=":", linewidth=0.8)


def _label(filt: Filter) -> str:
    if isinstance(filt, CustomFilter):
        return f"#{filt.id} custom biquad"
    return f"#{filt.id} {filt.kind} {filt.hz:.0f} Hz {filt.db:+.1f} dB Q{filt.q:.2f}"


def plot_filter_set(
    filter_set: FilterSet,
    save_path: Optional[Path],
    show_plot: bool = True,
    width: int = 1000,
    height: int = 500,
    step_px: float = SAMPLE_STEP_PX,
    title: str = "EQ Response",
) -> None:
    fig, ax = plt.subplots(figsize=(width / 100.0, height / 100.0))
    style_axes(ax)
    draw_filter_set(ax, filter_set, frequency_scale(width), gain_scale(height), step_px)
    ax.set_title(title)
    ax.legend(loc="upper right")
    fig.tight_layout()

    if save_path is not None:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150)
        print(f"Saved plot to {save_path}")

    if show_plot:
        plt.show()
    else:
        plt.close(fig)
