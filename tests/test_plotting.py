import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from eq_editor.config import load_filter_config
from eq_editor.filters import CustomFilter, FilterSet, PeakingFilter
from eq_editor.plotting import draw_filter_set, plot_filter_set, style_axes
from eq_editor.scales import frequency_scale, gain_scale


def test_plot_is_written_headless(tmp_path):
    filters, _ = load_filter_config(None)
    filters.add(CustomFilter(id=4, b0=0.0))
    target = tmp_path / "plots" / "curve.png"
    plot_filter_set(filters, target, show_plot=False, width=400, height=200)
    assert target.exists()
    assert target.stat().st_size > 0


def test_selected_filter_gets_its_own_curve_and_q_handles():
    filters = FilterSet([PeakingFilter(id=1, hz=1000.0, db=6.0, q=1.0), CustomFilter(id=2)], selected_id=1)
    fig, ax = plt.subplots()
    style_axes(ax)
    draw_filter_set(ax, filters, frequency_scale(400.0), gain_scale(200.0))
    labels = [line.get_label() for line in ax.get_lines()]
    assert "Total" in labels
    assert any(label.startswith("#1 peaking") for label in labels)
    # 0 dB baseline, total, selected curve, main handle, Q handle pair; custom filters have no handles
    assert len(ax.get_lines()) == 5
    plt.close(fig)


def test_no_selection_draws_only_total_and_main_handles():
    filters = FilterSet([PeakingFilter(id=1), PeakingFilter(id=2, hz=200.0)])
    fig, ax = plt.subplots()
    draw_filter_set(ax, filters, frequency_scale(400.0), gain_scale(200.0))
    assert len(ax.get_lines()) == 3
    plt.close(fig)
