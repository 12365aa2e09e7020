"""Response math and drag mapping for an interactive EQ curve editor."""

from .filters import (
    CustomFilter,
    Filter,
    FilterSet,
    HighShelfFilter,
    LowShelfFilter,
    PeakingFilter,
    filter_from_dict,
    filter_to_dict,
)
from .response import SAMPLE_RATE, gain_at, gain_curve, total_gain_at, total_gain_curve
from .scales import LinearScale, LogScale, frequency_scale, gain_scale
from .sampling import SamplePoint, sample_curve
from .interaction import HandleKind, HandlePositions, apply_drag, compute_handle_positions, hit_test
from .propagation import DragSession, Throttle, reconcile
from .config import load_filter_config

__all__ = [
    "Filter",
    "FilterSet",
    "PeakingFilter",
    "LowShelfFilter",
    "HighShelfFilter",
    "CustomFilter",
    "filter_from_dict",
    "filter_to_dict",
    "SAMPLE_RATE",
    "gain_at",
    "gain_curve",
    "total_gain_at",
    "total_gain_curve",
    "LogScale",
    "LinearScale",
    "frequency_scale",
    "gain_scale",
    "SamplePoint",
    "sample_curve",
    "HandleKind",
    "HandlePositions",
    "compute_handle_positions",
    "apply_drag",
    "hit_test",
    "Throttle",
    "DragSession",
    "reconcile",
    "load_filter_config",
]
