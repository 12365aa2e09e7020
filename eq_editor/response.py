"""Gain-vs-frequency models for single filters and for a whole filter set."""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np
from scipy import signal, special

from .filters import CustomFilter, Filter, HighShelfFilter, LowShelfFilter, PeakingFilter

log = logging.getLogger("eq_editor.response")

SAMPLE_RATE = 48_000.0
MIN_GAIN_DB = -100.0
MAX_GAIN_DB = 100.0
SHELF_STEEPNESS = 5.0


def gain_at(filt: Filter, frequency_hz: float) -> float:
    return float(gain_curve(filt, np.array([frequency_hz], dtype=np.float64))[0])


def total_gain_at(filters: Iterable[Filter], frequency_hz: float) -> float:
    """Sum of the individual filter gains in dB.

    Stacked filters really multiply linear magnitudes; the editor draws the
    plain dB sum instead.
    """
    return float(sum(gain_at(filt, frequency_hz) for filt in filters))


def gain_curve(filt: Filter, frequencies: np.ndarray) -> np.ndarray:
    freq = np.asarray(frequencies, dtype=np.float64)
    if isinstance(filt, PeakingFilter):
        return _peaking_gain(filt, freq)
    if isinstance(filt, LowShelfFilter):
        return filt.db * special.expit(-_shelf_position(filt, freq))
    if isinstance(filt, HighShelfFilter):
        return filt.db * special.expit(_shelf_position(filt, freq))
    if isinstance(filt, CustomFilter):
        return _custom_gain(filt, freq)
    log.debug("Unrecognised filter object %r contributes no gain", filt)
    return np.zeros_like(freq)


def total_gain_curve(filters: Iterable[Filter], frequencies: np.ndarray) -> np.ndarray:
    freq = np.asarray(frequencies, dtype=np.float64)
    total = np.zeros_like(freq)
    for filt in filters:
        total += gain_curve(filt, freq)
    return total


def _peaking_gain(filt: PeakingFilter, freq: np.ndarray) -> np.ndarray:
    if filt.q <= 0:
        return np.zeros_like(freq)
    x = np.log2(freq / filt.hz) * filt.q
    gain = filt.db / (1.0 + 4.0 * x * x)
    # Never cross the 0 dB baseline in the wrong direction.
    if filt.db > 0:
        return np.maximum(0.0, gain)
    return np.minimum(0.0, gain)


def _shelf_position(filt: LowShelfFilter | HighShelfFilter, freq: np.ndarray) -> np.ndarray:
    steepness = filt.q * SHELF_STEEPNESS
    return (np.log10(freq) - np.log10(filt.hz)) * steepness


def _custom_gain(filt: CustomFilter, freq: np.ndarray) -> np.ndarray:
    w = 2.0 * np.pi * freq / SAMPLE_RATE
    b = np.array([filt.b0, filt.b1, filt.b2], dtype=np.float64)
    a = np.array([1.0, filt.a1, filt.a2], dtype=np.float64)
    _, numerator = signal.freqz(b, 1.0, worN=w)
    _, denominator = signal.freqz(a, 1.0, worN=w)
    with np.errstate(divide="ignore", invalid="ignore"):
        # 0/0 gives NaN, which lands on the floor below.
        magnitude = np.abs(numerator) / np.abs(denominator)
        gains = np.full(freq.shape, MIN_GAIN_DB)
        audible = magnitude > 0
        gains[audible] = 20.0 * np.log10(magnitude[audible])
    gains[np.isinf(magnitude)] = MAX_GAIN_DB
    if not audible.all():
        log.debug("Custom filter %s has zero magnitude at some frequencies; floored to %.1f dB", filt.id, MIN_GAIN_DB)
    return gains
