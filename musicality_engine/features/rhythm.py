"""Rhythmic consistency: steady inter-onset intervals at a playable tempo."""

from __future__ import annotations

from typing import Sequence

from ..model import clamp01
from ..music_theory import coefficient_of_variation, linear_ramp

# CV at or above this scores zero steadiness.
MAX_CV = 0.35

# Mean IOI (ms) at or below which playing counts as mashing.
FAST_IOI_MS = 100.0
# Mean IOI (ms) from which the fast-tempo penalty no longer applies.
COMFORTABLE_IOI_MS = 150.0
FAST_TEMPO_FACTOR = 0.2

# Slower than 40 BPM starts losing credit; 20 BPM and below floors out.
SLOW_IOI_MS = 1500.0
VERY_SLOW_IOI_MS = 3000.0
SLOW_TEMPO_FACTOR = 0.3

MIN_INTERVALS = 2


def tempo_factor(mean_ioi: float) -> float:
    """Multiplier in [0.2, 1] for the mean IOI; uniform mashing stays low."""
    if mean_ioi < COMFORTABLE_IOI_MS:
        return linear_ramp(mean_ioi, FAST_IOI_MS, FAST_TEMPO_FACTOR, COMFORTABLE_IOI_MS, 1.0)
    return linear_ramp(mean_ioi, SLOW_IOI_MS, 1.0, VERY_SLOW_IOI_MS, SLOW_TEMPO_FACTOR)


def rhythmic_consistency(intervals: Sequence[float]) -> float:
    """Score the IOI window.

    Needs at least two IOIs, so the first two events of a session score 0.
    Simultaneous onsets (mean IOI of 0) also score 0.
    """
    if len(intervals) < MIN_INTERVALS:
        return 0.0
    cv = coefficient_of_variation(intervals)
    if cv is None:
        return 0.0
    steadiness = clamp01(1.0 - cv / MAX_CV)
    mean_ioi = sum(intervals) / len(intervals)
    return clamp01(steadiness * tempo_factor(mean_ioi))
