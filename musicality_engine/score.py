"""Fixed-weight fusion of the six metrics into one musicality score."""

from __future__ import annotations

from typing import Dict

from .model import METRIC_NAMES, Metrics, clamp01

# Tunable values, not structural; must sum to 1.
METRIC_WEIGHTS: Dict[str, float] = {
    "rhythmic_consistency": 0.20,
    "melodic_coherence": 0.25,
    "scale_adherence": 0.15,
    "harmonic_progression": 0.25,
    "phrase_structure": 0.10,
    "dynamic_variation": 0.05,
}

# Parallel to Metrics field order.
_WEIGHT_TABLE = tuple(METRIC_WEIGHTS[name] for name in METRIC_NAMES)


def compute_musicality_score(metrics: Metrics) -> float:
    """Weighted sum of *metrics*, clamped to [0, 1]."""
    total = 0.0
    for weight, value in zip(_WEIGHT_TABLE, metrics.values()):
        total += weight * value
    return clamp01(total)


def grade(score: float) -> str:
    """Letter grade for a score in [0, 1]."""
    if score >= 0.9:
        return "A"
    elif score >= 0.75:
        return "B"
    elif score >= 0.6:
        return "C"
    elif score >= 0.4:
        return "D"
    else:
        return "F"
