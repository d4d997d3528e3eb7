"""Dynamic variation: expressive, but not erratic, velocity changes."""

from __future__ import annotations

from typing import Sequence

from ..music_theory import coefficient_of_variation, gaussian_band

IDEAL_CV = 0.25
BAND_WIDTH = 0.1


def dynamic_variation(velocities: Sequence[float]) -> float:
    """Peak of 1.0 at IDEAL_CV; flat and erratic playing both fall off."""
    if len(velocities) < 2:
        return 0.0
    cv = coefficient_of_variation(velocities)
    if cv is None:
        cv = 0.0
    return gaussian_band(cv, IDEAL_CV, BAND_WIDTH)
