"""Melodic coherence: stepwise motion and recurring intervals over recent notes."""

from __future__ import annotations

from typing import Sequence

from ..model import MAJOR_2ND, MINOR_2ND, MINOR_6TH, UNISON, clamp01

WINDOW = 8

STEPWISE_WEIGHT = 0.7
VARIETY_WEIGHT = 0.3
# Subtracted once per leap of a minor sixth or wider.
LEAP_PENALTY = 0.15
LEAP_SEMITONES = MINOR_6TH
# Scaled by the share of unison intervals.
REPEAT_PENALTY = 0.5


def melodic_coherence(pitches: Sequence[int]) -> float:
    """Score the last WINDOW pitches.

    Unisons do not count as steps: a single key hammered repeatedly would
    otherwise look like perfect stepwise motion with a one-interval motif.
    """
    recent = list(pitches)[-WINDOW:]
    if len(recent) < 2:
        return 0.0
    intervals = [abs(b - a) for a, b in zip(recent, recent[1:])]
    total = len(intervals)

    steps = sum(1 for iv in intervals if MINOR_2ND <= iv <= MAJOR_2ND)
    repeats = sum(1 for iv in intervals if iv == UNISON)
    leaps = sum(1 for iv in intervals if iv >= LEAP_SEMITONES)
    variety = 1.0 - len(set(intervals)) / total

    score = (
        STEPWISE_WEIGHT * (steps / total)
        + VARIETY_WEIGHT * variety
        - LEAP_PENALTY * leaps
        - REPEAT_PENALTY * (repeats / total)
    )
    return clamp01(score)
