"""Playing-style diagnostics: simple scales, repeated figures, random playing, mashing.

Reported next to the score for display and tuning. None of these feed back
into the metrics or the musicality score.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence

from .model import MAJOR_2ND, MINOR_2ND, MINOR_6TH, OCTAVE, Metrics

SIMPLE_SCALE_NOTES = 4
SIMPLE_SCALE_MIN_RHYTHM = 0.7

PATTERN_MIN_NOTES = 8
PATTERN_LENGTHS = range(2, 5)

SCALE_PATTERN_WINDOW = 8
SCALE_PATTERN_RATIO = 0.6

MASHING_WINDOW = 5
MASHING_IOI_MS = 100.0

RANDOM_MIN_NOTES = 5
RANDOM_THRESHOLD = 0.5


@dataclass(frozen=True)
class PlayingDiagnosis:
    simple_scale: bool = False
    repeating_pattern: bool = False
    scale_pattern: bool = False
    random_playing: bool = False
    mashing: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _diffs(values: Sequence[float]) -> List[float]:
    return [b - a for a, b in zip(values, values[1:])]


def is_simple_scale(pitches: Sequence[int], metrics: Metrics) -> bool:
    """Last four notes climb by 1-2 semitones each, in steady time."""
    if len(pitches) < SIMPLE_SCALE_NOTES:
        return False
    steps = _diffs(list(pitches)[-SIMPLE_SCALE_NOTES:])
    ascending = all(MINOR_2ND <= s <= MAJOR_2ND for s in steps)
    return ascending and metrics.rhythmic_consistency > SIMPLE_SCALE_MIN_RHYTHM


def has_repeating_pattern(pitches: Sequence[int]) -> bool:
    """A 2-4 note figure immediately followed by itself."""
    notes = list(pitches)
    if len(notes) < PATTERN_MIN_NOTES:
        return False
    for length in PATTERN_LENGTHS:
        for i in range(len(notes) - 2 * length + 1):
            if notes[i:i + length] == notes[i + length:i + 2 * length]:
                return True
    return False


def has_scale_pattern(pitches: Sequence[int]) -> bool:
    """Most recent motion is stepwise in either direction."""
    recent = list(pitches)[-SCALE_PATTERN_WINDOW:]
    if len(recent) < 4:
        return False
    steps = sum(1 for d in _diffs(recent) if MINOR_2ND <= abs(d) <= MAJOR_2ND)
    return steps >= (len(recent) - 1) * SCALE_PATTERN_RATIO


def is_mashing(timestamps: Sequence[float]) -> bool:
    """Mean of the last few IOIs under MASHING_IOI_MS."""
    if len(timestamps) < 3:
        return False
    iois = _diffs(list(timestamps)[-MASHING_WINDOW:])
    return sum(iois) / len(iois) < MASHING_IOI_MS


def random_playing_score(pitches: Sequence[int], timestamps: Sequence[float],
                         metrics: Metrics) -> float:
    """Weighted evidence of random playing; above RANDOM_THRESHOLD is random."""
    jumps = [abs(d) for d in _diffs(pitches)]
    iois = _diffs(timestamps)
    mean_jump = sum(jumps) / len(jumps)
    large = sum(1 for j in jumps if j > MINOR_6TH)
    very_large = sum(1 for j in jumps if j > OCTAVE)

    mean_ioi = sum(iois) / len(iois)
    if mean_ioi > 0:
        variance = sum((x - mean_ioi) ** 2 for x in iois) / len(iois)
        time_inconsistency = variance / (mean_ioi * mean_ioi)
    else:
        time_inconsistency = 0.0

    repeating = has_repeating_pattern(pitches)
    scale_like = has_scale_pattern(pitches)

    score = 0.0
    if large > len(jumps) * 0.25:
        score += 0.3
    if very_large > 0:
        score += 0.2
    if mean_jump > 5:
        score += 0.2
    if time_inconsistency > 0.15:
        score += 0.2
    if not repeating:
        score += 0.2
    if not scale_like:
        score += 0.2
    if metrics.melodic_coherence < 0.5:
        score += 0.2
    if metrics.rhythmic_consistency > 0.8:
        score -= 0.2
    if scale_like:
        score -= 0.3
    return score


def diagnose(pitches: Sequence[int], timestamps: Sequence[float],
             metrics: Metrics) -> PlayingDiagnosis:
    """Compute all playing-style flags for the current history window."""
    pitches = list(pitches)
    timestamps = list(timestamps)
    random_playing = (
        len(pitches) >= RANDOM_MIN_NOTES
        and random_playing_score(pitches, timestamps, metrics) > RANDOM_THRESHOLD
    )
    return PlayingDiagnosis(
        simple_scale=is_simple_scale(pitches, metrics),
        repeating_pattern=has_repeating_pattern(pitches),
        scale_pattern=has_scale_pattern(pitches),
        random_playing=random_playing,
        mashing=is_mashing(timestamps),
    )
