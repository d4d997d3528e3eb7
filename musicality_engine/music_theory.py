"""Pure music theory functions: scale/chord templates, matching, statistics.

No engine state. Template tables are ordered tuples; the enumeration order
is the tie-break order, so it must not change.
"""

from __future__ import annotations

import math
import statistics
from typing import Iterable, List, NamedTuple, Optional, Sequence

from .model import NOTE_NAMES, ChordEvent, ScaleContext

# ---------------------------------------------------------------------------
# Scale templates
# ---------------------------------------------------------------------------


class ScaleTemplate(NamedTuple):
    name: str
    intervals: frozenset[int]
    weight: float = 1.0


SCALE_TEMPLATES: tuple[ScaleTemplate, ...] = (
    ScaleTemplate("major", frozenset({0, 2, 4, 5, 7, 9, 11})),
    ScaleTemplate("natural_minor", frozenset({0, 2, 3, 5, 7, 8, 10})),
    ScaleTemplate("harmonic_minor", frozenset({0, 2, 3, 5, 7, 8, 11})),
    ScaleTemplate("pentatonic_major", frozenset({0, 2, 4, 7, 9})),
    ScaleTemplate("pentatonic_minor", frozenset({0, 3, 5, 7, 10})),
    ScaleTemplate("blues", frozenset({0, 3, 5, 6, 7, 10})),
    # Every pitch class fits; halved so it only wins when nothing tonal does.
    ScaleTemplate("chromatic", frozenset(range(12)), 0.5),
)

# ---------------------------------------------------------------------------
# Chord templates
# ---------------------------------------------------------------------------


class ChordTemplate(NamedTuple):
    quality: str
    suffix: str
    intervals: frozenset[int]
    min_matches: int


CHORD_TEMPLATES: tuple[ChordTemplate, ...] = (
    ChordTemplate("major", "", frozenset({0, 4, 7}), 2),
    ChordTemplate("minor", "m", frozenset({0, 3, 7}), 2),
    ChordTemplate("diminished", "dim", frozenset({0, 3, 6}), 2),
    ChordTemplate("augmented", "aug", frozenset({0, 4, 8}), 2),
    ChordTemplate("major_seventh", "maj7", frozenset({0, 4, 7, 11}), 4),
    ChordTemplate("dominant_seventh", "7", frozenset({0, 4, 7, 10}), 4),
    ChordTemplate("minor_seventh", "m7", frozenset({0, 3, 7, 10}), 4),
)

# ---------------------------------------------------------------------------
# Progressions (root offsets in semitones from the tonic)
# ---------------------------------------------------------------------------


class Progression(NamedTuple):
    name: str
    roots: tuple[int, ...]


PROGRESSIONS: tuple[Progression, ...] = (
    Progression("I-V-vi-IV", (0, 7, 9, 5)),
    Progression("I-IV-V", (0, 5, 7)),
    Progression("ii-V-I", (2, 7, 0)),
    Progression("I-vi-IV-V", (0, 9, 5, 7)),
    Progression("vi-IV-I-V", (9, 5, 0, 7)),
)


class ProgressionMatch(NamedTuple):
    progression: Progression
    matched: int

    @property
    def score(self) -> float:
        return self.matched / len(self.progression.roots)


# ---------------------------------------------------------------------------
# Pitch-class histogram & scale detection
# ---------------------------------------------------------------------------


def pitch_class_histogram(pitches: Iterable[int]) -> List[int]:
    """12-bin count of pitch classes."""
    hist = [0] * 12
    for p in pitches:
        hist[p % 12] += 1
    return hist


def detect_scale(histogram: Sequence[int]) -> Optional[ScaleContext]:
    """Best (template, root) for a pitch-class histogram.

    Fit is the weighted share of notes that fall on scale members. The first
    strictly greater fit wins, so ties go to the earlier template and the
    lower root. Returns None for an empty histogram.
    """
    total = sum(histogram)
    if total == 0:
        return None
    best: Optional[ScaleContext] = None
    best_fit = -1.0
    for template in SCALE_TEMPLATES:
        for root in range(12):
            weight = sum(histogram[(root + i) % 12] for i in template.intervals)
            fit = weight * template.weight / total
            if fit > best_fit:
                best_fit = fit
                best = ScaleContext(name=template.name, root=root, fit=fit)
    return best


# ---------------------------------------------------------------------------
# Chord detection
# ---------------------------------------------------------------------------


def detect_chord(pitch_classes: Iterable[int]) -> Optional[ChordEvent]:
    """Match a pitch-class set against the chord templates at every root.

    Triads need 2 of 3 tones, seventh chords all 4. Candidate quality is
    matches / max(template size, set size), which penalises extra tones.
    """
    pcs = frozenset(pc % 12 for pc in pitch_classes)
    if len(pcs) < 2:
        return None
    best: Optional[ChordEvent] = None
    best_quality = 0.0
    for template in CHORD_TEMPLATES:
        size = len(template.intervals)
        for root in range(12):
            tones = {(root + i) % 12 for i in template.intervals}
            matches = len(pcs & tones)
            if matches < template.min_matches:
                continue
            quality = matches / max(size, len(pcs))
            if quality > best_quality:
                best_quality = quality
                best = ChordEvent(
                    name=f"{NOTE_NAMES[root]}{template.suffix}",
                    root_pc=root,
                    quality=template.quality,
                )
    return best


def match_progression(roots: Sequence[int], tonic: int) -> Optional[ProgressionMatch]:
    """Longest suffix of *roots* that is a prefix of a canonical progression.

    Roots are compared as offsets from *tonic*. Longer suffixes are tried
    first; within one length, progressions are tried in table order.
    """
    offsets = [(r - tonic) % 12 for r in roots]
    for k in range(len(offsets), 0, -1):
        tail = tuple(offsets[-k:])
        for prog in PROGRESSIONS:
            if len(prog.roots) >= k and prog.roots[:k] == tail:
                return ProgressionMatch(progression=prog, matched=k)
    return None


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


def coefficient_of_variation(values: Sequence[float]) -> Optional[float]:
    """Population stddev / mean. None when empty or the mean is not positive."""
    if not values:
        return None
    mean = statistics.fmean(values)
    if mean <= 0:
        return None
    return statistics.pstdev(values, mu=mean) / mean


def gaussian_band(value: float, center: float, width: float) -> float:
    """1.0 at *center*, falling off as exp(-0.5 * z^2)."""
    z = (value - center) / width
    return math.exp(-0.5 * z * z)


def linear_ramp(value: float, x0: float, y0: float, x1: float, y1: float) -> float:
    """Linear interpolation between (x0, y0) and (x1, y1), held flat outside."""
    if value <= x0:
        return y0
    if value >= x1:
        return y1
    return y0 + (y1 - y0) * (value - x0) / (x1 - x0)
