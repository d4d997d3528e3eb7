"""Unified data model for the musicality engine.

Immutable note events, the six-metric record, scale/chord contexts and the
per-note result returned to callers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, NamedTuple, Optional, Tuple

# ---------------------------------------------------------------------------
# Pitch constants
# ---------------------------------------------------------------------------

PITCH_MIN = 0
PITCH_MAX = 127

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# ---------------------------------------------------------------------------
# Interval constants
# ---------------------------------------------------------------------------

UNISON = 0
MINOR_2ND = 1
MAJOR_2ND = 2
MINOR_6TH = 8
OCTAVE = 12

# ---------------------------------------------------------------------------
# NoteEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoteEvent:
    """A single note onset."""
    pitch_index: int
    timestamp_ms: float
    velocity: float = 0.5

    @property
    def pitch_class(self) -> int:
        return self.pitch_index % 12

    @property
    def note_name(self) -> str:
        return NOTE_NAMES[self.pitch_class]


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Metrics:
    """The six musical-feature metrics, each in [0, 1].

    Field order is the computation order used by the engine.
    """
    rhythmic_consistency: float = 0.0
    melodic_coherence: float = 0.0
    scale_adherence: float = 0.0
    harmonic_progression: float = 0.0
    phrase_structure: float = 0.0
    dynamic_variation: float = 0.0

    def values(self) -> Tuple[float, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    def as_dict(self) -> Dict[str, float]:
        """camelCase mapping, as exposed to display layers."""
        return {_camel(k): v for k, v in asdict(self).items()}


METRIC_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(Metrics))


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# ---------------------------------------------------------------------------
# Scale / chord context
# ---------------------------------------------------------------------------


class ScaleContext(NamedTuple):
    """Best-guess scale for the current history window."""
    name: str
    root: int
    fit: float

    @property
    def label(self) -> str:
        return f"{NOTE_NAMES[self.root]} {self.name}"


class ChordEvent(NamedTuple):
    """A chord detected from one flushed chord buffer."""
    name: str
    root_pc: int
    quality: str


# ---------------------------------------------------------------------------
# NoteResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoteResult:
    """Snapshot returned by ``MusicalityEngine.process_note``."""
    score: float
    metrics: Metrics
    excitement_delta: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "metrics": self.metrics.as_dict(),
            "excitementDelta": self.excitement_delta,
        }


# ---------------------------------------------------------------------------
# Utility functions
# ---------------------------------------------------------------------------


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def chord_label(chord: Optional[ChordEvent]) -> str:
    return chord.name if chord is not None else "-"
