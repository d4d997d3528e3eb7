"""Replay orchestrator: load a note stream and drive one engine with it."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .config import EngineParams
from .diagnosis import PlayingDiagnosis
from .engine import MusicalityEngine
from .loaders import load_json, load_midi
from .model import ChordEvent, Metrics, NoteEvent, NoteResult, ScaleContext, clamp01


@dataclass
class ReplayResult:
    """Everything a caller would have observed while driving the engine."""
    results: List[NoteResult] = field(default_factory=list)
    excitement: float = 0.0
    scale: Optional[ScaleContext] = None
    chords: Tuple[Optional[ChordEvent], ...] = ()
    diagnosis: PlayingDiagnosis = field(default_factory=PlayingDiagnosis)
    params: EngineParams = field(default_factory=EngineParams)
    source_file: Optional[str] = None

    @property
    def note_count(self) -> int:
        return len(self.results)

    @property
    def final_score(self) -> float:
        return self.results[-1].score if self.results else 0.0

    @property
    def final_metrics(self) -> Metrics:
        return self.results[-1].metrics if self.results else Metrics()

    @property
    def mean_score(self) -> float:
        if not self.results:
            return 0.0
        return sum(r.score for r in self.results) / len(self.results)

    @property
    def peak_excitement(self) -> float:
        level = 0.0
        peak = 0.0
        for r in self.results:
            level = clamp01(level + r.excitement_delta)
            peak = max(peak, level)
        return peak


def load_events(path: Union[str, Path], channel: Optional[int] = None) -> List[NoteEvent]:
    """Auto-detect format and load note events."""
    p = Path(path)
    if p.suffix.lower() in (".mid", ".midi"):
        return load_midi(p, channel=channel)
    return load_json(p)


def replay(events: Sequence[NoteEvent], params: Optional[EngineParams] = None,
           engine: Optional[MusicalityEngine] = None) -> ReplayResult:
    """Feed *events* through an engine in order.

    Excitement is accumulated the way the interactive front end does it:
    each delta is added and the level clamped to [0, 1]. Wall-clock decay
    is not simulated.

    Args:
        events: Note events, already in onset order.
        params: Parameters for a fresh engine (ignored if *engine* is given).
        engine: Existing engine to drive; it is not reset first.
    """
    if engine is None:
        engine = MusicalityEngine(params)
    out = ReplayResult(params=engine.params)
    for ev in events:
        result = engine.process_note(ev.pitch_index, ev.timestamp_ms, ev.velocity)
        out.results.append(result)
        out.excitement = clamp01(out.excitement + result.excitement_delta)
    out.scale = engine.scale_context
    out.chords = engine.chord_history
    out.diagnosis = engine.diagnose()
    return out


def replay_file(path: Union[str, Path], params: Optional[EngineParams] = None,
                channel: Optional[int] = None) -> ReplayResult:
    """Load *path* and replay it through a fresh engine."""
    result = replay(load_events(path, channel=channel), params=params)
    result.source_file = str(path)
    return result
