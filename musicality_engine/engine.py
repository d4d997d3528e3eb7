"""The musicality engine: one instance per playing session.

Single-writer and synchronous. Each ``process_note`` call does work bounded
by the window capacities, never by the length of the session. Callers with
more than one input source must serialize their calls.
"""

from __future__ import annotations

import logging
import math
from numbers import Integral, Real
from typing import Any, Optional, Tuple

from .config import EngineParams, get_params
from .diagnosis import PlayingDiagnosis, diagnose
from .errors import InvalidNoteError
from .excitement import ExcitementDriver
from .features import (
    ChordTracker,
    dynamic_variation,
    harmonic_progression,
    melodic_coherence,
    phrase_structure,
    rhythmic_consistency,
    scale_adherence,
)
from .history import HistoryWindow
from .model import (
    PITCH_MAX,
    PITCH_MIN,
    ChordEvent,
    Metrics,
    NoteEvent,
    NoteResult,
    ScaleContext,
)
from .score import compute_musicality_score

logger = logging.getLogger(__name__)


class MusicalityEngine:
    """Turns a stream of note onsets into a musicality score and excitement delta.

    Usage::

        engine = MusicalityEngine()
        result = engine.process_note(0, 0)
        result = engine.process_note(2, 400, velocity=0.6)
        excitement = min(1.0, max(0.0, excitement + result.excitement_delta))
    """

    def __init__(self, params: Optional[EngineParams] = None):
        self._params = (params or get_params(None)).validate()
        p = self._params
        self._history = HistoryWindow(p.history_size, p.ioi_window, p.velocity_window)
        self._chords = ChordTracker(p.chord_window_ms)
        self._driver = ExcitementDriver(p.ema_alpha, p.boost_pos, p.boost_neg)
        self._scale: Optional[ScaleContext] = None
        self._metrics = Metrics()
        self._score = 0.0
        self._note_count = 0

    # -- read-only state ----------------------------------------------------

    @property
    def params(self) -> EngineParams:
        return self._params

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    @property
    def musicality_score(self) -> float:
        return self._score

    @property
    def scale_context(self) -> Optional[ScaleContext]:
        return self._scale

    @property
    def chord_history(self) -> Tuple[Optional[ChordEvent], ...]:
        return self._chords.history

    @property
    def note_count(self) -> int:
        """Notes processed since the last reset."""
        return self._note_count

    @property
    def ema(self) -> Optional[float]:
        return self._driver.ema

    @property
    def pitches(self) -> Tuple[int, ...]:
        return tuple(self._history.pitches)

    # -- event ingest ---------------------------------------------------------

    def process_note(self, pitch_index: int, timestamp_ms: float,
                     velocity: float = 0.5) -> NoteResult:
        """Ingest one note onset and return the updated score snapshot.

        Raises:
            InvalidNoteError: bad pitch, timestamp or velocity. The engine
                state is left exactly as it was.
        """
        event = self._validate(pitch_index, timestamp_ms, velocity)

        self._history.append(event)
        self._note_count += 1
        pitches = self._history.pitches

        rhythm = rhythmic_consistency(list(self._history.intervals))
        melody = melodic_coherence(pitches)
        tonal, self._scale = scale_adherence(pitches)
        self._chords.add(event)
        harmony = harmonic_progression(self._chords.trailing_roots(), self._scale)
        phrase = phrase_structure(self._note_count, event.pitch_index, self._scale)
        dynamics = dynamic_variation(list(self._history.velocities))

        self._metrics = Metrics(
            rhythmic_consistency=rhythm,
            melodic_coherence=melody,
            scale_adherence=tonal,
            harmonic_progression=harmony,
            phrase_structure=phrase,
            dynamic_variation=dynamics,
        )
        self._score = compute_musicality_score(self._metrics)
        delta = self._driver.update(self._score)

        if __debug__:
            self._history.check_invariants(self._note_count)

        return NoteResult(score=self._score, metrics=self._metrics, excitement_delta=delta)

    def _validate(self, pitch_index: Any, timestamp_ms: Any, velocity: Any) -> NoteEvent:
        if isinstance(pitch_index, bool) or not isinstance(pitch_index, Integral):
            raise InvalidNoteError(f"pitch_index must be an integer, got {pitch_index!r}")
        if not PITCH_MIN <= pitch_index <= PITCH_MAX:
            raise InvalidNoteError(
                f"pitch_index {pitch_index} outside [{PITCH_MIN}, {PITCH_MAX}]"
            )
        if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, Real):
            raise InvalidNoteError(f"timestamp_ms must be a number, got {timestamp_ms!r}")
        if not math.isfinite(timestamp_ms):
            raise InvalidNoteError(f"timestamp_ms must be finite, got {timestamp_ms!r}")
        last = self._history.last_timestamp
        if last is not None and timestamp_ms < last:
            raise InvalidNoteError(
                f"timestamp_ms {timestamp_ms} earlier than previous event at {last}"
            )
        if last is not None and not math.isfinite(timestamp_ms - last):
            raise InvalidNoteError(
                f"interval from {last} to {timestamp_ms} is not representable"
            )
        if isinstance(velocity, bool) or not isinstance(velocity, Real):
            raise InvalidNoteError(f"velocity must be a number, got {velocity!r}")
        if not math.isfinite(velocity) or not 0.0 <= velocity <= 1.0:
            raise InvalidNoteError(f"velocity must be within [0, 1], got {velocity!r}")
        return NoteEvent(int(pitch_index), timestamp_ms, float(velocity))

    # -- lifecycle ------------------------------------------------------------

    def reset(self) -> None:
        """Clear every window, context and the baseline."""
        self._history.clear()
        self._chords.clear()
        self._driver.reset()
        self._scale = None
        self._metrics = Metrics()
        self._score = 0.0
        self._note_count = 0
        logger.debug("engine reset")

    def reset_baseline(self) -> None:
        """Forget the EMA baseline only; histories are kept."""
        self._driver.reset()
        logger.debug("excitement baseline reset")

    def update_params(self, **changes: Any) -> EngineParams:
        """Apply live parameter changes.

        Windows are resized in place keeping their most recent entries, and
        the baseline is reset so it re-adapts under the new settings.

        Raises:
            InvalidParameterError: unknown name or out-of-range value; no
                change is applied.
        """
        params = self._params.with_updates(**changes)
        self._params = params
        self._history.resize(params.history_size, params.ioi_window, params.velocity_window)
        self._chords.window_ms = params.chord_window_ms
        self._driver.alpha = params.ema_alpha
        self._driver.boost_pos = params.boost_pos
        self._driver.boost_neg = params.boost_neg
        self._driver.reset()
        logger.debug("parameters updated: %s", changes)
        return params

    # -- diagnostics ----------------------------------------------------------

    def diagnose(self) -> PlayingDiagnosis:
        """Playing-style flags for the current window (not part of the score)."""
        return diagnose(self._history.pitches, self._history.timestamps, self._metrics)
