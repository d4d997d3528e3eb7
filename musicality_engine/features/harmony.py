"""Harmonic progression: chord buffering, detection and progression matching.

Notes whose onsets fall within one chord window of the first buffered note
are treated as a single chord. The buffer is flushed only when a later note
arrives (or on reset), so the final chord of a phrase followed by a long
pause is not scored until playing resumes.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Tuple

from ..model import ChordEvent, NoteEvent, ScaleContext
from ..music_theory import detect_chord, match_progression

logger = logging.getLogger(__name__)

CHORD_HISTORY_SIZE = 4


class ChordTracker:
    """Time-windowed chord buffer feeding a bounded chord history."""

    def __init__(self, window_ms: float):
        self.window_ms = window_ms
        self._buffer: List[NoteEvent] = []
        self._history: Deque[Optional[ChordEvent]] = deque(maxlen=CHORD_HISTORY_SIZE)

    @property
    def history(self) -> Tuple[Optional[ChordEvent], ...]:
        return tuple(self._history)

    @property
    def pending(self) -> Tuple[NoteEvent, ...]:
        return tuple(self._buffer)

    def add(self, event: NoteEvent) -> Optional[ChordEvent]:
        """Buffer *event*, flushing first if the window has elapsed.

        Returns the chord flushed by this call, if any.
        """
        flushed = None
        if self._buffer and event.timestamp_ms - self._buffer[0].timestamp_ms >= self.window_ms:
            flushed = self._flush()
        self._buffer.append(event)
        return flushed

    def _flush(self) -> Optional[ChordEvent]:
        chord = detect_chord(n.pitch_class for n in self._buffer)
        logger.debug(
            "chord buffer flushed: %d note(s) -> %s",
            len(self._buffer),
            chord.name if chord else None,
        )
        self._history.append(chord)
        self._buffer = []
        return chord

    def clear(self) -> None:
        self._buffer = []
        self._history.clear()

    def trailing_roots(self) -> List[int]:
        """Roots of the most recent unbroken run of detected chords."""
        roots: List[int] = []
        for chord in reversed(self._history):
            if chord is None:
                break
            roots.append(chord.root_pc)
        roots.reverse()
        return roots


def harmonic_progression(roots: List[int], scale: Optional[ScaleContext]) -> float:
    """Matched-prefix share of the best canonical progression, else 0.

    Roots are read relative to the detected scale root, or to the first
    chord of the run when no scale is known.
    """
    if not roots:
        return 0.0
    tonic = scale.root if scale is not None else roots[0]
    match = match_progression(roots, tonic)
    return match.score if match is not None else 0.0
