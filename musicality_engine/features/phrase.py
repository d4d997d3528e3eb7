"""Phrase structure.

Phrase boundaries are taken from the raw note count, not from rests.
"""

from __future__ import annotations

from typing import Optional

from ..model import ScaleContext

PHRASE_LENGTH = 4
BOUNDARY_BONUS = 0.5
CADENCE_BONUS = 0.5


def phrase_structure(note_count: int, last_pitch: Optional[int],
                     scale: Optional[ScaleContext]) -> float:
    """Score phrase boundary and tonic cadence for the latest note.

    Every multiple of 8 is also a multiple of 4, so a single boundary bonus
    covers both canonical phrase lengths.
    """
    if note_count < 1 or last_pitch is None:
        return 0.0
    score = 0.0
    if note_count % PHRASE_LENGTH == 0:
        score += BOUNDARY_BONUS
    if scale is not None and last_pitch % 12 == scale.root:
        score += CADENCE_BONUS
    return min(1.0, score)
