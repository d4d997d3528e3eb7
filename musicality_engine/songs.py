"""Bundled demo material for the autoplayer and the CLI ``demo`` command.

Pitch indices are keyboard positions with C4 at 0, matching the on-screen
keyboard (C4 through E5, indices 0-16).
"""

from __future__ import annotations

import re
from typing import Dict, List, Sequence

from .model import NOTE_NAMES, NoteEvent

KEYBOARD_BASE_OCTAVE = 4

_NOTE_RE = re.compile(r"^([A-G]#?)(-?\d+)$")
_NAME_TO_PC: Dict[str, int] = {name: pc for pc, name in enumerate(NOTE_NAMES)}

PATTERN_1 = ["C4", "E4", "G4", "B4", "C5", "B4", "G4", "E4"]
PATTERN_2 = ["D4", "F4", "A4", "C5", "D5", "C5", "A4", "F4"]


def _repeat(pattern: List[str], times: int) -> List[str]:
    return pattern * times


DEMO_SONG: List[str] = (
    _repeat(PATTERN_1, 4)
    + _repeat(PATTERN_2, 4)
    + _repeat(PATTERN_1, 4)
    + _repeat(PATTERN_2, 4)
)


def note_name_to_index(name: str) -> int:
    """'C4' -> 0, 'E5' -> 16. Raises ValueError for unparseable names."""
    m = _NOTE_RE.match(name)
    if not m:
        raise ValueError(f"Unrecognised note name: {name!r}")
    pc = _NAME_TO_PC[m.group(1)]
    octave = int(m.group(2))
    return (octave - KEYBOARD_BASE_OCTAVE) * 12 + pc


def song_events(names: Sequence[str], beat_ms: float = 400.0,
                velocity: float = 0.8, start_ms: float = 0.0) -> List[NoteEvent]:
    """Evenly spaced NoteEvents for a list of note names."""
    return [
        NoteEvent(note_name_to_index(name), start_ms + i * beat_ms, velocity)
        for i, name in enumerate(names)
    ]


def demo_song_events(beat_ms: float = 400.0, velocity: float = 0.8) -> List[NoteEvent]:
    """The autoplayer demo song at a fixed beat."""
    return song_events(DEMO_SONG, beat_ms=beat_ms, velocity=velocity)
