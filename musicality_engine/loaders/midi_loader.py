"""Load a note stream from a standard MIDI file using mido."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..model import NoteEvent

logger = logging.getLogger(__name__)


def load_midi(source: Union[str, Path], channel: Optional[int] = None) -> List[NoteEvent]:
    """Load note onsets from a .mid file.

    Requires the ``mido`` package. Iterating a MidiFile merges all tracks
    and yields delta times in seconds with tempo changes applied, so onsets
    come out in wall-clock milliseconds.

    Args:
        source: Path to a .mid file.
        channel: Keep only this MIDI channel (0-15); None keeps all.

    Returns:
        One NoteEvent per note-on with non-zero velocity, in onset order.
        Velocity is scaled from 0-127 to [0, 1].
    """
    try:
        import mido
    except ImportError as exc:
        raise ImportError(
            "mido is required for MIDI loading. Install with: pip install mido"
        ) from exc

    mid = mido.MidiFile(str(source))

    events: List[NoteEvent] = []
    elapsed = 0.0
    skipped = 0
    for msg in mid:
        elapsed += msg.time
        if msg.type != "note_on" or msg.velocity == 0:
            continue
        if channel is not None and msg.channel != channel:
            skipped += 1
            continue
        events.append(
            NoteEvent(
                pitch_index=msg.note,
                timestamp_ms=round(elapsed * 1000.0, 3),
                velocity=msg.velocity / 127.0,
            )
        )
    if skipped:
        logger.debug("skipped %d note(s) outside channel %s", skipped, channel)
    if not events:
        logger.warning("no note-on events found in %s", source)
    return events
