"""Load a note stream from JSON.

Accepted shapes::

    {"notes": [{"pitch": 60, "time_ms": 0, "velocity": 0.8}, ...]}
    [{"pitch": 60, "time_ms": 0}, ...]

``velocity`` defaults to 0.5. ``timestamp_ms`` is accepted as an alias of
``time_ms``. Records are returned sorted by onset time.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from ..model import NoteEvent

logger = logging.getLogger(__name__)

DEFAULT_VELOCITY = 0.5


def _parse_note(note_data: Any, idx: int) -> NoteEvent:
    """Parse a single note dict."""
    if not isinstance(note_data, dict):
        raise ValueError(f"note #{idx}: expected an object, got {type(note_data).__name__}")
    if "pitch" not in note_data:
        raise ValueError(f"note #{idx}: missing 'pitch'")
    pitch = note_data["pitch"]
    if isinstance(pitch, bool) or not isinstance(pitch, int):
        raise ValueError(f"note #{idx}: pitch must be an integer, got {pitch!r}")
    time_ms = note_data.get("time_ms", note_data.get("timestamp_ms"))
    if time_ms is None:
        raise ValueError(f"note #{idx}: missing 'time_ms'")
    return NoteEvent(
        pitch_index=pitch,
        timestamp_ms=time_ms,
        velocity=float(note_data.get("velocity", DEFAULT_VELOCITY)),
    )


def load_json(source: Union[str, Path, dict, list]) -> List[NoteEvent]:
    """Load note events from a JSON file or pre-parsed object.

    Args:
        source: File path (str or Path) or already-parsed dict/list.

    Returns:
        NoteEvents sorted by timestamp (stable for equal onsets).

    Raises:
        ValueError: malformed document or note record.
    """
    if isinstance(source, (dict, list)):
        data = source
    else:
        path = Path(source)
        with open(path) as fh:
            data = json.load(fh)

    if isinstance(data, dict):
        records = data.get("notes")
        if records is None:
            raise ValueError("JSON object has no 'notes' list")
    else:
        records = data
    if not isinstance(records, list):
        raise ValueError("'notes' must be a list")

    events = [_parse_note(nd, i) for i, nd in enumerate(records)]
    logger.debug("loaded %d note(s) from JSON", len(events))
    return sorted(events, key=lambda e: e.timestamp_ms)
