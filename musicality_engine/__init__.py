"""Musicality Engine - real-time scoring of note-onset streams.

Usage:
    python -m musicality_engine score take.json
    python -m musicality_engine score take.mid --channel 0
    python -m musicality_engine demo --json
"""

from .config import EngineParams, get_params
from .engine import MusicalityEngine
from .errors import (
    InvalidNoteError,
    InvalidParameterError,
    MusicalityError,
    WindowInvariantError,
)
from .model import ChordEvent, Metrics, NoteEvent, NoteResult, ScaleContext
from .runner import load_events, replay
from .score import compute_musicality_score

__all__ = [
    "ChordEvent",
    "EngineParams",
    "InvalidNoteError",
    "InvalidParameterError",
    "Metrics",
    "MusicalityEngine",
    "MusicalityError",
    "NoteEvent",
    "NoteResult",
    "ScaleContext",
    "WindowInvariantError",
    "compute_musicality_score",
    "get_params",
    "load_events",
    "replay",
]
