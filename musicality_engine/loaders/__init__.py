"""Note-stream loaders for JSON and MIDI formats."""

from .json_loader import load_json
from .midi_loader import load_midi

__all__ = ["load_json", "load_midi"]
