"""Per-event metric extractors, in engine computation order."""

from .dynamics import dynamic_variation
from .harmony import ChordTracker, harmonic_progression
from .melody import melodic_coherence
from .phrase import phrase_structure
from .rhythm import rhythmic_consistency
from .tonality import scale_adherence

__all__ = [
    "ChordTracker",
    "dynamic_variation",
    "harmonic_progression",
    "melodic_coherence",
    "phrase_structure",
    "rhythmic_consistency",
    "scale_adherence",
]
