"""Tests for the data model."""

import dataclasses
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from musicality_engine.model import (
    METRIC_NAMES,
    ChordEvent,
    Metrics,
    NoteEvent,
    NoteResult,
    ScaleContext,
    chord_label,
    clamp01,
)


class TestNoteEvent(unittest.TestCase):
    def test_pitch_class(self):
        self.assertEqual(NoteEvent(14, 0).pitch_class, 2)
        self.assertEqual(NoteEvent(14, 0).note_name, "D")

    def test_default_velocity(self):
        self.assertEqual(NoteEvent(0, 0).velocity, 0.5)

    def test_immutable(self):
        ev = NoteEvent(0, 0)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            ev.pitch_index = 3


class TestMetrics(unittest.TestCase):
    def test_zeroed_by_default(self):
        self.assertEqual(Metrics().values(), (0.0,) * 6)

    def test_field_order(self):
        self.assertEqual(METRIC_NAMES, (
            "rhythmic_consistency",
            "melodic_coherence",
            "scale_adherence",
            "harmonic_progression",
            "phrase_structure",
            "dynamic_variation",
        ))

    def test_as_dict_camel_case(self):
        d = Metrics(melodic_coherence=0.4).as_dict()
        self.assertEqual(d["melodicCoherence"], 0.4)
        self.assertIn("rhythmicConsistency", d)
        self.assertIn("dynamicVariation", d)
        self.assertEqual(len(d), 6)


class TestNoteResult(unittest.TestCase):
    def test_as_dict(self):
        result = NoteResult(score=0.5, metrics=Metrics(), excitement_delta=-0.01)
        d = result.as_dict()
        self.assertEqual(d["score"], 0.5)
        self.assertEqual(d["excitementDelta"], -0.01)
        self.assertEqual(d["metrics"]["scaleAdherence"], 0.0)


class TestHelpers(unittest.TestCase):
    def test_clamp01(self):
        self.assertEqual(clamp01(-0.5), 0.0)
        self.assertEqual(clamp01(1.5), 1.0)
        self.assertEqual(clamp01(0.25), 0.25)

    def test_scale_label(self):
        self.assertEqual(ScaleContext("natural_minor", 9, 1.0).label, "A natural_minor")

    def test_chord_label(self):
        self.assertEqual(chord_label(ChordEvent("Am", 9, "minor")), "Am")
        self.assertEqual(chord_label(None), "-")


if __name__ == "__main__":
    unittest.main()
