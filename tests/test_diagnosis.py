"""Tests for playing-style diagnostics."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from musicality_engine.diagnosis import (
    diagnose,
    has_repeating_pattern,
    has_scale_pattern,
    is_mashing,
    is_simple_scale,
    random_playing_score,
)
from musicality_engine.model import Metrics

STEADY = Metrics(rhythmic_consistency=0.9)


class TestDetectors(unittest.TestCase):
    def test_simple_scale(self):
        self.assertTrue(is_simple_scale([0, 2, 4, 5], STEADY))
        self.assertFalse(is_simple_scale([0, 2, 4, 5], Metrics()))
        self.assertFalse(is_simple_scale([5, 4, 2, 0], STEADY))
        self.assertFalse(is_simple_scale([0, 2], STEADY))

    def test_repeating_pattern(self):
        self.assertTrue(has_repeating_pattern([0, 4, 7, 0, 4, 7, 9, 11]))
        self.assertFalse(has_repeating_pattern([0, 4, 7, 0, 4, 7]))
        self.assertFalse(has_repeating_pattern([0, 2, 4, 5, 7, 9, 11, 12]))

    def test_scale_pattern(self):
        self.assertTrue(has_scale_pattern([12, 11, 9, 7]))
        self.assertFalse(has_scale_pattern([0, 12, 0, 12]))
        self.assertFalse(has_scale_pattern([0, 2, 4]))

    def test_mashing(self):
        self.assertTrue(is_mashing([0, 50, 100, 140]))
        self.assertFalse(is_mashing([0, 400, 800]))
        self.assertFalse(is_mashing([0, 10]))


class TestRandomPlaying(unittest.TestCase):
    PITCHES = [0, 20, 3, 30, 1, 25, 2]
    TIMES = [0, 150, 700, 800, 1500, 1600, 2600]

    def test_wide_erratic_playing_scores_high(self):
        self.assertGreater(random_playing_score(self.PITCHES, self.TIMES, Metrics()), 0.5)

    def test_flagged(self):
        self.assertTrue(diagnose(self.PITCHES, self.TIMES, Metrics()).random_playing)

    def test_needs_enough_notes(self):
        flags = diagnose(self.PITCHES[:4], self.TIMES[:4], Metrics())
        self.assertFalse(flags.random_playing)

    def test_as_dict(self):
        flags = diagnose([], [], Metrics()).as_dict()
        self.assertEqual(set(flags), {
            "simple_scale", "repeating_pattern", "scale_pattern",
            "random_playing", "mashing",
        })
        self.assertFalse(any(flags.values()))


if __name__ == "__main__":
    unittest.main()
