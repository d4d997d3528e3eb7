"""Tests for melodic coherence."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from musicality_engine.features.melody import WINDOW, melodic_coherence


class TestMelodicCoherence(unittest.TestCase):
    def test_too_few_notes(self):
        self.assertEqual(melodic_coherence([]), 0.0)
        self.assertEqual(melodic_coherence([5]), 0.0)

    def test_single_step(self):
        self.assertAlmostEqual(melodic_coherence([0, 2]), 0.7)

    def test_diatonic_scale(self):
        score = melodic_coherence([0, 2, 4, 5, 7, 9, 11, 12])
        self.assertAlmostEqual(score, 0.7 + 0.3 * (1 - 2 / 7))
        self.assertGreater(score, 0.6)

    def test_repetition_penalised(self):
        self.assertLessEqual(melodic_coherence([7] * 8), 0.3)
        self.assertEqual(melodic_coherence([7] * 8), 0.0)

    def test_leaps_penalised(self):
        self.assertEqual(melodic_coherence([0, 12, 0, 12]), 0.0)
        stepwise = melodic_coherence([0, 2, 4, 2, 0])
        leapy = melodic_coherence([0, 2, 10, 2, 0])
        self.assertGreater(stepwise, leapy)

    def test_only_recent_window(self):
        old_leaps = [0, 16, 0, 16]
        recent = [0, 2, 4, 5, 7, 9, 11, 12]
        self.assertEqual(
            melodic_coherence(old_leaps + recent),
            melodic_coherence(recent),
        )
        self.assertEqual(WINDOW, 8)

    def test_bounded(self):
        for seq in ([0, 16] * 4, [3, 4] * 4, [0, 1, 2, 3, 4, 5, 6, 7]):
            score = melodic_coherence(seq)
            self.assertGreaterEqual(score, 0.0)
            self.assertLessEqual(score, 1.0)


if __name__ == "__main__":
    unittest.main()
