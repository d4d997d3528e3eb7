"""Tests for engine parameters and profiles."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from musicality_engine.config import (
    PARAM_RANGES,
    EngineParams,
    all_profile_names,
    get_params,
)
from musicality_engine.errors import InvalidParameterError


class TestEngineParams(unittest.TestCase):
    def test_defaults_valid(self):
        params = EngineParams().validate()
        self.assertEqual(params.history_size, 32)
        self.assertEqual(params.chord_window_ms, 250)
        self.assertLess(params.boost_neg, params.boost_pos)

    def test_every_field_has_range(self):
        self.assertEqual(set(EngineParams().as_dict()), set(PARAM_RANGES))

    def test_with_updates(self):
        params = EngineParams().with_updates(ema_alpha=0.3, history_size=16)
        self.assertEqual(params.ema_alpha, 0.3)
        self.assertEqual(params.history_size, 16)
        self.assertEqual(EngineParams().ema_alpha, 0.2)

    def test_out_of_range(self):
        with self.assertRaises(InvalidParameterError):
            EngineParams().with_updates(ema_alpha=0.9)
        with self.assertRaises(InvalidParameterError):
            EngineParams().with_updates(history_size=4)

    def test_unknown_parameter(self):
        with self.assertRaises(InvalidParameterError):
            EngineParams().with_updates(tempo=120)

    def test_non_finite(self):
        with self.assertRaises(InvalidParameterError):
            EngineParams().with_updates(boost_pos=float("nan"))

    def test_integer_window_required(self):
        with self.assertRaises(InvalidParameterError):
            EngineParams().with_updates(ioi_window=8.5)
        with self.assertRaises(InvalidParameterError):
            EngineParams().with_updates(velocity_window=True)

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            EngineParams(boost_neg=1.0).validate()


class TestProfileRegistry(unittest.TestCase):
    def test_known_profiles(self):
        for name in ("default", "responsive", "patient"):
            self.assertIn(name, all_profile_names())

    def test_profiles_valid(self):
        for name in all_profile_names():
            get_params(name).validate()

    def test_unknown_returns_default(self):
        self.assertEqual(get_params("nope"), EngineParams())
        self.assertEqual(get_params(None), EngineParams())

    def test_responsive_adapts_faster(self):
        self.assertGreater(get_params("responsive").ema_alpha, get_params("patient").ema_alpha)


if __name__ == "__main__":
    unittest.main()
