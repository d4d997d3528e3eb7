"""Tests for replay, the demo song, report formatting and the CLI."""

import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from musicality_engine.__main__ import main
from musicality_engine.config import get_params
from musicality_engine.engine import MusicalityEngine
from musicality_engine.model import NoteEvent
from musicality_engine.report import format_json, format_text
from musicality_engine.runner import load_events, replay, replay_file
from musicality_engine.songs import (
    DEMO_SONG,
    PATTERN_1,
    demo_song_events,
    note_name_to_index,
    song_events,
)


def _write_json(data):
    fh = tempfile.NamedTemporaryFile("w", suffix=".json", delete=False)
    with fh:
        json.dump(data, fh)
    return fh.name


class TestSongs(unittest.TestCase):
    def test_note_names(self):
        self.assertEqual(note_name_to_index("C4"), 0)
        self.assertEqual(note_name_to_index("C#4"), 1)
        self.assertEqual(note_name_to_index("E5"), 16)
        with self.assertRaises(ValueError):
            note_name_to_index("H2")

    def test_demo_song(self):
        self.assertEqual(len(DEMO_SONG), 128)
        events = demo_song_events(beat_ms=250)
        self.assertEqual(events[1].timestamp_ms, 250)
        self.assertTrue(all(0 <= e.pitch_index <= 16 for e in events))

    def test_song_events(self):
        events = song_events(PATTERN_1[:3], beat_ms=100, start_ms=50)
        self.assertEqual([e.pitch_index for e in events], [0, 4, 7])
        self.assertEqual([e.timestamp_ms for e in events], [50, 150, 250])


class TestReplay(unittest.TestCase):
    def test_demo_replay(self):
        result = replay(demo_song_events())
        self.assertEqual(result.note_count, 128)
        self.assertTrue(0.0 <= result.excitement <= 1.0)
        self.assertGreaterEqual(result.peak_excitement, result.excitement)
        self.assertIsNotNone(result.scale)
        self.assertEqual(result.scale.root, 0)

    def test_empty(self):
        result = replay([])
        self.assertEqual(result.note_count, 0)
        self.assertEqual(result.final_score, 0.0)
        self.assertEqual(result.mean_score, 0.0)

    def test_uses_given_engine(self):
        engine = MusicalityEngine()
        engine.process_note(0, 0)
        replay([NoteEvent(2, 400)], engine=engine)
        self.assertEqual(engine.note_count, 2)

    def test_params(self):
        result = replay(demo_song_events()[:8], params=get_params("patient"))
        self.assertEqual(result.params.history_size, 48)

    def test_replay_json_file(self):
        path = _write_json({"notes": [{"pitch": p, "time_ms": i * 400}
                                      for i, p in enumerate([0, 2, 4, 5])]})
        try:
            result = replay_file(path)
        finally:
            os.unlink(path)
        self.assertEqual(result.note_count, 4)
        self.assertEqual(result.source_file, path)

    def test_midi_dispatch(self):
        with patch("musicality_engine.runner.load_midi", return_value=[]) as loader:
            load_events("take.MID", channel=3)
        loader.assert_called_once_with(Path("take.MID"), channel=3)


class TestReport(unittest.TestCase):
    def setUp(self):
        self.result = replay(demo_song_events()[:16])
        self.result.source_file = "demo"

    def test_text(self):
        text = format_text(self.result)
        self.assertIn("=== Musicality: demo, 16 notes ===", text)
        self.assertIn("melodic_coherence", text)
        self.assertIn("Score:", text)
        self.assertIn("Scale: C major", text)
        self.assertIn("Flags:", text)

    def test_json(self):
        data = json.loads(format_json(self.result))
        self.assertEqual(data["metadata"]["note_count"], 16)
        self.assertEqual(len(data["notes"]), 16)
        self.assertIn("melodicCoherence", data["summary"]["metrics"])
        self.assertEqual(data["notes"][0]["excitementDelta"], 0.0)
        self.assertEqual(data["summary"]["scale"]["root"], "C")


class TestCli(unittest.TestCase):
    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_no_command(self):
        code, out, _ = self._run([])
        self.assertEqual(code, 0)
        self.assertIn("usage", out)

    def test_demo_json_to_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.json")
            code, _, _ = self._run(["demo", "--json", "-o", path, "--profile", "responsive"])
            self.assertEqual(code, 0)
            with open(path) as fh:
                data = json.load(fh)
        self.assertEqual(data["metadata"]["note_count"], 128)
        self.assertEqual(data["metadata"]["params"]["ema_alpha"], 0.4)

    def test_score_text(self):
        path = _write_json([{"pitch": p, "time_ms": i * 400} for i, p in enumerate(range(8))])
        try:
            code, out, _ = self._run(["score", path, "--ema-alpha", "0.3"])
        finally:
            os.unlink(path)
        self.assertEqual(code, 0)
        self.assertIn("=== Musicality:", out)

    def test_missing_file(self):
        code, _, err = self._run(["score", "/nonexistent/take.json"])
        self.assertEqual(code, 2)
        self.assertIn("error:", err)

    def test_invalid_override(self):
        code, _, err = self._run(["demo", "--chord-window-ms", "5"])
        self.assertEqual(code, 2)
        self.assertIn("chord_window_ms", err)


if __name__ == "__main__":
    unittest.main()
