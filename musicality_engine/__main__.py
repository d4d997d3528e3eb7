"""CLI entry point: python -m musicality_engine score/demo."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import EngineParams, all_profile_names, get_params
from .errors import MusicalityError
from .report import format_json, format_text
from .runner import ReplayResult, replay, replay_file
from .songs import demo_song_events


def _params_from_args(args: argparse.Namespace) -> EngineParams:
    params = get_params(args.profile)
    overrides = {}
    if args.ema_alpha is not None:
        overrides["ema_alpha"] = args.ema_alpha
    if args.chord_window_ms is not None:
        overrides["chord_window_ms"] = args.chord_window_ms
    if overrides:
        params = params.with_updates(**overrides)
    return params


def _emit(result: ReplayResult, args: argparse.Namespace) -> None:
    output = format_json(result) if args.json else format_text(result)
    if args.output:
        Path(args.output).write_text(output)
    else:
        print(output)


def cmd_score(args: argparse.Namespace) -> int:
    """Replay a JSON or MIDI note stream."""
    result = replay_file(args.input, params=_params_from_args(args), channel=args.channel)
    _emit(result, args)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Replay the bundled autoplayer demo song."""
    events = demo_song_events(beat_ms=args.beat_ms)
    result = replay(events, params=_params_from_args(args))
    result.source_file = "<demo>"
    _emit(result, args)
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--profile", choices=all_profile_names(), help="Parameter profile")
    p.add_argument("--ema-alpha", type=float, help="Override EMA smoothing constant")
    p.add_argument("--chord-window-ms", type=int, help="Override chord window (ms)")
    p.add_argument("--json", action="store_true", help="JSON output")
    p.add_argument("-o", "--output", help="Output file path")


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="musicality_engine",
        description="Real-time musicality scoring of note-onset streams",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # score
    p_score = subparsers.add_parser("score", help="Score a JSON or .mid note stream")
    p_score.add_argument("input", help="Path to a .json or .mid file")
    p_score.add_argument("--channel", type=int, help="MIDI channel filter (0-15)")
    _add_common(p_score)

    # demo
    p_demo = subparsers.add_parser("demo", help="Score the autoplayer demo song")
    p_demo.add_argument("--beat-ms", type=float, default=400.0, help="Interval between notes")
    _add_common(p_demo)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "score":
            return cmd_score(args)
        elif args.command == "demo":
            return cmd_demo(args)
        else:
            parser.print_help()
            return 0
    except (MusicalityError, FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
