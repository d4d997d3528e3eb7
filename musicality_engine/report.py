"""Report generation: text and JSON output for a replay."""

from __future__ import annotations

import json
from typing import Any, Dict

from .model import NOTE_NAMES, chord_label
from .runner import ReplayResult
from .score import METRIC_WEIGHTS, grade


def _bar(value: float, width: int = 20) -> str:
    filled = int(round(value * width))
    return "#" * filled + "." * (width - filled)


def format_text(result: ReplayResult) -> str:
    """Format a replay as human-readable text."""
    lines = []

    meta_parts = [f"{result.note_count} notes"]
    if result.source_file:
        meta_parts.insert(0, result.source_file)
    lines.append(f"=== Musicality: {', '.join(meta_parts)} ===")
    lines.append("")

    metrics = result.final_metrics
    for name, value in zip(METRIC_WEIGHTS, metrics.values()):
        lines.append(
            f"  {name:<22} {value:5.3f} [{_bar(value)}] x{METRIC_WEIGHTS[name]:.2f}"
        )
    lines.append("")

    lines.append(
        f"  Score: {result.final_score:.3f} (mean {result.mean_score:.3f}, "
        f"grade {grade(result.final_score)})"
    )
    lines.append(
        f"  Excitement: {result.excitement:.3f} (peak {result.peak_excitement:.3f})"
    )
    if result.scale is not None:
        lines.append(f"  Scale: {result.scale.label} (fit {result.scale.fit:.2f})")
    else:
        lines.append("  Scale: -")
    chords = " ".join(chord_label(c) for c in result.chords) or "-"
    lines.append(f"  Chords: {chords}")

    flags = [name for name, on in result.diagnosis.as_dict().items() if on]
    lines.append(f"  Flags: {', '.join(flags) if flags else 'none'}")
    lines.append("")

    return "\n".join(lines)


def format_json(result: ReplayResult) -> str:
    """Format a replay as JSON."""
    scale = result.scale
    data: Dict[str, Any] = {
        "metadata": {
            "source_file": result.source_file,
            "note_count": result.note_count,
            "params": result.params.as_dict(),
        },
        "summary": {
            "score": result.final_score,
            "mean_score": result.mean_score,
            "grade": grade(result.final_score),
            "excitement": result.excitement,
            "peak_excitement": result.peak_excitement,
            "metrics": result.final_metrics.as_dict(),
            "scale": None if scale is None else {
                "name": scale.name,
                "root": NOTE_NAMES[scale.root],
                "fit": scale.fit,
            },
            "chords": [c._asdict() if c is not None else None for c in result.chords],
            "diagnosis": result.diagnosis.as_dict(),
        },
        "notes": [r.as_dict() for r in result.results],
    }
    return json.dumps(data, indent=2)
