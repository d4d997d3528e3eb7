"""Scale adherence over the full history window."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..model import ScaleContext, clamp01
from ..music_theory import detect_scale, pitch_class_histogram


def scale_adherence(pitches: Sequence[int]) -> Tuple[float, Optional[ScaleContext]]:
    """Return (score, detected scale). An empty window gives (0.0, None)."""
    context = detect_scale(pitch_class_histogram(pitches))
    if context is None:
        return 0.0, None
    return clamp01(context.fit), context
