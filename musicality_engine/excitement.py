"""Excitement driver: surprise relative to the player's own recent baseline.

The driver rewards improvement over an exponential moving average of recent
scores rather than absolute skill. A player who sustains a constant level
sees the baseline catch up and the reward fade; a dip costs less than an
equal rise earns, because the negative scale constant is the smaller one.
"""

from __future__ import annotations

from typing import Optional


class ExcitementDriver:
    """EMA baseline producing a signed, asymmetric excitement increment.

    States: uninitialised (``ema is None``) until the first score, which
    seeds the baseline and emits 0; tracking afterwards.
    """

    def __init__(self, alpha: float, boost_pos: float, boost_neg: float):
        self.alpha = alpha
        self.boost_pos = boost_pos
        self.boost_neg = boost_neg
        self.ema: Optional[float] = None

    @property
    def tracking(self) -> bool:
        return self.ema is not None

    def update(self, score: float) -> float:
        """Feed one score; return the excitement increment for it."""
        if self.ema is None:
            self.ema = score
            return 0.0
        # Surprise is measured against the baseline before it absorbs score.
        delta = score - self.ema
        self.ema = self.alpha * score + (1.0 - self.alpha) * self.ema
        if delta > 0:
            return self.boost_pos * delta
        return self.boost_neg * delta

    def reset(self) -> None:
        """Drop the baseline; the next score re-seeds it."""
        self.ema = None
