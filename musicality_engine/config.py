"""Tunable engine parameters and named parameter profiles.

Parameters are live-adjustable from a settings surface. Each one has a
permitted range; values outside it are rejected rather than clamped so a
misbehaving slider cannot silently change scoring.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidParameterError


@dataclass(frozen=True)
class EngineParams:
    """Tunable parameters for one engine session."""

    # Window capacities (events)
    history_size: int = 32
    ioi_window: int = 16
    velocity_window: int = 16

    # Chord buffer duration (ms)
    chord_window_ms: int = 250

    # Excitement driver
    ema_alpha: float = 0.2
    boost_pos: float = 0.05
    boost_neg: float = 0.02

    def validate(self) -> "EngineParams":
        """Raise InvalidParameterError if any value is outside its range."""
        for f in fields(self):
            value = getattr(self, f.name)
            low, high = PARAM_RANGES[f.name]
            if f.name in _INT_PARAMS:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise InvalidParameterError(
                        f"{f.name} must be an integer, got {value!r}"
                    )
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidParameterError(f"{f.name} must be a number, got {value!r}")
            if not math.isfinite(value) or not low <= value <= high:
                raise InvalidParameterError(
                    f"{f.name}={value!r} outside [{low}, {high}]"
                )
        return self

    def with_updates(self, **changes: Any) -> "EngineParams":
        """Return a validated copy with *changes* applied."""
        unknown = set(changes) - set(PARAM_RANGES)
        if unknown:
            raise InvalidParameterError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes).validate()

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Slider ranges exposed by the settings panel.
PARAM_RANGES: Dict[str, Tuple[float, float]] = {
    "history_size": (8, 64),
    "ioi_window": (4, 32),
    "velocity_window": (4, 32),
    "chord_window_ms": (50, 1000),
    "ema_alpha": (0.01, 0.5),
    "boost_pos": (0.01, 0.2),
    "boost_neg": (0.005, 0.1),
}

_INT_PARAMS = frozenset({"history_size", "ioi_window", "velocity_window", "chord_window_ms"})

# ---------------------------------------------------------------------------
# Profile registry
# ---------------------------------------------------------------------------

_PROFILES: Dict[str, EngineParams] = {
    "default": EngineParams(),
    # Baseline follows the player quickly; short memory.
    "responsive": EngineParams(
        history_size=16,
        ioi_window=8,
        velocity_window=8,
        ema_alpha=0.4,
        boost_pos=0.08,
        boost_neg=0.03,
    ),
    # Slow baseline; rewards sustained improvement over longer spans.
    "patient": EngineParams(
        history_size=48,
        ioi_window=24,
        velocity_window=24,
        chord_window_ms=300,
        ema_alpha=0.05,
        boost_pos=0.03,
        boost_neg=0.01,
    ),
}

_DEFAULT_PARAMS = _PROFILES["default"]


def get_params(profile_name: Optional[str]) -> EngineParams:
    """Look up EngineParams by profile name. Returns default for unknown names."""
    if not profile_name:
        return _DEFAULT_PARAMS
    return _PROFILES.get(profile_name, _DEFAULT_PARAMS)


def all_profile_names() -> list[str]:
    """Return all registered profile names."""
    return list(_PROFILES.keys())
