"""Bounded sliding windows owned by the engine."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, List, Optional, Tuple, TypeVar

from .errors import WindowInvariantError
from .model import NoteEvent

T = TypeVar("T")


class RollingWindow(Generic[T]):
    """Fixed-capacity FIFO; appending to a full window evicts the oldest item."""

    def __init__(self, capacity: int):
        self._items: Deque[T] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    def append(self, item: T) -> None:
        self._items.append(item)

    def resize(self, capacity: int) -> None:
        """Change capacity, keeping the most recent items."""
        self._items = deque(self._items, maxlen=capacity)

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> Tuple[T, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


class HistoryWindow:
    """Pitch/time/velocity history plus the derived IOI and velocity windows.

    The note window, IOI window and velocity window have independent
    capacities. The timestamp of the latest note is kept separately so IOIs
    stay correct regardless of how small the note window is.
    """

    def __init__(self, history_size: int, ioi_window: int, velocity_window: int):
        self.notes: RollingWindow[NoteEvent] = RollingWindow(history_size)
        self.intervals: RollingWindow[float] = RollingWindow(ioi_window)
        self.velocities: RollingWindow[float] = RollingWindow(velocity_window)
        self.last_timestamp: Optional[float] = None

    def append(self, event: NoteEvent) -> None:
        if self.last_timestamp is not None:
            self.intervals.append(event.timestamp_ms - self.last_timestamp)
        self.notes.append(event)
        self.velocities.append(event.velocity)
        self.last_timestamp = event.timestamp_ms

    def resize(self, history_size: int, ioi_window: int, velocity_window: int) -> None:
        self.notes.resize(history_size)
        self.intervals.resize(ioi_window)
        self.velocities.resize(velocity_window)

    def clear(self) -> None:
        self.notes.clear()
        self.intervals.clear()
        self.velocities.clear()
        self.last_timestamp = None

    @property
    def pitches(self) -> List[int]:
        return [n.pitch_index for n in self.notes]

    @property
    def timestamps(self) -> List[float]:
        return [n.timestamp_ms for n in self.notes]

    def check_invariants(self, notes_seen: int) -> None:
        """Raise WindowInvariantError if any window is inconsistent."""
        for label, window in (
            ("notes", self.notes),
            ("intervals", self.intervals),
            ("velocities", self.velocities),
        ):
            if len(window) > window.capacity:
                raise WindowInvariantError(
                    f"{label} window holds {len(window)} > capacity {window.capacity}"
                )
        # Windows may hold fewer items than seen after a resize, never more.
        if len(self.notes) > notes_seen or (notes_seen > 0 and not self.notes):
            raise WindowInvariantError(
                f"notes window holds {len(self.notes)} after {notes_seen} events"
            )
        if len(self.intervals) > max(notes_seen - 1, 0):
            raise WindowInvariantError(
                f"intervals window holds {len(self.intervals)} after {notes_seen} events"
            )
        if (self.last_timestamp is None) != (notes_seen == 0):
            raise WindowInvariantError("last timestamp out of sync with note count")
