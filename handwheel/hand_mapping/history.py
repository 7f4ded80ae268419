"""Bounded radius/angle history for charting."""

from collections import deque

from .config import MAX_HISTORY


class HistoryBuffer:
    """Two time-aligned FIFO series; the oldest sample is evicted when full."""

    def __init__(self, max_history: int = MAX_HISTORY):
        if max_history <= 0:
            raise ValueError("max_history must be positive")
        self.max_history = max_history
        self._radius: deque[float] = deque(maxlen=max_history)
        self._angle: deque[float] = deque(maxlen=max_history)

    def push(self, radius: float, angle_deg: float) -> None:
        self._radius.append(radius)
        self._angle.append(angle_deg)

    @property
    def radius(self) -> tuple[float, ...]:
        return tuple(self._radius)

    @property
    def angle(self) -> tuple[float, ...]:
        return tuple(self._angle)

    def __len__(self) -> int:
        return len(self._radius)
