# core/chrono.py
import time
from typing import Callable, Optional


class Stopwatch:
    """
    Session clock. Nothing ticks in the background: elapsed time is always
    computed on demand as "now - start" or "stop - start".
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.started_at: Optional[float] = None
        self.stopped_at: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self.started_at is not None and self.stopped_at is None

    @property
    def is_idle(self) -> bool:
        return self.started_at is None

    def start(self):
        if self.started_at is None:
            self.started_at = self._clock()

    def stop(self):
        if self.started_at is not None and self.stopped_at is None:
            self.stopped_at = self._clock()

    def reset(self):
        self.started_at = None
        self.stopped_at = None

    def seconds(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.stopped_at if self.stopped_at is not None else self._clock()
        return max(0.0, end - self.started_at)
