# timeline/scheduler.py
import heapq, logging
from typing import Callable

log = logging.getLogger(__name__)

class Scheduler:
    """Fire-once deferred callbacks driven by the frame clock.

    The app loop calls advance(dt) once per frame; callbacks whose due time
    has passed run in due order (ties in scheduling order). Nothing is
    cancellable: callers make stale callbacks inert themselves (generation tags).
    """
    def __init__(self):
        self.now = 0.0
        self._seq = 0
        self._heap: list[tuple[float, int, Callable[[], None]]] = []  # (due, seq, fn)

    def call_later(self, delay: float, fn: Callable[[], None]) -> float:
        due = self.now + max(0.0, delay)
        heapq.heappush(self._heap, (due, self._seq, fn))
        self._seq += 1
        return due

    def advance(self, dt: float) -> int:
        self.now += max(0.0, dt)
        fired = 0
        while self._heap and self._heap[0][0] <= self.now:
            _, _, fn = heapq.heappop(self._heap)
            fired += 1
            try:
                fn()
            except Exception:
                log.exception("deferred callback failed")
        return fired

    def pending(self) -> int:
        return len(self._heap)

    def clear(self):
        self._heap.clear()
