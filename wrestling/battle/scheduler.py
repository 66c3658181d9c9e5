"""Deferred turn scheduling.

The opponent "thinks" for a moment before acting. Instead of a fire-and-forget
timer, each deferred turn is a :class:`ScheduledTurn` handle that the owner
can cancel; the scheduler itself never spawns threads and only fires callbacks
when driven (``run_due`` / ``wait`` / ``run_all``).
"""
from __future__ import annotations
from typing import Callable, List, Optional
import time

class ScheduledTurn:
    def __init__(self, due: float, callback: Callable[[], None], label: str = ""):
        self.due = due
        self.callback = callback
        self.label = label
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> bool:
        if not self.pending:
            return False
        self.cancelled = True
        return True

    def fire(self) -> bool:
        if not self.pending:
            return False
        self.fired = True
        self.callback()
        return True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else ("fired" if self.fired else "pending")
        return f"ScheduledTurn({self.label or self.callback!r}, due={self.due:.3f}, {state})"

class TurnScheduler:
    def __init__(self, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.clock = clock
        self.sleep = sleep
        self._queue: List[ScheduledTurn] = []

    def schedule(self, delay: float, callback: Callable[[], None], label: str = "") -> ScheduledTurn:
        handle = ScheduledTurn(self.clock() + max(0.0, float(delay)), callback, label)
        self._queue.append(handle)
        self._queue.sort(key=lambda h: h.due)
        return handle

    def pending(self) -> List[ScheduledTurn]:
        self._queue = [h for h in self._queue if h.pending]
        return list(self._queue)

    def next_due(self) -> Optional[float]:
        queue = self.pending()
        return queue[0].due if queue else None

    def run_due(self, now: Optional[float] = None) -> int:
        """Fire every pending turn whose due time has passed."""
        now = self.clock() if now is None else now
        fired = 0
        for handle in self.pending():
            if handle.due > now:
                break
            if handle.fire():
                fired += 1
        return fired

    def wait(self) -> int:
        """Block until the next pending turn is due, then run what is due."""
        due = self.next_due()
        if due is None:
            return 0
        remaining = due - self.clock()
        if remaining > 0:
            self.sleep(remaining)
        return self.run_due(max(due, self.clock()))

    def run_all(self) -> int:
        """Fire everything pending regardless of due time (including turns scheduled while running)."""
        fired = 0
        while True:
            queue = self.pending()
            if not queue:
                return fired
            if queue[0].fire():
                fired += 1

__all__ = ["ScheduledTurn", "TurnScheduler"]
