"""
Timer queue for deferred, fire-and-forget callbacks.

The frame loop pumps the queue with the current clock; nothing here sleeps or
waits, so input handling is never held up by a pending callback.
"""
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass(order=True)
class ScheduledCallback:
    """A callback due at a given time in milliseconds."""
    due_ms: int
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    label: str = field(default="", compare=False)


class TimerQueue:
    """
    Min-heap of callbacks ordered by deadline, then by scheduling order.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """
        Args:
            clock: Returns the current time in milliseconds. Only used by
                schedule() when no explicit `now_ms` is given.
        """
        self._clock = clock
        self._heap: List[ScheduledCallback] = []
        self._counter = itertools.count()

    @property
    def pending(self) -> int:
        return len(self._heap)

    def schedule(
        self,
        delay_ms: int,
        callback: Callable[[], None],
        now_ms: Optional[int] = None,
        label: str = "",
    ) -> ScheduledCallback:
        """
        Queue `callback` to run once `delay_ms` has elapsed.

        Args:
            delay_ms: Delay from now in milliseconds (negative treated as 0)
            callback: Zero-argument callable
            now_ms: Current time; defaults to the queue's clock, or 0
            label: Optional description used when reporting failures

        Returns:
            The queued entry
        """
        if now_ms is None:
            now_ms = self._clock() if self._clock else 0
        entry = ScheduledCallback(
            due_ms=now_ms + max(0, int(delay_ms)),
            sequence=next(self._counter),
            callback=callback,
            label=label,
        )
        heapq.heappush(self._heap, entry)
        return entry

    def run_due(self, now_ms: int) -> int:
        """
        Run every callback whose deadline is at or before `now_ms`.

        Callbacks scheduled by a running callback are only run in this pass
        if they are already due. A failing callback is reported and the rest
        still run.

        Returns:
            Number of callbacks run
        """
        ran = 0
        while self._heap and self._heap[0].due_ms <= now_ms:
            entry = heapq.heappop(self._heap)
            ran += 1
            try:
                entry.callback()
            except Exception as e:
                name = entry.label or getattr(entry.callback, "__name__", "callback")
                print(f"[TimerQueue] Error in scheduled {name}: {e}")
        return ran

    def next_due(self) -> Optional[int]:
        """Deadline of the earliest pending callback, if any."""
        return self._heap[0].due_ms if self._heap else None

    def cancel_all(self):
        """Drop every pending callback."""
        self._heap.clear()
