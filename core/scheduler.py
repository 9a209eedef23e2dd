"""
Cancellable delayed-callback contract.

The animation controller only ever talks to a Scheduler. The desktop shell
plugs in a QTimer-backed implementation; tests drive a manual one.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple


class CancelToken:
    """
    Handle for one pending callback.

    cancel() is idempotent. An optional hook lets a backend stop its timer.
    """

    def __init__(self, on_cancel: Optional[Callable[[], None]] = None):
        self._on_cancel = on_cancel
        self.cancelled = False

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()
            self._on_cancel = None


class Scheduler(ABC):
    """Runs a callback once after a delay on the caller's thread."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> CancelToken:
        """
        Schedule callback to run once after delay_ms milliseconds.

        The returned token must prevent the callback from running once cancelled.
        """
        pass


class ManualScheduler(Scheduler):
    """
    Scheduler driven by hand, for headless runs and tests.

    Keeps a virtual clock in milliseconds; advance() fires every callback
    whose due time has been reached, in due order.
    """

    def __init__(self):
        self.now = 0
        self._queue: List[Tuple[int, int, CancelToken, Callable[[], None]]] = []
        self._seq = 0

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> CancelToken:
        token = CancelToken()
        self._queue.append((self.now + delay_ms, self._seq, token, callback))
        self._seq += 1
        return token

    def pending(self) -> int:
        return sum(1 for _, _, token, _ in self._queue if not token.cancelled)

    def advance(self, ms: int) -> int:
        """Move the clock forward by ms, running due callbacks. Returns how many ran."""
        target = self.now + ms
        ran = 0
        while True:
            due = [entry for entry in self._queue if entry[0] <= target]
            if not due:
                break
            entry = min(due, key=lambda e: (e[0], e[1]))
            self._queue.remove(entry)
            when, _, token, callback = entry
            self.now = max(self.now, when)
            if not token.cancelled:
                callback()
                ran += 1
        self.now = target
        return ran

    def run_all(self) -> int:
        """Run until nothing is pending."""
        ran = 0
        while self.pending():
            next_due = min(e[0] for e in self._queue if not e[2].cancelled)
            ran += self.advance(next_due - self.now)
        return ran
