"""
QTimer-backed Scheduler for the animation controller.
"""
from PySide6 import QtCore

from core.scheduler import CancelToken, Scheduler


class QtScheduler(Scheduler):
    """
    Schedules callbacks as single-shot QTimers on the GUI thread.

    Pending timers are kept alive here until they fire or are cancelled.
    """

    def __init__(self, parent=None):
        self.parent = parent
        self._timers = set()

    def call_later(self, delay_ms, callback):
        timer = QtCore.QTimer(self.parent)
        timer.setSingleShot(True)
        timer.setInterval(int(delay_ms))

        def stop():
            timer.stop()
            self._release(timer)

        token = CancelToken(on_cancel=stop)

        def fire():
            self._release(timer)
            if not token.cancelled:
                callback()

        timer.timeout.connect(fire)
        self._timers.add(timer)
        timer.start()
        return token

    def pending(self):
        """Number of timers that have neither fired nor been cancelled."""
        return len(self._timers)

    def _release(self, timer):
        if timer in self._timers:
            self._timers.discard(timer)
            timer.deleteLater()
