"""Frame schedulers: the host's "run this before the next repaint" mechanism.

A scheduler exposes two things to the Animator:
    now()                   current time in milliseconds
    request_frame(callback) call callback(now_ms) once, on the next frame

QtFrameScheduler drives the desktop application from the Qt event loop.
SteppedFrameScheduler runs on a virtual clock for the headless renderer
and tests: nothing happens until step() is called.
"""

import logging

from PyQt5.QtCore import QElapsedTimer, QObject, QTimer

from constants import FRAME_INTERVAL_MS

logger = logging.getLogger(__name__)


class QtFrameScheduler(QObject):
    """Frame callbacks on the Qt GUI thread at roughly display refresh rate"""

    def __init__(self, interval_ms=FRAME_INTERVAL_MS, parent=None):
        super().__init__(parent)
        self.interval_ms = interval_ms
        self._clock = QElapsedTimer()
        self._clock.start()

    def now(self):
        return float(self._clock.elapsed())

    def request_frame(self, callback):
        QTimer.singleShot(self.interval_ms, lambda: callback(self.now()))


class SteppedFrameScheduler:
    """Deterministic scheduler with a virtual millisecond clock.

    Usage:
        scheduler = SteppedFrameScheduler()
        animator = Animator(scheduler)
        animator.start("zoom", 1.0, 2.0, 200, on_frame)
        scheduler.run_until_idle()
    """

    def __init__(self, interval_ms=FRAME_INTERVAL_MS, start_ms=0.0):
        self.interval_ms = interval_ms
        self._now = float(start_ms)
        self._pending = []
        self.frame_count = 0

    def now(self):
        return self._now

    def request_frame(self, callback):
        self._pending.append(callback)

    @property
    def pending(self):
        """Number of frame callbacks waiting for the next step"""
        return len(self._pending)

    def advance(self, ms):
        """Move the clock forward without running any frames"""
        self._now += ms

    def step(self):
        """Advance one frame interval and run the callbacks requested before it.

        Callbacks requested while this frame runs wait for the next step.

        Returns:
            Number of callbacks run
        """
        self._now += self.interval_ms
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback(self._now)
        self.frame_count += 1
        return len(callbacks)

    def run_until_idle(self, max_frames=10000):
        """Step until no frame is pending.

        Raises:
            RuntimeError: If frames are still pending after max_frames steps
        """
        steps = 0
        while self._pending:
            if steps >= max_frames:
                raise RuntimeError(f"Frames still pending after {max_frames} steps")
            self.step()
            steps += 1
        return steps
