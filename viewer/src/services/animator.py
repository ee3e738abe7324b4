"""Time-based value animation on named channels.

One session per channel. Starting a new session on a channel supersedes the
old one: the old session's pending frame finds a different session installed
and does nothing, and its completion callback never runs. Distinct channels
animate independently.

Progress is eased with ease-out-cubic and the value is interpolated in the
eased domain:
    progress = min(elapsed / duration, 1)
    value = start + (end - start) * (1 - (1 - progress) ** 3)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


@dataclass
class AnimationSession:
    channel: str
    start_time: float
    duration: float
    start_value: float
    end_value: float
    on_frame: Callable[[float], None]
    on_complete: Optional[Callable[[], None]] = None

    def value_at(self, now: float) -> float:
        if self.progress_at(now) >= 1.0:
            return self.end_value
        return self.start_value + (self.end_value - self.start_value) * ease_out_cubic(self.progress_at(now))

    def progress_at(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return max(0.0, min((now - self.start_time) / self.duration, 1.0))


class Animator:
    """Drives numeric values toward a target over time via a frame scheduler.

    Args:
        scheduler: Object with now() -> ms and request_frame(callback(now_ms))
    """

    def __init__(self, scheduler):
        self._scheduler = scheduler
        self._sessions: Dict[str, AnimationSession] = {}

    @property
    def scheduler(self):
        return self._scheduler

    def start(self, channel: str, start_value: float, end_value: float, duration_ms: float,
              on_frame: Callable[[float], None],
              on_complete: Optional[Callable[[], None]] = None) -> AnimationSession:
        """Register a session under channel, replacing any session already there.

        The first frame runs on the next scheduler frame, never synchronously.

        Returns:
            The installed AnimationSession
        """
        session = AnimationSession(
            channel=channel,
            start_time=self._scheduler.now(),
            duration=float(duration_ms),
            start_value=float(start_value),
            end_value=float(end_value),
            on_frame=on_frame,
            on_complete=on_complete,
        )
        if channel in self._sessions:
            logger.debug("Superseding animation on channel %r", channel)
        self._sessions[channel] = session
        self._scheduler.request_frame(lambda now: self._tick(session, now))
        return session

    def cancel(self, channel: str) -> bool:
        """Drop the session on channel without running its completion.

        Returns:
            True if a session was removed
        """
        return self._sessions.pop(channel, None) is not None

    def cancel_all(self):
        self._sessions.clear()

    def is_active(self, channel: str) -> bool:
        return channel in self._sessions

    def active_channels(self) -> List[str]:
        return list(self._sessions)

    def _tick(self, session: AnimationSession, now: float):
        # Superseded or cancelled sessions stop here
        if self._sessions.get(session.channel) is not session:
            return

        progress = session.progress_at(now)
        session.on_frame(session.value_at(now))

        # on_frame may have replaced or cancelled the session
        if self._sessions.get(session.channel) is not session:
            return

        if progress < 1:
            self._scheduler.request_frame(lambda t: self._tick(session, t))
            return

        del self._sessions[session.channel]
        if session.on_complete:
            session.on_complete()
