"""Playback clock driving the timeline playhead.

Design:
PlaybackClock owns a single QTimer and exposes:
    start() -> ClockToken
    stop(token=None) -> bool
    close()
Signals:
    ticked(float)          # seconds to advance, once per timer interval
    stateChanged(str)      # 'playing'|'stopped'

The clock does not touch the project itself. Whoever owns the current snapshot
connects to ``ticked`` and replaces the snapshot with `advance_playhead`, which
also decides when playback reaches the end: at or past ``duration`` the
playhead rewinds to 0 and playback stops (stop-and-rewind, not looping).

Cancellation: every start() opens a new generation and returns a token for it;
a token from an earlier run cannot stop a later one. stop() clears the running
flag before stopping the timer and the timeout slot checks that flag, so no
tick is emitted after a stop even when one was already due.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional
import logging

from PySide6.QtCore import QObject, Signal, QTimer, Qt

from ..config import DEFAULT_CONFIG, EditorConfig
from ..core.project import Project
from ..errors import ClockStateError

logger = logging.getLogger(__name__)

# Playhead positions are kept at microsecond resolution so repeated 0.1 s
# steps land exactly on whole seconds.
TIME_RESOLUTION_DIGITS = 6


def advance_playhead(project: Project, step: float) -> Project:
    """One clock tick applied to a snapshot.

    Not playing: unchanged. At or past the end: stop and rewind to 0.
    Otherwise move the playhead forward by ``step``.
    """
    if not project.is_playing:
        return project
    if project.current_time >= project.duration:
        logger.debug("playhead reached end %.3f, rewinding", project.duration)
        return replace(project, is_playing=False, current_time=0.0)
    return replace(
        project,
        current_time=round(project.current_time + step, TIME_RESOLUTION_DIGITS),
    )


@dataclass(frozen=True)
class ClockToken:
    """Handle for one start() of a clock; cancel() stops that run only."""

    clock: "PlaybackClock"
    generation: int

    @property
    def active(self) -> bool:
        return self.clock.is_running and self.clock._generation == self.generation

    def cancel(self) -> bool:
        return self.clock.stop(self)


class PlaybackClock(QObject):
    ticked = Signal(float)
    stateChanged = Signal(str)

    def __init__(
        self,
        parent: Optional[QObject] = None,
        *,
        config: EditorConfig = DEFAULT_CONFIG,
    ):
        super().__init__(parent)
        self._interval_ms = config.tick_interval_ms
        self._step = config.tick_step
        self._generation = 0
        self._running = False
        self._closed = False
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._tick)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def step(self) -> float:
        return self._step

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def start(self) -> ClockToken:
        """Begin ticking. Starting a running clock returns the current token."""
        if self._closed:
            raise ClockStateError("playback clock has been closed")
        if self._running:
            return ClockToken(self, self._generation)
        self._generation += 1
        self._running = True
        self._timer.start(self._interval_ms)
        logger.info("playback started (generation %d)", self._generation)
        self.stateChanged.emit("playing")
        return ClockToken(self, self._generation)

    def stop(self, token: Optional[ClockToken] = None) -> bool:
        """Stop ticking. A stale ``token`` is ignored; returns True if stopped."""
        if not self._running:
            return False
        if token is not None and token.generation != self._generation:
            return False
        self._running = False
        self._timer.stop()
        logger.info("playback stopped")
        self.stateChanged.emit("stopped")
        return True

    def close(self):
        """Tear down: stop and refuse further starts."""
        self.stop()
        self._closed = True

    # Internal
    def _tick(self):
        if not self._running:
            return
        self.ticked.emit(self._step)


__all__ = ["PlaybackClock", "ClockToken", "advance_playhead"]
