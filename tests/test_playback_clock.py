import pytest
from PySide6.QtCore import QEventLoop, QTimer

from reelcut.config import EditorConfig
from reelcut.core.project import Project, set_playing
from reelcut.errors import ClockStateError
from reelcut.media.playback import PlaybackClock, advance_playhead


def _spin(ms):
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


def test_ten_ticks_reach_end_then_wrap():
    p = set_playing(Project(duration=1.0), True)
    for _ in range(10):
        p = advance_playhead(p, 0.1)
    assert p.is_playing
    assert p.current_time == pytest.approx(1.0)
    p = advance_playhead(p, 0.1)
    assert not p.is_playing
    assert p.current_time == 0


def test_seek_past_end_wraps_on_next_tick():
    p = set_playing(Project(duration=5.0, current_time=9.0), True)
    p = advance_playhead(p, 0.1)
    assert (p.is_playing, p.current_time) == (False, 0)


def test_stopped_project_does_not_advance():
    p = Project(duration=5.0, current_time=1.0)
    assert advance_playhead(p, 0.1) is p


def test_start_is_idempotent(qapp):
    clock = PlaybackClock()
    first = clock.start()
    again = clock.start()
    assert first.generation == again.generation
    assert first.active
    clock.close()


def test_stale_token_cannot_stop_new_run(qapp):
    clock = PlaybackClock()
    old = clock.start()
    assert old.cancel()
    assert not old.active
    new = clock.start()
    assert not clock.stop(old)
    assert clock.is_running and new.active
    assert new.cancel()
    assert not clock.is_running


def test_no_tick_after_stop(qapp):
    clock = PlaybackClock()
    ticks = []
    clock.ticked.connect(ticks.append)
    clock.start()
    clock._tick()
    clock.stop()
    clock._tick()  # a timeout that was already due
    assert ticks == [pytest.approx(0.1)]


def test_timer_drives_ticks(qapp):
    clock = PlaybackClock(config=EditorConfig(tick_interval_ms=10))
    ticks = []
    clock.ticked.connect(ticks.append)
    clock.start()
    _spin(120)
    clock.stop()
    count = len(ticks)
    assert count > 2
    _spin(60)
    assert len(ticks) == count


def test_closed_clock_refuses_start(qapp):
    clock = PlaybackClock()
    clock.start()
    clock.close()
    assert not clock.is_running
    with pytest.raises(ClockStateError):
        clock.start()


def test_state_signal(qapp):
    clock = PlaybackClock()
    states = []
    clock.stateChanged.connect(states.append)
    clock.start()
    clock.start()
    clock.stop()
    clock.stop()
    assert states == ["playing", "stopped"]
