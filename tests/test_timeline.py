import pytest

from reelcut.config import EditorConfig
from reelcut.core.project import Clip, ClipKind
from reelcut.core.timeline import (
    clip_extent,
    pixel_to_time,
    ruler_ticks,
    seek_time_from_pointer,
    time_to_pixel,
    timeline_width,
    zoom_in,
    zoom_out,
)
from reelcut.errors import InvalidTimeError


@pytest.mark.parametrize("zoom", [5.0, 20.0, 37.3, 100.0])
@pytest.mark.parametrize("t", [0.0, 0.1, 3.3333, 59.99, 1234.5])
def test_pixel_time_round_trip(t, zoom):
    assert pixel_to_time(time_to_pixel(t, zoom), zoom) == pytest.approx(t)


def test_pixel_to_time_clamps_at_zero():
    assert pixel_to_time(-40, 20) == 0.0


def test_zero_zoom_rejected():
    with pytest.raises(InvalidTimeError):
        time_to_pixel(1.0, 0)


def test_zoom_steps_are_multiplicative_and_clamped():
    assert zoom_in(20.0) == pytest.approx(24.0)
    assert zoom_out(24.0) == pytest.approx(20.0)
    assert zoom_in(95.0) == 100.0
    assert zoom_out(5.5) == 5.0
    cfg = EditorConfig(zoom_min=1.0, zoom_max=10.0, zoom_step=2.0)
    assert zoom_in(8.0, cfg) == 10.0
    assert zoom_out(1.5, cfg) == 1.0


def test_seek_from_pointer_includes_scroll():
    # 300px into the view, scrolled by 100px, at 20px/s -> 20s
    assert seek_time_from_pointer(350, 50, 100, 20) == pytest.approx(20.0)
    # left of the track origin clamps to 0
    assert seek_time_from_pointer(10, 50, 0, 20) == 0.0
    # no upper clamp
    assert seek_time_from_pointer(10050, 50, 0, 20) == pytest.approx(500.0)


def test_timeline_width_has_minimum():
    assert timeline_width(10, 20) == 1000
    assert timeline_width(60, 20) == 1200
    assert timeline_width(1, 1, min_width=0) == 1


def test_clip_extent():
    clip = Clip(id="c", track_id="t", kind=ClipKind.IMAGE, name="c", start=2, duration=3)
    assert clip_extent(clip, 10) == (20, 30)


def test_ruler_ticks_zoomed_in():
    ticks = ruler_ticks(12, 20)
    # ceil(12/5)*5 + 30 = 45 -> seconds 0..45
    assert len(ticks) == 46
    assert ticks[0].major and ticks[0].label == "0:00"
    assert not ticks[1].major and ticks[1].label is None
    assert ticks[5].x == 100
    assert ticks[-1].seconds == 45


def test_ruler_ticks_zoomed_out_drop_minor():
    ticks = ruler_ticks(60, 5)
    assert all(t.major for t in ticks)
    assert [t.seconds for t in ticks][:3] == [0, 5, 10]
    assert ticks[-1].seconds == 90
    assert ticks[-1].label == "1:30"
