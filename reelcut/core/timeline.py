"""Time <-> pixel mapping for the track area.

The horizontal axis of the timeline is linear: ``zoom`` pixels per second.
Seeking converts a pointer position back to seconds, zoom controls step the
scale multiplicatively so repeated presses feel even at every magnification,
and `ruler_ticks` lays out the ruler above the tracks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple
import math

from ..config import DEFAULT_CONFIG, EditorConfig
from ..errors import InvalidTimeError
from ..utils.timefmt import format_ruler_label
from .project import Clip

__all__ = [
    "RulerTick",
    "time_to_pixel",
    "pixel_to_time",
    "zoom_in",
    "zoom_out",
    "seek_time_from_pointer",
    "timeline_width",
    "clip_extent",
    "ruler_ticks",
]

MAJOR_TICK_EVERY = 5  # seconds
RULER_TAIL = 30  # extra seconds of ruler drawn past the end
MINOR_TICK_MIN_ZOOM = 10.0


def _check_zoom(zoom: float) -> None:
    if zoom <= 0:
        raise InvalidTimeError(f"zoom must be > 0, got {zoom}")


def time_to_pixel(t: float, zoom: float) -> float:
    _check_zoom(zoom)
    return t * zoom


def pixel_to_time(x: float, zoom: float) -> float:
    _check_zoom(zoom)
    return max(0.0, x / zoom)


def zoom_in(zoom: float, config: EditorConfig = DEFAULT_CONFIG) -> float:
    return config.clamp_zoom(zoom * config.zoom_step)


def zoom_out(zoom: float, config: EditorConfig = DEFAULT_CONFIG) -> float:
    return config.clamp_zoom(zoom / config.zoom_step)


def seek_time_from_pointer(
    client_x: float, origin_x: float, scroll_left: float, zoom: float
) -> float:
    """Seconds under a pointer at ``client_x``.

    ``origin_x`` is the left edge of the track area on screen and
    ``scroll_left`` its horizontal scroll offset. Clamped at 0, unbounded above.
    """
    return pixel_to_time(client_x - origin_x + scroll_left, zoom)


def timeline_width(
    duration: float, zoom: float, min_width: Optional[float] = None
) -> float:
    if min_width is None:
        min_width = DEFAULT_CONFIG.min_timeline_width
    return max(time_to_pixel(duration, zoom), min_width)


def clip_extent(clip: Clip, zoom: float) -> Tuple[float, float]:
    """(left, width) in pixels of a clip block."""
    return time_to_pixel(clip.start, zoom), time_to_pixel(clip.duration, zoom)


@dataclass(frozen=True)
class RulerTick:
    seconds: int
    x: float
    major: bool
    label: Optional[str] = None


def ruler_ticks(duration: float, zoom: float) -> List[RulerTick]:
    """One tick per second; every fifth is major and labelled.

    The ruler runs to the next multiple of five past ``duration`` plus a tail,
    and minor ticks are dropped when zoomed out below ``MINOR_TICK_MIN_ZOOM``.
    """
    _check_zoom(zoom)
    last = math.ceil(max(0.0, duration) / MAJOR_TICK_EVERY) * MAJOR_TICK_EVERY + RULER_TAIL
    show_minor = zoom >= MINOR_TICK_MIN_ZOOM
    ticks: List[RulerTick] = []
    for i in range(last + 1):
        major = i % MAJOR_TICK_EVERY == 0
        if not major and not show_minor:
            continue
        ticks.append(
            RulerTick(
                seconds=i,
                x=i * zoom,
                major=major,
                label=format_ruler_label(i) if major else None,
            )
        )
    return ticks
