"""Active-clip resolution: what is on screen and on air at a given time.

The preview shows exactly one visual clip, the *primary clip*. Candidates are
the clips of unmuted visual tracks whose half-open range ``[start, end)``
contains the playhead, taken in track order and then clip order; the last
candidate wins. Audio is not mixed here: `resolve_active_audio` only lists the
live clips of unmuted audio tracks for the external mixer.

Every view's ``local_time`` is the position in the clip's source, in seconds.
For video and audio that is the elapsed timeline time scaled by the clip's
``speed``; images and text have no source clock and use elapsed time as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .project import Clip, ClipKind, Project, TrackKind

__all__ = [
    "PreviewMode",
    "PrimaryClipView",
    "AudioClipView",
    "live_clips",
    "source_time",
    "resolve_active_visual",
    "resolve_active_audio",
    "PLACEHOLDER_SRC",
]

PLACEHOLDER_SRC = "placeholder://no-media"


class PreviewMode(str, Enum):
    TEXT = "text"
    MEDIA = "media"
    AUDIO = "audio"  # "audio playing" indicator, no pixels


@dataclass(frozen=True)
class PrimaryClipView:
    """Resolved visual for the preview frame."""

    clip: Clip
    mode: PreviewMode
    source: str  # text to draw, a media locator, or "" for audio
    local_time: float  # seconds into the clip's source
    opacity: float
    scale: float
    rotation: float
    position: Tuple[float, float]
    volume: float
    speed: float

    @property
    def clip_id(self) -> str:
        return self.clip.id


@dataclass(frozen=True)
class AudioClipView:
    clip: Clip
    source: Optional[str]
    local_time: float
    volume: float
    speed: float

    @property
    def clip_id(self) -> str:
        return self.clip.id


def live_clips(project: Project, t: float, kind: TrackKind) -> List[Clip]:
    """Clips of unmuted ``kind`` tracks live at ``t``, in flattened track order."""
    return [
        clip
        for track in project.tracks
        if track.kind is kind and not track.is_muted
        for clip in track.clips
        if clip.is_live_at(t)
    ]


def source_time(clip: Clip, t: float) -> float:
    """Seconds into ``clip``'s source at timeline time ``t``."""
    elapsed = t - clip.start
    if clip.kind.is_timed_media:
        return elapsed * clip.properties.speed
    return elapsed


def _primary_view(clip: Clip, t: float) -> PrimaryClipView:
    props = clip.properties
    if clip.kind is ClipKind.TEXT:
        mode = PreviewMode.TEXT
        source = clip.text_content or clip.name
    elif clip.kind is ClipKind.AUDIO:
        mode = PreviewMode.AUDIO
        source = ""
    else:
        mode = PreviewMode.MEDIA
        source = clip.media_src or PLACEHOLDER_SRC
    return PrimaryClipView(
        clip=clip,
        mode=mode,
        source=source,
        local_time=source_time(clip, t),
        opacity=props.opacity,
        scale=props.scale,
        rotation=props.rotation,
        position=(props.position_x, props.position_y),
        volume=props.volume,
        speed=props.speed,
    )


def resolve_active_visual(
    project: Project, t: Optional[float] = None
) -> Optional[PrimaryClipView]:
    """Primary clip at ``t`` (default: the playhead), or None for "no frame".

    An audio clip sitting on a visual track can win; its view has mode
    `PreviewMode.AUDIO` and carries no picture.
    """
    at = project.current_time if t is None else t
    candidates = live_clips(project, at, TrackKind.VISUAL)
    if not candidates:
        return None
    return _primary_view(candidates[-1], at)


def resolve_active_audio(
    project: Project, t: Optional[float] = None
) -> List[AudioClipView]:
    at = project.current_time if t is None else t
    return [
        AudioClipView(
            clip=clip,
            source=clip.media_src,
            local_time=source_time(clip, at),
            volume=clip.properties.volume,
            speed=clip.properties.speed,
        )
        for clip in live_clips(project, at, TrackKind.AUDIO)
    ]
