"""Project model: tracks of timed clips plus playhead state.

A `Project` is an immutable snapshot. Every editing operation in this module is
a pure function ``Project -> Project`` built on `dataclasses.replace`, so a
snapshot handed to a renderer or a clock tick can never be modified under it.
Operations given an id that resolves to nothing return the very same snapshot
object; callers can test ``new is old`` to detect a no-op.

Clip payloads are a small tagged union: media-backed kinds (video, audio, image)
carry a `MediaContent`, text clips carry a `TextContent`. `Clip.media_src` and
`Clip.text_content` read through to whichever payload applies.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace, asdict
from enum import Enum
from functools import cached_property
from typing import Any, Iterator, Mapping, Optional, Tuple, Union
import logging
import math
import random
import string

from ..config import DEFAULT_CONFIG, EditorConfig
from ..errors import (
    InvalidPropertyError,
    InvalidTimeError,
    TrackMembershipError,
    UnknownPropertyError,
)

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id(length: int = 9) -> str:
    """Short random base-36 identifier for tracks and clips."""
    return "".join(random.choices(_ID_ALPHABET, k=length))


class TrackKind(str, Enum):
    VISUAL = "visual"
    AUDIO = "audio"


class ClipKind(str, Enum):
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    TEXT = "TEXT"
    IMAGE = "IMAGE"

    @property
    def track_kind(self) -> TrackKind:
        """Kind of track this clip kind is placed on."""
        return TrackKind.AUDIO if self is ClipKind.AUDIO else TrackKind.VISUAL

    @property
    def is_timed_media(self) -> bool:
        return self in (ClipKind.VIDEO, ClipKind.AUDIO)


# camelCase names used by property panels and foreign project data.
_PROPERTY_ALIASES = {"positionX": "position_x", "positionY": "position_y"}
_PERCENT_PROPERTIES = frozenset({"opacity", "volume"})


@dataclass(frozen=True)
class ClipProperties:
    opacity: float = 100.0  # 0-100
    scale: float = 100.0  # percent
    position_x: float = 0.0
    position_y: float = 0.0
    rotation: float = 0.0  # degrees
    volume: float = 100.0  # 0-100
    speed: float = 1.0  # playback rate, video/audio only

    @classmethod
    def names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def normalize(cls, partial: Mapping[str, Any]) -> dict[str, float]:
        """Map aliases to field names and coerce values to float.

        Opacity and volume are clamped to 0-100 and scale to >= 0. Unknown
        names raise `UnknownPropertyError`; non-numeric or non-finite values
        and a speed <= 0 raise `InvalidPropertyError`.
        """
        renamed = {_PROPERTY_ALIASES.get(k, k): v for k, v in partial.items()}
        unknown = set(renamed) - cls.names()
        if unknown:
            raise UnknownPropertyError(unknown)
        out = {}
        for name, raw in renamed.items():
            try:
                value = float(raw)
            except (TypeError, ValueError):
                raise InvalidPropertyError(name, raw) from None
            if not math.isfinite(value):
                raise InvalidPropertyError(name, raw)
            if name in _PERCENT_PROPERTIES:
                value = min(max(value, 0.0), 100.0)
            elif name == "scale":
                value = max(value, 0.0)
            elif name == "speed" and value <= 0:
                raise InvalidPropertyError(name, raw)
            out[name] = value
        return out

    def merged(self, partial: Mapping[str, Any]) -> "ClipProperties":
        return replace(self, **self.normalize(partial))


@dataclass(frozen=True)
class MediaContent:
    src: Optional[str] = None


@dataclass(frozen=True)
class TextContent:
    text: str = ""


ClipContent = Union[MediaContent, TextContent]


@dataclass(frozen=True)
class Clip:
    id: str
    track_id: str
    kind: ClipKind
    name: str
    start: float  # seconds, timeline absolute
    duration: float  # seconds
    content: ClipContent = field(default_factory=MediaContent)
    properties: ClipProperties = field(default_factory=ClipProperties)

    def __post_init__(self):
        if self.start < 0:
            raise InvalidTimeError(f"clip start must be >= 0, got {self.start}")
        if self.duration <= 0:
            raise InvalidTimeError(
                f"clip duration must be > 0, got {self.duration}"
            )
        expected = TextContent if self.kind is ClipKind.TEXT else MediaContent
        if not isinstance(self.content, expected):
            raise TypeError(
                f"{self.kind.value} clip needs {expected.__name__}, "
                f"got {type(self.content).__name__}"
            )

    @property
    def end(self) -> float:
        return self.start + self.duration

    @property
    def media_src(self) -> Optional[str]:
        return self.content.src if isinstance(self.content, MediaContent) else None

    @property
    def text_content(self) -> Optional[str]:
        return self.content.text if isinstance(self.content, TextContent) else None

    def is_live_at(self, t: float) -> bool:
        """Half-open interval test: start <= t < end."""
        return self.start <= t < self.end


@dataclass(frozen=True)
class Track:
    id: str
    kind: TrackKind = TrackKind.VISUAL
    is_muted: bool = False
    is_locked: bool = False
    clips: Tuple[Clip, ...] = ()

    def __post_init__(self):
        for clip in self.clips:
            if clip.track_id != self.id:
                raise TrackMembershipError(
                    f"clip {clip.id} claims track {clip.track_id}, held by {self.id}"
                )

    def with_clip(self, clip: Clip) -> "Track":
        return replace(self, clips=self.clips + (replace(clip, track_id=self.id),))


@dataclass(frozen=True)
class Project:
    tracks: Tuple[Track, ...] = ()
    current_time: float = 0.0
    duration: float = DEFAULT_CONFIG.initial_duration
    selected_clip_id: Optional[str] = None
    is_playing: bool = False

    @classmethod
    def new(cls, config: EditorConfig = DEFAULT_CONFIG) -> "Project":
        """Fresh session skeleton: one visual track, one audio track."""
        return cls(
            tracks=(
                Track(id=new_id(), kind=TrackKind.VISUAL),
                Track(id=new_id(), kind=TrackKind.AUDIO),
            ),
            duration=config.initial_duration,
        )

    # id -> (track index, clip index); a new snapshot gets a new index.
    @cached_property
    def _clip_index(self) -> dict[str, Tuple[int, int]]:
        index: dict[str, Tuple[int, int]] = {}
        for ti, track in enumerate(self.tracks):
            for ci, clip in enumerate(track.clips):
                index.setdefault(clip.id, (ti, ci))
        return index

    def iter_clips(self) -> Iterator[Clip]:
        for track in self.tracks:
            yield from track.clips

    def find_clip(self, clip_id: Optional[str]) -> Optional[Clip]:
        if clip_id is None:
            return None
        loc = self._clip_index.get(clip_id)
        if loc is None:
            return None
        ti, ci = loc
        return self.tracks[ti].clips[ci]

    def track_index(self, track_id: str) -> Optional[int]:
        for i, track in enumerate(self.tracks):
            if track.id == track_id:
                return i
        return None

    def track(self, track_id: str) -> Optional[Track]:
        i = self.track_index(track_id)
        return None if i is None else self.tracks[i]

    def content_end(self) -> float:
        """End time of the latest clip, 0 for an empty timeline."""
        return max((c.end for c in self.iter_clips()), default=0.0)

    # --- Plain-data conversion (snapshot exchange with collaborators) ---
    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        for track_d, track in zip(d["tracks"], self.tracks):
            track_d["kind"] = track.kind.value
            for clip_d, clip in zip(track_d["clips"], track.clips):
                clip_d["kind"] = clip.kind.value
                clip_d.pop("content")
                clip_d["media_src"] = clip.media_src
                clip_d["text_content"] = clip.text_content
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Project":
        tracks = []
        for track_d in data.get("tracks", []):
            track_id = str(track_d["id"])
            clips = tuple(_clip_from_dict(c, track_id) for c in track_d.get("clips", []))
            tracks.append(
                Track(
                    id=track_id,
                    kind=TrackKind(track_d.get("kind", TrackKind.VISUAL.value)),
                    is_muted=bool(track_d.get("is_muted", False)),
                    is_locked=bool(track_d.get("is_locked", False)),
                    clips=clips,
                )
            )
        return cls(
            tracks=tuple(tracks),
            current_time=float(data.get("current_time", 0.0)),
            duration=float(data.get("duration", DEFAULT_CONFIG.initial_duration)),
            selected_clip_id=data.get("selected_clip_id"),
            is_playing=bool(data.get("is_playing", False)),
        )


def _clip_from_dict(data: Mapping[str, Any], track_id: str) -> Clip:
    kind = ClipKind(data["kind"])
    if kind is ClipKind.TEXT:
        content: ClipContent = TextContent(
            data.get("text_content") or data.get("name", "")
        )
    else:
        content = MediaContent(data.get("media_src"))
    return Clip(
        id=str(data["id"]),
        track_id=track_id,
        kind=kind,
        name=data.get("name", ""),
        start=float(data["start"]),
        duration=float(data["duration"]),
        content=content,
        properties=ClipProperties().merged(data.get("properties", {})),
    )


# --- Pure snapshot transitions ---


def _replace_track(project: Project, index: int, track: Track) -> Project:
    tracks = project.tracks[:index] + (track,) + project.tracks[index + 1 :]
    return replace(project, tracks=tracks)


def add_track(
    project: Project, kind: TrackKind = TrackKind.VISUAL, track_id: Optional[str] = None
) -> Project:
    track = Track(id=track_id or new_id(), kind=kind)
    logger.debug("add track %s (%s)", track.id, kind.value)
    return replace(project, tracks=project.tracks + (track,))


def find_clip(project: Project, clip_id: Optional[str]) -> Optional[Clip]:
    return project.find_clip(clip_id)


def selected_clip(project: Project) -> Optional[Clip]:
    return project.find_clip(project.selected_clip_id)


def select_clip(project: Project, clip_id: Optional[str]) -> Project:
    # Dangling ids are allowed; they resolve to "no clip" on read.
    return replace(project, selected_clip_id=clip_id)


def update_clip_properties(
    project: Project, clip_id: str, partial: Mapping[str, Any]
) -> Project:
    """Merge ``partial`` into one clip's properties.

    Values go through `ClipProperties.normalize`, so bad names or values raise
    even when ``clip_id`` is unknown. An unknown ``clip_id`` otherwise returns
    ``project`` itself.
    """
    normalized = ClipProperties.normalize(partial)
    loc = project._clip_index.get(clip_id)
    if loc is None:
        logger.debug("update_clip_properties: no clip %s", clip_id)
        return project
    ti, ci = loc
    track = project.tracks[ti]
    clip = track.clips[ci]
    new_clip = replace(clip, properties=replace(clip.properties, **normalized))
    clips = track.clips[:ci] + (new_clip,) + track.clips[ci + 1 :]
    return _replace_track(project, ti, replace(track, clips=clips))


def update_selected_clip_properties(
    project: Project, partial: Mapping[str, Any]
) -> Project:
    if project.selected_clip_id is None:
        return project
    return update_clip_properties(project, project.selected_clip_id, partial)


def remove_clip(project: Project, clip_id: str) -> Project:
    loc = project._clip_index.get(clip_id)
    if loc is None:
        return project
    ti, ci = loc
    track = project.tracks[ti]
    clips = track.clips[:ci] + track.clips[ci + 1 :]
    result = _replace_track(project, ti, replace(track, clips=clips))
    if project.selected_clip_id == clip_id:
        result = replace(result, selected_clip_id=None)
    logger.debug("removed clip %s from track %s", clip_id, track.id)
    return result


def set_track_muted(project: Project, track_id: str, muted: bool) -> Project:
    i = project.track_index(track_id)
    if i is None:
        return project
    return _replace_track(project, i, replace(project.tracks[i], is_muted=muted))


def set_track_locked(project: Project, track_id: str, locked: bool) -> Project:
    i = project.track_index(track_id)
    if i is None:
        return project
    return _replace_track(project, i, replace(project.tracks[i], is_locked=locked))


def seek(project: Project, t: float) -> Project:
    # No upper clamp: the playback clock handles positions past the end.
    return replace(project, current_time=max(0.0, float(t)))


def set_playing(project: Project, playing: bool) -> Project:
    if project.is_playing == playing:
        return project
    return replace(project, is_playing=playing)


def toggle_play(project: Project) -> Project:
    return set_playing(project, not project.is_playing)


def extend_duration(project: Project, end: float, padding: float = 0.0) -> Project:
    """Grow the timeline so ``end`` (plus padding) fits; never shrinks."""
    wanted = end + padding
    if wanted <= project.duration:
        return project
    logger.debug("extend duration %.3f -> %.3f", project.duration, wanted)
    return replace(project, duration=wanted)


__all__ = [
    "TrackKind",
    "ClipKind",
    "ClipProperties",
    "MediaContent",
    "TextContent",
    "ClipContent",
    "Clip",
    "Track",
    "Project",
    "new_id",
    "add_track",
    "find_clip",
    "selected_clip",
    "select_clip",
    "update_clip_properties",
    "update_selected_clip_properties",
    "remove_clip",
    "set_track_muted",
    "set_track_locked",
    "seek",
    "set_playing",
    "toggle_play",
    "extend_duration",
]
