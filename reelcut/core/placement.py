"""Placement engine: turning assets into clips on the timeline.

Two entry points:
    place_asset(project, track_id, start, asset)   # drop onto a known track
    add_asset(project, asset, start=None)          # click-to-add, track picked by kind

Both auto-select the new clip and grow the timeline when the clip ends past
the current duration. Dropping onto a track id that does not exist, or adding
an asset when no track of the right kind exists, returns the project unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple
import logging

from ..config import DEFAULT_CONFIG, EditorConfig
from .project import (
    Clip,
    ClipKind,
    ClipProperties,
    MediaContent,
    Project,
    TextContent,
    add_track,
    extend_duration,
    new_id,
)

logger = logging.getLogger(__name__)

__all__ = [
    "Asset",
    "resolve_duration",
    "clip_from_asset",
    "place_asset",
    "pick_target_track",
    "ensure_track",
    "add_asset",
]


@dataclass(frozen=True)
class Asset:
    """Media handed over by ingestion or generation.

    ``duration`` is the authoritative media length when known. ``text`` holds a
    generated text body; when absent a text clip shows the asset name.
    """

    id: str
    kind: ClipKind
    url: str = ""
    name: str = ""
    thumbnail: Optional[str] = None
    duration: Optional[float] = None
    text: Optional[str] = None


def resolve_duration(asset: Asset, config: EditorConfig = DEFAULT_CONFIG) -> float:
    if asset.duration is not None and asset.duration > 0:
        return float(asset.duration)
    if asset.kind.is_timed_media:
        return config.default_media_duration
    return config.default_still_duration


def clip_from_asset(
    asset: Asset,
    track_id: str,
    start: float,
    config: EditorConfig = DEFAULT_CONFIG,
) -> Clip:
    if asset.kind is ClipKind.TEXT:
        content = TextContent(asset.text if asset.text else asset.name)
    else:
        content = MediaContent(asset.url)
    return Clip(
        id=new_id(),
        track_id=track_id,
        kind=asset.kind,
        name=asset.name,
        start=max(0.0, float(start)),
        duration=resolve_duration(asset, config),
        content=content,
        properties=ClipProperties(),
    )


def place_asset(
    project: Project,
    track_id: str,
    start: float,
    asset: Asset,
    config: EditorConfig = DEFAULT_CONFIG,
) -> Project:
    index = project.track_index(track_id)
    if index is None:
        logger.warning("drop onto unknown track %s ignored", track_id)
        return project
    clip = clip_from_asset(asset, track_id, start, config)
    track = project.tracks[index].with_clip(clip)
    tracks = project.tracks[:index] + (track,) + project.tracks[index + 1 :]
    result = replace(project, tracks=tracks, selected_clip_id=clip.id)
    logger.debug(
        "placed %s clip %s on track %s at %.3f (%.3fs)",
        clip.kind.value,
        clip.id,
        track_id,
        clip.start,
        clip.duration,
    )
    return extend_duration(result, clip.end, config.duration_padding)


def pick_target_track(project: Project, kind: ClipKind) -> Optional[str]:
    """First track able to hold ``kind``: audio clips on audio tracks, the rest visual."""
    wanted = kind.track_kind
    for track in project.tracks:
        if track.kind is wanted:
            return track.id
    return None


def ensure_track(project: Project, kind: ClipKind) -> Tuple[Project, str]:
    track_id = pick_target_track(project, kind)
    if track_id is not None:
        return project, track_id
    track_id = new_id()
    return add_track(project, kind.track_kind, track_id=track_id), track_id


def add_asset(
    project: Project,
    asset: Asset,
    start: Optional[float] = None,
    config: EditorConfig = DEFAULT_CONFIG,
) -> Project:
    track_id = pick_target_track(project, asset.kind)
    if track_id is None:
        logger.warning(
            "no %s track for %s asset %s",
            asset.kind.track_kind.value,
            asset.kind.value,
            asset.id,
        )
        return project
    at = project.current_time if start is None else start
    return place_asset(project, track_id, at, asset, config)

