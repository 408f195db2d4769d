"""Describe local media files as placement assets.

`probe_asset` reads a file's length through MoviePy so the placement engine can
use the real duration. Probing is best effort: a file MoviePy cannot open still
yields an `Asset`, just without ``duration``, and placement falls back to its
defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import logging

from moviepy import AudioFileClip, VideoFileClip

from ..core.placement import Asset
from ..core.project import ClipKind, new_id

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = {".mp4", ".mov", ".m4v", ".mkv", ".webm", ".avi"}
AUDIO_EXTENSIONS = {".mp3", ".wav", ".m4a", ".aac", ".ogg", ".flac"}
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp"}


def kind_for_path(path: str | Path) -> Optional[ClipKind]:
    ext = Path(path).suffix.lower()
    if ext in VIDEO_EXTENSIONS:
        return ClipKind.VIDEO
    if ext in AUDIO_EXTENSIONS:
        return ClipKind.AUDIO
    if ext in IMAGE_EXTENSIONS:
        return ClipKind.IMAGE
    return None


def media_duration(path: str | Path, kind: ClipKind) -> Optional[float]:
    """Length in seconds of a video/audio file, None if it cannot be read."""
    opener = VideoFileClip if kind is ClipKind.VIDEO else AudioFileClip
    try:
        clip = opener(str(path))
    except Exception as e:  # moviepy raises OSError/IOError/KeyError on bad media
        logger.warning("could not probe %s: %s", path, e)
        return None
    try:
        duration = getattr(clip, "duration", None)
        return float(duration) if duration else None
    finally:
        clip.close()


def probe_asset(path: str | Path, kind: Optional[ClipKind] = None) -> Asset:
    p = Path(path)
    kind = kind or kind_for_path(p)
    if kind is None:
        raise ValueError(f"cannot tell media kind of {p.name}")
    duration = media_duration(p, kind) if kind.is_timed_media else None
    return Asset(
        id=new_id(),
        kind=kind,
        url=p.resolve().as_uri(),
        name=p.name,
        duration=duration,
    )


__all__ = ["probe_asset", "media_duration", "kind_for_path"]
