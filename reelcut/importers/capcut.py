"""CapCut / JianYing draft importer (``draft_content.json``).

Only the parts of the draft needed to rebuild the timeline are read:

    materials.videos[]  {id, path, duration, type}   type "photo" marks stills
    materials.audios[]  {id, path, duration}
    materials.texts[]   {id, content}
    tracks[]            {id, type, segments[]}
    segments[]          {id, material_id, target_timerange {start, duration}}

Draft times are microseconds. Local media paths cannot be resolved from the
draft alone, so media clips come in without a source locator.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional
import json
import logging
import re

from ..config import DEFAULT_CONFIG, EditorConfig
from ..core.project import (
    Clip,
    ClipContent,
    ClipKind,
    ClipProperties,
    MediaContent,
    Project,
    TextContent,
    Track,
    TrackKind,
    new_id,
)
from .base import imported_duration

logger = logging.getLogger(__name__)

US_PER_SECOND = 1_000_000

__all__ = ["CapCutDraftImporter", "load_capcut_draft", "US_PER_SECOND"]


@dataclass(frozen=True)
class _Material:
    kind: ClipKind
    name: str
    duration: Optional[float] = None
    content: Optional[str] = None


def _basename(path: Optional[str], missing: str, unnamed: str) -> str:
    if not path:
        return missing
    # Drafts may come from Windows or macOS; split on both separators.
    return re.split(r"[\\/]", path)[-1] or unnamed


class CapCutDraftImporter:
    def __init__(self, config: EditorConfig = DEFAULT_CONFIG):
        self.config = config

    def import_project(self, data: Any) -> Optional[Project]:
        """Build a project from a parsed draft, JSON text or bytes.

        Returns None when the draft has no usable tracks or is malformed.
        """
        try:
            if isinstance(data, (str, bytes, bytearray)):
                data = json.loads(data)
            return self._build(data)
        except (ValueError, KeyError, TypeError, AttributeError):
            logger.exception("failed to parse CapCut draft")
            return None

    # Internal
    def _materials(self, materials: Mapping[str, Any]) -> dict[str, _Material]:
        table: dict[str, _Material] = {}
        for m in materials.get("videos") or []:
            kind = ClipKind.IMAGE if m.get("type") == "photo" else ClipKind.VIDEO
            table[m["id"]] = _Material(
                kind=kind,
                name=_basename(m.get("path"), "Video Asset", "Unknown Video"),
                duration=float(m.get("duration", 0)) / US_PER_SECOND,
            )
        for m in materials.get("audios") or []:
            table[m["id"]] = _Material(
                kind=ClipKind.AUDIO,
                name=_basename(m.get("path"), "Audio Asset", "Unknown Audio"),
                duration=float(m.get("duration", 0)) / US_PER_SECOND,
            )
        for m in materials.get("texts") or []:
            table[m["id"]] = _Material(
                kind=ClipKind.TEXT,
                name="Text Layer",
                content=m.get("content") or "Text Layer",
            )
        return table

    def _build(self, data: Mapping[str, Any]) -> Optional[Project]:
        materials = self._materials(data["materials"])
        tracks = []
        latest_end = 0.0
        for cc_track in data["tracks"]:
            segments = cc_track.get("segments") or []
            if not segments:
                continue
            track_id = new_id()
            first = materials.get(segments[0].get("material_id"))
            kind = (
                TrackKind.AUDIO
                if first is not None and first.kind is ClipKind.AUDIO
                else TrackKind.VISUAL
            )
            clips = []
            for seg in segments:
                material = materials.get(seg.get("material_id"))
                if material is None:
                    logger.debug("segment %s: unknown material", seg.get("id"))
                    continue
                timerange = seg["target_timerange"]
                start = float(timerange["start"]) / US_PER_SECOND
                duration = float(timerange["duration"]) / US_PER_SECOND
                if duration <= 0:
                    logger.debug("segment %s: empty time range", seg.get("id"))
                    continue
                latest_end = max(latest_end, start + duration)
                content: ClipContent
                if material.kind is ClipKind.TEXT:
                    content = TextContent(material.content or material.name)
                else:
                    content = MediaContent("")
                clips.append(
                    Clip(
                        id=new_id(),
                        track_id=track_id,
                        kind=material.kind,
                        name=material.name,
                        start=start,
                        duration=duration,
                        content=content,
                        properties=ClipProperties(),
                    )
                )
            tracks.append(Track(id=track_id, kind=kind, clips=tuple(clips)))

        if not tracks:
            logger.info("CapCut draft has no usable tracks")
            return None
        logger.info(
            "imported CapCut draft: %d tracks, %d clips",
            len(tracks),
            sum(len(t.clips) for t in tracks),
        )
        return Project(
            tracks=tuple(tracks),
            current_time=0.0,
            duration=imported_duration(latest_end, self.config),
            selected_clip_id=None,
            is_playing=False,
        )


def load_capcut_draft(
    path: str | Path, config: EditorConfig = DEFAULT_CONFIG
) -> Optional[Project]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError:
        logger.exception("cannot read CapCut draft %s", p)
        return None
    return CapCutDraftImporter(config).import_project(text)
