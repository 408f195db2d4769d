"""Top-level package exports.

Public API surface (keep minimal):
 - EditorSession (owns the project snapshot and the playback clock)
 - Project, Track, Clip, Asset and their kinds (timeline model)
 - resolve_active_visual / resolve_active_audio (what the renderer draws and mixes)

Pure editing functions live in `reelcut.core`; importers in `reelcut.importers`.
"""

from .config import EditorConfig  # noqa: F401
from .core.placement import Asset  # noqa: F401
from .core.project import Clip, ClipKind, ClipProperties, Project, Track, TrackKind  # noqa: F401
from .core.resolver import resolve_active_audio, resolve_active_visual  # noqa: F401
from .session import EditorSession  # noqa: F401

__all__ = [
    "EditorConfig",
    "EditorSession",
    "Asset",
    "Clip",
    "ClipKind",
    "ClipProperties",
    "Project",
    "Track",
    "TrackKind",
    "resolve_active_visual",
    "resolve_active_audio",
]
