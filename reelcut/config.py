"""Editor configuration.

All tunables of the timeline engine live in one frozen dataclass so a session
can be built with non-default values in tests. `EditorConfig.from_env()` reads
overrides from ``REELCUT_*`` environment variables (a ``.env`` file in the
working directory is honoured).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
import os

from dotenv import find_dotenv, load_dotenv

__all__ = ["EditorConfig", "DEFAULT_CONFIG"]


@dataclass(frozen=True)
class EditorConfig:
    # Zoom is pixels per second of timeline.
    zoom_min: float = 5.0
    zoom_max: float = 100.0
    zoom_default: float = 20.0
    zoom_step: float = 1.2

    # Playback clock cadence.
    tick_interval_ms: int = 100
    tick_step: float = 0.1

    # Placement fallbacks when an asset carries no duration.
    default_media_duration: float = 10.0  # video / audio
    default_still_duration: float = 5.0  # image / text

    # Timeline length.
    initial_duration: float = 60.0
    duration_padding: float = 5.0
    min_import_duration: float = 60.0

    min_timeline_width: float = 1000.0

    @classmethod
    def from_env(cls, prefix: str = "REELCUT_") -> "EditorConfig":
        """Build a config from environment variables such as ``REELCUT_ZOOM_MAX``."""
        load_dotenv(find_dotenv(usecwd=True))
        overrides = {}
        for f in fields(cls):
            raw = os.getenv(prefix + f.name.upper())
            if raw is None or raw == "":
                continue
            cast = int if f.type in ("int", int) else float
            overrides[f.name] = cast(raw)
        return cls(**overrides)

    def clamp_zoom(self, zoom: float) -> float:
        return min(max(zoom, self.zoom_min), self.zoom_max)


DEFAULT_CONFIG = EditorConfig()
