"""Editing session: the single owner of the current project snapshot.

UI events call one method each; every method computes the next snapshot with a
pure core function and commits it through `_commit`, which is the only place
``self._project`` is assigned. Playback ticks take the same path, so a seek or
pause can never interleave with a half-applied tick.

The snapshot's ``is_playing`` flag is authoritative. After every commit the
session starts or stops its `PlaybackClock` to match, which covers user
pause, the clock's stop-and-rewind at the end of the timeline, and imports
that replace the whole project.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
import logging

from PySide6.QtCore import QObject, Signal

from .config import DEFAULT_CONFIG, EditorConfig
from .core import placement, project as model, timeline
from .core.placement import Asset
from .core.project import Clip, ClipKind, Project, TrackKind
from .core.resolver import (
    AudioClipView,
    PrimaryClipView,
    resolve_active_audio,
    resolve_active_visual,
)
from .importers.base import ProjectImporter
from .media.playback import PlaybackClock, advance_playhead
from .utils.timefmt import format_playhead

logger = logging.getLogger(__name__)


class EditorSession(QObject):
    """Signals:
    projectChanged(object): new `Project` snapshot after every change.
    zoomChanged(float): pixels per second after a zoom step.
    """

    projectChanged = Signal(object)
    zoomChanged = Signal(float)

    def __init__(
        self,
        project: Optional[Project] = None,
        parent: Optional[QObject] = None,
        *,
        config: EditorConfig = DEFAULT_CONFIG,
    ):
        super().__init__(parent)
        self.config = config
        self._project = project if project is not None else Project.new(config)
        self._zoom = config.zoom_default
        self._closed = False
        self.clock = PlaybackClock(self, config=config)
        self.clock.ticked.connect(self._on_tick)
        self._sync_clock()

    # --- Read side ---
    @property
    def project(self) -> Project:
        return self._project

    @property
    def zoom(self) -> float:
        return self._zoom

    def selected_clip(self) -> Optional[Clip]:
        return model.selected_clip(self._project)

    def find_clip(self, clip_id: str) -> Optional[Clip]:
        return model.find_clip(self._project, clip_id)

    def playhead_label(self) -> str:
        return format_playhead(self._project.current_time)

    def active_visual(self) -> Optional[PrimaryClipView]:
        return resolve_active_visual(self._project)

    def active_audio(self) -> List[AudioClipView]:
        return resolve_active_audio(self._project)

    # --- Transport ---
    def toggle_play(self):
        if self._closed:
            return
        self._commit(model.toggle_play(self._project))

    def play(self):
        if self._closed:
            return
        self._commit(model.set_playing(self._project, True))

    def pause(self):
        self._commit(model.set_playing(self._project, False))

    def seek(self, t: float):
        self._commit(model.seek(self._project, t))

    def seek_pointer(self, client_x: float, origin_x: float, scroll_left: float = 0.0):
        t = timeline.seek_time_from_pointer(client_x, origin_x, scroll_left, self._zoom)
        self.seek(t)

    # --- Zoom ---
    def zoom_in(self):
        self._set_zoom(timeline.zoom_in(self._zoom, self.config))

    def zoom_out(self):
        self._set_zoom(timeline.zoom_out(self._zoom, self.config))

    def _set_zoom(self, zoom: float):
        if zoom == self._zoom:
            return
        self._zoom = zoom
        self.zoomChanged.emit(zoom)

    # --- Editing ---
    def add_track(self, kind: TrackKind = TrackKind.VISUAL):
        self._commit(model.add_track(self._project, kind))

    def place_asset(self, track_id: str, start: float, asset: Asset):
        self._commit(placement.place_asset(self._project, track_id, start, asset, self.config))

    def drop_asset(
        self,
        track_id: str,
        client_x: float,
        origin_x: float,
        asset: Asset,
        scroll_left: float = 0.0,
    ):
        """Place ``asset`` where it was dropped on a track row."""
        t = timeline.seek_time_from_pointer(client_x, origin_x, scroll_left, self._zoom)
        self.place_asset(track_id, t, asset)

    def add_asset(self, asset: Asset, *, create_track: bool = False) -> bool:
        """Click-to-add at the playhead. Returns False when nothing was placed.

        With ``create_track`` a missing track of the right kind is appended first.
        """
        current = self._project
        if create_track:
            current, _ = placement.ensure_track(current, asset.kind)
        result = placement.add_asset(current, asset, config=self.config)
        if result is current:
            return False
        self._commit(result)
        return True

    def select_clip(self, clip_id: Optional[str]):
        self._commit(model.select_clip(self._project, clip_id))

    def update_clip(self, clip_id: str, partial: Mapping[str, Any]):
        self._commit(model.update_clip_properties(self._project, clip_id, partial))

    def update_selected_clip(self, partial: Mapping[str, Any]):
        self._commit(model.update_selected_clip_properties(self._project, partial))

    def remove_clip(self, clip_id: str):
        self._commit(model.remove_clip(self._project, clip_id))

    def set_track_muted(self, track_id: str, muted: bool):
        self._commit(model.set_track_muted(self._project, track_id, muted))

    def set_track_locked(self, track_id: str, locked: bool):
        self._commit(model.set_track_locked(self._project, track_id, locked))

    def import_project(self, importer: ProjectImporter, data: Any) -> bool:
        """Replace the project with an imported one. False if nothing imported."""
        imported = importer.import_project(data)
        if imported is None:
            return False
        self._commit(imported)
        return True

    def close(self):
        """Stop playback for good; no tick is applied after this returns.

        Edits still work on a closed session, but it never plays again.
        """
        self._closed = True
        self.clock.close()
        self._commit(self._project)

    # --- Internal ---
    def _commit(self, new: Project):
        if self._closed and new.is_playing:
            new = model.set_playing(new, False)
        if new is self._project:
            return
        self._project = new
        self._sync_clock()
        self.projectChanged.emit(new)

    def _sync_clock(self):
        if self._project.is_playing and not self.clock.is_running:
            self.clock.start()
        elif not self._project.is_playing and self.clock.is_running:
            self.clock.stop()

    def _on_tick(self, step: float):
        self._commit(advance_playhead(self._project, step))


def kinds_without_track(project: Project) -> List[ClipKind]:
    """Clip kinds that `add_asset` would currently refuse."""
    return [k for k in ClipKind if placement.pick_target_track(project, k) is None]


__all__ = ["EditorSession", "kinds_without_track"]
