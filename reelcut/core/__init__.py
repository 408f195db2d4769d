"""Timeline core: pure snapshot model, placement, time mapping, resolution.

Nothing in this package depends on Qt; every function maps one `Project`
snapshot to the next or reads from one.
"""

from .project import (  # noqa: F401
    Clip,
    ClipKind,
    ClipProperties,
    MediaContent,
    Project,
    TextContent,
    Track,
    TrackKind,
    add_track,
    extend_duration,
    find_clip,
    remove_clip,
    seek,
    select_clip,
    selected_clip,
    set_playing,
    set_track_locked,
    set_track_muted,
    toggle_play,
    update_clip_properties,
    update_selected_clip_properties,
)
from .placement import Asset, add_asset, ensure_track, pick_target_track, place_asset  # noqa: F401
from .resolver import (  # noqa: F401
    AudioClipView,
    PreviewMode,
    PrimaryClipView,
    live_clips,
    resolve_active_audio,
    resolve_active_visual,
)
from .timeline import (  # noqa: F401
    pixel_to_time,
    ruler_ticks,
    seek_time_from_pointer,
    time_to_pixel,
    zoom_in,
    zoom_out,
)
