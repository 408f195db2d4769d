from .playback import PlaybackClock, ClockToken, advance_playhead  # noqa: F401
from .probe import probe_asset  # noqa: F401

__all__ = ["PlaybackClock", "ClockToken", "advance_playhead", "probe_asset"]
