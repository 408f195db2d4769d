from .timefmt import format_playhead, format_ruler_label  # noqa: F401

__all__ = ["format_playhead", "format_ruler_label"]
