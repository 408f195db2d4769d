from .base import ProjectImporter, imported_duration  # noqa: F401
from .capcut import CapCutDraftImporter, load_capcut_draft  # noqa: F401

__all__ = [
    "ProjectImporter",
    "imported_duration",
    "CapCutDraftImporter",
    "load_capcut_draft",
]
