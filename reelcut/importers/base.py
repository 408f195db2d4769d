"""Contract for foreign-project importers.

An importer turns someone else's project file into a complete `Project`
snapshot or returns None. It never hands back a half-built project: any
problem with the input means "nothing imported".
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from ..config import DEFAULT_CONFIG, EditorConfig
from ..core.project import Project

__all__ = ["ProjectImporter", "imported_duration"]


@runtime_checkable
class ProjectImporter(Protocol):
    def import_project(self, data: Any) -> Optional[Project]: ...


def imported_duration(latest_end: float, config: EditorConfig = DEFAULT_CONFIG) -> float:
    """Timeline length for an imported project: padded, with a floor."""
    return max(latest_end + config.duration_padding, config.min_import_duration)
