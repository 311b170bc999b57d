"""Snapshot timeline, restore guard and undo/redo manager."""

from .guard import Importer, RestoreGuard, SnapshotImportError
from .manager import HistoryListener, HistoryManager
from .snapshot import Snapshot, SnapshotLike
from .timeline import SnapshotTimeline, TimelineStats

__all__ = [
    "HistoryListener",
    "HistoryManager",
    "Importer",
    "RestoreGuard",
    "Snapshot",
    "SnapshotImportError",
    "SnapshotLike",
    "SnapshotTimeline",
    "TimelineStats",
]
