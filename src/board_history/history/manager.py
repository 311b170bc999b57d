"""Undo/redo manager binding a timeline, a restore guard and an importer."""

from __future__ import annotations

from typing import Callable, List, Optional

from board_history.runtime import telemetry
from board_history.runtime.config import HistoryConfig

from .guard import Importer, RestoreGuard, SnapshotImportError
from .snapshot import Snapshot, SnapshotLike
from .timeline import SnapshotTimeline, TimelineStats

HistoryListener = Callable[[bool, bool], None]


class HistoryManager:
    """Steps through a ``SnapshotTimeline`` and applies the result silently.

    ``importer`` must apply a snapshot to the live document without firing
    the document's change notifications. A failed import is rolled back so
    the timeline keeps pointing at the state actually shown on the board.
    """

    def __init__(
        self,
        importer: Importer,
        *,
        config: Optional[HistoryConfig] = None,
        timeline: Optional[SnapshotTimeline] = None,
        guard: Optional[RestoreGuard] = None,
        logger_name: str | None = None,
    ) -> None:
        self.importer = importer
        self._logger_name = logger_name
        if timeline is None:
            capacity = (config or HistoryConfig.from_env()).max_history
            self.guard = guard or RestoreGuard(logger_name=logger_name)
            timeline = SnapshotTimeline(
                capacity, guard=self.guard, logger_name=logger_name
            )
        else:
            if guard is not None and timeline.guard not in (None, guard):
                raise ValueError("timeline is already bound to a different RestoreGuard")
            self.guard = guard or timeline.guard or RestoreGuard(logger_name=logger_name)
            timeline.guard = self.guard
        self.timeline = timeline
        self._listeners: List[HistoryListener] = []

    @property
    def restoring(self) -> bool:
        return self.guard.active

    def subscribe(self, callback: HistoryListener) -> None:
        self._listeners.append(callback)

    def stats(self) -> TimelineStats:
        return self.timeline.stats()

    def can_undo(self) -> bool:
        return self.timeline.can_undo()

    def can_redo(self) -> bool:
        return self.timeline.can_redo()

    def reset(self, snapshot: SnapshotLike) -> None:
        self.timeline.initialize(snapshot)
        self._notify()

    def record(self, snapshot: SnapshotLike) -> bool:
        recorded = self.timeline.push(snapshot)
        if recorded:
            self._notify()
        return recorded

    def clear(self) -> None:
        self.timeline.clear()
        self._notify()

    def undo(self) -> bool:
        target = self.timeline.undo()
        if target is None:
            return False
        self._restore(target, direction="undo")
        return True

    def redo(self) -> bool:
        target = self.timeline.redo()
        if target is None:
            return False
        self._restore(target, direction="redo")
        return True

    def _restore(self, target: Snapshot, *, direction: str) -> None:
        try:
            self.guard.apply(target, self.importer, direction=direction)
        except SnapshotImportError:
            # step back to where the board actually is
            if direction == "undo":
                self.timeline.redo()
            else:
                self.timeline.undo()
            telemetry.record_event(
                "history.rollback",
                level="warning",
                data={"direction": direction, "snapshot": target.digest()},
                logger_name=self._logger_name,
            )
            raise
        finally:
            self._notify()

    def _notify(self) -> None:
        can_undo = self.timeline.can_undo()
        can_redo = self.timeline.can_redo()
        for callback in list(self._listeners):
            callback(can_undo, can_redo)


__all__ = ["HistoryListener", "HistoryManager"]
