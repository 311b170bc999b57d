"""Bounded, linear undo/redo timeline of board snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from board_history.runtime import telemetry
from board_history.runtime.config import DEFAULT_MAX_HISTORY, validate_capacity

from .guard import RestoreGuard
from .snapshot import Snapshot, SnapshotLike


@dataclass(slots=True)
class TimelineStats:
    """Lightweight snapshot describing timeline state."""

    depth: int
    pending_redo: int
    capacity: int


class SnapshotTimeline:
    """Two-stack history: ``_history`` oldest first, ``_future`` next redo last.

    The current board state is always ``_history[-1]``. Any recorded push
    empties ``_future``, so the timeline never branches.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_MAX_HISTORY,
        *,
        guard: RestoreGuard | None = None,
        logger_name: str | None = None,
    ) -> None:
        self.capacity = validate_capacity(capacity, key="capacity")
        self.guard = guard
        self._history: List[Snapshot] = []
        self._future: List[Snapshot] = []
        self._logger_name = logger_name

    def __len__(self) -> int:
        return len(self._history)

    @property
    def current(self) -> Optional[Snapshot]:
        return self._history[-1] if self._history else None

    def entries(self) -> tuple[Snapshot, ...]:
        return tuple(self._history)

    def pending(self) -> tuple[Snapshot, ...]:
        return tuple(self._future)

    def stats(self) -> TimelineStats:
        return TimelineStats(
            depth=len(self._history),
            pending_redo=len(self._future),
            capacity=self.capacity,
        )

    def initialize(self, snapshot: SnapshotLike) -> None:
        seed = Snapshot.coerce(snapshot)
        self._history = [seed]
        self._future = []
        self._event("history.initialize", snapshot=seed.digest())

    def push(self, snapshot: SnapshotLike) -> bool:
        """Record ``snapshot`` as the new current state.

        Returns ``False`` when the push was absorbed: a restore is in progress
        or the snapshot equals the current entry. Neither case touches the
        redo buffer.
        """

        entry = Snapshot.coerce(snapshot)
        if self.guard is not None and self.guard.active:
            self._event("history.skip", reason="restoring", snapshot=entry.digest())
            return False
        if self._history and self._history[-1] == entry:
            self._event("history.skip", reason="duplicate", snapshot=entry.digest())
            return False

        self._future.clear()
        self._history.append(entry)
        if len(self._history) > self.capacity:
            evicted = self._history.pop(0)
            self._event("history.evict", snapshot=evicted.digest())
        self._event("history.record", snapshot=entry.digest(), depth=len(self._history))
        return True

    def can_undo(self) -> bool:
        return len(self._history) >= 2

    def can_redo(self) -> bool:
        return bool(self._future)

    def undo(self) -> Optional[Snapshot]:
        if not self.can_undo():
            return None
        self._future.append(self._history.pop())
        target = self._history[-1]
        self._event("history.undo", snapshot=target.digest(), depth=len(self._history))
        return target

    def redo(self) -> Optional[Snapshot]:
        if not self.can_redo():
            return None
        target = self._future.pop()
        self._history.append(target)
        self._event("history.redo", snapshot=target.digest(), depth=len(self._history))
        return target

    def clear(self) -> None:
        self._history.clear()
        self._future.clear()
        self._event("history.clear")

    def _event(self, name: str, **data: object) -> None:
        telemetry.record_event(
            name, level="debug", data=data, logger_name=self._logger_name
        )


__all__ = ["SnapshotTimeline", "TimelineStats"]
