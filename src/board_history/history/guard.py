"""Re-entrancy guard active while a snapshot is applied back to the board."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from board_history.runtime import telemetry

from .snapshot import Snapshot

Importer = Callable[[Snapshot], object]


class SnapshotImportError(RuntimeError):
    """Raised when the importer could not apply a snapshot to the document."""

    def __init__(
        self,
        message: str,
        *,
        snapshot: Snapshot | None = None,
        direction: str = "restore",
    ) -> None:
        super().__init__(message)
        self.snapshot = snapshot
        self.direction = direction


class RestoreGuard:
    """Suppresses snapshot capture for the duration of a restore.

    Timelines constructed with this guard ignore every ``push`` while
    ``active`` is true, which stops the import triggered by undo/redo from
    being recorded as a fresh edit.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._depth = 0
        self._logger_name = logger_name

    @property
    def active(self) -> bool:
        return self._depth > 0

    @contextmanager
    def restoring(self, snapshot: Optional[Snapshot] = None) -> Iterator[None]:
        metadata: dict[str, object] = {"depth": self._depth + 1}
        if snapshot is not None:
            metadata["snapshot"] = snapshot.digest()
        with telemetry.span(
            "history::restore",
            logger_name=self._logger_name,
            component="history",
            metadata=metadata,
        ):
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1

    def apply(
        self,
        snapshot: Snapshot,
        importer: Importer,
        *,
        direction: str = "restore",
    ) -> None:
        """Run ``importer(snapshot)`` with capture suppressed.

        An importer that raises or returns ``False`` surfaces as
        ``SnapshotImportError``; the guard is released either way.
        """

        try:
            with self.restoring(snapshot):
                outcome = importer(snapshot)
        except SnapshotImportError:
            raise
        except Exception as exc:
            raise SnapshotImportError(
                f"{direction} failed to import snapshot {snapshot.digest()}: {exc}",
                snapshot=snapshot,
                direction=direction,
            ) from exc
        if outcome is False:
            raise SnapshotImportError(
                f"{direction} rejected by importer for snapshot {snapshot.digest()}",
                snapshot=snapshot,
                direction=direction,
            )


__all__ = ["Importer", "RestoreGuard", "SnapshotImportError"]
