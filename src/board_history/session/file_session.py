"""File session: the coordinator between a live board, its history and storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from board_history.history import HistoryManager, Snapshot, SnapshotLike
from board_history.runtime import telemetry
from board_history.runtime.config import HistoryConfig

from .contracts import BoardDocument, FileOperationError, FileStore, StoreResult

UNTITLED = "Untitled"
LOGGER_NAME = "board_history.session"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class SessionHooks:
    """Callbacks the host UI registers to follow session state."""

    update_title: Callable[[str], None] = _noop
    file_state_changed: Callable[[Optional[str]], None] = _noop
    history_changed: Callable[[bool, bool], None] = _noop


class FileSession:
    """Owns one open board file and routes every capture through its history.

    Mutations call ``save_state``; undo/redo commands call ``undo``/``redo``,
    which restore through the history's guard so the import is never
    captured as a new edit.
    """

    def __init__(
        self,
        document: BoardDocument,
        store: FileStore,
        *,
        file_id: Optional[str] = None,
        config: Optional[HistoryConfig] = None,
        hooks: Optional[SessionHooks] = None,
    ) -> None:
        self.document = document
        self.store = store
        self.file_id = file_id
        self.hooks = hooks or SessionHooks()
        self.history = HistoryManager(
            self._import_silently,
            config=config,
            logger_name="board_history.history",
        )
        self.history.subscribe(self.hooks.history_changed)

    def _import_silently(self, snapshot: Snapshot) -> bool:
        return self.document.import_state(snapshot, notify_listeners=False)

    def init_history(self) -> None:
        self.history.reset(self.document.serialize_state())

    def capture(self) -> bool:
        """Record the current board without uploading it."""

        if self.history.restoring:
            return False
        return self.history.record(self.document.serialize_state())

    async def save_state(self) -> bool:
        """Capture the board into history, then upload it.

        Capture happens before the upload so a failed upload still leaves an
        undo entry.
        """

        with telemetry.span(
            "session::save_state",
            logger_name=LOGGER_NAME,
            component="session",
            metadata={"file_id": self.file_id or "-"},
        ) as handle:
            snapshot = self.document.serialize_state()
            if not self.history.restoring:
                handle.add_metadata("recorded", self.history.record(snapshot))
            if self.file_id is None:
                handle.add_metadata("skipped", "no_file")
                return False
            result = await self.store.save(self.file_id, snapshot)
            if not result.success:
                handle.add_metadata("error", result.error or "unknown")
                telemetry.record_event(
                    "session.save_failed",
                    level="warning",
                    data={"file_id": self.file_id, "error": result.error},
                    logger_name=LOGGER_NAME,
                )
            return result.success

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    async def load_state(self, file_id: Optional[str] = None) -> None:
        """Open ``file_id`` (or reload the current file) with a fresh history."""

        target = file_id or self.file_id
        with telemetry.span(
            "session::load_state",
            logger_name=LOGGER_NAME,
            component="session",
            metadata={"file_id": target or "-"},
        ):
            if target != self.file_id:
                self.history.clear()
            if target is not None:
                snapshot = await self.store.load(target)
                self.history.guard.apply(snapshot, self._import_silently, direction="load")
                self.file_id = target
            self.init_history()
        await self.update_file_title()

    def export_data(self) -> Snapshot:
        return self.document.serialize_state()

    async def import_data(self, snapshot: SnapshotLike, *, should_save: bool = True) -> bool:
        entry = Snapshot.coerce(snapshot)
        self.history.guard.apply(entry, self._import_silently, direction="import")
        if should_save:
            return await self.save_state()
        return False

    async def update_file_title(self) -> str:
        if self.file_id is None:
            self.hooks.update_title(UNTITLED)
            self.hooks.file_state_changed(None)
            return UNTITLED

        result = await self.store.file_title(self.file_id)
        if not result.success:
            telemetry.record_event(
                "session.title_failed",
                level="warning",
                data={"file_id": self.file_id, "error": result.error},
                logger_name=LOGGER_NAME,
            )
        title = result.name or UNTITLED
        self.hooks.update_title(title)
        self.hooks.file_state_changed(self.file_id)
        return title

    async def validate_file_name(self, file_id: str, new_name: str) -> str:
        result = await self.store.validate_file_name(file_id, new_name)
        _raise_for_result(result, file_id=file_id, operation="validate_file_name")
        return result.name or new_name

    async def rename_file(self, file_id: str, new_name: str) -> str:
        result = await self.store.rename_file(file_id, new_name)
        _raise_for_result(result, file_id=file_id, operation="rename_file")
        telemetry.record_event(
            "session.renamed",
            data={"file_id": file_id, "name": result.name},
            logger_name=LOGGER_NAME,
        )
        if self.file_id == file_id:
            await self.update_file_title()
        return result.name or new_name

    async def delete_file(self, file_id: str) -> None:
        if not file_id:
            raise FileOperationError(
                "File ID is required for deletion.", operation="delete_file"
            )
        result = await self.store.delete_file(file_id)
        _raise_for_result(result, file_id=file_id, operation="delete_file")
        telemetry.record_event(
            "session.deleted", data={"file_id": file_id}, logger_name=LOGGER_NAME
        )
        if not result.storage_deleted:
            telemetry.record_event(
                "session.storage_cleanup_incomplete",
                level="warning",
                data={"file_id": file_id},
                logger_name=LOGGER_NAME,
            )
        if self.file_id == file_id:
            self.file_id = None
            await self.update_file_title()


def _raise_for_result(result: StoreResult, *, file_id: str, operation: str) -> None:
    if not result.success:
        raise FileOperationError(
            result.error or f"{operation} failed", file_id=file_id, operation=operation
        )


__all__ = ["FileSession", "SessionHooks", "UNTITLED"]
