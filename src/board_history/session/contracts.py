"""Boundary types shared between the session and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from board_history.history import Snapshot


@dataclass(slots=True)
class StoreResult:
    """Outcome of a file-store call."""

    success: bool
    error: Optional[str] = None
    name: Optional[str] = None
    storage_deleted: bool = True


class BoardDocument(Protocol):
    """The live board the session serializes and restores."""

    def serialize_state(self) -> Snapshot:
        """Return a deterministic snapshot of the current board."""
        ...

    def import_state(self, snapshot: Snapshot, *, notify_listeners: bool = False) -> bool:
        """Replace the board contents with ``snapshot``.

        With ``notify_listeners=False`` the board must not fire its usual
        change notifications.
        """
        ...


class FileStore(Protocol):
    """Remote storage for board files."""

    async def save(self, file_id: str, snapshot: Snapshot) -> StoreResult: ...

    async def load(self, file_id: str) -> Snapshot: ...

    async def file_title(self, file_id: str) -> StoreResult: ...

    async def validate_file_name(self, file_id: str, new_name: str) -> StoreResult: ...

    async def rename_file(self, file_id: str, new_name: str) -> StoreResult: ...

    async def delete_file(self, file_id: str) -> StoreResult: ...


class FileOperationError(RuntimeError):
    """Raised when the file store reports a failed operation."""

    def __init__(
        self,
        message: str,
        *,
        file_id: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.file_id = file_id
        self.operation = operation


__all__ = ["BoardDocument", "FileOperationError", "FileStore", "StoreResult"]
