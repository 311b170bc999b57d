"""Dictionary-backed ``FileStore`` for the demo host and tests."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict

from board_history.history import Snapshot

from .contracts import FileOperationError, StoreResult

MAX_NAME_LENGTH = 100


@dataclass
class _StoredFile:
    name: str
    snapshot: Snapshot
    saves: int = 0


class InMemoryFileStore:
    def __init__(self) -> None:
        self._files: Dict[str, _StoredFile] = {}
        self._ids = itertools.count(1)

    def create(self, name: str, snapshot: Snapshot) -> str:
        file_id = f"file-{next(self._ids)}"
        self._files[file_id] = _StoredFile(name=name, snapshot=snapshot)
        return file_id

    def stored(self, file_id: str) -> Snapshot:
        return self._files[file_id].snapshot

    def save_count(self, file_id: str) -> int:
        return self._files[file_id].saves

    async def save(self, file_id: str, snapshot: Snapshot) -> StoreResult:
        stored = self._files.get(file_id)
        if stored is None:
            return StoreResult(success=False, error=f"Unknown file '{file_id}'")
        stored.snapshot = snapshot
        stored.saves += 1
        return StoreResult(success=True, name=stored.name)

    async def load(self, file_id: str) -> Snapshot:
        stored = self._files.get(file_id)
        if stored is None:
            raise FileOperationError(
                f"Unknown file '{file_id}'", file_id=file_id, operation="load"
            )
        return stored.snapshot

    async def file_title(self, file_id: str) -> StoreResult:
        stored = self._files.get(file_id)
        if stored is None:
            return StoreResult(success=False, error=f"Unknown file '{file_id}'")
        return StoreResult(success=True, name=stored.name)

    async def validate_file_name(self, file_id: str, new_name: str) -> StoreResult:
        name = new_name.strip()
        if not name:
            return StoreResult(success=False, error="File name cannot be empty")
        if len(name) > MAX_NAME_LENGTH:
            return StoreResult(
                success=False,
                error=f"File name cannot exceed {MAX_NAME_LENGTH} characters",
            )
        for other_id, stored in self._files.items():
            if other_id != file_id and stored.name == name:
                return StoreResult(success=False, error=f"'{name}' already exists")
        return StoreResult(success=True, name=name)

    async def rename_file(self, file_id: str, new_name: str) -> StoreResult:
        if file_id not in self._files:
            return StoreResult(success=False, error=f"Unknown file '{file_id}'")
        checked = await self.validate_file_name(file_id, new_name)
        if not checked.success:
            return checked
        self._files[file_id].name = checked.name or new_name
        return checked

    async def delete_file(self, file_id: str) -> StoreResult:
        if self._files.pop(file_id, None) is None:
            return StoreResult(success=False, error=f"Unknown file '{file_id}'")
        return StoreResult(success=True)


__all__ = ["InMemoryFileStore", "MAX_NAME_LENGTH"]
