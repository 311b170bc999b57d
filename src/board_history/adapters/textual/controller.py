"""Textual-facing controller that routes undo/redo commands to a FileSession."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from board_history.history import Snapshot, SnapshotImportError
from board_history.session import FileSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


UNDO_KEYS = frozenset({"ctrl+z"})
REDO_KEYS = frozenset({"ctrl+y", "ctrl+shift+z"})


@dataclass(slots=True)
class TextualHistoryHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[Snapshot], None]
    update_status: Callable[[str], None] = _noop
    update_controls: Callable[[bool, bool], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHistoryAdapter:
    """Bridges key bindings and buttons to the session's history."""

    def __init__(self, session: FileSession, hooks: TextualHistoryHooks) -> None:
        self.session = session
        self.hooks = hooks
        session.history.subscribe(self._on_history_changed)
        self._on_history_changed(session.can_undo(), session.can_redo())

    def handle_key(self, key: str) -> bool:
        """Return True when ``key`` was an undo/redo binding."""

        normalized = key.lower()
        if normalized in UNDO_KEYS:
            self.undo()
            return True
        if normalized in REDO_KEYS:
            self.redo()
            return True
        return False

    def undo(self) -> str:
        return self._step("undo", self.session.undo)

    def redo(self) -> str:
        return self._step("redo", self.session.redo)

    def _step(self, name: str, action: Callable[[], bool]) -> str:
        self._log_state(f"{name} ->")
        try:
            status = name if action() else f"nothing_to_{name}"
        except SnapshotImportError as exc:
            status = f"restore_failed:{exc}"
        else:
            if status == name:
                self.hooks.update_document(self.session.export_data())
        self.hooks.update_status(status)
        self._log_state(f"{name} <-", status=status)
        return status

    def _on_history_changed(self, can_undo: bool, can_redo: bool) -> None:
        self.hooks.update_controls(can_undo, can_redo)

    def _log_state(self, prefix: str, **fields: object) -> None:
        state = self._state_metadata()
        state.update(fields)
        line = " ".join([prefix, *(f"{key}={value!r}" for key, value in state.items())])
        self.hooks.log(line)

    def _state_metadata(self) -> Dict[str, object]:
        stats = self.session.history.stats()
        return {
            "file": self.session.file_id,
            "depth": stats.depth,
            "pending_redo": stats.pending_redo,
        }


__all__ = ["TextualHistoryAdapter", "TextualHistoryHooks", "UNDO_KEYS", "REDO_KEYS"]
