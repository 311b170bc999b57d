from __future__ import annotations

import asyncio
from typing import List, Tuple

from board_history.adapters.textual import TextualHistoryAdapter, TextualHistoryHooks
from board_history.history import Snapshot
from board_history.session import FileSession, InMemoryFileStore


class FakeBoard:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.broken = False

    def serialize_state(self) -> Snapshot:
        return Snapshot(self.text)

    def import_state(self, snapshot: Snapshot, *, notify_listeners: bool = False) -> bool:
        if self.broken:
            return False
        self.text = snapshot.payload
        return True


class Recorder:
    def __init__(self) -> None:
        self.documents: List[Snapshot] = []
        self.statuses: List[str] = []
        self.controls: List[Tuple[bool, bool]] = []
        self.logs: List[str] = []

    def hooks(self) -> TextualHistoryHooks:
        return TextualHistoryHooks(
            update_document=self.documents.append,
            update_status=self.statuses.append,
            update_controls=lambda can_undo, can_redo: self.controls.append(
                (can_undo, can_redo)
            ),
            log=self.logs.append,
        )


def make_adapter(*edits: str) -> Tuple[TextualHistoryAdapter, FakeBoard, Recorder]:
    board = FakeBoard("A")
    session = FileSession(board, InMemoryFileStore())
    session.init_history()
    recorder = Recorder()
    adapter = TextualHistoryAdapter(session, recorder.hooks())
    for edit in edits:
        board.text = edit
        asyncio.run(session.save_state())
    return adapter, board, recorder


def test_adapter_publishes_initial_controls() -> None:
    _, _, recorder = make_adapter()

    assert recorder.controls == [(False, False)]


def test_undo_key_restores_document() -> None:
    adapter, board, recorder = make_adapter("B")
    assert recorder.controls[-1] == (True, False)

    assert adapter.handle_key("ctrl+z") is True

    assert board.text == "A"
    assert recorder.documents[-1] == Snapshot("A")
    assert recorder.statuses[-1] == "undo"
    assert recorder.controls[-1] == (False, True)


def test_redo_keys() -> None:
    adapter, board, recorder = make_adapter("B", "C")
    adapter.undo()
    adapter.undo()

    assert adapter.handle_key("ctrl+y") is True
    assert adapter.handle_key("CTRL+SHIFT+Z") is True

    assert board.text == "C"
    assert recorder.statuses[-2:] == ["redo", "redo"]


def test_nothing_to_undo_or_redo() -> None:
    adapter, _, recorder = make_adapter()

    assert adapter.undo() == "nothing_to_undo"
    assert adapter.redo() == "nothing_to_redo"
    assert recorder.documents == []


def test_failed_restore_is_reported() -> None:
    adapter, board, recorder = make_adapter("B")
    board.broken = True

    status = adapter.undo()

    assert status.startswith("restore_failed:")
    assert board.text == "B"
    assert recorder.controls[-1] == (True, False)


def test_other_keys_pass_through() -> None:
    adapter, _, recorder = make_adapter("B")

    assert adapter.handle_key("x") is False
    assert recorder.statuses == []


def test_adapter_emits_log_lines() -> None:
    adapter, _, recorder = make_adapter("B")

    adapter.undo()

    assert any(line.startswith("undo ->") for line in recorder.logs)
    assert any("status='undo'" in line for line in recorder.logs)
