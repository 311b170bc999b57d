"""Executable Textual app hosting a text board with undo/redo."""

from __future__ import annotations

import argparse
import json
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal
    from textual.widgets import Button, Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use board_history.adapters.textual.app"
    ) from exc

from board_history.history import Snapshot
from board_history.runtime import telemetry
from board_history.session import FileSession, InMemoryFileStore, SessionHooks

from .controller import TextualHistoryAdapter, TextualHistoryHooks

FORMAT_VERSION = 1


def encode_board(text: str) -> Snapshot:
    payload = json.dumps({"version": FORMAT_VERSION, "text": text}, sort_keys=True)
    return Snapshot(payload=payload)


def decode_board(snapshot: Snapshot) -> str:
    data = json.loads(snapshot.payload)
    if data.get("version") != FORMAT_VERSION:
        raise ValueError(f"Unsupported board format {data.get('version')!r}")
    return str(data.get("text", ""))


class TextBoardDocument:
    """Board document backed by a ``TextArea`` widget."""

    def __init__(self, text_area: TextArea) -> None:
        self.text_area = text_area

    def serialize_state(self) -> Snapshot:
        return encode_board(self.text_area.text)

    def import_state(self, snapshot: Snapshot, *, notify_listeners: bool = False) -> bool:
        # the Changed message posted by load_text re-serializes to the
        # restored snapshot, which the timeline absorbs as a duplicate
        del notify_listeners
        self.text_area.load_text(decode_board(snapshot))
        return True


class BoardHistoryApp(App[None]):
    """Minimal Textual board with undo/redo controls."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#board {
		height: 1fr;
		border: round $accent;
	}

	#controls {
		height: 3;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+z", "undo_board", "Undo", priority=True),
        Binding("ctrl+y", "redo_board", "Redo", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, initial_text: str = "", file_name: str = "Board") -> None:
        super().__init__()
        self.store = InMemoryFileStore()
        self._file_id = self.store.create(file_name, encode_board(initial_text))
        self.session: FileSession | None = None
        self.adapter: TextualHistoryAdapter | None = None
        self.logger = telemetry.get_logger("board_history.textual")

    def compose(self) -> ComposeResult:
        yield Header()
        yield TextArea(id="board")
        with Horizontal(id="controls"):
            yield Button("Undo", id="undo", disabled=True)
            yield Button("Redo", id="redo", disabled=True)
        yield Static("", id="status-line")
        yield Footer()

    async def on_mount(self) -> None:
        board = self.query_one("#board", TextArea)
        self.session = FileSession(
            TextBoardDocument(board),
            self.store,
            hooks=SessionHooks(update_title=self._update_title),
        )
        hooks = TextualHistoryHooks(
            update_document=lambda _snapshot: None,
            update_status=self._update_status,
            update_controls=self._update_controls,
            log=self._log_line,
        )
        self.adapter = TextualHistoryAdapter(self.session, hooks)
        await self.session.load_state(self._file_id)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        del event
        if self.session is None:
            return
        # capture in event order; the upload worker re-serializes and its
        # capture is absorbed as a duplicate
        self.session.capture()
        self.run_worker(self.session.save_state(), group="save")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "undo":
            self.action_undo_board()
        elif event.button.id == "redo":
            self.action_redo_board()

    def action_undo_board(self) -> None:
        if self.adapter:
            self.adapter.undo()

    def action_redo_board(self) -> None:
        if self.adapter:
            self.adapter.redo()

    def _update_title(self, title: str) -> None:
        self.title = title

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _update_controls(self, can_undo: bool, can_redo: bool) -> None:
        self.query_one("#undo", Button).disabled = not can_undo
        self.query_one("#redo", Button).disabled = not can_redo

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the board history Textual demo.")
    parser.add_argument("--text", default="", help="Initial board contents")
    parser.add_argument("--name", default="Board", help="Title of the demo file")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset (default: BOARD_HISTORY_* environment)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    BoardHistoryApp(initial_text=args.text, file_name=args.name).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
