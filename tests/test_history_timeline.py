import pytest

from board_history.history import RestoreGuard, Snapshot, SnapshotTimeline
from board_history.runtime import ConfigurationError


def payloads(snapshots: tuple[Snapshot, ...]) -> list[str]:
    return [snapshot.payload for snapshot in snapshots]


def make_timeline(*states: str, capacity: int = 100) -> SnapshotTimeline:
    timeline = SnapshotTimeline(capacity)
    first, *rest = states
    timeline.initialize(first)
    for state in rest:
        timeline.push(state)
    return timeline


def test_undo_redo_walkthrough() -> None:
    timeline = make_timeline("A", "B", "C")

    assert timeline.undo() == Snapshot("B")
    assert timeline.undo() == Snapshot("A")
    assert timeline.undo() is None
    assert timeline.redo() == Snapshot("B")

    timeline.push("D")

    assert timeline.redo() is None
    assert payloads(timeline.entries()) == ["A", "B", "D"]


def test_capacity_evicts_oldest_entry() -> None:
    timeline = make_timeline("A", "B", "C", capacity=2)

    assert payloads(timeline.entries()) == ["B", "C"]
    assert timeline.undo() == Snapshot("B")
    assert timeline.undo() is None
    assert timeline.can_undo() is False
    assert timeline.can_redo() is True


def test_long_run_keeps_last_capacity_unique_snapshots() -> None:
    timeline = SnapshotTimeline(5)
    timeline.initialize("s0")
    for index in range(1, 12):
        timeline.push(f"s{index}")
        timeline.push(f"s{index}")

    assert payloads(timeline.entries()) == ["s7", "s8", "s9", "s10", "s11"]
    assert timeline.stats().depth == 5


def test_duplicate_push_is_absorbed() -> None:
    timeline = make_timeline("A")

    assert timeline.push("B") is True
    assert timeline.push("B") is False
    assert timeline.push(Snapshot("B", label="autosave")) is False
    assert len(timeline) == 2


def test_duplicate_push_after_undo_keeps_redo() -> None:
    timeline = make_timeline("A", "B")
    timeline.undo()

    assert timeline.push("A") is False
    assert timeline.can_redo() is True
    assert timeline.redo() == Snapshot("B")


def test_new_push_after_undo_discards_redo_branch() -> None:
    timeline = make_timeline("A", "B", "C")
    timeline.undo()
    timeline.undo()

    timeline.push("X")

    assert timeline.pending() == ()
    assert timeline.can_redo() is False
    assert payloads(timeline.entries()) == ["A", "X"]


def test_undo_then_redo_round_trip() -> None:
    timeline = make_timeline("A", "B", "C")
    before = timeline.current

    timeline.undo()
    assert timeline.redo() == before
    assert timeline.current == before


def test_capability_queries_track_every_step() -> None:
    timeline = SnapshotTimeline(3)
    assert (timeline.can_undo(), timeline.can_redo()) == (False, False)

    timeline.initialize("A")
    assert (timeline.can_undo(), timeline.can_redo()) == (False, False)

    for state in ("B", "C", "D"):
        timeline.push(state)
        assert timeline.can_undo() is (len(timeline) >= 2)
        assert timeline.can_redo() is False

    timeline.undo()
    assert (timeline.can_undo(), timeline.can_redo()) == (True, True)
    timeline.undo()
    assert (timeline.can_undo(), timeline.can_redo()) == (False, True)
    timeline.redo()
    timeline.redo()
    assert (timeline.can_undo(), timeline.can_redo()) == (True, False)


def test_initialize_resets_to_single_entry() -> None:
    timeline = make_timeline("A", "B", "C")
    timeline.undo()

    timeline.initialize("Z")

    assert payloads(timeline.entries()) == ["Z"]
    assert timeline.pending() == ()


def test_clear_empties_both_stacks_and_push_reseeds() -> None:
    guard = RestoreGuard()
    timeline = SnapshotTimeline(guard=guard)
    timeline.initialize("A")
    timeline.push("B")
    timeline.undo()

    with guard.restoring():
        timeline.clear()
        assert guard.active is True

    assert timeline.current is None
    assert timeline.stats().pending_redo == 0
    assert timeline.push("C") is True
    assert payloads(timeline.entries()) == ["C"]


def test_push_ignored_while_guard_active() -> None:
    guard = RestoreGuard()
    timeline = SnapshotTimeline(guard=guard)
    timeline.initialize("A")
    timeline.push("B")
    timeline.undo()

    with guard.restoring():
        assert timeline.push("C") is False

    assert payloads(timeline.entries()) == ["A"]
    assert timeline.can_redo() is True


def test_invalid_capacity_rejected() -> None:
    with pytest.raises(ConfigurationError):
        SnapshotTimeline(0)


def test_non_string_snapshot_rejected() -> None:
    timeline = SnapshotTimeline()

    with pytest.raises(TypeError):
        timeline.initialize(42)  # type: ignore[arg-type]
