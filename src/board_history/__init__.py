"""Snapshot-based undo/redo engine for board editors."""

__all__ = [
    "adapters",
    "history",
    "runtime",
    "session",
]

__version__ = "0.1.0"
