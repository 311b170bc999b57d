"""Textual host adapter for the history engine."""

from .controller import TextualHistoryAdapter, TextualHistoryHooks

__all__ = ["TextualHistoryAdapter", "TextualHistoryHooks"]
