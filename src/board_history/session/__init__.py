"""File session coordinator and storage contracts."""

from .contracts import BoardDocument, FileOperationError, FileStore, StoreResult
from .file_session import UNTITLED, FileSession, SessionHooks
from .memory import InMemoryFileStore

__all__ = [
    "BoardDocument",
    "FileOperationError",
    "FileSession",
    "FileStore",
    "InMemoryFileStore",
    "SessionHooks",
    "StoreResult",
    "UNTITLED",
]
