"""Opaque snapshot value type."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Union


@dataclass(slots=True, frozen=True)
class Snapshot:
    """Serialized board state at one point in time.

    The payload is never parsed here; snapshots only need to compare equal
    when the serialized state is identical. ``label`` is descriptive and is
    ignored by equality.
    """

    payload: str
    label: str = field(default="", compare=False)

    @classmethod
    def coerce(cls, value: "SnapshotLike") -> "Snapshot":
        if isinstance(value, Snapshot):
            return value
        if isinstance(value, str):
            return cls(payload=value)
        raise TypeError(f"Cannot build a Snapshot from {type(value).__name__}")

    def digest(self) -> str:
        """Short content hash, safe to put in log lines."""

        return hashlib.sha1(self.payload.encode("utf-8")).hexdigest()[:12]


SnapshotLike = Union[Snapshot, str]

__all__ = ["Snapshot", "SnapshotLike"]
