"""Environment-driven configuration for the history engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "BOARD_HISTORY_"
DEFAULT_MAX_HISTORY = 100


class ConfigurationError(ValueError):
    """Raised when a configuration value cannot be used."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def validate_capacity(value: int, *, key: str = "max_history") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}", key=key)
    if value < 1:
        raise ConfigurationError(f"{key} must be at least 1, got {value}", key=key)
    return value


@dataclass(slots=True, frozen=True)
class HistoryConfig:
    """Tunables for one undo/redo timeline."""

    max_history: int = DEFAULT_MAX_HISTORY

    def __post_init__(self) -> None:
        validate_capacity(self.max_history)

    @classmethod
    def from_env(cls) -> "HistoryConfig":
        """Build a config from ``BOARD_HISTORY_MAX_HISTORY`` (default if unset)."""

        raw = env("MAX_HISTORY")
        if raw is None or not raw.strip():
            return cls()
        try:
            value = int(raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"{ENV_PREFIX}MAX_HISTORY must be an integer, got {raw!r}",
                key="max_history",
            ) from exc
        return cls(max_history=value)


__all__ = [
    "ConfigurationError",
    "DEFAULT_MAX_HISTORY",
    "ENV_PREFIX",
    "HistoryConfig",
    "env",
    "env_flag",
    "validate_capacity",
]
