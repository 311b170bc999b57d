"""Runtime services: configuration and telelog telemetry."""

from .config import ConfigurationError, HistoryConfig

__all__ = ["ConfigurationError", "HistoryConfig"]
