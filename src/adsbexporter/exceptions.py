"""Custom exception hierarchy for adsbexporter."""

from __future__ import annotations

from pathlib import Path


class AdsbExporterError(Exception):
    """Base exception for all adsbexporter errors."""


class ConfigError(AdsbExporterError):
    """Invalid configuration that cannot fall back to a default."""


class SnapshotError(AdsbExporterError):
    """A snapshot file could not be turned into a model."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        self.path = str(path) if path is not None else None
        super().__init__(message)


class SnapshotReadError(SnapshotError):
    """Snapshot file missing or unreadable."""


class DecodeError(SnapshotError):
    """Snapshot bytes are not JSON, or the top-level shape is wrong.

    Raised only for problems that make the whole snapshot unusable. A bad
    field or a bad aircraft record is dropped during decoding instead.
    """
