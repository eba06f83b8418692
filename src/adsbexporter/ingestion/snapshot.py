"""Snapshot file reading and decoding.

Files are read whole before parsing; the decoder rewrites them atomically
and they are small.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from adsbexporter.exceptions import DecodeError, SnapshotReadError
from adsbexporter.models._base import AdsbBaseModel
from adsbexporter.models.aircraft import AircraftSnapshot
from adsbexporter.models.stats import StatsSnapshot

TModel = TypeVar("TModel", bound=AdsbBaseModel)


def read_snapshot(path: str | Path) -> bytes:
    """Read a snapshot file fully."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise SnapshotReadError(f"cannot read {path}: {exc}", path=path) from exc


def _load_object(raw: bytes, *, path: str | Path | None) -> dict[str, Any]:
    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(f"malformed JSON: {exc}", path=path) from exc
    if not isinstance(decoded, dict):
        raise DecodeError(f"expected a JSON object at top level, got {type(decoded).__name__}", path=path)
    return decoded


def _decode(model: type[TModel], raw: bytes, *, path: str | Path | None) -> TModel:
    payload = _load_object(raw, path=path)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"unexpected {model.__name__} shape: {exc}", path=path) from exc


def decode_stats(raw: bytes, *, path: str | Path | None = None) -> StatsSnapshot:
    """Decode ``stats.json`` bytes.

    Raises
    ------
    DecodeError
        The bytes are not JSON or the top level is not an object.
    """
    return _decode(StatsSnapshot, raw, path=path)


def decode_aircraft(raw: bytes, *, path: str | Path | None = None) -> AircraftSnapshot:
    """Decode ``aircraft.json`` bytes.

    Raises
    ------
    DecodeError
        The bytes are not JSON, the top level is not an object, or
        ``aircraft`` is missing or not an array.
    """
    return _decode(AircraftSnapshot, raw, path=path)
