"""Base model and field types for decoder snapshots.

Every snapshot model inherits from :class:`AdsbBaseModel` which provides:

* ``extra="ignore"`` so fields added by newer decoder versions are skipped.
* A ``model_validator(mode="before")`` that drops ``null`` values so the
  field default is used, drops sub-record keys (``_SECTIONS``) whose value
  is not a non-empty object, and drops record keys (``_RECORDS``) whose
  value is not an object.

Scalar fields use the annotated types below, which route every value
through :mod:`adsbexporter.ingestion.normalize`. A field that cannot be
coerced therefore decodes as absent instead of failing the snapshot.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator

from adsbexporter.ingestion.normalize import coerce_float, coerce_label


def _coerce_series(value: Any) -> tuple[float | None, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(coerce_float(item) for item in value)


def _coerce_count_map(value: Any) -> dict[str, float]:
    if not isinstance(value, dict):
        return {}
    counts: dict[str, float] = {}
    for key, item in value.items():
        number = coerce_float(item)
        if number is not None:
            counts[str(key)] = number
    return counts


def _coerce_flags(value: Any) -> frozenset[str]:
    # Any non-array shape reads as "no flags set".
    if not isinstance(value, list):
        return frozenset()
    return frozenset(item.strip() for item in value if isinstance(item, str) and item.strip())


Reading = Annotated[float | None, BeforeValidator(coerce_float)]
"""Optional numeric reading; ``None`` when absent or uncoercible."""

Count = Annotated[float | None, BeforeValidator(coerce_float)]
"""Plain counter. Absence falls back to the field default (``0.0``); a value
that cannot be coerced decodes as ``None`` and is not exported."""

Label = Annotated[str, BeforeValidator(coerce_label)]
"""String used as a label value; ``""`` when absent."""

CountSeries = Annotated[tuple[float | None, ...], BeforeValidator(_coerce_series)]
"""Positional counters. Uncoercible entries keep their slot as ``None``."""

CountMap = Annotated[dict[str, float], BeforeValidator(_coerce_count_map)]
"""Named counters. Uncoercible entries are dropped."""

FlagSet = Annotated[frozenset[str], BeforeValidator(_coerce_flags)]
"""Multi-valued categorical field."""


class AdsbBaseModel(BaseModel):
    """Base for decoded snapshot models."""

    _SECTIONS: ClassVar[frozenset[str]] = frozenset()
    """Keys holding optional sub-records.

    A sub-record that is absent, ``null``, empty, or not an object at all is
    treated as missing.
    """

    _RECORDS: ClassVar[frozenset[str]] = frozenset()
    """Keys holding optional records that are valid even when empty.

    Only ``null`` and non-object values are treated as missing.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_missing_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        sections: frozenset[str] = getattr(cls, "_SECTIONS", frozenset())
        records: frozenset[str] = getattr(cls, "_RECORDS", frozenset())
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if key in sections and not (isinstance(value, dict) and value):
                continue
            if key in records and not isinstance(value, dict):
                continue
            cleaned[key] = value
        return cleaned
