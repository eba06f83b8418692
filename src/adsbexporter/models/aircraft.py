"""Tracked aircraft snapshot model (``aircraft.json``)."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from adsbexporter.models._base import AdsbBaseModel, Count, FlagSet, Label, Reading


class Aircraft(AdsbBaseModel):
    """One tracked aircraft.

    ``hex``, ``flight`` and ``category`` together form the identity used to
    label every series of this aircraft. ``alt_baro`` may be the string
    ``"ground"``, which decodes as absent.
    """

    hex: Label = ""
    flight: Label = ""
    category: Label = ""

    alt_baro: Reading = None
    alt_geom: Reading = None
    gs: Reading = None
    ias: Reading = None
    tas: Reading = None
    mach: Reading = None
    track: Reading = None
    track_rate: Reading = None
    roll: Reading = None
    mag_heading: Reading = None
    true_heading: Reading = None
    baro_rate: Reading = None
    geom_rate: Reading = None
    nav_qnh: Reading = None
    nav_altitude_mcp: Reading = None
    nav_altitude_fms: Reading = None
    nav_heading: Reading = None
    lat: Reading = None
    lon: Reading = None
    nic: Reading = None
    rc: Reading = None
    seen_pos: Reading = None
    version: Reading = None
    nic_baro: Reading = None
    nac_p: Reading = None
    nac_v: Reading = None
    sil: Reading = None
    gva: Reading = None
    sda: Reading = None
    seen: Reading = None
    rssi: Reading = None
    messages: Count = 0.0

    squawk: Label = ""
    emergency: Label = ""
    sil_type: Label = ""
    nav_modes: FlagSet = frozenset()

    @property
    def identity(self) -> tuple[str, str, str]:
        """Identity key ``(hex, flight, category)``."""
        return (self.hex, self.flight, self.category)

    @property
    def has_position(self) -> bool:
        return self.lat is not None and self.lon is not None


class AircraftSnapshot(AdsbBaseModel):
    """Top-level ``aircraft.json`` document.

    ``aircraft`` is required. Entries that are not objects are dropped.
    """

    now: Reading = None
    messages: Reading = None
    aircraft: list[Aircraft]

    @field_validator("aircraft", mode="before")
    @classmethod
    def _drop_non_objects(cls, value: Any) -> Any:
        if not isinstance(value, list):
            raise ValueError("aircraft must be an array")
        return [item for item in value if isinstance(item, dict)]
