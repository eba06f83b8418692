"""Data models for decoder snapshot files."""

from adsbexporter.models._base import AdsbBaseModel, Count, CountMap, CountSeries, FlagSet, Label, Reading
from adsbexporter.models.aircraft import Aircraft, AircraftSnapshot
from adsbexporter.models.stats import (
    AdaptiveGainStats,
    CprStats,
    CpuStats,
    GainStep,
    OriginStats,
    Period,
    StatsSnapshot,
)

__all__ = [
    "AdaptiveGainStats",
    "AdsbBaseModel",
    "Aircraft",
    "AircraftSnapshot",
    "Count",
    "CountMap",
    "CountSeries",
    "CprStats",
    "CpuStats",
    "FlagSet",
    "GainStep",
    "Label",
    "OriginStats",
    "Period",
    "Reading",
    "StatsSnapshot",
]
