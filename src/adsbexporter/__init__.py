"""adsbexporter - Prometheus exporter for ADS-B decoder JSON snapshots."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("adsb-exporter")
except PackageNotFoundError:
    __version__ = "0+local"
from adsbexporter.config import ExporterConfig
from adsbexporter.exceptions import (
    AdsbExporterError,
    ConfigError,
    DecodeError,
    SnapshotError,
    SnapshotReadError,
)
from adsbexporter.ingestion.normalize import coerce_float
from adsbexporter.ingestion.poller import Poller
from adsbexporter.ingestion.project import project_aircraft, project_stats
from adsbexporter.ingestion.snapshot import decode_aircraft, decode_stats, read_snapshot
from adsbexporter.models import Aircraft, AircraftSnapshot, OriginStats, Period, StatsSnapshot
from adsbexporter.state.registry import ReconcileResult, SeriesRegistry
from adsbexporter.state.series import EntityProjection, SeriesKey

__all__ = [
    "__version__",
    "AdsbExporterError",
    "Aircraft",
    "AircraftSnapshot",
    "ConfigError",
    "DecodeError",
    "EntityProjection",
    "ExporterConfig",
    "OriginStats",
    "Period",
    "Poller",
    "ReconcileResult",
    "SeriesKey",
    "SeriesRegistry",
    "SnapshotError",
    "SnapshotReadError",
    "StatsSnapshot",
    "coerce_float",
    "decode_aircraft",
    "decode_stats",
    "project_aircraft",
    "project_stats",
    "read_snapshot",
]
