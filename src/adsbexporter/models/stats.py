"""Receiver statistics snapshot model (``stats.json``).

The decoder rewrites this file periodically with one record per
aggregation window. Field meanings follow the decoder's README-json.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, field_validator

from adsbexporter._constants import PERIODS
from adsbexporter.ingestion.normalize import coerce_float
from adsbexporter.models._base import AdsbBaseModel, Count, CountMap, CountSeries, Reading


class OriginStats(AdsbBaseModel):
    """Counters for one message origin.

    The same shape is used for ``local`` (the SDR) and ``remote``
    (network inputs).

    Parameters
    ----------
    accepted : tuple
        Messages accepted with N corrected bits, indexed by N.
    signal, noise, peak_signal : float or None
        Signal levels in dBFS. Only reported for ``local``.
    gain_db : float or None
        Current SDR gain.
    """

    samples_processed: Count = 0.0
    samples_dropped: Count = 0.0
    modeac: Count = 0.0
    modes: Count = 0.0
    bad: Count = 0.0
    unknown_icao: Count = 0.0
    strong_signals: Count = 0.0
    accepted: CountSeries = ()
    signal: Reading = None
    noise: Reading = None
    peak_signal: Reading = None
    gain_db: Reading = None


class CpuStats(AdsbBaseModel):
    """Milliseconds of CPU time spent per task."""

    demod: Count = 0.0
    reader: Count = 0.0
    background: Count = 0.0


class CprStats(AdsbBaseModel):
    """Compact Position Reporting decode outcomes."""

    surface: Count = 0.0
    airborne: Count = 0.0
    global_ok: Count = 0.0
    global_bad: Count = 0.0
    global_range: Count = 0.0
    global_speed: Count = 0.0
    global_skipped: Count = 0.0
    local_ok: Count = 0.0
    local_aircraft_relative: Count = 0.0
    local_receiver_relative: Count = 0.0
    local_skipped: Count = 0.0
    local_range: Count = 0.0
    local_speed: Count = 0.0
    filtered: Count = 0.0


class GainStep(AdsbBaseModel):
    """Time spent at one adaptive gain step."""

    gain_db: float
    seconds: float


class AdaptiveGainStats(AdsbBaseModel):
    """Adaptive gain controller state.

    ``gain_seconds`` arrives as ``{"<step>": [gain_db, seconds], ...}``.
    Steps whose pair is short or not numeric are dropped while decoding.
    """

    gain_db: Reading = None
    dynamic_range_limit_db: Reading = None
    gain_changes: Reading = None
    loud_undecoded: Reading = None
    loud_decoded: Reading = None
    noise_dbfs: Reading = None
    gain_seconds: dict[str, GainStep] = Field(default_factory=dict)

    @field_validator("gain_seconds", mode="before")
    @classmethod
    def _coerce_gain_pairs(cls, value: Any) -> dict[str, GainStep]:
        if not isinstance(value, dict):
            return {}
        steps: dict[str, GainStep] = {}
        for step, pair in value.items():
            if not isinstance(pair, list) or len(pair) < 2:
                continue
            gain = coerce_float(pair[0])
            seconds = coerce_float(pair[1])
            if gain is None or seconds is None:
                continue
            steps[str(step)] = GainStep(gain_db=gain, seconds=seconds)
        return steps


class Period(AdsbBaseModel):
    """Statistics for one aggregation window."""

    _SECTIONS: ClassVar[frozenset[str]] = frozenset({"local", "remote", "cpu", "cpr", "adaptive"})

    start: Reading = None
    end: Reading = None
    messages: Count = 0.0
    local: OriginStats | None = None
    remote: OriginStats | None = None
    cpu: CpuStats | None = None
    cpr: CprStats | None = None
    adaptive: AdaptiveGainStats | None = None
    tracks: CountMap = Field(default_factory=dict)
    messages_by_df: CountSeries = ()

    def origins(self) -> list[tuple[str, OriginStats]]:
        """Present origin records, keyed by their ``origin`` label value."""
        pairs = (("local", self.local), ("remote", self.remote))
        return [(name, stats) for name, stats in pairs if stats is not None]


class StatsSnapshot(AdsbBaseModel):
    """Top-level ``stats.json`` document."""

    _RECORDS: ClassVar[frozenset[str]] = frozenset(PERIODS)

    latest: Period | None = None
    last1min: Period | None = None
    last5min: Period | None = None
    last15min: Period | None = None
    total: Period | None = None

    def periods(self) -> list[tuple[str, Period]]:
        """Present periods in a fixed order."""
        present: list[tuple[str, Period]] = []
        for name in PERIODS:
            period = getattr(self, name)
            if period is not None:
                present.append((name, period))
        return present
