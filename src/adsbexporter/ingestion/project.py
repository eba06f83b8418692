"""Metric projection.

Maps decoded snapshots onto ``(SeriesKey, value)`` assignments using the
catalog in :mod:`adsbexporter.metrics`. Projection never fails: fields that
decoded as absent are simply not projected.
"""

from __future__ import annotations

from adsbexporter import metrics
from adsbexporter._constants import NAV_MODES
from adsbexporter.ingestion.normalize import format_label_number
from adsbexporter.models.aircraft import Aircraft, AircraftSnapshot
from adsbexporter.models.stats import AdaptiveGainStats, OriginStats, Period, StatsSnapshot
from adsbexporter.state.series import Assignment, EntityProjection, SeriesKey


def _fields(record: object, table: tuple[tuple[str, str, str], ...], labels: tuple[str, ...]) -> list[Assignment]:
    # Fields that decoded as None (absent or uncoercible) are skipped.
    out: list[Assignment] = []
    for attr, name, _ in table:
        value = getattr(record, attr)
        if value is not None:
            out.append((SeriesKey(name, labels), value))
    return out


def _origin_assignments(period: str, origin: str, stats: OriginStats) -> list[Assignment]:
    labels = (period, origin)
    out = _fields(stats, metrics.ORIGIN_COUNTERS + metrics.ORIGIN_READINGS, labels)

    # The total is always derived from the per-bit series published here.
    total = 0.0
    for bits, value in enumerate(stats.accepted):
        if value is None:
            continue
        out.append((SeriesKey(metrics.STATS_ACCEPTED.name, (period, origin, str(bits))), value))
        total += value
    out.append((SeriesKey(metrics.STATS_ACCEPTED_TOTAL.name, labels), total))
    return out


def _adaptive_assignments(period: str, adaptive: AdaptiveGainStats) -> list[Assignment]:
    out = _fields(adaptive, metrics.ADAPTIVE_READINGS, (period,))
    for step, gain in adaptive.gain_seconds.items():
        key = SeriesKey(metrics.STATS_ADAPTIVE_GAIN_SECONDS.name, (period, step, format_label_number(gain.gain_db)))
        out.append((key, gain.seconds))
    return out


def project_period(name: str, period: Period) -> list[Assignment]:
    """Project one stats period."""
    out: list[Assignment] = []
    if period.messages is not None:
        out.append((SeriesKey(metrics.STATS_MESSAGES.name, (name,)), period.messages))

    for origin, stats in period.origins():
        out.extend(_origin_assignments(name, origin, stats))

    if period.cpu is not None:
        out.extend(_fields(period.cpu, metrics.CPU_COUNTERS, (name,)))

    if period.cpr is not None:
        out.extend(_fields(period.cpr, metrics.CPR_COUNTERS, (name,)))

    if period.adaptive is not None:
        out.extend(_adaptive_assignments(name, period.adaptive))

    for bucket, value in period.tracks.items():
        out.append((SeriesKey(metrics.STATS_TRACKS.name, (name, bucket)), value))

    for df, value in enumerate(period.messages_by_df):
        if value is not None:
            out.append((SeriesKey(metrics.STATS_MESSAGES_BY_DF.name, (name, str(df))), value))
    return out


def project_stats(snapshot: StatsSnapshot) -> list[Assignment]:
    """Project every present period of a stats snapshot."""
    out: list[Assignment] = []
    for name, period in snapshot.periods():
        out.extend(project_period(name, period))
    return out


def project_one_aircraft(aircraft: Aircraft) -> list[Assignment]:
    """Project the series family of one aircraft."""
    labels = aircraft.identity
    out: list[Assignment] = []
    if aircraft.messages is not None:
        out.append((SeriesKey(metrics.AIRCRAFT_MESSAGES.name, labels), aircraft.messages))
    out.extend(_fields(aircraft, metrics.AIRCRAFT_READINGS, labels))

    for attr, name, _ in metrics.AIRCRAFT_CATEGORICALS:
        value = getattr(aircraft, attr)
        if value:
            out.append((SeriesKey(name, (*labels, value)), 1.0))

    for mode in NAV_MODES:
        engaged = 1.0 if mode in aircraft.nav_modes else 0.0
        out.append((SeriesKey(metrics.AIRCRAFT_NAV_MODE.name, (*labels, mode)), engaged))
    return out


def project_aircraft(snapshot: AircraftSnapshot) -> EntityProjection:
    """Project an aircraft snapshot and record which identities it carries.

    When two records share an identity key the first one wins, so every
    series key is assigned at most once per poll.
    """
    projection = EntityProjection()
    with_position = 0
    for aircraft in snapshot.aircraft:
        identity = aircraft.identity
        if identity in projection.current:
            continue
        assignments = project_one_aircraft(aircraft)
        projection.current[identity] = identity
        projection.series[identity] = frozenset(key for key, _ in assignments)
        projection.assignments.extend(assignments)
        if aircraft.has_position:
            with_position += 1

    projection.assignments.append((SeriesKey(metrics.AIRCRAFT_RECENT_OBSERVED.name), float(len(projection.current))))
    projection.assignments.append((SeriesKey(metrics.AIRCRAFT_RECENT_WITH_POSITION.name), float(with_position)))
    return projection
