"""Series registry and reconciler.

This is the only component allowed to publish or retract series. It owns
the Prometheus collector registry that the HTTP surface exposes, and the
per-entity bookkeeping used to garbage-collect series of entities that
disappeared from the latest snapshot.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter, Gauge

from adsbexporter.metrics import FAMILIES, MetricFamily
from adsbexporter.state.series import Assignment, EntityProjection, IdentityKey, SeriesKey

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrackedEntity:
    """What the registry remembers about one entity between polls."""

    labels: tuple[str, ...]
    series: frozenset[SeriesKey]


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    published: int
    retracted_identities: tuple[IdentityKey, ...]
    retracted_series: int


class SeriesRegistry:
    """Process-wide metric registry with entity garbage collection.

    One instance is shared by the poller (writer) and the HTTP surface
    (reader). Gauge values are atomic per series inside
    ``prometheus_client``; the lock guards the tracked-entity map.

    Exporter health metrics live in a separate collector registry so that a
    skipped poll leaves the data series registry untouched.

    Parameters
    ----------
    families : iterable of MetricFamily
        Gauge families to register. Defaults to the full catalog.
    registry : CollectorRegistry or None
        Collector registry to register into. A fresh one is created when
        omitted, so instances never collide in tests.
    retract_stale_series : bool
        Also retract series that a surviving entity stopped publishing
        (e.g. an old squawk label). Off by default: such series then go
        away together with the entity.
    """

    def __init__(
        self,
        families: Iterable[MetricFamily] = FAMILIES,
        *,
        registry: CollectorRegistry | None = None,
        retract_stale_series: bool = False,
    ) -> None:
        self._registry = registry if registry is not None else CollectorRegistry()
        self._health = CollectorRegistry()
        self._retract_stale_series = retract_stale_series
        self._families: dict[str, MetricFamily] = {}
        self._gauges: dict[str, Gauge] = {}
        for family in families:
            self._families[family.name] = family
            self._gauges[family.name] = Gauge(family.name, family.help, family.labelnames, registry=self._registry)

        self._poll_errors = Counter(
            "adsb_exporter_poll_errors",
            "Polls of a snapshot file that failed to read or decode",
            ("file",),
            registry=self._health,
        )
        self._last_success = Gauge(
            "adsb_exporter_last_success_timestamp_seconds",
            "Unix time of the last successful poll of a snapshot file",
            ("file",),
            registry=self._health,
        )
        self._tracked_gauge = Gauge(
            "adsb_exporter_tracked_aircraft",
            "Aircraft identities currently exported",
            registry=self._health,
        )

        self._lock = threading.Lock()
        self._tracked: dict[IdentityKey, TrackedEntity] = {}

    @property
    def collector_registry(self) -> CollectorRegistry:
        return self._registry

    @property
    def health_registry(self) -> CollectorRegistry:
        return self._health

    # ------------------------------------------------------------------
    # Metric surface
    # ------------------------------------------------------------------

    def publish(self, key: SeriesKey, value: float) -> None:
        """Set a series, creating it if needed."""
        gauge = self._gauges[key.name]
        if key.labels:
            gauge.labels(*key.labels).set(value)
        else:
            gauge.set(value)

    def retract(self, key: SeriesKey) -> None:
        """Remove a series. Unknown series are ignored."""
        gauge = self._gauges.get(key.name)
        if gauge is None or not key.labels:
            return
        with contextlib.suppress(KeyError):
            gauge.remove(*key.labels)

    def value(self, key: SeriesKey) -> float | None:
        """Current value of a series, or ``None`` when it is not exported."""
        family = self._families[key.name]
        return self._registry.get_sample_value(key.name, dict(zip(family.labelnames, key.labels, strict=True)))

    def apply(self, assignments: Iterable[Assignment]) -> int:
        """Publish assignments without any retraction."""
        count = 0
        for key, value in assignments:
            self.publish(key, value)
            count += 1
        return count

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def reconcile(self, projection: EntityProjection) -> ReconcileResult:
        """Publish one entity poll, then retract entities that disappeared.

        Publishing happens first so a series that survives the poll is never
        removed and recreated. Entities absent from ``projection.current``
        lose every series recorded for them.
        """
        published = self.apply(projection.assignments)

        retracted_identities: list[IdentityKey] = []
        retracted_series = 0
        with self._lock:
            previous = self._tracked
            current: dict[IdentityKey, TrackedEntity] = {}
            for identity, labels in projection.current.items():
                series = projection.series.get(identity, frozenset())
                known = previous.get(identity)
                if known is not None:
                    stale = known.series - series
                    if self._retract_stale_series:
                        for key in stale:
                            self.retract(key)
                        retracted_series += len(stale)
                    else:
                        series = series | stale
                current[identity] = TrackedEntity(labels=labels, series=series)

            for identity, entity in previous.items():
                if identity in current:
                    continue
                _logger.debug("Retracting %d series of vanished entity %s", len(entity.series), identity)
                for key in entity.series:
                    self.retract(key)
                retracted_series += len(entity.series)
                retracted_identities.append(identity)

            self._tracked = current
            self._tracked_gauge.set(len(current))

        return ReconcileResult(
            published=published,
            retracted_identities=tuple(retracted_identities),
            retracted_series=retracted_series,
        )

    def tracked_identities(self) -> dict[IdentityKey, tuple[str, ...]]:
        """Identity keys exported by the last successful poll."""
        with self._lock:
            return {identity: entity.labels for identity, entity in self._tracked.items()}

    # ------------------------------------------------------------------
    # Exporter health
    # ------------------------------------------------------------------

    def record_poll_success(self, file: str, *, at: float | None = None) -> None:
        self._last_success.labels(file).set(time.time() if at is None else at)

    def record_poll_failure(self, file: str) -> None:
        self._poll_errors.labels(file).inc()
