"""Snapshot polling.

This module owns the periodic "read + decode + project + publish" loop.
Each file is handled on its own: a failure on one never touches the series
of the other, and a failed poll leaves the registry exactly as it was so
a truncated file reads as stale data rather than an empty sky.
"""

from __future__ import annotations

import asyncio
import logging

from adsbexporter.config import ExporterConfig
from adsbexporter.exceptions import SnapshotError
from adsbexporter.ingestion.project import project_aircraft, project_stats
from adsbexporter.ingestion.snapshot import decode_aircraft, decode_stats, read_snapshot
from adsbexporter.state.registry import SeriesRegistry

_logger = logging.getLogger(__name__)

STATS_FILE = "stats"
AIRCRAFT_FILE = "aircraft"


class Poller:
    """Drives poll cycles against one :class:`SeriesRegistry`.

    Cycles run one after another on a single task, so two reconciliations
    never overlap.
    """

    def __init__(self, config: ExporterConfig, registry: SeriesRegistry) -> None:
        self._config = config
        self._registry = registry

    async def poll_stats(self) -> bool:
        """Poll the stats file. Returns ``False`` when the poll was skipped."""
        path = self._config.stats_path
        try:
            raw = await asyncio.to_thread(read_snapshot, path)
            snapshot = decode_stats(raw, path=path)
        except SnapshotError as exc:
            self._skip(STATS_FILE, exc)
            return False

        published = self._registry.apply(project_stats(snapshot))
        self._registry.record_poll_success(STATS_FILE)
        _logger.debug("Published %d stats series from %s", published, path)
        return True

    async def poll_aircraft(self) -> bool:
        """Poll the aircraft file. Returns ``False`` when the poll was skipped."""
        path = self._config.aircrafts_path
        try:
            raw = await asyncio.to_thread(read_snapshot, path)
            snapshot = decode_aircraft(raw, path=path)
        except SnapshotError as exc:
            self._skip(AIRCRAFT_FILE, exc)
            return False

        result = self._registry.reconcile(project_aircraft(snapshot))
        self._registry.record_poll_success(AIRCRAFT_FILE)
        _logger.debug(
            "Published %d aircraft series from %s; retracted %d series of %d aircraft",
            result.published,
            path,
            result.retracted_series,
            len(result.retracted_identities),
        )
        return True

    async def poll_once(self) -> None:
        """Run one full poll cycle."""
        await self.poll_stats()
        await self.poll_aircraft()

    async def run(self, stop: asyncio.Event) -> None:
        """Poll now and then once per interval until *stop* is set.

        *stop* is only observed between cycles; a running cycle always
        completes. Ticks missed because a cycle overran are skipped.
        """
        interval = float(self._config.interval_seconds)
        loop = asyncio.get_running_loop()
        next_at = loop.time()

        while not stop.is_set():
            await self.poll_once()

            next_at += interval
            now = loop.time()
            if now >= next_at:
                missed = int((now - next_at) // interval) + 1
                next_at += missed * interval
                _logger.debug("Poll cycle overran the interval; skipping %d tick(s)", missed)

            try:
                await asyncio.wait_for(stop.wait(), timeout=next_at - now)
            except TimeoutError:
                continue

    def _skip(self, file: str, exc: SnapshotError) -> None:
        self._registry.record_poll_failure(file)
        _logger.warning("Skipping %s poll, keeping previous series: %s", file, exc)
        _logger.debug("%s poll failure", file, exc_info=True)
