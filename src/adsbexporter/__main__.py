"""Command-line entry point: ``python -m adsbexporter``."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import os
import signal
from typing import Any

from adsbexporter.config import ExporterConfig
from adsbexporter.exceptions import ConfigError
from adsbexporter.ingestion.poller import Poller
from adsbexporter.server import start_server
from adsbexporter.state.registry import SeriesRegistry

_logger = logging.getLogger("adsbexporter")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="adsb-exporter",
        description="Export ADS-B decoder stats.json/aircraft.json snapshots as Prometheus metrics.",
    )
    parser.add_argument("--stats-path", help="stats snapshot file (env STATS_PATH, default stats.json)")
    parser.add_argument(
        "--aircrafts-path", help="aircraft snapshot file (env AIRCRAFTS_PATH, default aircrafts.json)"
    )
    parser.add_argument("--listen-addr", help="host:port to serve /metrics on (env LISTEN_ADDR, default :9187)")
    parser.add_argument("--interval", help="poll interval in whole seconds (env INTERVAL_SECONDS, default 5)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _log_level(verbose: bool) -> int:
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName((os.environ.get("LOG_LEVEL") or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


async def _serve(config: ExporterConfig, host: str | None, port: int) -> int:
    registry = SeriesRegistry(retract_stale_series=config.retract_stale_series)
    poller = Poller(config, registry)

    try:
        runner = await start_server(registry, host, port)
    except OSError as exc:
        _logger.error("Metrics server failed on %s: %s", config.listen_addr, exc)
        return 1

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    _logger.info(
        "Polling %s and %s every %ds", config.stats_path, config.aircrafts_path, config.interval_seconds
    )
    try:
        await poller.run(stop)
        _logger.info("Shutdown signal received, shutting down")
    finally:
        try:
            await asyncio.wait_for(runner.cleanup(), timeout=config.shutdown_grace_seconds)
        except TimeoutError:
            _logger.warning("Graceful shutdown did not finish within %ss", config.shutdown_grace_seconds)
    _logger.info("Exited")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=_log_level(args.verbose), format="%(levelname)s %(name)s: %(message)s")

    overrides: dict[str, Any] = {
        "stats_path": args.stats_path,
        "aircrafts_path": args.aircrafts_path,
        "listen_addr": args.listen_addr,
        "interval_seconds": args.interval,
    }
    config = ExporterConfig.from_env(**{key: value for key, value in overrides.items() if value is not None})
    try:
        host, port = config.listen_host_port()
    except ConfigError as exc:
        _logger.error("%s", exc)
        return 2

    return asyncio.run(_serve(config, host, port))


if __name__ == "__main__":
    raise SystemExit(main())
