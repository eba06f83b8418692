"""Exporter configuration for adsbexporter."""

from __future__ import annotations

import dataclasses
import logging
import os
from typing import Any

from adsbexporter._constants import (
    DEFAULT_AIRCRAFTS_PATH,
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_LISTEN_ADDR,
    DEFAULT_SHUTDOWN_GRACE_SECONDS,
    DEFAULT_STATS_PATH,
)
from adsbexporter.exceptions import ConfigError

_logger = logging.getLogger(__name__)


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def parse_interval(value: str | int | None) -> int:
    """Parse a poll interval in whole seconds.

    Non-positive or unparsable values fall back to the default with a
    warning.
    """
    if value is None:
        return DEFAULT_INTERVAL_SECONDS
    try:
        seconds = int(str(value).strip())
    except ValueError:
        seconds = 0
    if seconds <= 0:
        _logger.warning("invalid INTERVAL_SECONDS=%r, using %d", value, DEFAULT_INTERVAL_SECONDS)
        return DEFAULT_INTERVAL_SECONDS
    return seconds


def parse_listen_addr(value: str) -> tuple[str | None, int]:
    """Split ``host:port`` into its parts.

    An empty host (``":9187"``) means all interfaces and is returned as
    ``None``. IPv6 hosts may be bracketed (``"[::1]:9187"``).
    """
    text = value.strip()
    host, sep, port_text = text.rpartition(":")
    if not sep or not port_text.isdigit():
        raise ConfigError(f"invalid listen address {value!r}, expected host:port")
    port = int(port_text)
    if not 0 < port < 65536:
        raise ConfigError(f"invalid listen port {port} in {value!r}")
    host = host.strip("[]")
    return (host or None), port


@dataclasses.dataclass(frozen=True)
class ExporterConfig:
    """Exporter configuration.

    Parameters
    ----------
    stats_path : str
        Path of the receiver statistics snapshot.
    aircrafts_path : str
        Path of the tracked aircraft snapshot.
    listen_addr : str
        ``host:port`` for the HTTP endpoint. An empty host binds all
        interfaces.
    interval_seconds : int
        Seconds between polls.
    shutdown_grace_seconds : float
        Upper bound on HTTP shutdown after a stop signal.
    retract_stale_series : bool
        Retract series a surviving aircraft stopped publishing, instead of
        waiting for the aircraft to disappear.
    """

    stats_path: str = DEFAULT_STATS_PATH
    aircrafts_path: str = DEFAULT_AIRCRAFTS_PATH
    listen_addr: str = DEFAULT_LISTEN_ADDR
    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    shutdown_grace_seconds: float = DEFAULT_SHUTDOWN_GRACE_SECONDS
    retract_stale_series: bool = False

    def listen_host_port(self) -> tuple[str | None, int]:
        return parse_listen_addr(self.listen_addr)

    @classmethod
    def from_env(cls, **overrides: Any) -> ExporterConfig:
        """Create configuration from environment variables.

        Reads ``STATS_PATH``, ``AIRCRAFTS_PATH``, ``LISTEN_ADDR``,
        ``INTERVAL_SECONDS``, ``SHUTDOWN_GRACE_SECONDS`` and
        ``RETRACT_STALE_SERIES``. Empty values count as unset. Explicit
        keyword arguments override environment values.
        """
        env = {key: value for key, value in os.environ.items() if value != ""}

        _ENV_CONFIG_MAP = {
            "STATS_PATH": "stats_path",
            "AIRCRAFTS_PATH": "aircrafts_path",
            "LISTEN_ADDR": "listen_addr",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "interval_seconds" in overrides:
            overrides["interval_seconds"] = parse_interval(overrides["interval_seconds"])
        else:
            config_kwargs["interval_seconds"] = parse_interval(env.get("INTERVAL_SECONDS"))

        grace_env = env.get("SHUTDOWN_GRACE_SECONDS")
        if grace_env is not None and "shutdown_grace_seconds" not in overrides:
            try:
                config_kwargs["shutdown_grace_seconds"] = float(grace_env)
            except ValueError:
                _logger.warning(
                    "invalid SHUTDOWN_GRACE_SECONDS=%r, using %s", grace_env, DEFAULT_SHUTDOWN_GRACE_SECONDS
                )

        if "retract_stale_series" not in overrides:
            config_kwargs["retract_stale_series"] = _env_bool(env.get("RETRACT_STALE_SERIES"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
