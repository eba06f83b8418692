"""HTTP exposition of the series registry."""

from __future__ import annotations

import logging

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from adsbexporter.state.registry import SeriesRegistry

_logger = logging.getLogger(__name__)

REGISTRY_KEY = web.AppKey("registry", SeriesRegistry)

_INDEX_HTML = (
    "<html><head><title>ADS-B exporter</title></head>"
    '<body><h1>ADS-B exporter</h1><p><a href="/metrics">Metrics</a></p></body></html>'
)


async def _handle_metrics(request: web.Request) -> web.Response:
    registry = request.app[REGISTRY_KEY]
    body = generate_latest(registry.collector_registry) + generate_latest(registry.health_registry)
    return web.Response(body=body, headers={"Content-Type": CONTENT_TYPE_LATEST})


async def _handle_index(_request: web.Request) -> web.Response:
    return web.Response(text=_INDEX_HTML, content_type="text/html")


def create_app(registry: SeriesRegistry) -> web.Application:
    """Build the aiohttp application serving ``/metrics``."""
    app = web.Application()
    app[REGISTRY_KEY] = registry
    app.router.add_get("/metrics", _handle_metrics)
    app.router.add_get("/", _handle_index)
    return app


async def start_server(registry: SeriesRegistry, host: str | None, port: int) -> web.AppRunner:
    """Bind and start the HTTP endpoint.

    Raises :class:`OSError` when the address cannot be bound. The caller
    owns the returned runner and must ``cleanup()`` it.
    """
    runner = web.AppRunner(create_app(registry), access_log=None)
    await runner.setup()
    try:
        site = web.TCPSite(runner, host, port)
        await site.start()
    except OSError:
        await runner.cleanup()
        raise
    _logger.info("Serving metrics on %s:%d", host or "*", port)
    return runner
