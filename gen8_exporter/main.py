import logging
import asyncio
import aiohttp
from prometheus_client import REGISTRY, CollectorRegistry, start_http_server
from gen8_exporter.auth import login, logout
from gen8_exporter.collector import ThermalCollector
from gen8_exporter.config import ExporterConfig
from gen8_exporter.metrics import SCRAPE_ERRORS, SCRAPE_LATENCY


async def run_exporter(
    config: ExporterConfig,
    stop_event: asyncio.Event,
    registry: CollectorRegistry = REGISTRY,
) -> None:
    """
    Log in, serve /metrics until stop_event is set, then log out.

    The Redfish session is created once and deleted on every exit path
    after a successful login.

    Args:
        config: Exporter configuration.
        stop_event: Set to shut the exporter down.
        registry: Registry served on /metrics. The default registry also
            carries the process and platform collectors. Any other registry
            gets the scrape duration and error series registered for the
            lifetime of the exporter.

    Raises:
        AuthenticationError: If the session cannot be created.
        SessionTeardownError: If the session cannot be deleted.
    """
    own_metrics = [] if registry is REGISTRY else [SCRAPE_LATENCY, SCRAPE_ERRORS]
    async with aiohttp.ClientSession() as session:
        rf_session = await login(session, config)
        try:
            collector = ThermalCollector(
                config, session, rf_session, asyncio.get_running_loop()
            )
            for metric in own_metrics:
                registry.register(metric)
            registry.register(collector)
            try:
                start_http_server(config.port, registry=registry)
                logging.info("Metrics server on http://localhost:%s", config.port)
                await stop_event.wait()
            finally:
                collector.close()
                registry.unregister(collector)
                for metric in own_metrics:
                    registry.unregister(metric)
        finally:
            await logout(session, rf_session, config)
