# collector.py
import time
import logging
import asyncio
import concurrent.futures
from typing import Iterator, List
import aiohttp
from prometheus_client.core import GaugeMetricFamily
from gen8_exporter.api import fetch_thermal
from gen8_exporter.config import ExporterConfig
from gen8_exporter.errors import ThermalFetchError
from gen8_exporter.metrics import (
    SCRAPE_ERRORS,
    SCRAPE_LATENCY,
    build_metric_families,
    up_family,
)
from gen8_exporter.redfish import RedfishSession


class ThermalCollector:
    """
    Custom collector polled by the Prometheus registry.

    Every collect() performs one live Thermal request. The request runs on the
    event loop owning the aiohttp session; collect() blocks the calling
    registry thread until it completes.

    Attributes:
        config: Exporter configuration.
        session: Shared aiohttp client session.
        rf_session: Authenticated Redfish session.
    """

    def __init__(
        self,
        config: ExporterConfig,
        session: aiohttp.ClientSession,
        rf_session: RedfishSession,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self.config = config
        self.session = session
        self.rf_session = rf_session
        self._loop = loop
        self._closed = False

    def close(self) -> None:
        """Stop fetching. Later scrapes report the device as down."""
        self._closed = True

    def describe(self) -> List[GaugeMetricFamily]:
        """Families collect() emits, without samples and without network access."""
        return build_metric_families([], []) + [up_family()]

    async def scrape(self) -> List[GaugeMetricFamily]:
        """Fetch the Thermal resource and project it."""
        fans, sensors = await fetch_thermal(self.session, self.rf_session, self.config)
        return build_metric_families(fans, sensors)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        if self._closed:
            yield up_family(False)
            return

        start = time.monotonic()
        families = None
        try:
            future = asyncio.run_coroutine_threadsafe(self.scrape(), self._loop)
            families = future.result()
        except ThermalFetchError as e:
            logging.warning("Scrape of %s failed: %s", self.rf_session.fqdn, e)
            SCRAPE_ERRORS.labels(error=type(e).__name__).inc()
        except (concurrent.futures.CancelledError, RuntimeError) as e:
            # Loop or client session went away during shutdown.
            logging.warning("Scrape of %s aborted: %r", self.rf_session.fqdn, e)
        SCRAPE_LATENCY.observe(time.monotonic() - start)

        if families is None:
            yield up_family(False)
            return
        yield from families
        yield up_family(True)
