# api.py
import time
import logging
import asyncio
from typing import Any, Dict, List, Tuple
import aiohttp
from gen8_exporter.config import ExporterConfig
from gen8_exporter.errors import ThermalDecodeError, ThermalFetchError
from gen8_exporter.redfish import (
    FanReading,
    RedfishSession,
    TemperatureReading,
    thermal_url,
)
from gen8_exporter.utils import get_aiohttp_request_kwargs, lookup


def _entries(payload: Dict[str, Any], field: str) -> List[Dict[str, Any]]:
    value = lookup(payload, field)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ThermalDecodeError(f"Field {field} is not an array")
    entries = []
    for entry in value:
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise ThermalDecodeError(f"Entry of {field} is not an object: {entry!r}")
        entries.append(entry)
    return entries


def _text(value: Any, field: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ThermalDecodeError(f"Field {field} is not a string: {value!r}")
    return value


def _number(value: Any, field: str) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ThermalDecodeError(f"Field {field} is not a number: {value!r}")
    try:
        return float(value)
    except OverflowError as e:
        raise ThermalDecodeError(f"Field {field} is out of range") from e


def _status(entry: Dict[str, Any]) -> Tuple[str, str]:
    """Health and state of an entry, from Status or from top-level fields."""
    status = lookup(entry, "Status")
    if status is None:
        status = {}
    if not isinstance(status, dict):
        raise ThermalDecodeError(f"Field Status is not an object: {status!r}")
    health = lookup(status, "Health", default=lookup(entry, "Health"))
    state = lookup(status, "State", default=lookup(entry, "State"))
    return _text(health, "Health"), _text(state, "State")


def decode_fans(payload: Dict[str, Any]) -> List[FanReading]:
    """
    Decode the Fans array of a Thermal payload.

    Unknown fields are ignored, missing fields take empty values.

    Raises:
        ThermalDecodeError: If a field has an unexpected type.
    """
    fans = []
    for entry in _entries(payload, "Fans"):
        reading = _number(lookup(entry, "CurrentReading"), "CurrentReading")
        if not reading.is_integer():
            raise ThermalDecodeError(f"Fan reading is not an integer: {reading}")
        health, state = _status(entry)
        fans.append(
            FanReading(
                name=_text(lookup(entry, "FanName", "Name"), "FanName"),
                current_reading=int(reading),
                health=health,
                state=state,
            )
        )
    return fans


def decode_temperatures(payload: Dict[str, Any]) -> List[TemperatureReading]:
    """
    Decode the Temperatures array of a Thermal payload.

    Raises:
        ThermalDecodeError: If a field has an unexpected type.
    """
    sensors = []
    for entry in _entries(payload, "temperatures"):
        health, state = _status(entry)
        sensors.append(
            TemperatureReading(
                name=_text(lookup(entry, "Name"), "Name"),
                current_reading=_number(
                    lookup(entry, "CurrentReading"), "CurrentReading"
                ),
                health=health,
                state=state,
                upper_threshold_critical=_number(
                    lookup(entry, "UpperThresholdCritical"), "UpperThresholdCritical"
                ),
                upper_threshold_fatal=_number(
                    lookup(entry, "UpperThresholdFatal"), "UpperThresholdFatal"
                ),
            )
        )
    return sensors


def decode_thermal(payload: Any) -> Tuple[List[FanReading], List[TemperatureReading]]:
    """Decode fans and temperature sensors from one Thermal payload."""
    if not isinstance(payload, dict):
        raise ThermalDecodeError(
            f"Thermal payload is not an object: {type(payload).__name__}"
        )
    return decode_fans(payload), decode_temperatures(payload)


async def fetch_thermal(
    session: aiohttp.ClientSession, rf_session: RedfishSession, config: ExporterConfig
) -> Tuple[List[FanReading], List[TemperatureReading]]:
    """
    Fetch the Thermal resource and decode it.

    Exactly one request is made; nothing is retried or cached.

    Args:
        session: Shared aiohttp client session.
        rf_session: Authenticated Redfish session.
        config: Exporter configuration.

    Returns:
        Fans and temperature sensors in payload order.

    Raises:
        ThermalFetchError: On any status other than 200 or on transport errors.
        ThermalDecodeError: If the body is not a thermal JSON object.
    """
    url = thermal_url(config)
    kwargs = get_aiohttp_request_kwargs(
        verify_ssl=config.verify_ssl,
        timeout_seconds=config.timeout,
        headers=rf_session.headers,
    )
    start = time.monotonic()
    try:
        async with session.get(url, **kwargs) as resp:
            if resp.status != 200:
                raise ThermalFetchError(
                    f"HTTP {resp.status} from {url}", status_code=resp.status
                )
            payload = await resp.json(content_type=None)
    except (asyncio.TimeoutError, aiohttp.ClientError) as e:
        raise ThermalFetchError(f"Request error on {url}: {e}") from e
    except ValueError as e:
        raise ThermalDecodeError(f"Invalid JSON from {url}: {e}") from e

    fans, sensors = decode_thermal(payload)
    logging.debug(
        "Fetched %d fans and %d sensors from %s in %.3fs",
        len(fans),
        len(sensors),
        rf_session.fqdn,
        time.monotonic() - start,
    )
    return fans, sensors
