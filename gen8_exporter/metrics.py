# metrics.py
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple
from prometheus_client import Counter, Histogram
from prometheus_client.core import GaugeMetricFamily
from gen8_exporter.redfish import FanReading, TemperatureReading

FAN_USAGE = "microserver_gen8_fan_usage"
SENSOR_STATE = "microserver_gen8_sensor_state"
TEMPERATURE = "microserver_gen8_temperature"
TEMPERATURE_UPPER_CRITICAL = "microserver_gen8_temperature_upper_critical"
TEMPERATURE_UPPER_FATAL = "microserver_gen8_temperature_upper_fatal"
UP = "microserver_gen8_up"

# series name -> (documentation, label schema)
SERIES: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    FAN_USAGE: ("Fan usage", ("name", "health", "state")),
    SENSOR_STATE: ("Temperature sensor enabled (1) or not (0)", ("name", "health")),
    TEMPERATURE: ("Temperature reading in degrees Celsius", ("name",)),
    TEMPERATURE_UPPER_CRITICAL: (
        "Upper critical temperature threshold in degrees Celsius",
        ("name",),
    ),
    TEMPERATURE_UPPER_FATAL: (
        "Upper fatal temperature threshold in degrees Celsius",
        ("name",),
    ),
}

SCRAPE_LATENCY = Histogram(
    "microserver_gen8_scrape_duration_seconds", "Time for Redfish thermal request"
)
SCRAPE_ERRORS = Counter(
    "microserver_gen8_scrape_errors_total", "Total failed thermal scrapes", ["error"]
)


class MetricSample(NamedTuple):
    """One value of a series, labels ordered like the series' label schema."""

    series: str
    labels: Tuple[str, ...]
    value: float


def project_fan(fan: FanReading) -> List[MetricSample]:
    """Map a fan onto the fan usage series."""
    return [
        MetricSample(
            FAN_USAGE, (fan.name, fan.health, fan.state), float(fan.current_reading)
        )
    ]


def project_temperature(sensor: TemperatureReading) -> List[MetricSample]:
    """
    Map a temperature sensor onto its four series.

    Any state other than "Enabled" maps to 0. The upper fatal series carries
    the critical threshold.
    """
    return [
        MetricSample(
            SENSOR_STATE, (sensor.name, sensor.health), 1.0 if sensor.enabled else 0.0
        ),
        MetricSample(TEMPERATURE, (sensor.name,), sensor.current_reading),
        MetricSample(
            TEMPERATURE_UPPER_CRITICAL, (sensor.name,), sensor.upper_threshold_critical
        ),
        MetricSample(
            TEMPERATURE_UPPER_FATAL, (sensor.name,), sensor.upper_threshold_critical
        ),
    ]


def new_families() -> Dict[str, GaugeMetricFamily]:
    """Empty gauge families for every thermal series."""
    return {
        name: GaugeMetricFamily(name, documentation, labels=list(labels))
        for name, (documentation, labels) in SERIES.items()
    }


def build_metric_families(
    fans: Iterable[FanReading], sensors: Iterable[TemperatureReading]
) -> List[GaugeMetricFamily]:
    """
    Project readings onto the pre-declared thermal series.

    Args:
        fans: Fans of one scrape.
        sensors: Temperature sensors of the same scrape.

    Returns:
        List[GaugeMetricFamily]: One family per series, in SERIES order,
            possibly without samples.
    """
    families = new_families()
    samples: List[MetricSample] = []
    for fan in fans:
        samples.extend(project_fan(fan))
    for sensor in sensors:
        samples.extend(project_temperature(sensor))
    for sample in samples:
        families[sample.series].add_metric(list(sample.labels), sample.value)
    return list(families.values())


def up_family(up: Optional[bool] = None) -> GaugeMetricFamily:
    """Whether the thermal scrape succeeded, without a sample if up is None."""
    documentation = "Thermal scrape succeeded (1) or failed (0)"
    if up is None:
        return GaugeMetricFamily(UP, documentation)
    return GaugeMetricFamily(UP, documentation, value=1.0 if up else 0.0)
