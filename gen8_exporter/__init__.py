"""Microserver Gen8 Thermal Exporter: export fan and temperature data from an HPE iLO Redfish API."""

from .main import run_exporter
from .config import ExporterConfig, load_config
from .redfish import RedfishSession, FanReading, TemperatureReading
from .collector import ThermalCollector

__all__ = [
    "run_exporter",
    "ExporterConfig",
    "load_config",
    "RedfishSession",
    "FanReading",
    "TemperatureReading",
    "ThermalCollector",
]
