"""
Exporter errors.

Startup errors (configuration, login, logout) end the process; scrape errors
are reported through the collector instead.
"""

from typing import Optional


class ExporterError(Exception):
    """Base exception for exporter operations"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ConfigError(ExporterError, ValueError):
    """Raised when required settings are missing or malformed"""


class AuthenticationError(ExporterError):
    """Raised when a Redfish session cannot be created"""


class SessionTeardownError(ExporterError):
    """Raised when the Redfish session cannot be deleted"""


class ThermalFetchError(ExporterError):
    """Raised when the thermal resource cannot be retrieved"""


class ThermalDecodeError(ThermalFetchError):
    """Raised when the thermal payload has an unexpected shape"""
