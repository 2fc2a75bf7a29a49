# redfish.py
from dataclasses import dataclass
from urllib.parse import urljoin
from gen8_exporter.config import ExporterConfig

SESSION_PATH: str = "/redfish/v1/SessionService/Sessions"
THERMAL_PATH: str = "/redfish/v1/Chassis/{chassis}/Thermal/"
AUTH_HEADER: str = "X-Auth-Token"
LOCATION_HEADER: str = "Location"
STATE_ENABLED: str = "Enabled"


def session_url(config: ExporterConfig) -> str:
    """URL of the Redfish session collection."""
    return f"{config.url}{SESSION_PATH}"


def thermal_url(config: ExporterConfig) -> str:
    """URL of the Thermal resource of the configured chassis."""
    return f"{config.url}{THERMAL_PATH.format(chassis=config.chassis)}"


@dataclass(frozen=True)
class RedfishSession:
    """
    An authenticated Redfish session.

    Attributes:
        token: Value of the X-Auth-Token header.
        logout_url: Location header of the login response, as sent.
            May be relative to fqdn.
        fqdn: Base URL of the Redfish service.
        username: User the session was created for.
    """

    token: str
    logout_url: str
    fqdn: str
    username: str

    @property
    def resolved_logout_url(self) -> str:
        """Absolute URL of the session resource, deleted on logout."""
        return urljoin(f"{self.fqdn}/", self.logout_url)

    @property
    def headers(self) -> dict:
        """Headers authenticating a request with this session."""
        return {AUTH_HEADER: self.token}


@dataclass(frozen=True)
class FanReading:
    """
    One entry of the Fans array.

    Attributes:
        name: Fan name.
        current_reading: Fan usage as reported by the device.
        health: Health status, empty if not reported.
        state: State, e.g. "Enabled" or "Absent".
    """

    name: str
    current_reading: int
    health: str = ""
    state: str = ""


@dataclass(frozen=True)
class TemperatureReading:
    """
    One entry of the Temperatures array.

    Attributes:
        name: Sensor name.
        current_reading: Temperature in degrees Celsius.
        health: Health status, empty if not reported.
        state: State, e.g. "Enabled" or "Absent".
        upper_threshold_critical: Critical upper threshold.
        upper_threshold_fatal: Fatal upper threshold.
    """

    name: str
    current_reading: float
    health: str = ""
    state: str = ""
    upper_threshold_critical: float = 0.0
    upper_threshold_fatal: float = 0.0

    @property
    def enabled(self) -> bool:
        return self.state == STATE_ENABLED
