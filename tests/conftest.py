# tests/conftest.py
import copy
import pytest
from unittest.mock import AsyncMock, MagicMock
from gen8_exporter.config import ExporterConfig
from gen8_exporter.redfish import RedfishSession

SCENARIO_PAYLOAD = {
    "Fans": [{"FanName": "Fan1", "CurrentReading": 30, "state": "Enabled"}],
    "temperatures": [
        {
            "Name": "Ambient",
            "CurrentReading": 25.5,
            "state": "Enabled",
            "UpperThresholdCritical": 70,
            "UpperThresholdFatal": 85,
        }
    ],
}

# Trimmed iLO 4 Thermal resource
ILO_PAYLOAD = {
    "@odata.id": "/redfish/v1/Chassis/1/Thermal/",
    "Id": "Thermal",
    "Type": "Thermal.1.1.0",
    "Fans": [
        {
            "FanName": "Fan 1",
            "CurrentReading": 19,
            "Units": "Percent",
            "Status": {"Health": "OK", "State": "Enabled"},
        },
        {
            "FanName": "Fan 2",
            "CurrentReading": 0,
            "Units": "Percent",
            "Status": {"State": "Absent"},
        },
    ],
    "Temperatures": [
        {
            "Name": "01-Inlet Ambient",
            "Number": 1,
            "CurrentReading": 21,
            "Status": {"Health": "OK", "State": "Enabled"},
            "UpperThresholdCritical": 42,
            "UpperThresholdFatal": 46,
        },
        {
            "Name": "02-CPU",
            "Number": 2,
            "CurrentReading": 40,
            "Status": {"Health": "OK", "State": "Enabled"},
            "UpperThresholdCritical": 70,
            "UpperThresholdFatal": 0,
        },
        {
            "Name": "03-P1 DIMM 1-2",
            "Number": 3,
            "CurrentReading": 0,
            "Status": {"State": "Absent"},
            "UpperThresholdCritical": 87,
            "UpperThresholdFatal": 0,
        },
    ],
}


def create_mock_response(data=None, status=200, headers=None, text=""):
    """Create a mock aiohttp response."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=data)
    mock_response.text = AsyncMock(return_value=text)
    mock_response.headers = headers or {}
    return mock_response


def create_mock_cm(response=None, error=None):
    """Async context manager entering into response, or failing with error."""
    mock_cm = MagicMock()
    if error is not None:
        mock_cm.__aenter__ = AsyncMock(side_effect=error)
    else:
        mock_cm.__aenter__ = AsyncMock(return_value=response)
    mock_cm.__aexit__ = AsyncMock(return_value=None)
    return mock_cm


def create_mock_session(data=None, status=200, headers=None, text="", error=None):
    """Create a mock aiohttp session answering every request the same way."""
    session = MagicMock()
    mock_cm = create_mock_cm(create_mock_response(data, status, headers, text), error)
    session.get.return_value = mock_cm
    session.post.return_value = mock_cm
    session.delete.return_value = mock_cm
    return session


@pytest.fixture
def config():
    return ExporterConfig(
        url="https://ilo.example.com",
        login="admin",
        password="secret",
    )


@pytest.fixture
def rf_session():
    return RedfishSession(
        token="abc123",
        logout_url="https://ilo.example.com/redfish/v1/SessionService/Sessions/admin0001/",
        fqdn="https://ilo.example.com",
        username="admin",
    )


@pytest.fixture
def mock_session():
    return create_mock_session


@pytest.fixture
def scenario_payload():
    return copy.deepcopy(SCENARIO_PAYLOAD)


@pytest.fixture
def ilo_payload():
    return copy.deepcopy(ILO_PAYLOAD)
