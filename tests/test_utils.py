# tests/test_utils.py
from aiohttp import ClientTimeout
from gen8_exporter.utils import get_aiohttp_request_kwargs, lookup


class TestGetAiohttpRequestKwargs:
    """Tests for get_aiohttp_request_kwargs function."""

    def test_basic_kwargs_with_ssl_true(self):
        """Test kwargs generation with SSL verification enabled."""
        kwargs = get_aiohttp_request_kwargs(verify_ssl=True)
        assert kwargs["ssl"] is True
        assert isinstance(kwargs["timeout"], ClientTimeout)
        assert kwargs["timeout"].total == 10
        assert kwargs["headers"] == {}

    def test_basic_kwargs_with_ssl_false(self):
        """Test kwargs generation with SSL verification disabled."""
        kwargs = get_aiohttp_request_kwargs(verify_ssl=False)
        assert kwargs["ssl"] is False

    def test_custom_timeout(self):
        """Test kwargs with custom timeout."""
        kwargs = get_aiohttp_request_kwargs(verify_ssl=True, timeout_seconds=30)
        assert kwargs["timeout"].total == 30

    def test_zero_timeout_disables_timeout(self):
        """Test a zero timeout means no timeout."""
        kwargs = get_aiohttp_request_kwargs(verify_ssl=True, timeout_seconds=0)
        assert kwargs["timeout"].total is None

    def test_custom_headers(self):
        """Test kwargs with custom headers."""
        headers = {"X-Auth-Token": "abc123"}
        kwargs = get_aiohttp_request_kwargs(verify_ssl=True, headers=headers)
        assert kwargs["headers"] == headers


class TestLookup:
    """Tests for lookup function."""

    def test_exact_key(self):
        assert lookup({"Fans": [1]}, "Fans") == [1]

    def test_case_insensitive_key(self):
        assert lookup({"Temperatures": [1]}, "temperatures") == [1]

    def test_exact_key_preferred(self):
        assert lookup({"state": "a", "State": "b"}, "State") == "b"

    def test_first_matching_name(self):
        assert lookup({"Name": "Fan 1"}, "FanName", "Name") == "Fan 1"

    def test_missing_key(self):
        assert lookup({"Fans": []}, "Temperatures") is None

    def test_missing_key_with_default(self):
        assert lookup({}, "Fans", default="fallback") == "fallback"

    def test_value_is_none(self):
        assert lookup({"Fans": None}, "Fans", default=[]) is None

