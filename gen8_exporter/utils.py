# gen8_exporter/utils.py
from typing import Optional, Any, Dict
from aiohttp import ClientTimeout


def get_aiohttp_request_kwargs(
    verify_ssl: bool,
    timeout_seconds: Optional[float] = 10,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Generate keyword arguments for aiohttp requests with proper typing.

    Args:
        verify_ssl: If True, verify SSL certificates.
        timeout_seconds: Timeout in seconds, None or 0 disables it. Defaults to 10.
        headers: Optional headers dictionary.

    Returns:
        dict: Keyword arguments for aiohttp requests (ssl, timeout, headers).
    """
    return {
        "ssl": verify_ssl,
        "timeout": ClientTimeout(total=timeout_seconds or None),
        "headers": headers or {},
    }


def lookup(data: Dict[str, Any], *names: str, default: Any = None) -> Any:
    """
    Get the first matching field of a JSON object.

    Each name is tried as an exact key first, then case-insensitively, the
    way Redfish field names are matched by most JSON decoders.

    Args:
        data: The JSON object to query.
        *names: Candidate field names in order of preference.
        default: Default value if no name matches.

    Returns:
        The value if found, otherwise the default.
    """
    for name in names:
        if name in data:
            return data[name]
        folded = name.casefold()
        for key, value in data.items():
            if isinstance(key, str) and key.casefold() == folded:
                return value
    return default

