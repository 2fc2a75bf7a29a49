# gen8_exporter/auth.py
import logging
import asyncio
import aiohttp
from gen8_exporter.config import ExporterConfig
from gen8_exporter.errors import AuthenticationError, SessionTeardownError
from gen8_exporter.redfish import (
    AUTH_HEADER,
    LOCATION_HEADER,
    RedfishSession,
    session_url,
)
from gen8_exporter.utils import get_aiohttp_request_kwargs


async def login(session: aiohttp.ClientSession, config: ExporterConfig) -> RedfishSession:
    """
    Create a Redfish session.

    The session is created once at startup and reused by every scrape, so
    any failure here is final.

    Args:
        session: Shared aiohttp client session.
        config: Exporter configuration.

    Returns:
        RedfishSession: Token and logout URL of the new session.

    Raises:
        AuthenticationError: On any status other than 201, on transport
            errors, or if the token or location header is missing.
    """
    kwargs = get_aiohttp_request_kwargs(
        verify_ssl=config.verify_ssl, timeout_seconds=config.timeout
    )
    payload = {"UserName": config.login, "Password": config.password}
    try:
        async with session.post(session_url(config), json=payload, **kwargs) as resp:
            if resp.status != 201:
                body = await resp.text()
                raise AuthenticationError(
                    f"Login to {config.url} failed with status {resp.status}: {body}",
                    status_code=resp.status,
                )
            token = resp.headers.get(AUTH_HEADER)
            location = resp.headers.get(LOCATION_HEADER)
    except (asyncio.TimeoutError, aiohttp.ClientError, UnicodeDecodeError) as e:
        raise AuthenticationError(f"Login to {config.url} failed: {e}") from e

    if not token:
        raise AuthenticationError(f"No {AUTH_HEADER} in login response from {config.url}")
    if not location:
        raise AuthenticationError(
            f"No {LOCATION_HEADER} in login response from {config.url}"
        )

    logging.info("New session token obtained for %s", config.url)
    return RedfishSession(
        token=token,
        logout_url=location,
        fqdn=config.url,
        username=config.login,
    )


async def logout(
    session: aiohttp.ClientSession, rf_session: RedfishSession, config: ExporterConfig
) -> None:
    """
    Delete a Redfish session.

    Raises:
        SessionTeardownError: On any status other than 200 or on transport errors.
    """
    kwargs = get_aiohttp_request_kwargs(
        verify_ssl=config.verify_ssl,
        timeout_seconds=config.timeout,
        headers=rf_session.headers,
    )
    try:
        async with session.delete(rf_session.resolved_logout_url, **kwargs) as resp:
            if resp.status != 200:
                raise SessionTeardownError(
                    f"Logout from {rf_session.fqdn} failed with status {resp.status}",
                    status_code=resp.status,
                )
    except (asyncio.TimeoutError, aiohttp.ClientError) as e:
        raise SessionTeardownError(f"Logout from {rf_session.fqdn} failed: {e}") from e
    logging.info("Logged out from %s", rf_session.fqdn)
