"""HTML fetching and URL validation utilities."""

import asyncio
import ipaddress
import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

from cucina_loca.app.core.config import get_settings
from cucina_loca.app.services.url_parsing.errors import (
    FetchFailed,
    FetchTimeout,
    InvalidInput,
    MalformedUpstreamData,
)

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = ("text/html", "application/xhtml", "text/plain")


def is_private_host(host: str) -> bool:
    """Check if a host (optionally with a port) is private/localhost."""
    hostname = host.strip("[]")
    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        hostname = host.rsplit(":", 1)[0].strip("[]")
        try:
            ip = ipaddress.ip_address(hostname)
        except ValueError:
            return hostname.lower() in {"localhost"}
    return ip.is_private or ip.is_loopback


def validate_url(url: Optional[str]) -> str:
    """Return the stripped URL or raise ``InvalidInput`` before any network call."""
    if not url or not url.strip():
        raise InvalidInput("URL is required")
    url = url.strip()
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        # Raises for non-numeric or out-of-range ports.
        parsed.port
    except ValueError:
        raise InvalidInput() from None
    if parsed.scheme not in {"http", "https"} or not parsed.netloc or not hostname:
        raise InvalidInput()
    if get_settings().block_private_hosts and is_private_host(hostname):
        raise InvalidInput("URL points to a private or disallowed host.")
    return url


def build_headers() -> dict:
    settings = get_settings()
    headers = {
        "User-Agent": settings.scraper_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }
    if settings.scraper_cookies:
        headers["Cookie"] = settings.scraper_cookies
    return headers


async def fetch_html(
    url: str,
    *,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Fetch a page once, bounded by a wall-clock timeout.

    The whole request (connect, redirects and body) runs under
    ``asyncio.wait_for`` so an expired deadline cancels the in-flight call.
    The URL is validated here too since callers may use this directly,
    and the private-host guard must hold for every outbound request.
    """
    url = validate_url(url)
    if timeout is None:
        timeout = get_settings().fetch_timeout_seconds

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers=build_headers(),
        transport=transport,
    ) as client:
        try:
            response = await asyncio.wait_for(client.get(url), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("Timed out fetching %s after %.1fs", url, timeout)
            raise FetchTimeout() from None
        except httpx.InvalidURL as exc:
            raise InvalidInput() from exc
        except httpx.HTTPError as exc:
            logger.warning("Network error fetching %s: %s", url, exc)
            raise FetchFailed() from exc

    if not response.is_success:
        logger.warning("Fetching %s returned status %s", url, response.status_code)
        raise FetchFailed(response.status_code, response.reason_phrase)

    content_type = response.headers.get("content-type", "")
    if content_type and not any(ctype in content_type.lower() for ctype in ACCEPTED_CONTENT_TYPES):
        logger.warning("Unsupported content type for %s: %s", url, content_type)
        raise MalformedUpstreamData(f"Unsupported content type: {content_type.split(';')[0]}")

    return response.text
