"""Server geolocation lookup."""

import asyncio
import logging
import socket

import httpx

from analyzers.base import ServerLocation
from config import settings
from errors import SignalLookupError

logger = logging.getLogger(__name__)


async def resolve_ipv4(domain: str) -> str:
    """Resolve a domain and return its first IPv4 address."""
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(domain, None, family=socket.AF_INET, type=socket.SOCK_STREAM)
    except OSError as e:
        raise SignalLookupError(f"DNS lookup failed for {domain}: {e}") from e
    if not infos:
        raise SignalLookupError(f"No IPv4 address found for {domain}")
    return infos[0][4][0]


async def geolocate_ip(ip_address: str) -> ServerLocation:
    """Look up country, region and city for an IP address."""
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
            response = await client.get(settings.geoip_url.format(ip=ip_address))
            response.raise_for_status()
            data = response.json()
        return ServerLocation(
            country=data["country_name"],
            region=data.get("region_name", ""),
            city=data.get("city", ""),
        )
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        raise SignalLookupError(f"Geolocation lookup failed for {ip_address}: {e!r}") from e


async def get_server_location(domain: str) -> ServerLocation | None:
    """
    Find where the server behind a domain is located.

    Returns None when either DNS or the geolocation service fails. No retries.
    """
    try:
        ip_address = await resolve_ipv4(domain)
        location = await geolocate_ip(ip_address)
    except SignalLookupError as e:
        logger.warning(f"Error fetching server location for {domain}: {e}; location unavailable")
        return None

    logger.debug(f"{domain} ({ip_address}) located in {location.city}, {location.region}, {location.country}")
    return location
