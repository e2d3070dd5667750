"""Green hosting check against the Green Web Foundation directory."""

import logging

import httpx

from config import settings
from errors import SignalLookupError

logger = logging.getLogger(__name__)


async def _fetch_greencheck(domain: str) -> dict:
    """Query the greencheck API and return its JSON payload."""
    async with httpx.AsyncClient(
        timeout=settings.http_timeout,
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent_identifier},
    ) as client:
        response = await client.get(settings.green_check_url.format(domain=domain))
        response.raise_for_status()
        return response.json()


async def check_green_hosting(domain: str) -> bool:
    """
    Return True if the domain is served from green hosting.

    Any lookup failure counts as not green. The failure is logged, never raised.
    """
    try:
        payload = await _fetch_greencheck(domain)
        if not isinstance(payload, dict):
            raise ValueError(f"unexpected payload {payload!r}")
    except (httpx.HTTPError, ValueError) as e:
        error = SignalLookupError(f"Green hosting lookup failed for {domain}: {e!r}")
        logger.warning(f"{error}; assuming non-green hosting")
        return False

    green = bool(payload.get("green", False))
    if green:
        logger.info(f"{domain} is green hosted by {payload.get('hosted_by', 'unknown provider')}")
    return green
