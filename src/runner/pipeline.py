"""Per-domain eco score pipeline."""

import logging
from urllib.parse import urlparse

from analyzers.countries import country_code_for
from analyzers.hosting import check_green_hosting
from analyzers.lighthouse import run_audit
from analyzers.location import get_server_location
from config import settings
from emissions.co2 import estimate_co2
from errors import LocationUnavailableError
from scoring.eco_score import compute_eco_score
from scoring.schemas import EcoScoreReport

logger = logging.getLogger(__name__)

# Page weight in KB is scaled by 1000 (not 1024) before the emissions model
BYTES_PER_KB_FOR_EMISSIONS = 1000


def normalize_url(domain: str) -> str:
    """Prefix the default scheme unless the domain already has http(s)."""
    if domain.startswith(("http://", "https://")):
        return domain
    return f"{settings.default_scheme}{domain}"


def hostname_of(url: str) -> str:
    """Return the hostname part of a URL."""
    return urlparse(url).hostname or ""


async def get_eco_score(url: str) -> EcoScoreReport:
    """
    Run the full pipeline for one normalized URL.

    Audit -> server location -> green hosting -> CO2 estimate -> score.
    Lookup failures degrade to defaults; audit, location and CO2 errors propagate.
    """
    measurements = await run_audit(url)

    domain = hostname_of(url)
    server_location = await get_server_location(domain)
    is_green = await check_green_hosting(domain)

    if server_location is None:
        raise LocationUnavailableError()

    country_code = country_code_for(server_location.country)
    if country_code is None:
        logger.info(f"No country code for '{server_location.country}', using default grid intensity")

    co2 = estimate_co2(
        measurements.transfer_size_kb * BYTES_PER_KB_FOR_EMISSIONS,
        country_code,
        is_green,
    )

    report = compute_eco_score(measurements, co2, server_location, is_green)
    logger.info(f"Eco score for {url}: {report.eco_score}")
    return report
