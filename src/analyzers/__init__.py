"""EcoScore analyzers package."""

from analyzers.base import AuditMeasurements, ServerLocation
from analyzers.countries import COUNTRY_NAME_TO_CODE, country_code_for
from analyzers.hosting import check_green_hosting
from analyzers.lighthouse import LighthouseAnalyzer, extract_measurements, run_audit
from analyzers.location import get_server_location

__all__ = [
    "AuditMeasurements",
    "ServerLocation",
    "COUNTRY_NAME_TO_CODE",
    "country_code_for",
    "check_green_hosting",
    "LighthouseAnalyzer",
    "extract_measurements",
    "run_audit",
    "get_server_location",
]
