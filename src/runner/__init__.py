"""Eco score batch runner package."""

from runner.batch import DomainFailure, DomainSuccess, process_domain_list, process_domains
from runner.pipeline import get_eco_score, normalize_url

__all__ = [
    "DomainFailure",
    "DomainSuccess",
    "process_domain_list",
    "process_domains",
    "get_eco_score",
    "normalize_url",
]
