"""Emissions estimation package."""

from emissions.co2 import SustainableWebDesignModel, estimate_co2

__all__ = [
    "SustainableWebDesignModel",
    "estimate_co2",
]
