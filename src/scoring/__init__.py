"""Eco score aggregation package."""

from scoring.eco_score import compute_eco_score
from scoring.schemas import CO2Estimate, EcoScoreReport

__all__ = [
    "compute_eco_score",
    "CO2Estimate",
    "EcoScoreReport",
]
