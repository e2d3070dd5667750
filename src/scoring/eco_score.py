"""
Eco score aggregation.

Combines Lighthouse performance and SEO, page load time, and the CO2
estimate into one 0-100 score:

- Performance Weight: 20% of the total score.
- SEO Weight: 20% of the total score, relative to an SEO goal.
- CO2 Emissions Weight: 40% of the total score, relative to a CO2 goal.
- Page Load Time Weight: 20% of the total score, relative to a load time goal.

Thresholds follow https://sustainablewebdesign.org/estimating-digital-emissions/
and the Lighthouse speed index guidance (3.4s).
"""

import logging
import math
from dataclasses import asdict, dataclass

from analyzers.base import AuditMeasurements, ServerLocation
from errors import LocationUnavailableError
from scoring.schemas import CO2Estimate, EcoScoreReport

logger = logging.getLogger(__name__)

# Thresholds
CO2_GOAL = 0.6  # grams per page view
PAGE_LOAD_TIME_GOAL_SECONDS = 3.4
SEO_GOAL = 85  # lighthouse score
PERFORMANCE_SCORE_GOAL = 85  # lighthouse score, not applied (see performance_score)

# Weights (total = 1.0)
PERFORMANCE_WEIGHT = 0.20
SEO_WEIGHT = 0.20
CO2_WEIGHT = 0.40
PAGE_LOAD_TIME_WEIGHT = 0.20

MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def performance_score(performance_pct: float) -> int:
    """Raw Lighthouse performance scaled by its weight, without goal normalization."""
    return round_half_up(performance_pct * PERFORMANCE_WEIGHT)


def seo_score(seo_pct: float) -> int:
    """SEO relative to SEO_GOAL, capped at 100 before weighting."""
    ratio = min(seo_pct / SEO_GOAL * 100, 100)
    return round_half_up(ratio * SEO_WEIGHT)


def co2_score(emissions_grams: float) -> int:
    """Inversely proportional to emissions, capped at the weight's maximum."""
    max_points = round_half_up(CO2_WEIGHT * 100)
    if emissions_grams == 0:
        return max_points
    # Cap before rounding, tiny emissions overflow the ratio to inf
    return round_half_up(min((CO2_GOAL / emissions_grams) * 100 * CO2_WEIGHT, max_points))


def page_load_time_score(load_time_seconds: float) -> int:
    """
    Full points at or under the goal, proportionally fewer above it.

    A NaN load time counts as 0 seconds.
    """
    max_points = round_half_up(PAGE_LOAD_TIME_WEIGHT * 100)
    load_time = 0 if math.isnan(load_time_seconds) else load_time_seconds
    if load_time <= PAGE_LOAD_TIME_GOAL_SECONDS:
        return max_points

    raw = round_half_up((PAGE_LOAD_TIME_GOAL_SECONDS / load_time) * 100)
    # Anything over the goal never earns full points
    return min(round_half_up(raw * PAGE_LOAD_TIME_WEIGHT), max_points - 1)


@dataclass(frozen=True)
class ScoreComponents:
    """Weighted sub-scores that make up an eco score."""

    performance: int
    seo: int
    co2: int
    page_load_time: int

    @property
    def total(self) -> int:
        """Sum of the sub-scores clamped to [0, MAX_SCORE]."""
        total = self.performance + self.seo + self.co2 + self.page_load_time
        return max(0, min(total, MAX_SCORE))


def score_components(measurements: AuditMeasurements, co2: CO2Estimate) -> ScoreComponents:
    """Compute each weighted sub-score."""
    return ScoreComponents(
        performance=performance_score(measurements.performance_pct),
        seo=seo_score(measurements.seo_pct),
        co2=co2_score(co2.grams),
        page_load_time=page_load_time_score(measurements.load_time_seconds),
    )


def compute_eco_score(
    measurements: AuditMeasurements,
    co2: CO2Estimate,
    server_location: ServerLocation | None,
    is_green: bool,
) -> EcoScoreReport:
    """
    Build the eco score report for one page.

    Args:
        measurements: Lighthouse measurements for the page
        co2: Estimated emissions per page view
        server_location: Where the page is served from
        is_green: Whether the hosting is green

    Returns:
        EcoScoreReport with the clamped score and pass-through details

    Raises:
        LocationUnavailableError: if server_location is None
    """
    if server_location is None:
        raise LocationUnavailableError()

    components = score_components(measurements, co2)
    logger.debug(f"Eco score components: {asdict(components)} -> {components.total}")

    return EcoScoreReport(
        eco_score=components.total,
        page_weight_kb=measurements.transfer_size_kb,
        weight_breakdown=dict(measurements.breakdown_by_resource_type),
        emissions_grams=co2.grams,
        server_country=server_location.country,
        green_hosting=is_green,
    )
