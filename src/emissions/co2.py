"""CO2 estimation using the Sustainable Web Design per-byte model."""

import logging
import math

from config import settings
from errors import CO2EstimationError
from scoring.schemas import CO2Estimate

logger = logging.getLogger(__name__)


class SustainableWebDesignModel:
    """
    Sustainable Web Design model (v3), per byte transferred.

    Energy per byte is split into system segments, and each segment's
    energy is multiplied by the grid intensity it runs on. Green hosting
    only changes the data centre segment.

    Reference: https://sustainablewebdesign.org/estimating-digital-emissions/
    """

    KWH_PER_GB = 0.81
    GLOBAL_GRID_INTENSITY = 442  # gCO2e/kWh
    RENEWABLES_GRID_INTENSITY = 50  # gCO2e/kWh

    # Share of energy per system segment (total = 1)
    SEGMENTS = {
        "data_center": 0.15,
        "network": 0.14,
        "device": 0.52,
        "production": 0.19,
    }

    def __init__(self, grid_intensity: dict[str, float] | None = None):
        self.grid_intensity = grid_intensity or {}

    def data_center_intensity(self, country_code: str | None, green: bool) -> float:
        """Grid intensity for the data centre segment."""
        if green:
            return self.RENEWABLES_GRID_INTENSITY
        if country_code and country_code in self.grid_intensity:
            return self.grid_intensity[country_code]
        return self.GLOBAL_GRID_INTENSITY

    def per_byte(self, bytes_transferred: float, country_code: str | None = None, green: bool = False) -> float:
        """Return grams of CO2e for transferring the given number of bytes."""
        if not math.isfinite(bytes_transferred) or bytes_transferred < 0:
            raise CO2EstimationError(f"Invalid byte count: {bytes_transferred!r}")

        energy_kwh = bytes_transferred / 1_000_000_000 * self.KWH_PER_GB

        grams = 0.0
        for segment, share in self.SEGMENTS.items():
            if segment == "data_center":
                intensity = self.data_center_intensity(country_code, green)
            else:
                intensity = self.GLOBAL_GRID_INTENSITY
            grams += energy_kwh * share * intensity
        return grams


def estimate_co2(page_weight_bytes: float, country_code: str | None, is_green: bool) -> CO2Estimate:
    """
    Estimate the CO2 emitted per page view.

    An absent country code is fine: the global grid intensity is used.
    """
    if country_code is None:
        logger.debug("No country code for emissions estimate, using global grid intensity")

    model = SustainableWebDesignModel(settings.grid_intensity)
    grams = model.per_byte(page_weight_bytes, country_code, is_green)
    return CO2Estimate(grams=grams)
