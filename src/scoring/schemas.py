"""Pydantic models for emissions estimates and eco score reports."""

from pydantic import BaseModel, ConfigDict, Field


class CO2Estimate(BaseModel):
    """Estimated CO2 for one page view."""

    model_config = ConfigDict(frozen=True)

    grams: float = Field(..., ge=0)


class EcoScoreReport(BaseModel):
    """
    Final report for one domain.

    Field aliases are the keys written to the scores file.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    eco_score: int = Field(..., ge=0, le=100, alias="Eco Score")
    page_weight_kb: float = Field(..., alias="Page Weight")
    weight_breakdown: dict[str, float] = Field(default_factory=dict, alias="Weight Breakdown")
    emissions_grams: float = Field(..., alias="Emissions per page")
    server_country: str = Field(..., alias="Server Location")
    green_hosting: bool = Field(..., alias="Green Hosting")
