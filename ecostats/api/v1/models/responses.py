"""
API response models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from ecostats.domain.models import (
    DiversityResult,
    NestedPlotSample,
    SpeciesAreaCurveFit,
)


class AbundanceTableResponse(BaseModel):
    """Response model for the abundance table endpoint."""
    plot_id: Optional[str] = Field(
        default=None,
        description="Plot the table was built for"
    )
    counts: dict[str, int] = Field(
        description="Species -> individual count"
    )
    total_individuals: int = Field(
        description="Sum of all counts"
    )
    richness: int = Field(
        description="Number of species with a non-zero count"
    )


class ProjectDiversityResponse(BaseModel):
    """Response model for the project diversity summary endpoint."""
    plot_count: int = Field(
        description="Number of plots analysed"
    )
    results: List[DiversityResult] = Field(
        description="Diversity indices per plot"
    )


class SpeciesAreaResponse(BaseModel):
    """Response model for the species-area curve endpoint."""
    series_id: str = Field(
        description="Identifier for the series"
    )
    samples: List[NestedPlotSample] = Field(
        description="Cumulative area / richness points in increasing area"
    )
    fit: SpeciesAreaCurveFit = Field(
        description="Fitted curve"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "series_id": "P-01",
                "samples": [
                    {"cumulative_area": 25.0, "cumulative_richness": 3, "order": 0},
                    {"cumulative_area": 100.0, "cumulative_richness": 5, "order": 1},
                ],
                "fit": {
                    "series_id": "P-01",
                    "model": "power",
                    "coefficient_c": 0.916,
                    "coefficient_z": 0.368,
                    "r_squared": 1.0,
                    "point_count": 2,
                },
            }
        }


class NestedPlotSize(BaseModel):
    """Standard nested plot size."""
    label: str = Field(
        description="Side length label",
        examples=["5×5m"]
    )
    area: float = Field(
        description="Area in m²",
        examples=[25.0]
    )


class NestedPlotSizesResponse(BaseModel):
    """Response model for the standard nested plot sizes endpoint."""
    sizes: List[NestedPlotSize]
