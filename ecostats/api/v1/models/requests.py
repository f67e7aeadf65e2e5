"""
API request models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from ecostats.domain.models import (
    CanopyPhotoSample,
    CanopyPosition,
    CurveModel,
    SpeciesObservation,
)


class PlotObservationsRequest(BaseModel):
    """Observations recorded in a single plot."""
    observations: List[SpeciesObservation] = Field(
        description="Species observation records for one plot"
    )
    include_zero_counts: Optional[bool] = Field(
        default=None,
        description="Keep species recorded with count 0 (defaults to server setting)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "observations": [
                    {"species_id": "oak", "count": 5, "plot_id": "P-01"},
                    {"species_id": "oak", "count": 3, "plot_id": "P-01"},
                    {"species_id": "pine", "count": 2, "plot_id": "P-01"},
                ]
            }
        }


class ProjectPlot(BaseModel):
    """One plot of a project with its observations."""
    plot_id: str
    observations: List[SpeciesObservation] = Field(default_factory=list)


class ProjectDiversityRequest(BaseModel):
    """Plots of a project to summarise."""
    plots: List[ProjectPlot] = Field(
        description="Plots to analyse; plot ids must be unique"
    )


class NestedPlot(BaseModel):
    """One nested plot of a species-area series."""
    area: float = Field(description="Plot area in m²")
    observations: List[SpeciesObservation] = Field(default_factory=list)


class SpeciesAreaRequest(BaseModel):
    """Nested plots making up one species-area series."""
    series_id: str = Field(description="Identifier for the series")
    model: Optional[CurveModel] = Field(
        default=None,
        description="Curve model to fit (defaults to server setting)"
    )
    nested_plots: List[NestedPlot] = Field(
        description="Nested plots in any order"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "series_id": "P-01",
                "model": "power",
                "nested_plots": [
                    {"area": 25, "observations": [{"species_id": "oak", "count": 2, "plot_id": "P-01-a"}]},
                    {"area": 100, "observations": [{"species_id": "pine", "count": 1, "plot_id": "P-01-b"}]},
                ]
            }
        }


class CanopyCoverageRequest(BaseModel):
    """Photo-derived canopy samples for one plot."""
    samples: List[CanopyPhotoSample] = Field(
        description="Covered fraction per photo position"
    )
    position_weights: Optional[dict[CanopyPosition, float]] = Field(
        default=None,
        description="Optional weight per position; unweighted mean when omitted"
    )
