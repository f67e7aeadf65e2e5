"""
Domain models for plot observations and analysis results.

These models represent the core domain entities and should be independent
of any infrastructure concerns (HTTP, storage, etc.). All of them are
value objects: built once per analysis call and never mutated.
"""
import math
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class CurveModel(str, Enum):
    """Species-area model family."""
    POWER = "power"
    LOGARITHMIC = "logarithmic"


class CanopyPosition(str, Enum):
    """Direction a canopy photo was taken from within the plot."""
    CENTER = "center"
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class SpeciesObservation(BaseModel):
    """One observation event of a species within a plot."""
    species_id: str
    count: int = Field(description="Number of individuals observed")
    plot_id: str

    class Config:
        frozen = True


class AbundanceTable(BaseModel):
    """Species -> individual count mapping for one plot."""
    plot_id: Optional[str] = None
    counts: dict[str, int] = Field(default_factory=dict)

    class Config:
        frozen = True

    @property
    def total_individuals(self) -> int:
        return sum(self.counts.values())

    @property
    def richness(self) -> int:
        return sum(1 for count in self.counts.values() if count > 0)

    def present_species(self) -> set[str]:
        """Species with at least one individual."""
        return {species for species, count in self.counts.items() if count > 0}


class DiversityResult(BaseModel):
    """Diversity indices computed for one plot."""
    plot_id: Optional[str] = None
    richness: int = Field(ge=0, description="Number of distinct species present")
    shannon_index: float = Field(ge=0, description="Shannon-Wiener H' (natural log)")
    simpson_index: float = Field(
        ge=0, le=1,
        description="Simpson's D = sum of squared proportions (lower = more diverse)"
    )
    simpson_diversity: float = Field(
        ge=0, le=1,
        description="Simpson's diversity 1 - D (higher = more diverse)"
    )
    evenness: float = Field(ge=0, le=1, description="Pielou's evenness J = H' / ln(S)")
    total_individuals: int = Field(ge=0)
    inverse_simpson: float = Field(default=0.0, ge=0, description="Simpson's reciprocal 1 / D")
    menhinick_index: float = Field(default=0.0, ge=0, description="S / sqrt(N)")
    margalef_index: float = Field(default=0.0, ge=0, description="(S - 1) / ln(N)")

    class Config:
        frozen = True


class NestedPlotSample(BaseModel):
    """One level of a nested species-area series."""
    cumulative_area: float = Field(gt=0, description="Surveyed area in m²")
    cumulative_richness: int = Field(ge=0)
    order: int = Field(ge=0, description="Position in the nesting sequence")

    class Config:
        frozen = True


class SpeciesAreaCurveFit(BaseModel):
    """
    Fitted species-area curve.

    For the power model S = C·A^z, coefficient_c is C and coefficient_z is z.
    For the logarithmic model S = a + b·ln(A), coefficient_c is the
    intercept a and coefficient_z is the slope b.
    """
    series_id: str
    model: CurveModel
    coefficient_c: float
    coefficient_z: float
    r_squared: float = Field(ge=0, le=1)
    point_count: int = Field(ge=2, description="Number of points used by the fit")

    class Config:
        frozen = True

    @property
    def intercept(self) -> float:
        return self.coefficient_c

    @property
    def slope(self) -> float:
        return self.coefficient_z

    def predict(self, area: float) -> float:
        """Evaluate the fitted curve at the given area."""
        if area <= 0:
            raise ValueError(f"Area must be positive, got {area}")
        if self.model is CurveModel.POWER:
            return self.coefficient_c * area ** self.coefficient_z
        return self.coefficient_c + self.coefficient_z * math.log(area)


class CanopyPhotoSample(BaseModel):
    """Covered fraction derived from one canopy photo."""
    plot_id: str
    position: CanopyPosition
    covered_fraction: float = Field(description="Fraction of the frame covered by canopy")

    class Config:
        frozen = True


class CanopyCoverageResult(BaseModel):
    """Aggregate canopy coverage for one plot."""
    plot_id: str
    mean_coverage: float = Field(ge=0, le=1)
    sample_count: int = Field(ge=1)
    standard_error: float = Field(ge=0)
    ci_lower: float = Field(ge=0, le=1)
    ci_upper: float = Field(ge=0, le=1)
    confidence_level: float = Field(gt=0, lt=1)

    class Config:
        frozen = True
