"""
Application service: Orchestration layer for plot analysis operations.
"""
from typing import Mapping, Optional, Sequence, Union
import math
import logging

from ecostats.domain.models import (
    AbundanceTable,
    CanopyCoverageResult,
    CanopyPhotoSample,
    CanopyPosition,
    CurveModel,
    DiversityResult,
    NestedPlotSample,
    SpeciesAreaCurveFit,
    SpeciesObservation,
)
from ecostats.services.domain.abundance import build_abundance_table
from ecostats.services.domain.diversity import compute_diversity
from ecostats.services.domain.species_area import aggregate_species_area
from ecostats.services.domain.curve_fitting import fit_species_area_curve
from ecostats.services.domain.canopy import estimate_canopy_coverage

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Application service for plot and project analyses.

    Chains the domain functions for callers that hold raw observation
    records. Follows the application layer pattern - no formulas here,
    only coordination between the domain steps.
    """

    def __init__(
        self,
        include_zero_counts: Optional[bool] = None,
        confidence_level: Optional[float] = None,
        nested_plot_sizes: Optional[Sequence[float]] = None,
    ):
        """
        Initialize the service.

        Args:
            include_zero_counts: Keep zero-count species (None = settings default)
            confidence_level: Canopy confidence level (None = settings default)
            nested_plot_sizes: Standard nested plot areas in m²
        """
        self.include_zero_counts = include_zero_counts
        self.confidence_level = confidence_level
        self.nested_plot_sizes = list(nested_plot_sizes or [])

    def plot_abundance(
        self,
        observations: Sequence[SpeciesObservation],
        include_zero_counts: Optional[bool] = None,
        plot_id: Optional[str] = None,
    ) -> AbundanceTable:
        if include_zero_counts is None:
            include_zero_counts = self.include_zero_counts
        return build_abundance_table(observations, include_zero_counts, plot_id=plot_id)

    def plot_diversity(
        self,
        observations: Sequence[SpeciesObservation],
        include_zero_counts: Optional[bool] = None,
        plot_id: Optional[str] = None,
    ) -> DiversityResult:
        """
        Diversity indices for one plot straight from its observations.

        Raises:
            ValidationError: If observations are invalid
        """
        table = self.plot_abundance(observations, include_zero_counts, plot_id=plot_id)
        result = compute_diversity(table)
        logger.info(f"Plot {result.plot_id}: richness={result.richness}, "
                    f"shannon={result.shannon_index:.3f}")
        return result

    def project_diversity(
        self,
        plots: Mapping[str, Sequence[SpeciesObservation]],
    ) -> list[DiversityResult]:
        """
        Diversity indices for every plot of a project.

        Args:
            plots: plot_id -> observations for that plot

        Returns:
            One DiversityResult per plot, in the mapping's order

        Raises:
            ValidationError: If any plot's observations are invalid
        """
        logger.info(f"Computing diversity for {len(plots)} plots")
        return [
            self.plot_diversity(observations, plot_id=plot_id)
            for plot_id, observations in plots.items()
        ]

    def species_area_curve(
        self,
        nested_plots: Sequence[tuple[float, Sequence[SpeciesObservation]]],
        model: Optional[Union[CurveModel, str]] = None,
        series_id: str = "series",
    ) -> tuple[list[NestedPlotSample], SpeciesAreaCurveFit]:
        """
        Aggregate nested plots and fit a species-area curve.

        This method orchestrates:
        1. Building an abundance table for each nested plot
        2. Aggregating the tables into a cumulative series
        3. Fitting the requested model to the series

        Args:
            nested_plots: (area, observations) per nested plot
            model: Curve model (None = settings default)
            series_id: Identifier for the series

        Returns:
            (series samples, curve fit)

        Raises:
            ValidationError: If inputs are invalid
            InsufficientDataError: If the series is too sparse to fit
        """
        tables = [
            (area, self.plot_abundance(observations))
            for area, observations in nested_plots
        ]
        samples = aggregate_species_area(tables)
        fit = fit_species_area_curve(samples, model=model, series_id=series_id)
        return samples, fit

    def canopy_coverage(
        self,
        photo_samples: Sequence[CanopyPhotoSample],
        position_weights: Optional[Mapping[CanopyPosition, float]] = None,
    ) -> CanopyCoverageResult:
        """
        Canopy coverage for one plot.

        Raises:
            ValidationError: If the samples are empty or out of range
        """
        result = estimate_canopy_coverage(
            photo_samples,
            confidence_level=self.confidence_level,
            position_weights=position_weights,
        )
        logger.info(f"Plot {result.plot_id}: canopy coverage {result.mean_coverage:.1%} "
                    f"from {result.sample_count} photos")
        return result

    def standard_nested_plots(self) -> list[tuple[str, float]]:
        """Label and area of each standard nested plot size, e.g. ('5×5m', 25.0)."""
        return [(f"{math.sqrt(area):g}×{math.sqrt(area):g}m", float(area))
                for area in sorted(self.nested_plot_sizes)]
