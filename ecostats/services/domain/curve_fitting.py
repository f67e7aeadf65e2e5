"""
Domain service: species-area curve fitting.

Two models are supported:
- Power law S = C·A^z, fitted by least squares on (ln A, ln S). Points with
  S = 0 are excluded because their logarithm is undefined. The reported R²
  is the log-space R² of that linear fit, which can differ from an R²
  computed on back-transformed richness values.
- Logarithmic S = a + b·ln(A), fitted by least squares on (ln A, S) using
  every point.
"""
from typing import Optional, Sequence, Union
import math
import numpy as np
import logging

from ecostats.domain.errors import InsufficientDataError, ValidationError
from ecostats.domain.models import CurveModel, NestedPlotSample, SpeciesAreaCurveFit
from ecostats.utils.statistics import least_squares_line
from ecostats.config import settings

logger = logging.getLogger(__name__)


def _resolve_model(model: Optional[Union[CurveModel, str]]) -> CurveModel:
    if model is None:
        model = settings.default_curve_model
    try:
        return CurveModel(model)
    except ValueError:
        choices = ", ".join(m.value for m in CurveModel)
        raise ValidationError(f"Unknown species-area model {model!r} (expected one of: {choices})")


def _validate_series(samples: list[NestedPlotSample]) -> None:
    """Series must have positive, strictly increasing areas and non-decreasing richness."""
    for sample in samples:
        if not math.isfinite(sample.cumulative_area) or sample.cumulative_area <= 0:
            raise ValidationError(f"Sample areas must be positive, got {sample.cumulative_area}")

    for previous, current in zip(samples, samples[1:]):
        if current.cumulative_area <= previous.cumulative_area:
            raise ValidationError(
                f"Sample areas must strictly increase with order: "
                f"{previous.cumulative_area:g} (order {previous.order}) then "
                f"{current.cumulative_area:g} (order {current.order})"
            )
        if current.cumulative_richness < previous.cumulative_richness:
            raise ValidationError(
                f"Cumulative richness cannot decrease with area: "
                f"{previous.cumulative_richness} at {previous.cumulative_area:g} then "
                f"{current.cumulative_richness} at {current.cumulative_area:g}"
            )


def fit_species_area_curve(
    samples: Sequence[NestedPlotSample],
    model: Optional[Union[CurveModel, str]] = None,
    series_id: str = "series",
) -> SpeciesAreaCurveFit:
    """
    Fit a species-area model to a nested plot series.

    Args:
        samples: Series points, as produced by aggregate_species_area
        model: "power" or "logarithmic"; defaults to settings.default_curve_model
        series_id: Identifier reported on the fit

    Returns:
        SpeciesAreaCurveFit with coefficients and R²

    Raises:
        ValidationError: If the model is unknown, areas are invalid or
            richness decreases along the series
        InsufficientDataError: If fewer than 2 usable points remain
    """
    curve_model = _resolve_model(model)
    ordered = sorted(samples, key=lambda s: s.order)
    _validate_series(ordered)

    areas = np.array([s.cumulative_area for s in ordered], dtype=float)
    richness = np.array([s.cumulative_richness for s in ordered], dtype=float)

    if curve_model is CurveModel.POWER:
        usable = richness > 0
        excluded = int(np.count_nonzero(~usable))
        if excluded:
            logger.debug(f"Series {series_id}: excluded {excluded} zero-richness points from power fit")

        if np.count_nonzero(usable) < 2:
            raise InsufficientDataError(
                f"Power-law fit of series {series_id!r} needs at least 2 points with "
                f"non-zero richness, got {int(np.count_nonzero(usable))}"
            )

        fit = least_squares_line(np.log(areas[usable]), np.log(richness[usable]))
        coefficient_c = float(np.exp(fit.intercept))
        coefficient_z = fit.slope
    else:
        if len(ordered) < 2:
            raise InsufficientDataError(
                f"Logarithmic fit of series {series_id!r} needs at least 2 points, got {len(ordered)}"
            )

        fit = least_squares_line(np.log(areas), richness)
        coefficient_c = fit.intercept
        coefficient_z = fit.slope

    logger.info(f"Fitted {curve_model.value} curve for series {series_id}: "
                f"c={coefficient_c:.4f}, z={coefficient_z:.4f}, r²={fit.r_squared:.4f} "
                f"({fit.n} points)")

    return SpeciesAreaCurveFit(
        series_id=series_id,
        model=curve_model,
        coefficient_c=coefficient_c,
        coefficient_z=coefficient_z,
        r_squared=fit.r_squared,
        point_count=fit.n,
    )
