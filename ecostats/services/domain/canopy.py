"""
Domain service: canopy coverage estimation from directional photo samples.
"""
from typing import Mapping, Optional, Sequence
import math
import logging

from ecostats.domain.errors import ValidationError
from ecostats.domain.models import CanopyCoverageResult, CanopyPhotoSample, CanopyPosition
from ecostats.utils.statistics import (
    confidence_bounds,
    standard_error,
    weighted_mean,
    weighted_standard_error,
)
from ecostats.config import settings

logger = logging.getLogger(__name__)


def estimate_canopy_coverage(
    photo_samples: Sequence[CanopyPhotoSample],
    confidence_level: Optional[float] = None,
    position_weights: Optional[Mapping[CanopyPosition, float]] = None,
) -> CanopyCoverageResult:
    """
    Aggregate per-photo covered fractions into plot canopy coverage.

    Every sample counts equally unless position_weights is given, since no
    directional bias is assumed without calibration data. Any non-empty
    subset of the five positions is accepted.

    Args:
        photo_samples: Samples for a single plot
        confidence_level: Level for the t-based bounds; defaults to settings
        position_weights: Optional weight per position (positions not listed
            weigh 1.0). The standard error and bounds then describe the
            weighted mean, using the Kish effective sample size

    Returns:
        CanopyCoverageResult with mean, standard error and bounds

    Raises:
        ValidationError: If there are no samples, a fraction lies outside
            [0, 1], samples span several plots, or a weight names an unknown
            position or is not a positive finite number
    """
    samples = list(photo_samples)
    if not samples:
        raise ValidationError("Canopy coverage needs at least one photo sample")

    if confidence_level is None:
        confidence_level = settings.canopy_confidence_level
    if not 0 < confidence_level < 1:
        raise ValidationError(f"Confidence level must be in (0, 1), got {confidence_level}")

    for sample in samples:
        fraction = sample.covered_fraction
        if math.isnan(fraction) or not 0.0 <= fraction <= 1.0:
            raise ValidationError(
                f"Covered fraction must be in [0, 1]: {sample.position.value} photo of "
                f"plot {sample.plot_id!r} has {fraction}"
            )

    plot_ids = {sample.plot_id for sample in samples}
    if len(plot_ids) > 1:
        raise ValidationError(
            f"Canopy samples must belong to a single plot, got: {', '.join(sorted(plot_ids))}"
        )

    fractions = [sample.covered_fraction for sample in samples]

    if position_weights:
        weights_by_position = {}
        for position, weight in position_weights.items():
            try:
                position = CanopyPosition(position)
            except ValueError:
                raise ValidationError(f"Unknown canopy position in weights: {position!r}")
            if not math.isfinite(weight) or weight <= 0:
                raise ValidationError(
                    f"Weight for position {position.value} must be positive and finite, got {weight}"
                )
            weights_by_position[position] = float(weight)

        weights = [weights_by_position.get(sample.position, 1.0) for sample in samples]
        std_error, effective_count = weighted_standard_error(fractions, weights)
    else:
        weights = None
        std_error = standard_error(fractions)
        effective_count = float(len(samples))

    mean = weighted_mean(fractions, weights)
    if not math.isfinite(mean):
        raise ValidationError(f"Canopy coverage could not be computed from weights {position_weights}")
    mean = min(1.0, max(0.0, mean))
    lower, upper = confidence_bounds(mean, std_error, effective_count, confidence_level)

    plot_id = samples[0].plot_id
    logger.debug(f"Canopy coverage for plot {plot_id}: mean={mean:.3f}, se={std_error:.4f}, "
                 f"n={len(samples)}, n_eff={effective_count:.2f}, weighted={weights is not None}")

    return CanopyCoverageResult(
        plot_id=plot_id,
        mean_coverage=mean,
        sample_count=len(samples),
        standard_error=std_error,
        ci_lower=lower,
        ci_upper=upper,
        confidence_level=confidence_level,
    )
