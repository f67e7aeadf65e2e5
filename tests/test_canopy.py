"""
Unit tests for canopy coverage estimation.

Tests cover:
- Mean and standard error
- Confidence bounds
- Partial sample sets
- Optional position weighting and weighted standard error
- Input validation
"""
import math
import numpy as np
import pytest
from scipy import stats

from ecostats.domain.errors import ValidationError
from ecostats.domain.models import CanopyPhotoSample, CanopyPosition
from ecostats.services.domain.canopy import estimate_canopy_coverage


def sample(position, fraction, plot_id="P-01"):
    return CanopyPhotoSample(plot_id=plot_id, position=position, covered_fraction=fraction)


# ============================================================
# Estimation Tests
# ============================================================

class TestCanopyEstimation:
    """Tests for coverage aggregation."""

    def test_identical_samples(self):
        """Five samples of 0.6 give mean 0.6 and zero standard error."""
        samples = [sample(position, 0.6) for position in CanopyPosition]

        result = estimate_canopy_coverage(samples)

        assert result.mean_coverage == pytest.approx(0.6)
        assert result.standard_error == pytest.approx(0.0, abs=1e-12)
        assert result.sample_count == 5
        assert result.ci_lower == pytest.approx(0.6)
        assert result.ci_upper == pytest.approx(0.6)

    def test_mean_and_standard_error(self, canopy_samples):
        """Standard error uses the Bessel-corrected deviation."""
        result = estimate_canopy_coverage(canopy_samples)

        expected_se = math.sqrt(0.025 / 4) / math.sqrt(5)

        assert result.plot_id == "P-01"
        assert result.mean_coverage == pytest.approx(0.6)
        assert result.standard_error == pytest.approx(expected_se)

    def test_confidence_bounds(self, canopy_samples):
        """Bounds use the Student t quantile with n - 1 degrees of freedom."""
        result = estimate_canopy_coverage(canopy_samples, confidence_level=0.95)

        margin = stats.t.ppf(0.975, df=4) * result.standard_error

        assert result.confidence_level == 0.95
        assert result.ci_lower == pytest.approx(0.6 - margin)
        assert result.ci_upper == pytest.approx(0.6 + margin)
        assert result.ci_lower < result.mean_coverage < result.ci_upper

    def test_bounds_clipped_to_unit_interval(self):
        """Bounds never leave [0, 1]."""
        samples = [
            sample(CanopyPosition.CENTER, 1.0),
            sample(CanopyPosition.NORTH, 0.9),
        ]

        result = estimate_canopy_coverage(samples)

        assert result.ci_upper == 1.0
        assert 0.0 <= result.ci_lower <= result.mean_coverage

    def test_single_sample(self):
        """One photo gives zero standard error and collapsed bounds."""
        result = estimate_canopy_coverage([sample(CanopyPosition.CENTER, 0.42)])

        assert result.sample_count == 1
        assert result.mean_coverage == pytest.approx(0.42)
        assert result.standard_error == 0.0
        assert result.ci_lower == result.ci_upper == pytest.approx(0.42)

    def test_partial_subset_accepted(self):
        """Any non-empty subset of positions is accepted."""
        samples = [
            sample(CanopyPosition.NORTH, 0.3),
            sample(CanopyPosition.EAST, 0.5),
        ]

        result = estimate_canopy_coverage(samples)

        assert result.sample_count == 2
        assert result.mean_coverage == pytest.approx(0.4)
        assert result.standard_error == pytest.approx(0.1)

    def test_unweighted_by_default(self, canopy_samples):
        """Center and quadrant photos weigh equally by default."""
        result = estimate_canopy_coverage(canopy_samples)

        mean = sum(s.covered_fraction for s in canopy_samples) / len(canopy_samples)
        assert result.mean_coverage == pytest.approx(mean)

    def test_position_weights(self, canopy_samples):
        """Explicit weights shift the mean toward heavier positions."""
        result = estimate_canopy_coverage(
            canopy_samples,
            position_weights={CanopyPosition.CENTER: 4.0},
        )

        # center 0.70 with weight 4, the other four (mean 0.575) weight 1 each
        assert result.mean_coverage == pytest.approx((0.70 * 4 + 2.30) / 8)

    def test_weighted_standard_error(self, canopy_samples):
        """Weighted estimates report the Kish-corrected standard error."""
        result = estimate_canopy_coverage(
            canopy_samples,
            position_weights={CanopyPosition.CENTER: 4.0},
        )

        values = np.array([s.covered_fraction for s in canopy_samples])
        weights = np.array([4.0, 1.0, 1.0, 1.0, 1.0])
        mean = np.sum(weights * values) / weights.sum()
        n_eff = weights.sum() ** 2 / np.sum(weights ** 2)  # 64 / 20
        variance = np.sum(weights * (values - mean) ** 2) / weights.sum() * n_eff / (n_eff - 1)
        expected_se = math.sqrt(variance / n_eff)
        margin = stats.t.ppf(0.975, df=n_eff - 1) * expected_se

        assert n_eff == pytest.approx(3.2)
        assert result.standard_error == pytest.approx(expected_se)
        assert result.ci_lower == pytest.approx(mean - margin)
        assert result.ci_upper == pytest.approx(mean + margin)

    def test_equal_weights_match_unweighted(self, canopy_samples):
        """Uniform weights reproduce the unweighted estimate."""
        unweighted = estimate_canopy_coverage(canopy_samples)
        weighted = estimate_canopy_coverage(
            canopy_samples,
            position_weights={position: 2.5 for position in CanopyPosition},
        )

        assert weighted.mean_coverage == pytest.approx(unweighted.mean_coverage)
        assert weighted.standard_error == pytest.approx(unweighted.standard_error)
        assert weighted.ci_lower == pytest.approx(unweighted.ci_lower)
        assert weighted.ci_upper == pytest.approx(unweighted.ci_upper)

    def test_dominant_weight_widens_interval(self):
        """One overwhelming weight leaves about one effective sample."""
        samples = [sample(CanopyPosition.CENTER, 0.9)] + [
            sample(position, 0.1)
            for position in [CanopyPosition.NORTH, CanopyPosition.SOUTH,
                             CanopyPosition.EAST, CanopyPosition.WEST]
        ]

        unweighted = estimate_canopy_coverage(samples)
        weighted = estimate_canopy_coverage(
            samples,
            position_weights={CanopyPosition.CENTER: 1000.0},
        )

        assert unweighted.standard_error == pytest.approx(0.16)
        assert weighted.mean_coverage == pytest.approx(900.4 / 1004)
        assert weighted.standard_error == pytest.approx(0.563, abs=0.001)
        assert weighted.ci_lower == 0.0
        assert weighted.ci_upper == 1.0

    def test_huge_finite_weights(self, canopy_samples):
        """Weights near the float limit do not overflow."""
        result = estimate_canopy_coverage(
            canopy_samples,
            position_weights={position: 1e308 for position in CanopyPosition},
        )

        assert result.mean_coverage == pytest.approx(0.6)
        assert math.isfinite(result.standard_error)

    def test_string_position_keys(self, canopy_samples):
        """Weight keys may be given as position names."""
        by_enum = estimate_canopy_coverage(
            canopy_samples,
            position_weights={CanopyPosition.CENTER: 4.0},
        )
        by_name = estimate_canopy_coverage(
            canopy_samples,
            position_weights={"center": 4.0},
        )

        assert by_name.mean_coverage == pytest.approx(by_enum.mean_coverage)
        assert by_name.standard_error == pytest.approx(by_enum.standard_error)


# ============================================================
# Validation Tests
# ============================================================

class TestCanopyValidation:
    """Tests for invalid canopy input."""

    def test_empty_rejected(self):
        """At least one sample is required."""
        with pytest.raises(ValidationError):
            estimate_canopy_coverage([])

    @pytest.mark.parametrize("fraction", [-0.1, 1.2, float("nan")])
    def test_out_of_range_fraction_rejected(self, fraction):
        """Fractions outside [0, 1] are rejected."""
        samples = [
            sample(CanopyPosition.CENTER, 0.5),
            sample(CanopyPosition.NORTH, fraction),
        ]

        with pytest.raises(ValidationError, match="\\[0, 1\\]"):
            estimate_canopy_coverage(samples)

    def test_boundary_fractions_accepted(self):
        """0 and 1 are valid fractions."""
        samples = [
            sample(CanopyPosition.CENTER, 0.0),
            sample(CanopyPosition.NORTH, 1.0),
        ]

        result = estimate_canopy_coverage(samples)

        assert result.mean_coverage == pytest.approx(0.5)

    def test_mixed_plots_rejected(self):
        """Samples from several plots cannot be combined."""
        samples = [
            sample(CanopyPosition.CENTER, 0.5, plot_id="P-01"),
            sample(CanopyPosition.NORTH, 0.5, plot_id="P-02"),
        ]

        with pytest.raises(ValidationError, match="single plot"):
            estimate_canopy_coverage(samples)

    @pytest.mark.parametrize("weight", [0.0, -1.0, float("inf"), float("nan")])
    def test_invalid_weight_rejected(self, canopy_samples, weight):
        """Weights must be positive finite numbers."""
        with pytest.raises(ValidationError, match="positive and finite"):
            estimate_canopy_coverage(
                canopy_samples,
                position_weights={CanopyPosition.CENTER: weight},
            )

    def test_unknown_weight_position_rejected(self, canopy_samples):
        """Weight keys must name one of the five positions."""
        with pytest.raises(ValidationError, match="Unknown canopy position"):
            estimate_canopy_coverage(canopy_samples, position_weights={"nw": 2.0})

    def test_invalid_confidence_level_rejected(self, canopy_samples):
        """Confidence level must lie strictly between 0 and 1."""
        with pytest.raises(ValidationError):
            estimate_canopy_coverage(canopy_samples, confidence_level=1.5)
