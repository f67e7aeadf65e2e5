"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample species observations
- Sample abundance tables
- Sample nested plot series
- Sample canopy photo samples
- FastAPI test client
"""
import pytest
from fastapi.testclient import TestClient

from ecostats.main import app
from ecostats.domain.models import (
    AbundanceTable,
    CanopyPhotoSample,
    CanopyPosition,
    NestedPlotSample,
    SpeciesObservation,
)


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def oak_pine_observations() -> list[SpeciesObservation]:
    """Two oak records and one pine record for the same plot."""
    return [
        SpeciesObservation(species_id="oak", count=5, plot_id="P-01"),
        SpeciesObservation(species_id="oak", count=3, plot_id="P-01"),
        SpeciesObservation(species_id="pine", count=2, plot_id="P-01"),
    ]


@pytest.fixture
def even_table() -> AbundanceTable:
    """Three species with equal counts."""
    return AbundanceTable(plot_id="even", counts={"A": 10, "B": 10, "C": 10})


@pytest.fixture
def uneven_table() -> AbundanceTable:
    """Three species dominated by one."""
    return AbundanceTable(plot_id="uneven", counts={"A": 28, "B": 1, "C": 1})


@pytest.fixture
def nested_tables() -> list[tuple[float, AbundanceTable]]:
    """Nested plots (25 to 1600 m²) where each level adds species."""
    return [
        (25.0, AbundanceTable(plot_id="n1", counts={"oak": 4, "fern": 10})),
        (100.0, AbundanceTable(plot_id="n2", counts={"oak": 2, "pine": 1})),
        (400.0, AbundanceTable(plot_id="n3", counts={"birch": 3, "fern": 1})),
        (1600.0, AbundanceTable(plot_id="n4", counts={"alder": 1, "moss": 7, "oak": 1})),
    ]


@pytest.fixture
def power_law_samples() -> list[NestedPlotSample]:
    """Series generated from S = 20·A^0.3 rounded to whole species."""
    areas = [1, 2, 4, 8, 16]
    return [
        NestedPlotSample(
            cumulative_area=float(area),
            cumulative_richness=round(20 * area ** 0.3),
            order=i,
        )
        for i, area in enumerate(areas)
    ]


@pytest.fixture
def canopy_samples() -> list[CanopyPhotoSample]:
    """Five canopy photos for one plot."""
    fractions = {
        CanopyPosition.CENTER: 0.70,
        CanopyPosition.NORTH: 0.60,
        CanopyPosition.SOUTH: 0.50,
        CanopyPosition.EAST: 0.65,
        CanopyPosition.WEST: 0.55,
    }
    return [
        CanopyPhotoSample(plot_id="P-01", position=position, covered_fraction=fraction)
        for position, fraction in fractions.items()
    ]


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
