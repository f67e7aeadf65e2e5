"""
Domain service: species-area series from nested plot abundance tables.
"""
from itertools import groupby
from typing import Iterable
import math
import logging

from ecostats.domain.errors import ValidationError
from ecostats.domain.models import AbundanceTable, NestedPlotSample
from ecostats.services.domain.abundance import validate_table

logger = logging.getLogger(__name__)


def aggregate_species_area(
    nested_samples: Iterable[tuple[float, AbundanceTable]],
) -> list[NestedPlotSample]:
    """
    Build cumulative (area, richness) points from nested plots.

    Pairs are processed in increasing-area order whatever order they arrive
    in. A running set of species seen so far is kept; each distinct area
    emits one sample whose richness is the size of that set. Pairs sharing
    an area are merged into a single sample.

    Args:
        nested_samples: (area, abundance table) pairs, any order

    Returns:
        Samples with strictly increasing area and non-decreasing richness

    Raises:
        ValidationError: If an area is not positive, a table has negative
            counts, or fewer than 2 distinct areas are supplied
    """
    pairs = [(float(area), table) for area, table in nested_samples]

    for area, table in pairs:
        if not math.isfinite(area) or area <= 0:
            raise ValidationError(f"Nested plot areas must be positive, got {area}")
        validate_table(table)

    distinct_areas = {area for area, _ in pairs}
    if len(distinct_areas) < 2:
        raise ValidationError(
            f"A species-area series needs at least 2 distinct areas, got {len(distinct_areas)}"
        )

    pairs.sort(key=lambda pair: pair[0])

    seen: set[str] = set()
    samples: list[NestedPlotSample] = []

    for order, (area, group) in enumerate(groupby(pairs, key=lambda pair: pair[0])):
        for _, table in group:
            seen |= table.present_species()

        samples.append(NestedPlotSample(
            cumulative_area=area,
            cumulative_richness=len(seen),
            order=order,
        ))

    merged = len(pairs) - len(samples)
    if merged:
        logger.debug(f"Merged {merged} nested plots with duplicate areas")

    logger.debug(f"Species-area series: {len(samples)} points, "
                 f"final richness {samples[-1].cumulative_richness} "
                 f"at {samples[-1].cumulative_area:g} m²")

    return samples
