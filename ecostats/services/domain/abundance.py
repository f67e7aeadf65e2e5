"""
Domain service: abundance table construction from raw species observations.
"""
from typing import Iterable, Optional
import logging

from ecostats.domain.errors import ValidationError
from ecostats.domain.models import AbundanceTable, SpeciesObservation
from ecostats.config import settings

logger = logging.getLogger(__name__)


def validate_table(table: AbundanceTable) -> None:
    """
    Reject tables holding negative counts.

    Tables may be constructed outside build_abundance_table, so every
    consumer re-checks them.

    Raises:
        ValidationError: If any count is negative
    """
    negative = sorted(species for species, count in table.counts.items() if count < 0)
    if negative:
        raise ValidationError(
            f"Abundance table for plot {table.plot_id!r} has negative counts for: "
            f"{', '.join(negative)}"
        )


def build_abundance_table(
    observations: Iterable[SpeciesObservation],
    include_zero_counts: Optional[bool] = None,
    plot_id: Optional[str] = None,
) -> AbundanceTable:
    """
    Collapse a plot's observations into a species -> count table.

    Repeated observations of the same species are summed, since they are
    separate observation events within one plot visit. Records with a
    count of 0 are dropped unless include_zero_counts is set, in which case
    the species is kept at zero (still not counted toward richness).

    Args:
        observations: Observation records for a single plot (may be empty)
        include_zero_counts: Keep zero-count species; defaults to settings
        plot_id: Expected plot; used as the table's plot when there are no
            observations

    Returns:
        AbundanceTable for the plot

    Raises:
        ValidationError: If any count is negative or records span several plots
    """
    if include_zero_counts is None:
        include_zero_counts = settings.include_zero_counts

    records = list(observations)

    negative = [obs for obs in records if obs.count < 0]
    if negative:
        first = negative[0]
        raise ValidationError(
            f"Observation counts must be non-negative: species {first.species_id!r} "
            f"in plot {first.plot_id!r} has count {first.count}"
        )

    plot_ids = {obs.plot_id for obs in records}
    if plot_id is not None:
        plot_ids.add(plot_id)
    if len(plot_ids) > 1:
        raise ValidationError(
            f"Observations must belong to a single plot, got: {', '.join(sorted(plot_ids))}"
        )

    counts: dict[str, int] = {}
    skipped_zero = 0

    for obs in records:
        if obs.count == 0 and not include_zero_counts:
            skipped_zero += 1
            continue
        counts[obs.species_id] = counts.get(obs.species_id, 0) + obs.count

    table_plot_id = next(iter(plot_ids)) if plot_ids else None

    logger.debug(f"Built abundance table for plot {table_plot_id}: {len(records)} records -> "
                 f"{len(counts)} species (skipped {skipped_zero} zero-count records)")

    return AbundanceTable(plot_id=table_plot_id, counts=counts)
