"""
Domain service: diversity indices from a plot's abundance table.

Indices computed:
- Species richness S
- Shannon-Wiener H' = -Σ pᵢ·ln(pᵢ)
- Simpson's D = Σ pᵢ² and its complement 1 - D
- Pielou's evenness J = H' / ln(S)
- Simpson's reciprocal 1 / D, Menhinick S / √N, Margalef (S - 1) / ln(N)
"""
import numpy as np
import logging
from scipy.stats import entropy

from ecostats.domain.models import AbundanceTable, DiversityResult
from ecostats.services.domain.abundance import validate_table

logger = logging.getLogger(__name__)


def compute_diversity(table: AbundanceTable) -> DiversityResult:
    """
    Compute diversity indices for one plot.

    Species with a count of 0 are left out of every sum, so 0·ln(0) is
    never evaluated. An empty table yields zeros with evenness 1.0, and a
    single species is treated as maximally even.

    Args:
        table: Abundance table for the plot

    Returns:
        DiversityResult for the plot

    Raises:
        ValidationError: If the table holds a negative count
    """
    validate_table(table)

    counts = np.array([c for c in table.counts.values() if c > 0], dtype=float)
    richness = int(counts.size)
    total = int(counts.sum()) if richness else 0

    if total == 0:
        logger.debug(f"Plot {table.plot_id}: empty abundance table")
        return DiversityResult(
            plot_id=table.plot_id,
            richness=0,
            shannon_index=0.0,
            simpson_index=0.0,
            simpson_diversity=0.0,
            evenness=1.0,
            total_individuals=0,
        )

    proportions = counts / total

    shannon = max(0.0, float(entropy(proportions)))
    simpson = min(1.0, float(np.sum(proportions ** 2)))

    if richness > 1:
        evenness = min(1.0, max(0.0, shannon / float(np.log(richness))))
    else:
        evenness = 1.0

    margalef = (richness - 1) / float(np.log(total)) if total > 1 else 0.0

    result = DiversityResult(
        plot_id=table.plot_id,
        richness=richness,
        shannon_index=shannon,
        simpson_index=simpson,
        simpson_diversity=max(0.0, 1.0 - simpson),
        evenness=evenness,
        total_individuals=total,
        inverse_simpson=1.0 / simpson,
        menhinick_index=richness / float(np.sqrt(total)),
        margalef_index=margalef,
    )

    logger.debug(f"Plot {table.plot_id}: S={richness}, N={total}, H'={shannon:.4f}, "
                 f"D={simpson:.4f}, J={evenness:.4f}")

    return result
