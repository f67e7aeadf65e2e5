"""
API router for single-plot endpoints.
"""
from fastapi import APIRouter, Request

from ecostats.api.dependencies import AnalysisServiceDep
from ecostats.api.rate_limit import limiter, DEFAULT_LIMIT
from ecostats.api.v1.models.requests import PlotObservationsRequest
from ecostats.api.v1.models.responses import AbundanceTableResponse
from ecostats.domain.models import DiversityResult


router = APIRouter(
    prefix="/plots",
    tags=["plots"],
)

VALIDATION_RESPONSES = {
    400: {
        "description": "Invalid observations (e.g. negative counts or mixed plots)",
    },
    429: {
        "description": "Rate limit exceeded",
    },
}


@router.post(
    "/abundance",
    response_model=AbundanceTableResponse,
    summary="Build a plot abundance table",
    description="""
    Collapse a plot's observation records into a species -> count table.

    Repeated records of the same species are summed. Records with a count
    of 0 are dropped unless `include_zero_counts` is set.
    """,
    responses=VALIDATION_RESPONSES,
)
@limiter.limit(DEFAULT_LIMIT)
async def build_plot_abundance(
    request: Request,
    payload: PlotObservationsRequest,
    analysis_service: AnalysisServiceDep,
) -> AbundanceTableResponse:
    """
    Build the abundance table for a plot.

    Args:
        request: Incoming request (used for rate limiting)
        payload: Plot observations
        analysis_service: Analysis service (injected dependency)

    Returns:
        AbundanceTableResponse with counts and totals
    """
    table = analysis_service.plot_abundance(
        payload.observations,
        include_zero_counts=payload.include_zero_counts,
    )

    return AbundanceTableResponse(
        plot_id=table.plot_id,
        counts=table.counts,
        total_individuals=table.total_individuals,
        richness=table.richness,
    )


@router.post(
    "/diversity",
    response_model=DiversityResult,
    summary="Compute plot diversity indices",
    description="""
    Compute diversity indices for one plot from its observation records.

    Returned indices:
    - Species richness (S)
    - Shannon-Wiener (H', natural log)
    - Simpson's D and its complement 1 - D
    - Pielou's evenness (J)
    - Simpson's reciprocal, Menhinick and Margalef indices
    """,
    responses={
        200: {
            "description": "Successfully computed diversity indices",
            "content": {
                "application/json": {
                    "example": {
                        "plot_id": "P-01",
                        "richness": 2,
                        "shannon_index": 0.5004,
                        "simpson_index": 0.68,
                        "simpson_diversity": 0.32,
                        "evenness": 0.7219,
                        "total_individuals": 10,
                        "inverse_simpson": 1.4706,
                        "menhinick_index": 0.6325,
                        "margalef_index": 0.4343,
                    }
                }
            }
        },
        **VALIDATION_RESPONSES,
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def compute_plot_diversity(
    request: Request,
    payload: PlotObservationsRequest,
    analysis_service: AnalysisServiceDep,
) -> DiversityResult:
    """
    Compute diversity indices for a plot.

    Args:
        request: Incoming request (used for rate limiting)
        payload: Plot observations
        analysis_service: Analysis service (injected dependency)

    Returns:
        DiversityResult for the plot
    """
    return analysis_service.plot_diversity(
        payload.observations,
        include_zero_counts=payload.include_zero_counts,
    )
