"""
API router for species-area endpoints.
"""
from fastapi import APIRouter, Request

from ecostats.api.dependencies import AnalysisServiceDep
from ecostats.api.rate_limit import limiter, DEFAULT_LIMIT
from ecostats.api.v1.models.requests import SpeciesAreaRequest
from ecostats.api.v1.models.responses import (
    NestedPlotSize,
    NestedPlotSizesResponse,
    SpeciesAreaResponse,
)


router = APIRouter(
    prefix="/species-area",
    tags=["species-area"],
)


@router.post(
    "/curve",
    response_model=SpeciesAreaResponse,
    summary="Fit a species-area curve",
    description="""
    Aggregate nested plots into a species-area series and fit a curve.

    This endpoint:
    1. Builds an abundance table for each nested plot
    2. Sorts plots by area and accumulates the species seen so far
    3. Fits the requested model to the cumulative series

    Models:
    - `power`: S = C·A^z, least squares on log-log values (zero-richness
      points excluded); R² is reported in log space
    - `logarithmic`: S = a + b·ln(A), least squares on (ln A, S)
    """,
    responses={
        400: {
            "description": "Invalid areas or observations, or fewer than 2 distinct areas",
        },
        422: {
            "description": "Too few usable points to fit the model",
        },
        429: {
            "description": "Rate limit exceeded",
        },
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def fit_species_area(
    request: Request,
    payload: SpeciesAreaRequest,
    analysis_service: AnalysisServiceDep,
) -> SpeciesAreaResponse:
    """
    Fit a species-area curve to nested plots.

    Args:
        request: Incoming request (used for rate limiting)
        payload: Nested plots and model choice
        analysis_service: Analysis service (injected dependency)

    Returns:
        SpeciesAreaResponse with the series and its fit
    """
    samples, fit = analysis_service.species_area_curve(
        [(plot.area, plot.observations) for plot in payload.nested_plots],
        model=payload.model,
        series_id=payload.series_id,
    )

    return SpeciesAreaResponse(series_id=payload.series_id, samples=samples, fit=fit)


@router.get(
    "/nested-plot-sizes",
    response_model=NestedPlotSizesResponse,
    summary="List standard nested plot sizes",
)
async def get_nested_plot_sizes(
    analysis_service: AnalysisServiceDep,
) -> NestedPlotSizesResponse:
    """
    Standard nested plot sizes used to build species-area series.

    Returns:
        NestedPlotSizesResponse ordered by increasing area
    """
    return NestedPlotSizesResponse(
        sizes=[
            NestedPlotSize(label=label, area=area)
            for label, area in analysis_service.standard_nested_plots()
        ]
    )
