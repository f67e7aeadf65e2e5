"""
API router for canopy coverage endpoints.
"""
from fastapi import APIRouter, Request

from ecostats.api.dependencies import AnalysisServiceDep
from ecostats.api.rate_limit import limiter, DEFAULT_LIMIT
from ecostats.api.v1.models.requests import CanopyCoverageRequest
from ecostats.domain.models import CanopyCoverageResult


router = APIRouter(
    prefix="/canopy",
    tags=["canopy"],
)


@router.post(
    "/coverage",
    response_model=CanopyCoverageResult,
    summary="Estimate plot canopy coverage",
    description="""
    Combine photo-derived covered fractions (center and quadrant photos)
    into a plot canopy coverage estimate.

    The estimate is the unweighted mean of the fractions unless position
    weights are supplied. The standard error uses the Bessel-corrected
    sample deviation, and the bounds use the Student t distribution.
    Any non-empty subset of the five positions is accepted.
    """,
    responses={
        200: {
            "description": "Successfully estimated canopy coverage",
            "content": {
                "application/json": {
                    "example": {
                        "plot_id": "P-01",
                        "mean_coverage": 0.62,
                        "sample_count": 5,
                        "standard_error": 0.0316,
                        "ci_lower": 0.5323,
                        "ci_upper": 0.7077,
                        "confidence_level": 0.95,
                    }
                }
            }
        },
        400: {
            "description": "No samples, fraction outside [0, 1] or mixed plots",
        },
        429: {
            "description": "Rate limit exceeded",
        },
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def estimate_coverage(
    request: Request,
    payload: CanopyCoverageRequest,
    analysis_service: AnalysisServiceDep,
) -> CanopyCoverageResult:
    """
    Estimate canopy coverage for a plot.

    Args:
        request: Incoming request (used for rate limiting)
        payload: Photo samples and optional position weights
        analysis_service: Analysis service (injected dependency)

    Returns:
        CanopyCoverageResult for the plot
    """
    return analysis_service.canopy_coverage(
        payload.samples,
        position_weights=payload.position_weights,
    )
