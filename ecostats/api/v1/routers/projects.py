"""
API router for project-level endpoints.
"""
from collections import Counter
from fastapi import APIRouter, Request

from ecostats.api.dependencies import AnalysisServiceDep
from ecostats.api.rate_limit import limiter, DEFAULT_LIMIT
from ecostats.api.v1.models.requests import ProjectDiversityRequest
from ecostats.api.v1.models.responses import ProjectDiversityResponse
from ecostats.domain.errors import ValidationError


router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


@router.post(
    "/diversity",
    response_model=ProjectDiversityResponse,
    summary="Summarise diversity across a project's plots",
    description="""
    Compute diversity indices for every plot of a project.

    Each plot is analysed independently; plot ids must be unique.
    """,
    responses={
        400: {
            "description": "Invalid observations or duplicate plot ids",
        },
        429: {
            "description": "Rate limit exceeded",
        },
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def compute_project_diversity(
    request: Request,
    payload: ProjectDiversityRequest,
    analysis_service: AnalysisServiceDep,
) -> ProjectDiversityResponse:
    """
    Compute diversity for all plots in a project.

    Args:
        request: Incoming request (used for rate limiting)
        payload: Plots with their observations
        analysis_service: Analysis service (injected dependency)

    Returns:
        ProjectDiversityResponse with one result per plot

    Raises:
        ValidationError: If plot ids repeat or observations are invalid
    """
    duplicates = sorted(
        plot_id for plot_id, n in Counter(p.plot_id for p in payload.plots).items() if n > 1
    )
    if duplicates:
        raise ValidationError(f"Duplicate plot ids: {', '.join(duplicates)}")

    results = analysis_service.project_diversity(
        {plot.plot_id: plot.observations for plot in payload.plots}
    )

    return ProjectDiversityResponse(plot_count=len(results), results=results)
