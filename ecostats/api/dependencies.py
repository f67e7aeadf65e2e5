"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from ecostats.config import settings
from ecostats.services.application.analysis_service import AnalysisService


def get_analysis_service() -> AnalysisService:
    """
    Dependency factory for AnalysisService.

    Returns:
        AnalysisService configured from application settings
    """
    return AnalysisService(
        include_zero_counts=settings.include_zero_counts,
        confidence_level=settings.canopy_confidence_level,
        nested_plot_sizes=settings.nested_plot_sizes,
    )


# Type aliases for cleaner route signatures
AnalysisServiceDep = Annotated[AnalysisService, Depends(get_analysis_service)]
