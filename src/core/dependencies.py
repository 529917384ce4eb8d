"""
FastAPI dependency providers for the scorecard registry and plan service client.
"""

from functools import lru_cache

from services.scorecard_engine.registry import ScorecardRegistry
from src.core.config import get_settings
from src.plan_service.client import PlanServiceClient


@lru_cache()
def get_scorecard_registry() -> ScorecardRegistry:
    """Get the process-wide registry, loading scorecards on first use."""
    return ScorecardRegistry.from_directory(get_settings().scorecards_dir)


@lru_cache()
def get_plan_client() -> PlanServiceClient:
    """Get cached PlanServiceClient instance."""
    settings = get_settings()
    return PlanServiceClient(
        base_url=settings.plan_service_url,
        timeout=settings.plan_service_timeout,
    )
