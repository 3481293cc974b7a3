"""Health check API endpoint."""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from hostlookup.api.routes import RouteDependencies, get_dependencies

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    nameservers: List[str]
    system_config: bool
    sentry_enabled: bool


@router.get("/healthcheck", response_model=HealthResponse)
async def health_check(
    deps: RouteDependencies = Depends(get_dependencies),
) -> HealthResponse:
    """
    Health check endpoint.

    Reports the resolver configuration without issuing any query.
    """
    settings = deps.settings

    return HealthResponse(
        status="ok",
        nameservers=settings.nameservers_list,
        system_config=settings.use_system_config,
        sentry_enabled=settings.sentry_enabled,
    )
