"""
FastAPI router module for filter values.

Key Endpoints:
- GET /api/filters/{producto}: Distinct campaign names, used by the dashboard
  to populate its campaign selector. Not affected by any filter.
"""

from fastapi import APIRouter

from leads_api.core.dependencies import RegistryDep
from leads_api.models.schemas import ErrorResponse, FiltersResponse
from leads_api.services.reports import list_filters


router = APIRouter()


@router.get(
    "/{producto}",
    response_model=FiltersResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_filter_values(producto: str, registry: RegistryDep) -> FiltersResponse:
    return await list_filters(registry, producto)
