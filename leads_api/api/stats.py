"""
FastAPI router module for the statistics endpoint.

Key Endpoints:
- GET /api/stats/{producto}: Summary counts plus counts by campaign, by
  ingestion month and by neotel value, all over the same date range.
"""

from typing import Optional

from fastapi import APIRouter, Query

from leads_api.core.dependencies import RegistryDep
from leads_api.models.schemas import ErrorResponse, StatsResponse
from leads_api.services.reports import get_stats
from leads_api.sql.lead_queries import LeadFilters


router = APIRouter()


@router.get(
    "/{producto}",
    response_model=StatsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_producto_stats(
    producto: str,
    registry: RegistryDep,
    fecha_desde: Optional[str] = Query(default=None, alias="fechaDesde"),
    fecha_hasta: Optional[str] = Query(default=None, alias="fechaHasta"),
) -> StatsResponse:
    """Aggregate statistics for a producto, optionally bounded by date."""
    registry.resolve_tenant(producto)
    filters = LeadFilters.from_params(fecha_desde=fecha_desde, fecha_hasta=fecha_hasta)
    return await get_stats(registry, producto, filters)
