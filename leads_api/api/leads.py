"""
FastAPI router module for the lead listing endpoint.

Key Endpoints:
- GET /api/leads/{producto}: Every lead of a producto matching the optional
  filters, newest first. No pagination; the dashboard pages client-side.

Query Parameters (all optional, combined with AND):
- campana: Exact campaign name
- fechaDesde: Range start, ISO date or datetime (inclusive)
- fechaHasta: Range end, ISO date (inclusive through 23:59:59)
- buscar: Substring of first name, last name or email
- neotel: Neotel code (compared against the trimmed column)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from leads_api.core.dependencies import RegistryDep
from leads_api.models.schemas import ErrorResponse, LeadsResponse
from leads_api.services.reports import list_leads
from leads_api.sql.lead_queries import LeadFilters


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{producto}",
    response_model=LeadsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_leads(
    producto: str,
    registry: RegistryDep,
    campana: Optional[str] = Query(default=None, description="Exact campaign name"),
    fecha_desde: Optional[str] = Query(default=None, alias="fechaDesde"),
    fecha_hasta: Optional[str] = Query(default=None, alias="fechaHasta"),
    buscar: Optional[str] = Query(default=None, description="Name, surname or email substring"),
    neotel: Optional[str] = Query(default=None),
) -> LeadsResponse:
    """
    List leads for a producto.

    Raises:
        InvalidTenantError: Unknown producto (404).
        InvalidFilterError: Unparseable date (400).
    """
    registry.resolve_tenant(producto)
    filters = LeadFilters.from_params(
        campana=campana,
        fecha_desde=fecha_desde,
        fecha_hasta=fecha_hasta,
        buscar=buscar,
        neotel=neotel,
    )
    response = await list_leads(registry, producto, filters)
    logger.info(f"Listed {response.total} leads for {producto}")
    return response
