"""
Report service for the Leads API.

Composes the three layers for each endpoint: the query builder produces SQL,
the tenant pool registry executes it, and the shaper normalizes the rows.

Key Functions:
- list_leads: Full filtered lead listing, newest first
- get_stats: Summary plus by-campaign, by-month and by-neotel counts
- list_filters: Distinct campaign names

Every function validates the tenant before any query is built or run, and
lets the registry's errors (InvalidTenantError, ConnectionFailureError,
QueryExecutionFailedError) propagate to the API layer.
"""

import logging

from leads_api.core.database import TenantPoolRegistry
from leads_api.models.schemas import FiltersResponse, LeadsResponse, StatsResponse
from leads_api.services.shaping import shape_lead_row, shape_stats
from leads_api.sql.lead_queries import (
    LeadFilters,
    build_distinct_campaigns_query,
    build_leads_query,
    build_stats_queries,
)


logger = logging.getLogger(__name__)


async def list_leads(
    registry: TenantPoolRegistry,
    producto: str,
    filters: LeadFilters,
) -> LeadsResponse:
    """
    Fetch every lead matching the filters.

    Args:
        registry: Tenant pool registry.
        producto: Tenant id as received; echoed in the response.
        filters: Parsed lead filters.

    Returns:
        LeadsResponse with total equal to the number of leads returned.
    """
    registry.resolve_tenant(producto)
    sql, params = build_leads_query(filters)
    rows, = await registry.fetch(producto, [(sql, params)])

    leads = [shape_lead_row(row) for row in rows]
    logger.debug(f"Fetched {len(leads)} leads for {producto}")
    return LeadsResponse(producto=producto, total=len(leads), leads=leads)


async def get_stats(
    registry: TenantPoolRegistry,
    producto: str,
    filters: LeadFilters,
) -> StatsResponse:
    """
    Compute the four aggregate views over one shared filter clause.

    The four statements run on one connection; if any of them fails the whole
    call fails.
    """
    registry.resolve_tenant(producto)
    queries = build_stats_queries(filters)
    summary, by_campaign, by_month, by_neotel = await registry.fetch(
        producto, queries.statements()
    )
    return shape_stats(producto, summary, by_campaign, by_month, by_neotel)


async def list_filters(registry: TenantPoolRegistry, producto: str) -> FiltersResponse:
    """Return the distinct, non-null campaign names in ascending order."""
    registry.resolve_tenant(producto)
    rows, = await registry.fetch(producto, [(build_distinct_campaigns_query(), ())])
    return FiltersResponse(producto=producto, campanas=[r['campana'] for r in rows])
