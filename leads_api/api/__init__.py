"""
API router package for the Leads API.

Routers:
- leads: GET /api/leads/{producto}
- stats: GET /api/stats/{producto}
- filters: GET /api/filters/{producto}
"""

from leads_api.api.leads import router as leads_router
from leads_api.api.stats import router as stats_router
from leads_api.api.filters import router as filters_router

__all__ = [
    'leads_router',
    'stats_router',
    'filters_router',
]
