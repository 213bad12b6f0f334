"""
Package initialization file for Leads API models.

Re-exports the Pydantic response schemas so other modules can import them
from leads_api.models directly.
"""

from leads_api.models.schemas import (
    # Lead listing
    LeadRecord,
    LeadsResponse,
    # Statistics
    StatsSummary,
    CampaignCount,
    MonthCount,
    NeotelCount,
    StatsResponse,
    # Filter values
    FiltersResponse,
    # Status / errors
    StatusResponse,
    ErrorResponse,
)

__all__ = [
    'LeadRecord',
    'LeadsResponse',
    'StatsSummary',
    'CampaignCount',
    'MonthCount',
    'NeotelCount',
    'StatsResponse',
    'FiltersResponse',
    'StatusResponse',
    'ErrorResponse',
]
