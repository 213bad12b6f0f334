"""
Services package for the Leads API.

- reports: list_leads, get_stats, list_filters (query -> execute -> shape)
- shaping: row normalization into typed response records
"""

from leads_api.services.reports import list_leads, get_stats, list_filters
from leads_api.services.shaping import (
    shape_lead_row,
    shape_stats,
    normalize_neotel,
    format_ingestion_date,
)

__all__ = [
    'list_leads',
    'get_stats',
    'list_filters',
    'shape_lead_row',
    'shape_stats',
    'normalize_neotel',
    'format_ingestion_date',
]
