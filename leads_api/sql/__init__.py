"""
SQL Query Module for the Leads API.

Provides parameterized SQL for the lead listing, statistics and filter-value
reports. Query builders return SQL text plus positional parameters and never
execute anything themselves.

Example usage:
    from leads_api.sql import LeadFilters, build_leads_query

    filters = LeadFilters.from_params(campana='Black Friday', neotel='S')
    sql, params = build_leads_query(filters)
"""

from leads_api.sql.lead_queries import (
    LeadFilters,
    CampaignEquals,
    DateFrom,
    DateTo,
    SearchText,
    NeotelEquals,
    Predicate,
    StatsQueries,
    build_where_clause,
    build_leads_query,
    build_stats_queries,
    build_distinct_campaigns_query,
    LEADS_TABLE,
    END_OF_DAY,
)

__all__ = [
    # Filters
    'LeadFilters',
    'CampaignEquals',
    'DateFrom',
    'DateTo',
    'SearchText',
    'NeotelEquals',
    'Predicate',
    # Builders
    'StatsQueries',
    'build_where_clause',
    'build_leads_query',
    'build_stats_queries',
    'build_distinct_campaigns_query',
    'LEADS_TABLE',
    'END_OF_DAY',
]
