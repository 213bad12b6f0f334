"""
Result shaping for the Leads API.

Turns raw database rows into the typed response records:
- shape_lead_row: one lead row -> LeadRecord (date formatting, neotel trim)
- shape_stats: the four aggregate result sets -> StatsResponse

Only the known lead columns are copied; anything else on the row is dropped.
"""

from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from leads_api.models.schemas import (
    CampaignCount,
    LeadRecord,
    MonthCount,
    NeotelCount,
    StatsResponse,
    StatsSummary,
)
from leads_api.sql.lead_queries import LEAD_COLUMNS


LEAD_FIELDS = tuple(alias for _, alias in LEAD_COLUMNS)


def format_ingestion_date(value: Any) -> Optional[str]:
    """
    Reduce an ingestion timestamp to its YYYY-MM-DD calendar date.

    Aware datetimes are taken in UTC. None stays None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Unsupported ingestion date type: {type(value).__name__}")


def normalize_neotel(value: Any) -> Optional[str]:
    """
    Trim a fixed-width neotel code. Empty or whitespace-only becomes None.

    Idempotent: normalizing an already normalized value returns it unchanged.
    """
    if value is None:
        return None
    trimmed = str(value).strip()
    return trimmed or None


def shape_lead_row(row: Mapping[str, Any]) -> LeadRecord:
    """
    Shape a raw lead row into a LeadRecord.

    Args:
        row: An asyncpg Record or dict keyed by the query's column aliases.

    Returns:
        LeadRecord with fechaIngreso as a calendar date and neotel trimmed;
        every other field copied as-is.
    """
    values = dict(row)
    data = {name: values.get(name) for name in LEAD_FIELDS}
    data['fechaIngreso'] = format_ingestion_date(data['fechaIngreso'])
    data['neotel'] = normalize_neotel(data['neotel'])
    return LeadRecord.model_validate(data)


def shape_stats(
    producto: str,
    summary_rows: Sequence[Mapping[str, Any]],
    campaign_rows: Sequence[Mapping[str, Any]],
    month_rows: Sequence[Mapping[str, Any]],
    neotel_rows: Sequence[Mapping[str, Any]],
) -> StatsResponse:
    """
    Assemble the statistics payload from the four aggregate result sets,
    keeping each set's rows and order as returned.
    """
    resumen = (
        StatsSummary.model_validate(dict(summary_rows[0]))
        if summary_rows else StatsSummary()
    )
    return StatsResponse(
        producto=producto,
        resumen=resumen,
        porCampana=[CampaignCount.model_validate(dict(r)) for r in campaign_rows],
        porMes=[MonthCount.model_validate(dict(r)) for r in month_rows],
        porNeotel=[NeotelCount.model_validate(dict(r)) for r in neotel_rows],
    )
