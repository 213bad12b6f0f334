"""
Lead Queries Module for the Leads API.

Provides parameterized PostgreSQL queries against a tenant's ``leads_final``
table for the three report shapes:
- Lead listing with optional filters (build_leads_query)
- Aggregate statistics sharing one filter clause (build_stats_queries)
- Distinct campaign names for filter choices (build_distinct_campaigns_query)

Filters are modelled as a small set of predicate variants folded into a
``WHERE 1=1 AND ...`` clause in a fixed order:

    campana -> fechaDesde -> fechaHasta -> buscar -> neotel

Values are always bound as asyncpg positional parameters ($1, $2, ...) and
never interpolated into the SQL text. Date strings are parsed here, so a
malformed date raises InvalidFilterError before any SQL is built.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple, Union

from leads_api.core.exceptions import InvalidFilterError


# =============================================================================
# CONSTANTS
# =============================================================================

LEADS_TABLE: str = 'leads_final'

DATE_COLUMN: str = 'fecha_ingreso_leads'

# fechaHasta covers the whole calendar day
END_OF_DAY: time = time(23, 59, 59)

# Column -> JSON field name. Aliases are quoted to keep their camelCase.
LEAD_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ('id', 'id'),
    ('fecha_ingreso_leads', 'fechaIngreso'),
    ('nombre', 'nombre'),
    ('apellido', 'apellido'),
    ('correo_electronico', 'email'),
    ('telefono1', 'telefono1'),
    ('telefono2', 'telefono2'),
    ('campana', 'campana'),
    ('conjunto_anuncios', 'conjuntoAnuncios'),
    ('anuncio', 'anuncio'),
    ('tipo_telefono', 'tipoTelefono'),
    ('neotel', 'neotel'),
    ('comentarios', 'comentarios'),
)


# =============================================================================
# FILTER PREDICATES
# =============================================================================


@dataclass(frozen=True)
class CampaignEquals:
    """Exact campaign name match."""
    value: str

    def clause(self, placeholder: str) -> str:
        return f"campana = {placeholder}"

    @property
    def param(self) -> Any:
        return self.value


@dataclass(frozen=True)
class DateFrom:
    """Ingestion date on or after a moment (inclusive)."""
    value: datetime

    def clause(self, placeholder: str) -> str:
        return f"{DATE_COLUMN} >= {placeholder}"

    @property
    def param(self) -> Any:
        return self.value


@dataclass(frozen=True)
class DateTo:
    """Ingestion date on or before the end of a calendar day (inclusive)."""
    value: date

    def clause(self, placeholder: str) -> str:
        return f"{DATE_COLUMN} <= {placeholder}"

    @property
    def param(self) -> Any:
        return datetime.combine(self.value, END_OF_DAY)


@dataclass(frozen=True)
class SearchText:
    """Case-insensitive substring match on first name, last name or email."""
    value: str

    def clause(self, placeholder: str) -> str:
        return (
            f"(nombre ILIKE {placeholder} "
            f"OR apellido ILIKE {placeholder} "
            f"OR correo_electronico ILIKE {placeholder})"
        )

    @property
    def param(self) -> Any:
        return f"%{escape_like(self.value)}%"


@dataclass(frozen=True)
class NeotelEquals:
    """Exact neotel match; the stored fixed-width code is trimmed in SQL."""
    value: str

    def clause(self, placeholder: str) -> str:
        return f"BTRIM(neotel) = {placeholder}"

    @property
    def param(self) -> Any:
        return self.value


Predicate = Union[CampaignEquals, DateFrom, DateTo, SearchText, NeotelEquals]


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return text.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


# =============================================================================
# FILTER PARSING
# =============================================================================


def parse_date_from(value: str) -> datetime:
    """
    Parse a fechaDesde value: an ISO date or datetime.

    A bare date means midnight. Aware datetimes are converted to naive UTC,
    matching the timestamp column.

    Raises:
        InvalidFilterError: If the value is not ISO 8601.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise InvalidFilterError('fechaDesde', value) from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date_to(value: str) -> date:
    """
    Parse a fechaHasta value: an ISO calendar date (YYYY-MM-DD).

    Raises:
        InvalidFilterError: If the value is not a calendar date.
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidFilterError('fechaHasta', value) from None


@dataclass(frozen=True)
class LeadFilters:
    """
    Parsed, optional lead filters. Absent filters are None.

    Attributes:
        campana: Exact campaign name.
        fecha_desde: Range start (inclusive).
        fecha_hasta: Range end day (inclusive through 23:59:59).
        buscar: Free text matched against name, surname and email.
        neotel: Neotel code, compared against the trimmed column.
    """
    campana: Optional[str] = None
    fecha_desde: Optional[datetime] = None
    fecha_hasta: Optional[date] = None
    buscar: Optional[str] = None
    neotel: Optional[str] = None

    @classmethod
    def from_params(
        cls,
        campana: Optional[str] = None,
        fecha_desde: Optional[str] = None,
        fecha_hasta: Optional[str] = None,
        buscar: Optional[str] = None,
        neotel: Optional[str] = None,
    ) -> 'LeadFilters':
        """
        Build filters from raw query-string values. Empty strings are treated
        as absent.

        Raises:
            InvalidFilterError: If either date cannot be parsed.
        """
        return cls(
            campana=campana or None,
            fecha_desde=parse_date_from(fecha_desde) if fecha_desde else None,
            fecha_hasta=parse_date_to(fecha_hasta) if fecha_hasta else None,
            buscar=buscar or None,
            neotel=neotel or None,
        )

    def predicates(self) -> List[Predicate]:
        """Present filters as predicates, in the fixed clause order."""
        predicates: List[Predicate] = []
        if self.campana is not None:
            predicates.append(CampaignEquals(self.campana))
        if self.fecha_desde is not None:
            predicates.append(DateFrom(self.fecha_desde))
        if self.fecha_hasta is not None:
            predicates.append(DateTo(self.fecha_hasta))
        if self.buscar is not None:
            predicates.append(SearchText(self.buscar))
        if self.neotel is not None:
            predicates.append(NeotelEquals(self.neotel))
        return predicates


# =============================================================================
# WHERE CLAUSE
# =============================================================================


def build_where_clause(predicates: Sequence[Predicate]) -> Tuple[str, Tuple[Any, ...]]:
    """
    Fold predicates into ``WHERE 1=1 AND ...`` with numbered placeholders.

    Returns:
        The WHERE clause text and the parameter tuple, positionally aligned
        with $1..$n.
    """
    clauses = ['WHERE 1=1']
    params: List[Any] = []
    for predicate in predicates:
        params.append(predicate.param)
        clauses.append(f"AND {predicate.clause(f'${len(params)}')}")
    return '\n      '.join(clauses), tuple(params)


# =============================================================================
# LEADS QUERY
# =============================================================================


def build_leads_query(filters: LeadFilters) -> Tuple[str, Tuple[Any, ...]]:
    """
    Generate the lead listing query.

    Args:
        filters: Parsed filters; every present filter adds one AND clause.

    Returns:
        ``(sql, params)`` ready for ``conn.fetch(sql, *params)``.

    Note:
        Ordered by ingestion date descending only. Leads sharing a timestamp
        come back in storage order.
    """
    where, params = build_where_clause(filters.predicates())
    projection = ',\n        '.join(
        f'{column} AS "{alias}"' for column, alias in LEAD_COLUMNS
    )
    sql = f"""
    SELECT
        {projection}
    FROM {LEADS_TABLE}
    {where}
    ORDER BY {DATE_COLUMN} DESC
    """
    return sql, params


# =============================================================================
# STATS QUERIES
# =============================================================================


class StatsQueries(NamedTuple):
    """The four aggregate statements; all share ``params``."""
    summary: str
    by_campaign: str
    by_month: str
    by_neotel: str
    params: Tuple[Any, ...]

    def statements(self) -> List[Tuple[str, Tuple[Any, ...]]]:
        """``(sql, params)`` pairs in summary, campaign, month, neotel order."""
        return [
            (self.summary, self.params),
            (self.by_campaign, self.params),
            (self.by_month, self.params),
            (self.by_neotel, self.params),
        ]


def build_stats_queries(filters: LeadFilters) -> StatsQueries:
    """
    Generate the four statistics queries over one shared filter clause.

    Returns:
        StatsQueries whose statements all embed the identical WHERE clause
        and bind the identical parameters.
    """
    where, params = build_where_clause(filters.predicates())

    summary = f"""
    SELECT
        COUNT(*) AS "totalLeads",
        COUNT(DISTINCT campana) AS "totalCampanas",
        MIN({DATE_COLUMN}) AS "primerLead",
        MAX({DATE_COLUMN}) AS "ultimoLead"
    FROM {LEADS_TABLE}
    {where}
    """

    by_campaign = f"""
    SELECT campana AS "campana", COUNT(*) AS "cantidad"
    FROM {LEADS_TABLE}
    {where}
    GROUP BY campana
    ORDER BY "cantidad" DESC
    """

    # Month key is the truncated year-month of the ingestion date
    by_month = f"""
    SELECT to_char({DATE_COLUMN}, 'YYYY-MM') AS "mes", COUNT(*) AS "cantidad"
    FROM {LEADS_TABLE}
    {where}
    GROUP BY to_char({DATE_COLUMN}, 'YYYY-MM')
    ORDER BY "mes"
    """

    by_neotel = f"""
    SELECT BTRIM(neotel) AS "neotel", COUNT(*) AS "cantidad"
    FROM {LEADS_TABLE}
    {where}
    GROUP BY BTRIM(neotel)
    ORDER BY "cantidad" DESC
    """

    return StatsQueries(summary, by_campaign, by_month, by_neotel, params)


# =============================================================================
# FILTER VALUES QUERY
# =============================================================================


def build_distinct_campaigns_query() -> str:
    """Distinct non-null campaign names, ascending. Ignores all filters."""
    return f"""
    SELECT DISTINCT campana AS "campana"
    FROM {LEADS_TABLE}
    WHERE campana IS NOT NULL
    ORDER BY "campana"
    """
