"""
Pydantic response models for the Leads API.

One explicit record type per report shape. Field names are the camelCase
names the dashboard consumes; unexpected columns are ignored rather than
passed through.

All models use Pydantic v2 syntax.
"""

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Lead Listing
# =============================================================================


class LeadRecord(BaseModel):
    """
    A single captured lead as returned by /api/leads/{producto}.

    fechaIngreso is a YYYY-MM-DD calendar date and neotel is a trimmed code;
    both may be null.
    """
    model_config = ConfigDict(
        extra='ignore',
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "id": 1532,
                "fechaIngreso": "2024-11-29",
                "nombre": "Lucía",
                "apellido": "Fernández",
                "email": "lucia@example.com",
                "telefono1": "1155550101",
                "telefono2": None,
                "campana": "Black Friday",
                "conjuntoAnuncios": "BF - Retargeting",
                "anuncio": "Video 15s",
                "tipoTelefono": "Celular",
                "neotel": "S",
                "comentarios": None,
            }
        },
    )

    id: Union[int, UUID, str] = Field(..., description="Lead identifier, passed through as stored")
    fechaIngreso: Optional[str] = Field(default=None, description="Ingestion date (YYYY-MM-DD)")
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    email: Optional[str] = None
    telefono1: Optional[str] = None
    telefono2: Optional[str] = None
    campana: Optional[str] = Field(default=None, description="Campaign name")
    conjuntoAnuncios: Optional[str] = Field(default=None, description="Ad set name")
    anuncio: Optional[str] = Field(default=None, description="Ad name")
    tipoTelefono: Optional[str] = None
    neotel: Optional[str] = Field(default=None, description="Trimmed neotel code")
    comentarios: Optional[str] = None


class LeadsResponse(BaseModel):
    """Complete, unpaginated lead listing for a producto."""
    producto: str
    total: int = Field(..., ge=0, description="Number of leads returned")
    leads: List[LeadRecord] = Field(default_factory=list)


# =============================================================================
# Statistics
# =============================================================================


class StatsSummary(BaseModel):
    """Overall counts and date bounds for the filtered leads."""
    model_config = ConfigDict(extra='ignore')

    totalLeads: int = 0
    totalCampanas: int = 0
    primerLead: Optional[datetime] = None
    ultimoLead: Optional[datetime] = None


class CampaignCount(BaseModel):
    model_config = ConfigDict(extra='ignore')

    campana: Optional[str] = None
    cantidad: int


class MonthCount(BaseModel):
    model_config = ConfigDict(extra='ignore')

    mes: Optional[str] = Field(default=None, description="Year-month key (YYYY-MM)")
    cantidad: int


class NeotelCount(BaseModel):
    model_config = ConfigDict(extra='ignore')

    neotel: Optional[str] = None
    cantidad: int


class StatsResponse(BaseModel):
    """Four aggregate views computed over the same filter."""
    producto: str
    resumen: StatsSummary
    porCampana: List[CampaignCount] = Field(default_factory=list)
    porMes: List[MonthCount] = Field(default_factory=list)
    porNeotel: List[NeotelCount] = Field(default_factory=list)


# =============================================================================
# Filter Values
# =============================================================================


class FiltersResponse(BaseModel):
    """Distinct campaign names for populating filter choices."""
    producto: str
    campanas: List[str] = Field(default_factory=list)


# =============================================================================
# Service Status / Errors
# =============================================================================


class StatusResponse(BaseModel):
    """Root status payload in API-only mode."""
    status: str = 'ok'
    productos: List[str]
    server: str


class ErrorResponse(BaseModel):
    error: str
