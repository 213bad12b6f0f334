"""
Settings and environment management module for the Leads API backend.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Shared database connection settings applied to every tenant pool
- Static tenant -> database map with per-tenant overrides
- Singleton pattern via @lru_cache for efficient access

Environment Variables:
- DB_SERVER: Database host shared by all tenants (default: sql.ar-vida.com.ar)
- DB_PORT: Database port (default: 5432)
- DB_USER / DB_PASSWORD: Credentials (Required - startup fails without them)
- DB_AMM / DB_HOLAVET / DB_HOLARENE: Per-tenant database names
- PORT / HOST: Listening address for the HTTP server
- DASHBOARD_DIR: Directory holding the static dashboard (unset = API only)

Usage:
    from leads_api.core.config import get_settings

    settings = get_settings()
    databases = settings.tenant_databases
"""

from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Read once at startup. The database credentials have no defaults, so a
    missing DB_USER or DB_PASSWORD raises ``pydantic.ValidationError`` when
    the application factory builds its settings.

    Attributes:
        db_server: Database host shared by every tenant.
        db_port: Database port.
        db_user: Database login. Required.
        db_password: Database password. Required.
        db_amm: Database backing the ``amm`` tenant.
        db_holavet: Database backing the ``holavet`` tenant.
        db_holarene: Database backing the ``holarene`` tenant.
        db_encrypt: Use TLS for database connections.
        db_trust_server_certificate: Accept self-signed or mismatched certificates.
        db_request_timeout: Per-statement timeout in seconds.
        db_connect_timeout: Connection attempt timeout in seconds.
        db_pool_min: Minimum connections kept per tenant pool.
        db_pool_max: Maximum connections per tenant pool.
        db_pool_idle_timeout: Seconds before an idle connection is released.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        dashboard_dir: Directory served as the dashboard; None for API-only mode.
        log_level: Root logging level.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Database Server (shared by all tenants)
    # =========================================================================

    db_server: str = 'sql.ar-vida.com.ar'
    db_port: int = 5432

    # No defaults: the service refuses to start without credentials
    db_user: str = Field(..., min_length=1)
    db_password: str = Field(..., min_length=1)

    # =========================================================================
    # Tenant Databases
    # =========================================================================

    db_amm: str = 'LEADS_AMM'
    db_holavet: str = 'LEADS_HOLAVET'
    db_holarene: str = 'LEADS_HOLARENE'

    # =========================================================================
    # Connection Options (identical for every tenant pool)
    # =========================================================================

    # Encrypted transport with relaxed certificate checks. The lead servers use
    # self-signed certificates, so verification is off unless overridden.
    db_encrypt: bool = True
    db_trust_server_certificate: bool = True

    db_request_timeout: float = 30.0
    db_connect_timeout: float = 15.0

    db_pool_min: int = 0
    db_pool_max: int = 10
    db_pool_idle_timeout: float = 30.0

    # =========================================================================
    # HTTP Server / Presentation
    # =========================================================================

    host: str = '0.0.0.0'
    port: int = 3000

    # When set, the dashboard in this directory is served at "/"
    dashboard_dir: Optional[str] = None

    log_level: str = 'INFO'

    @property
    def tenant_databases(self) -> Dict[str, str]:
        """Map of lower-case tenant id to database name."""
        return {
            'amm': self.db_amm,
            'holavet': self.db_holavet,
            'holarene': self.db_holarene,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Raises:
        pydantic.ValidationError: If DB_USER or DB_PASSWORD is missing or a
            value cannot be coerced to its declared type.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
