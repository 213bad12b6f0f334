"""
Core infrastructure package for the Leads API.

Provides:
- Configuration management via pydantic-settings
- Per-tenant asyncpg connection pools
- Error taxonomy mapped to HTTP status codes
- FastAPI dependency injection utilities

Re-exports key components so other modules can write:

    from leads_api.core import get_settings, TenantPoolRegistry, RegistryDep
"""

from leads_api.core.config import Settings, get_settings
from leads_api.core.database import TenantPoolRegistry
from leads_api.core.exceptions import (
    LeadsApiError,
    InvalidTenantError,
    InvalidFilterError,
    ConnectionFailureError,
    QueryExecutionFailedError,
)
from leads_api.core.dependencies import (
    get_registry,
    get_settings_dependency,
    RegistryDep,
    SettingsDep,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Tenant pools (from database.py)
    'TenantPoolRegistry',
    # Errors (from exceptions.py)
    'LeadsApiError',
    'InvalidTenantError',
    'InvalidFilterError',
    'ConnectionFailureError',
    'QueryExecutionFailedError',
    # FastAPI dependency injection (from dependencies.py)
    'get_registry',
    'get_settings_dependency',
    'RegistryDep',
    'SettingsDep',
]
