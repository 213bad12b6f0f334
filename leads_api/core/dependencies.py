"""
FastAPI dependency injection module for the Leads API.

The tenant pool registry is created by the application lifespan and stored on
``app.state``; endpoints receive it through ``RegistryDep`` rather than
importing module-level state, which keeps them testable with a fake registry.

Key Dependencies Provided:
- get_registry: Returns the TenantPoolRegistry owned by the running app
- get_settings_dependency: Returns the Settings the app was built with
- RegistryDep / SettingsDep: Annotated aliases for endpoint signatures

Usage:
    @router.get("/{producto}")
    async def list_leads(producto: str, registry: RegistryDep):
        ...
"""

from typing import Annotated

from fastapi import Depends, Request

from leads_api.core.config import Settings
from leads_api.core.database import TenantPoolRegistry


def get_registry(request: Request) -> TenantPoolRegistry:
    """Return the registry created by the application lifespan."""
    return request.app.state.registry


def get_settings_dependency(request: Request) -> Settings:
    """
    Return the Settings instance the application was built with.

    Overridable in tests with
    ``app.dependency_overrides[get_settings_dependency] = lambda: settings``.
    """
    return request.app.state.settings


RegistryDep = Annotated[TenantPoolRegistry, Depends(get_registry)]

SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
